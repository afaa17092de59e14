import logging

from flask import Flask, jsonify
from flask_cors import CORS
from app.config import Config
from app.extensions import db, migrate
from app.celery_app import init_celery


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    )
    app.logger.setLevel(level)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise RuntimeError("Missing env var: DATABASE_URL")

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app)

    # Health check endpoint - register early so it's always available
    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"}), 200

    # Import models so metadata is complete for migrations
    from app.models import Campaign, CampaignLink  # noqa: F401

    # Register blueprints
    from app.api import campaigns
    app.register_blueprint(campaigns.bp, url_prefix='/api/campaigns')
    from app.api import campaign_links
    app.register_blueprint(campaign_links.bp, url_prefix='/api/campaign-links')
    from app.api import refresh
    app.register_blueprint(refresh.bp, url_prefix='/api/refresh')
    from app import views
    app.register_blueprint(views.bp)

    init_celery(app)

    return app
