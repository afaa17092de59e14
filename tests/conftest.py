"""
Pytest configuration: Flask app on in-memory SQLite, Apify and outbound HTTP mocked per test.
"""
import logging
import sys

import pytest

from app import create_app
from app.config import Config
from app.extensions import db
from app.models.campaign import Campaign
from app.models.campaign_link import CampaignLink

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    APIFY_TOKEN = 'test-token'
    APIFY_ACTOR_ID = 'clockworks/tiktok-scraper'
    APIFY_TIMEOUT_SECS = 30
    REDIRECT_TIMEOUT_SECS = 1
    REDIRECT_MAX_WORKERS = 4
    ALLOWED_LINK_DOMAINS = ['tiktok.com']
    CELERY_BROKER_URL = 'memory://'
    CELERY_RESULT_BACKEND = 'cache+memory://'
    REFRESH_SCHEDULE_MINUTES = 0
    REFRESH_POLL_MINUTES = 15


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_campaign(app):
    def _make(name='Launch'):
        campaign = Campaign(name=name)
        db.session.add(campaign)
        db.session.commit()
        return campaign.id
    return _make


@pytest.fixture
def make_link(app):
    def _make(campaign_id, url, **fields):
        link = CampaignLink(campaign_id=campaign_id, url=url, **fields)
        db.session.add(link)
        db.session.commit()
        return link.id
    return _make


def fresh(model, pk):
    """Re-read a row after a request wrote to it from another session."""
    db.session.expire_all()
    return db.session.get(model, pk)
