from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

"""
Flask Extensions - Initialized here, configured in app/__init__.py

Kept apart from the factory so models, services and tasks can import them
without importing the app itself.
"""
# Database ORM
# Usage: from app.extensions import db

db = SQLAlchemy()

# Alembic migrations (flask db upgrade)

migrate = Migrate()
