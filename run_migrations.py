#!/usr/bin/env python
"""
Run database migrations before starting the server.
Migrations need a Flask app context, so `alembic upgrade` alone won't do.
"""
import logging
import os
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
logger = logging.getLogger("run_migrations")


def main():
    db_url = os.getenv('DATABASE_URL')
    if not db_url:
        logger.error("DATABASE_URL environment variable is not set!")
        return 1

    logger.info("Database: %s", db_url.split('/')[-1] if '/' in db_url else 'unknown')

    from app import create_app
    from flask_migrate import upgrade

    app = create_app()
    with app.app_context():
        from app.extensions import db
        try:
            with db.engine.connect():
                logger.info("Database connection successful")
        except Exception:
            logger.exception("Database connection failed")
            return 1

        try:
            upgrade()
        except Exception:
            logger.exception("Migration error")
            return 1

    logger.info("Migrations completed successfully")
    return 0


if __name__ == '__main__':
    sys.exit(main())
