"""
Celery entry point for running worker commands.

Usage:
    celery -A celery_worker worker --loglevel=info
    celery -A celery_worker beat --loglevel=info   (needs REFRESH_SCHEDULE_MINUTES > 0)
"""
import logging

from app import create_app
from app.celery_app import celery_app

# Applies broker settings and the beat schedule from app config
flask_app = create_app()

# Import tasks so the @celery_app.task decorators register them
from app.tasks import refresh_tasks  # noqa: E402,F401

logger = logging.getLogger(__name__)

expected_tasks = ['refresh_campaign_links', 'refresh_all_campaigns']
for task_name in expected_tasks:
    if task_name not in celery_app.tasks:
        logger.error(f"Task '{task_name}' is NOT registered!")

if __name__ == '__main__':
    celery_app.start()
