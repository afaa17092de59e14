from datetime import timedelta

from celery import Celery


celery_app = Celery('ugc_tracker')


def init_celery(app):
    """
    Configure the shared Celery instance from the Flask app config.

    Tasks open their own app context (see app.tasks.refresh_tasks), so the
    task base class is left untouched.
    """
    broker_url = app.config.get('CELERY_BROKER_URL')
    result_backend = app.config.get('CELERY_RESULT_BACKEND')

    celery_app.conf.update(
        broker_url=broker_url,
        result_backend=result_backend,
        task_serializer='json',
        result_serializer='json',
        accept_content=['json'],
        timezone='UTC',
        enable_utc=True,
        task_track_started=True,
        task_time_limit=30 * 60,  # 30 minutes
        task_soft_time_limit=25 * 60,  # 25 minutes
        broker_connection_retry_on_startup=True,
    )

    schedule_minutes = app.config.get('REFRESH_SCHEDULE_MINUTES') or 0
    if schedule_minutes > 0:
        celery_app.conf.beat_schedule = {
            'refresh-all-campaigns': {
                'task': 'refresh_all_campaigns',
                'schedule': timedelta(minutes=schedule_minutes),
            },
        }
    else:
        celery_app.conf.beat_schedule = {}

    return celery_app
