import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value):
    return [item.strip().lower() for item in (value or '').split(',') if item.strip()]


class Config:
    # Database - Render/Supabase provide this as DATABASE_URL
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')

    # Fix for postgres:// vs postgresql://
    if SQLALCHEMY_DATABASE_URI and SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv('SECRET_KEY')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Redis / Celery
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
    CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', REDIS_URL)
    CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', REDIS_URL)
    # Minutes between scheduled refreshes of every campaign (0 = beat disabled)
    REFRESH_SCHEDULE_MINUTES = int(os.getenv('REFRESH_SCHEDULE_MINUTES', '0'))

    # Apify Configuration
    APIFY_TOKEN = os.getenv('APIFY_TOKEN') or os.getenv('APIFY_API_TOKEN')
    APIFY_ACTOR_ID = os.getenv('APIFY_ACTOR_ID', 'clockworks/tiktok-scraper')
    APIFY_TIMEOUT_SECS = int(os.getenv('APIFY_TIMEOUT_SECS', '300'))

    # Short-link expansion
    # Sync refresh worst case ~ ceil(links / workers) * timeout; use /api/refresh/async for big campaigns
    REDIRECT_TIMEOUT_SECS = float(os.getenv('REDIRECT_TIMEOUT_SECS', '5'))
    REDIRECT_MAX_WORKERS = int(os.getenv('REDIRECT_MAX_WORKERS', '16'))

    # Hostnames accepted at ingestion (subdomains included). Empty = any host.
    ALLOWED_LINK_DOMAINS = _split_csv(os.getenv('ALLOWED_LINK_DOMAINS', 'tiktok.com'))

    # Campaign page auto-refresh interval
    REFRESH_POLL_MINUTES = int(os.getenv('REFRESH_POLL_MINUTES', '15'))
