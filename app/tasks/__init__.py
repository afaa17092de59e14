"""
Celery tasks package.

Import directly from modules when needed:
  from app.tasks.refresh_tasks import refresh_campaign_links, refresh_all_campaigns
"""
