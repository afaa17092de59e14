import logging

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError

from app.celery_app import celery_app
from app.extensions import db
from app.models.campaign import Campaign
from app.services.apify_metrics import ApifyConfigError, ApifyRunError
from app.services.refresh_service import refresh_campaign

logger = logging.getLogger(__name__)


def _run_in_app_context(func, *args):
    # Worker processes have no app context; requests and tests already do
    if has_app_context():
        return func(*args)

    from app import create_app
    app = create_app()
    with app.app_context():
        return func(*args)


def _refresh(campaign_id):
    try:
        return refresh_campaign(campaign_id, current_app.config)
    except (ApifyConfigError, ApifyRunError, SQLAlchemyError) as e:
        logger.error(f"Error refreshing campaign {campaign_id}: {str(e)}", exc_info=True)
        db.session.rollback()
        return {
            "status": "error",
            "message": f"Refresh failed: {str(e)}",
            "campaign_id": campaign_id
        }


def _enqueue_all():
    campaign_ids = [row.id for row in Campaign.query.with_entities(Campaign.id).all()]
    for campaign_id in campaign_ids:
        refresh_campaign_links.delay(campaign_id)
    logger.info(f"Queued refresh for {len(campaign_ids)} campaign(s)")
    return {"status": "success", "queued": len(campaign_ids)}


@celery_app.task(bind=True, name='refresh_campaign_links')
def refresh_campaign_links(self, campaign_id):
    """
    Refresh metrics for one campaign in the background.

    Args:
        campaign_id: Campaign to refresh

    Returns:
        dict: Same summary as POST /api/refresh, or {"status": "error", ...}
    """
    logger.info(f"Refresh task started: campaign_id={campaign_id}")
    return _run_in_app_context(_refresh, campaign_id)


@celery_app.task(bind=True, name='refresh_all_campaigns')
def refresh_all_campaigns(self):
    """Fan out one refresh_campaign_links task per campaign (Celery beat entry)."""
    return _run_in_app_context(_enqueue_all)
