from flask import Blueprint, request, jsonify, current_app
from kombu.exceptions import OperationalError as BrokerError
from sqlalchemy.exc import SQLAlchemyError

from app.api.errors import store_error_response
from app.services.apify_metrics import ApifyConfigError, ApifyRunError
from app.services.refresh_service import refresh_campaign

bp = Blueprint('refresh', __name__)


@bp.route('', methods=['GET'])
def refresh_hint():
    return jsonify({"ok": True, "hint": "Use POST /api/refresh?campaignId=..."}), 200


@bp.route('', methods=['POST'])
def refresh():
    """
    Re-fetch metrics for every link of a campaign (synchronous).

    Redirect lookups run inside the request, so large campaigns are better
    served by POST /api/refresh/async.

    Query Parameters:
        - campaignId (str, required)

    Returns:
        200 OK with {"ok", "updated", "notFound", "apifyItems", "sampleExpanded", "sampleApifyUrl"}
        400 if campaignId is missing
        500 on configuration, Apify or database errors
    """
    campaign_id = (request.args.get('campaignId') or '').strip()
    if not campaign_id:
        return jsonify({"error": "campaignId required"}), 400

    try:
        result = refresh_campaign(campaign_id, current_app.config)
    except ApifyConfigError as e:
        current_app.logger.error(f"Refresh configuration error: {e}")
        return jsonify({"error": str(e)}), 500
    except ApifyRunError as e:
        current_app.logger.error(f"Refresh failed for campaign {campaign_id}: {e}")
        return jsonify({"error": str(e), "body": e.body}), 500
    except SQLAlchemyError as e:
        return store_error_response(e)

    return jsonify(result), 200


@bp.route('/async', methods=['POST'])
def refresh_async():
    """
    Queue a background refresh (Celery).

    Returns:
        202 Accepted with job_id
        500 if the broker is unreachable
    """
    from app.tasks.refresh_tasks import refresh_campaign_links

    campaign_id = (request.args.get('campaignId') or '').strip()
    if not campaign_id:
        return jsonify({"error": "campaignId required"}), 400

    try:
        task = refresh_campaign_links.delay(campaign_id)
    except BrokerError as e:
        current_app.logger.error(f"Could not queue refresh for campaign {campaign_id}: {e}")
        return jsonify({"error": f"Task queue unavailable: {e}"}), 500

    current_app.logger.info(f"Queued refresh for campaign {campaign_id}: job_id={task.id}")

    return jsonify({
        "message": "Refresh started",
        "job_id": task.id,
        "campaignId": campaign_id
    }), 202
