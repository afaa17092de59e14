from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.campaign import Campaign
from app.models.campaign_link import CampaignLink
from app.schemas.campaign_schema import add_links_schema
from app.services.link_ingestion import add_links, NoValidUrlsError
from app.api.errors import validation_error_response, store_error_response

bp = Blueprint('campaign_links', __name__)

MAX_LINKS_LISTED = 500


@bp.route('', methods=['GET'])
def list_links():
    """
    List a campaign's links, newest first.

    Query Parameters:
        - campaignId (str, required)

    Returns:
        200 OK with {"data": [CampaignLink, ...]}
    """
    campaign_id = (request.args.get('campaignId') or '').strip()
    if not campaign_id:
        return jsonify({"error": "campaignId required"}), 400

    try:
        links = (CampaignLink.query
                 .filter_by(campaign_id=campaign_id)
                 .order_by(CampaignLink.created_at.desc())
                 .limit(MAX_LINKS_LISTED)
                 .all())
    except SQLAlchemyError as e:
        return store_error_response(e)

    return jsonify({"data": [link.to_dict() for link in links]}), 200


@bp.route('', methods=['POST'])
def create_links():
    """
    Add a batch of video URLs to a campaign.

    Request Body:
        {
            "campaignId": "campaign-uuid",
            "urls": ["https://www.tiktok.com/@user/video/123", ...]
        }

    Returns:
        201 Created with {"data": [...], "inserted": n, "skipped": n, "invalid": n, "truncated": n}
        Only the first 500 non-blank urls are used; the rest count as truncated
        400 if campaignId/urls are missing, empty or nothing valid remains
        404 if the campaign does not exist
    """
    payload = request.get_json(silent=True) or {}
    try:
        data = add_links_schema.load(payload)
    except ValidationError as err:
        return validation_error_response(err)

    campaign_id = data['campaign_id'].strip()

    try:
        campaign = db.session.get(Campaign, campaign_id)
        if not campaign:
            return jsonify({"error": "Campaign not found"}), 404

        result = add_links(
            campaign_id,
            data['urls'],
            allowed_domains=current_app.config.get('ALLOWED_LINK_DOMAINS')
        )
    except NoValidUrlsError as e:
        return jsonify({"error": str(e)}), 400
    except SQLAlchemyError as e:
        return store_error_response(e)

    return jsonify({
        "data": [link.to_dict() for link in result["links"]],
        "inserted": result["inserted"],
        "skipped": result["skipped"],
        "invalid": result["invalid"],
        "truncated": result["truncated"],
    }), 201
