from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.campaign import Campaign
from app.schemas.campaign_schema import create_campaign_schema
from app.api.errors import validation_error_response, store_error_response

bp = Blueprint('campaigns', __name__)


@bp.route('', methods=['GET'])
def list_campaigns():
    """
    List all campaigns, newest first.

    Returns:
        200 OK with {"data": [Campaign, ...]}
    """
    try:
        campaigns = Campaign.query.order_by(Campaign.created_at.desc()).all()
    except SQLAlchemyError as e:
        return store_error_response(e)

    return jsonify({"data": [c.to_dict() for c in campaigns]}), 200


@bp.route('', methods=['POST'])
def create_campaign():
    """
    Create a campaign.

    Request Body:
        {"name": "Spring launch"}

    Returns:
        201 Created with {"data": Campaign}
        400 if name is missing or blank
    """
    payload = request.get_json(silent=True) or {}
    try:
        data = create_campaign_schema.load(payload)
    except ValidationError as err:
        return validation_error_response(err)

    campaign = Campaign(name=data['name'].strip())
    try:
        db.session.add(campaign)
        db.session.commit()
    except SQLAlchemyError as e:
        return store_error_response(e)

    current_app.logger.info(f"Campaign created: id={campaign.id} name={campaign.name!r}")
    return jsonify({"data": campaign.to_dict()}), 201
