"""Server-rendered pages: campaign list and per-campaign link table."""
from flask import Blueprint, render_template, abort, current_app

from app.extensions import db
from app.models.campaign import Campaign
from app.models.campaign_link import CampaignLink, METRIC_FIELDS

bp = Blueprint('views', __name__)


@bp.route('/', methods=['GET'])
def index():
    campaigns = Campaign.query.order_by(Campaign.created_at.desc()).all()
    return render_template('index.html', campaigns=campaigns)


@bp.route('/campaigns/<campaign_id>', methods=['GET'])
def campaign_detail(campaign_id):
    campaign = db.session.get(Campaign, campaign_id)
    if not campaign:
        abort(404)

    links = (CampaignLink.query
             .filter_by(campaign_id=campaign_id)
             .order_by(CampaignLink.created_at.desc())
             .limit(500)
             .all())
    totals = {field: sum(getattr(link, field) or 0 for link in links) for field in METRIC_FIELDS}

    return render_template(
        'campaign.html',
        campaign=campaign,
        links=links,
        totals=totals,
        poll_minutes=current_app.config.get('REFRESH_POLL_MINUTES', 15)
    )
