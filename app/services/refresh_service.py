"""
Campaign refresh: expand stored links, fetch metrics from Apify and write
them back onto the matching rows.
"""
import logging
from datetime import datetime

from app.extensions import db
from app.models.campaign_link import CampaignLink
from app.services.apify_metrics import (
    validate_apify_config,
    run_actor,
    build_metrics_index,
    lookup_metrics,
    item_url,
)
from app.services.url_utils import expand_urls, normalize_match_key

logger = logging.getLogger(__name__)

MAX_LINKS_PER_REFRESH = 500
SAMPLE_SIZE = 3
NOT_FOUND_MESSAGE = "No metrics returned (private/deleted/blocked or actor mismatch)"


def _unique(values):
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def refresh_campaign(campaign_id, config):
    """
    Refresh metrics for every link of a campaign.

    Args:
        campaign_id: Campaign whose links are refreshed
        config: Mapping with APIFY_* and REDIRECT_* settings (app.config)

    Returns:
        dict: Summary with updated/notFound counts and debug samples

    Raises:
        ApifyConfigError: If Apify is not configured
        ApifyRunError: If the actor run fails
        SQLAlchemyError: On store failures (caller rolls back)
    """
    token = config.get('APIFY_TOKEN')
    actor_id = config.get('APIFY_ACTOR_ID')
    validate_apify_config(token, actor_id)

    links = (CampaignLink.query
             .filter_by(campaign_id=campaign_id)
             .order_by(CampaignLink.created_at.asc())
             .limit(MAX_LINKS_PER_REFRESH)
             .all())

    if not links:
        logger.info(f"Campaign {campaign_id}: no links to refresh")
        return {"ok": True, "updated": 0, "notFound": 0, "reason": "no links"}

    logger.info(f"Campaign {campaign_id}: refreshing {len(links)} link(s)")

    sources = [link.canonical_url or link.url for link in links]
    expanded = expand_urls(
        sources,
        timeout=config.get('REDIRECT_TIMEOUT_SECS', 5),
        max_workers=config.get('REDIRECT_MAX_WORKERS', 16)
    )
    keys = [normalize_match_key(url) for url in expanded]

    items = run_actor(
        token,
        actor_id,
        _unique(keys),
        timeout_secs=config.get('APIFY_TIMEOUT_SECS', 300)
    )
    index = build_metrics_index(items)

    updated = 0
    not_found = 0
    now = datetime.utcnow()

    for link, key in zip(links, keys):
        canonical = key or normalize_match_key(link.canonical_url or link.url)
        metrics = lookup_metrics(index, canonical)
        if metrics is None:
            link.mark_not_found(canonical, NOT_FOUND_MESSAGE, now)
            not_found += 1
            continue
        link.apply_metrics(canonical, metrics, now)
        updated += 1

    db.session.commit()

    logger.info(f"Campaign {campaign_id}: updated={updated}, notFound={not_found}, items={len(items)}")

    first_item = items[0] if items and isinstance(items[0], dict) else None
    return {
        "ok": True,
        "updated": updated,
        "notFound": not_found,
        "apifyItems": len(items),
        "sampleExpanded": keys[:SAMPLE_SIZE],
        "sampleApifyUrl": item_url(first_item) if first_item else None,
    }
