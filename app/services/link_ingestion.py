import logging

from app.extensions import db
from app.models.campaign_link import CampaignLink, LINK_STATUS_OK
from app.services.url_utils import normalize_submitted_url

logger = logging.getLogger(__name__)


MAX_URLS_PER_REQUEST = 500


class NoValidUrlsError(ValueError):
    pass


def clean_urls(raw_urls, allowed_domains=None, limit=MAX_URLS_PER_REQUEST):
    """
    Trim, normalize and de-duplicate a batch of submitted URLs.

    Blank entries are dropped before the limit applies; non-blank entries past
    the first `limit` are ignored and counted as truncated.

    Returns:
        tuple: (unique normalized urls in submission order, duplicate count,
                invalid count, truncated count)
    """
    entries = [str(raw).strip() for raw in raw_urls if raw is not None and str(raw).strip()]
    truncated = max(0, len(entries) - limit)

    seen = set()
    unique = []
    duplicates = 0
    invalid = 0

    for raw in entries[:limit]:
        url = normalize_submitted_url(raw, allowed_domains)
        if not url:
            invalid += 1
            continue
        if url in seen:
            duplicates += 1
            continue
        seen.add(url)
        unique.append(url)

    return unique, duplicates, invalid, truncated


def add_links(campaign_id, raw_urls, allowed_domains=None):
    """
    Insert the new URLs of a batch for a campaign.

    URLs already stored for the campaign are skipped. The caller owns the
    transaction boundary on failure (SQLAlchemyError propagates).

    Returns:
        dict: inserted rows plus inserted/skipped/invalid/truncated counts

    Raises:
        NoValidUrlsError: If nothing usable is left after cleaning.
    """
    candidates, duplicates, invalid, truncated = clean_urls(raw_urls, allowed_domains)
    if not candidates:
        raise NoValidUrlsError("No valid urls")

    existing = CampaignLink.query.with_entities(CampaignLink.url).filter(
        CampaignLink.campaign_id == campaign_id,
        CampaignLink.url.in_(candidates)
    ).all()
    existing_urls = {row.url for row in existing}

    new_links = []
    for url in candidates:
        if url in existing_urls:
            continue
        new_links.append(CampaignLink(
            campaign_id=campaign_id,
            url=url,
            canonical_url=None,
            views=0,
            likes=0,
            comments=0,
            shares=0,
            saves=0,
            status=LINK_STATUS_OK,
            last_error=None,
            last_updated_at=None
        ))

    if new_links:
        db.session.add_all(new_links)
        db.session.commit()

    skipped = duplicates + len(existing_urls)
    logger.info(
        f"Campaign {campaign_id}: inserted {len(new_links)} link(s), "
        f"skipped {skipped}, invalid {invalid}, truncated {truncated}"
    )

    return {
        "links": new_links,
        "inserted": len(new_links),
        "skipped": skipped,
        "invalid": invalid,
        "truncated": truncated,
    }
