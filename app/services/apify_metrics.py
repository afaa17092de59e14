"""
Apify adapter for TikTok video metrics.

Runs the configured actor synchronously for a set of video URLs and turns the
returned dataset items into a lookup of normalized video URL -> metrics.
"""
import json
import logging

from apify_client import ApifyClient

from app.services.url_utils import normalize_match_key, strip_query

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 1200

# Item keys that may carry the video URL, in priority order
URL_KEYS = ('webVideoUrl', 'url', 'postUrl', 'videoUrl')

# Metric name -> item keys, first non-null wins (actors disagree on naming)
METRIC_ALIASES = {
    'views': ('playCount', 'viewCount'),
    'likes': ('diggCount', 'likeCount'),
    'comments': ('commentCount',),
    'shares': ('shareCount',),
    'saves': ('collectCount', 'saveCount'),
}

FAILED_RUN_STATUSES = {'FAILED', 'ABORTED', 'TIMED-OUT', 'TIMED_OUT'}


class ApifyConfigError(ValueError):
    """Apify credentials or actor id missing or malformed."""


class ApifyRunError(Exception):
    """The actor run could not be started or did not succeed."""

    def __init__(self, status, body):
        self.status = status
        self.body = (body or '')[:ERROR_BODY_LIMIT]
        super().__init__(f"Apify {status}")


def validate_apify_config(token, actor_id):
    """
    Raises:
        ApifyConfigError: If the token or actor id is missing, or the actor id is a URL.
    """
    if not token:
        raise ApifyConfigError("Missing env var: APIFY_TOKEN")
    if not actor_id or not isinstance(actor_id, str) or not actor_id.strip():
        raise ApifyConfigError("Missing env var: APIFY_ACTOR_ID")
    if actor_id.startswith('http://') or actor_id.startswith('https://'):
        raise ApifyConfigError(
            f"APIFY_ACTOR_ID appears to be a URL, not an actor ID: {actor_id}. "
            "Actor ID should be in format: 'username/actor-name' (e.g., 'clockworks/tiktok-scraper')"
        )


def build_run_input(urls):
    # Accepted by clockworks/tiktok-scraper: postURLs for videos, startUrls as fallback
    return {
        "postURLs": list(urls),
        "startUrls": [{"url": url} for url in urls],
        "resultsPerPage": 1,
        "proxyConfiguration": {"useApifyProxy": True},
    }


def run_actor(token, actor_id, urls, timeout_secs=300):
    """
    Run the actor and return its dataset items.

    Raises:
        ApifyRunError: On API errors or when the run does not succeed.
    """
    client = ApifyClient(token)
    run_input = build_run_input(urls)

    logger.info(f"Calling Apify Actor '{actor_id}' for {len(urls)} url(s)")

    try:
        run = client.actor(actor_id).call(run_input=run_input, timeout_secs=timeout_secs)
    except Exception as e:
        status = getattr(e, 'status_code', None) or 'error'
        logger.error(f"Apify API error: {str(e)}")
        raise ApifyRunError(status, str(e)) from e

    if not run:
        raise ApifyRunError('error', f"Actor '{actor_id}' returned no run")

    run_status = run.get('status')
    if run_status in FAILED_RUN_STATUSES:
        logger.error(f"Apify run {run.get('id')} ended with status {run_status}")
        raise ApifyRunError(run_status, json.dumps(run, default=str))

    try:
        items = list(client.dataset(run["defaultDatasetId"]).iterate_items())
    except Exception as e:
        status = getattr(e, 'status_code', None) or 'error'
        logger.error(f"Could not read Apify dataset: {str(e)}")
        raise ApifyRunError(status, str(e)) from e

    logger.info(f"Apify returned {len(items)} item(s)")
    return items


def item_url(item):
    for key in URL_KEYS:
        value = item.get(key)
        if value:
            return str(value)
    return None


def _to_count(value):
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError):
        return 0


def extract_metrics(item):
    """
    Example:
        extract_metrics({"playCount": 10, "diggCount": 2})
        -> {"views": 10, "likes": 2, "comments": 0, "shares": 0, "saves": 0}
    """
    metrics = {}
    for name, keys in METRIC_ALIASES.items():
        value = None
        for key in keys:
            if item.get(key) is not None:
                value = item[key]
                break
        metrics[name] = _to_count(value)
    return metrics


def build_metrics_index(items):
    """
    Map normalized provider URL -> metrics.

    Each item is indexed under its exact match key and, when different, under
    the key with the query string removed (exact keys take precedence).
    """
    exact = {}
    loose = {}
    for item in items or []:
        if not isinstance(item, dict):
            continue
        key = normalize_match_key(item_url(item))
        if not key:
            continue
        metrics = extract_metrics(item)
        exact[key] = metrics
        loose.setdefault(strip_query(key), metrics)

    index = dict(loose)
    index.update(exact)
    return index


def lookup_metrics(index, key):
    if key in index:
        return index[key]
    return index.get(strip_query(key))
