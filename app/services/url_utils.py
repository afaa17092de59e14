"""
URL helpers shared by link ingestion and refresh.

Two different normalizations are in play:
  - normalize_submitted_url: applied once at ingestion (scheme/host checks,
    query and fragment removed)
  - normalize_match_key: applied to resolved URLs and provider URLs before
    matching them against each other (trim, trailing slashes removed)
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import urlsplit, urlunsplit

import requests

logger = logging.getLogger(__name__)

USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0 Safari/537.36'
)


def host_allowed(hostname, allowed_domains):
    """True when hostname equals an allowed domain or is a subdomain of one."""
    if not allowed_domains:
        return True
    hostname = (hostname or '').lower()
    for domain in allowed_domains:
        if hostname == domain or hostname.endswith('.' + domain):
            return True
    return False


def normalize_submitted_url(raw, allowed_domains=None):
    """
    Clean a URL pasted by a user.

    Returns the normalized URL, or None when the entry is empty, is not an
    http(s) URL, or its host is outside allowed_domains.

    Example:
        normalize_submitted_url(' https://www.tiktok.com/@a/video/1?lang=en ', ['tiktok.com'])
        -> 'https://www.tiktok.com/@a/video/1'
    """
    value = str(raw or '').strip()
    if not value:
        return None

    try:
        parts = urlsplit(value)
    except ValueError:
        return None

    if parts.scheme.lower() not in ('http', 'https') or not parts.netloc:
        return None
    if not host_allowed(parts.hostname, allowed_domains):
        return None

    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, '', ''))


def normalize_match_key(url):
    return str(url or '').strip().rstrip('/')


def strip_query(url):
    """Match key without query string and fragment (tracking params on short-link targets)."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    return normalize_match_key(urlunsplit((parts.scheme, parts.netloc, parts.path, '', '')))


def expand_url(url, timeout=5):
    """
    Follow redirects from url and return the final destination.

    Any request failure falls back to the input URL unchanged.
    """
    try:
        response = requests.get(
            url,
            allow_redirects=True,
            timeout=timeout,
            stream=True,
            headers={'User-Agent': USER_AGENT}
        )
    except requests.RequestException as e:
        logger.debug(f"Could not expand {url}: {e}")
        return url

    try:
        return response.url or url
    finally:
        response.close()


def expand_urls(urls, timeout=5, max_workers=16):
    """Expand every URL concurrently; output order matches input order."""
    if not urls:
        return []
    workers = max(1, min(max_workers, len(urls)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(lambda u: expand_url(u, timeout=timeout), urls))
