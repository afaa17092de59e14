from unittest.mock import patch, MagicMock

import pytest

from app.services.apify_metrics import (
    ApifyConfigError,
    ApifyRunError,
    validate_apify_config,
    build_run_input,
    run_actor,
    extract_metrics,
    build_metrics_index,
    lookup_metrics,
    item_url,
)


class FakeApiError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


def test_validate_apify_config():
    validate_apify_config('token', 'clockworks/tiktok-scraper')

    with pytest.raises(ApifyConfigError, match="APIFY_TOKEN"):
        validate_apify_config(None, 'clockworks/tiktok-scraper')
    with pytest.raises(ApifyConfigError, match="APIFY_ACTOR_ID"):
        validate_apify_config('token', '  ')
    with pytest.raises(ApifyConfigError, match="URL"):
        validate_apify_config('token', 'https://apify.com/clockworks/tiktok-scraper')


def test_build_run_input():
    run_input = build_run_input(['https://www.tiktok.com/@a/video/1'])

    assert run_input["postURLs"] == ['https://www.tiktok.com/@a/video/1']
    assert run_input["startUrls"] == [{"url": 'https://www.tiktok.com/@a/video/1'}]
    assert run_input["resultsPerPage"] == 1
    assert run_input["proxyConfiguration"] == {"useApifyProxy": True}


def test_extract_metrics_uses_first_non_null_alias():
    metrics = extract_metrics({
        "playCount": 0,
        "viewCount": 99,
        "likeCount": 5,
        "commentCount": "7",
        "shareCount": None,
        "saveCount": 3,
    })

    assert metrics == {"views": 0, "likes": 5, "comments": 7, "shares": 0, "saves": 3}


def test_extract_metrics_bad_values_become_zero():
    metrics = extract_metrics({"playCount": "n/a", "diggCount": -4})

    assert metrics["views"] == 0
    assert metrics["likes"] == 0


def test_item_url_priority():
    assert item_url({"url": "u", "webVideoUrl": "w"}) == "w"
    assert item_url({"postUrl": "p", "videoUrl": "v"}) == "p"
    assert item_url({"webVideoUrl": ""}) is None


def test_build_metrics_index_normalizes_urls_and_skips_urlless_items():
    index = build_metrics_index([
        {"webVideoUrl": "https://www.tiktok.com/@a/video/1/", "playCount": 10},
        {"playCount": 5},
        "not-a-dict",
    ])

    assert list(index) == ["https://www.tiktok.com/@a/video/1"]
    assert index["https://www.tiktok.com/@a/video/1"]["views"] == 10


def test_lookup_metrics_falls_back_to_key_without_query():
    index = build_metrics_index([
        {"webVideoUrl": "https://www.tiktok.com/@a/video/1", "playCount": 10},
    ])

    assert lookup_metrics(index, "https://www.tiktok.com/@a/video/1?_r=1")["views"] == 10
    assert lookup_metrics(index, "https://www.tiktok.com/@a/video/2") is None


@patch('app.services.apify_metrics.ApifyClient')
def test_run_actor_returns_dataset_items(mock_client_cls):
    client = MagicMock()
    mock_client_cls.return_value = client
    client.actor.return_value.call.return_value = {"id": "run1", "status": "SUCCEEDED", "defaultDatasetId": "ds1"}
    client.dataset.return_value.iterate_items.return_value = iter([{"webVideoUrl": "x"}])

    items = run_actor('token', 'clockworks/tiktok-scraper', ['x'], timeout_secs=30)

    assert items == [{"webVideoUrl": "x"}]
    mock_client_cls.assert_called_once_with('token')
    client.actor.assert_called_once_with('clockworks/tiktok-scraper')
    _, kwargs = client.actor.return_value.call.call_args
    assert kwargs["timeout_secs"] == 30
    assert kwargs["run_input"]["postURLs"] == ['x']
    client.dataset.assert_called_once_with('ds1')


@patch('app.services.apify_metrics.ApifyClient')
def test_run_actor_wraps_api_errors(mock_client_cls):
    client = MagicMock()
    mock_client_cls.return_value = client
    client.actor.return_value.call.side_effect = FakeApiError("User was not found or authentication token is not valid", 401)

    with pytest.raises(ApifyRunError) as exc_info:
        run_actor('bad', 'clockworks/tiktok-scraper', ['x'])

    assert exc_info.value.status == 401
    assert str(exc_info.value) == "Apify 401"
    assert "authentication token" in exc_info.value.body


@patch('app.services.apify_metrics.ApifyClient')
def test_run_actor_failed_run_is_error(mock_client_cls):
    client = MagicMock()
    mock_client_cls.return_value = client
    client.actor.return_value.call.return_value = {"id": "run1", "status": "FAILED", "defaultDatasetId": "ds1"}

    with pytest.raises(ApifyRunError) as exc_info:
        run_actor('token', 'clockworks/tiktok-scraper', ['x'])

    assert exc_info.value.status == "FAILED"
    client.dataset.assert_not_called()


def test_error_body_is_truncated():
    error = ApifyRunError(500, "x" * 5000)

    assert len(error.body) == 1200
