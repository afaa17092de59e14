"""Database failures surface as JSON 500s carrying the driver message, with the session rolled back."""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from app.models.campaign import Campaign
from app.models.campaign_link import CampaignLink
from tests.conftest import fresh

VIDEO_1 = "https://www.tiktok.com/@a/video/1"


def _disk_full(statement="COMMIT"):
    return OperationalError(statement, {}, Exception("disk full"))


def test_create_campaign_store_failure(client):
    with patch('sqlalchemy.orm.Session.commit', side_effect=_disk_full()):
        response = client.post('/api/campaigns', json={"name": "Launch"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "disk full"}
    assert Campaign.query.count() == 0


def test_add_links_store_failure(client, make_campaign):
    campaign_id = make_campaign()

    with patch('sqlalchemy.orm.Session.commit', side_effect=_disk_full()):
        response = client.post('/api/campaign-links', json={
            "campaignId": campaign_id,
            "urls": [VIDEO_1],
        })

    assert response.status_code == 500
    assert response.get_json()["error"] == "disk full"
    assert CampaignLink.query.count() == 0


def test_list_links_store_failure(client, make_campaign):
    campaign_id = make_campaign()

    with patch('sqlalchemy.orm.Session.execute', side_effect=_disk_full("SELECT")):
        response = client.get(f'/api/campaign-links?campaignId={campaign_id}')

    assert response.status_code == 500
    assert response.get_json()["error"] == "disk full"


def test_list_campaigns_store_failure(client):
    with patch('sqlalchemy.orm.Session.execute', side_effect=_disk_full("SELECT")):
        response = client.get('/api/campaigns')

    assert response.status_code == 500
    assert response.get_json()["error"] == "disk full"


@patch('app.services.refresh_service.expand_urls', side_effect=lambda urls, **kw: list(urls))
@patch('app.services.refresh_service.run_actor')
def test_refresh_store_failure_leaves_rows_unchanged(mock_run_actor, _expand, client, make_campaign, make_link):
    mock_run_actor.return_value = [{"webVideoUrl": VIDEO_1, "playCount": 500}]
    campaign_id = make_campaign()
    link_id = make_link(campaign_id, VIDEO_1, views=7)

    with patch('sqlalchemy.orm.Session.commit', side_effect=_disk_full()):
        response = client.post(f'/api/refresh?campaignId={campaign_id}')

    assert response.status_code == 500
    assert response.get_json()["error"] == "disk full"
    link = fresh(CampaignLink, link_id)
    assert link.views == 7
    assert link.status == "ok"
    assert link.canonical_url is None
    assert link.last_updated_at is None
