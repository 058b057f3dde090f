"""Budgets, utilization, performance reports, bid recommendations and health."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest


@pytest.fixture
def campaign(builder, seller_headers):
    created = builder.campaign(seller_headers, name="Trail Running Shoes")
    builder.ad(
        seller_headers,
        created["id"],
        "Trail Running Shoes",
        "Lightweight running shoes for trail runners",
        "1.00",
    )
    return created


def budget_payload(campaign_id, **overrides):
    payload = {
        "campaign_id": campaign_id,
        "budget_type": "MONTHLY",
        "amount": "100.00",
        "start_date": datetime.now(timezone.utc).isoformat(),
    }
    payload.update(overrides)
    return payload


def test_create_budget(client, campaign, seller_headers):
    response = client.post("/ads/budgets", json=budget_payload(campaign["id"]), headers=seller_headers)
    assert response.status_code == 201
    budget = response.json()
    assert budget["budget_type"] == "MONTHLY"
    assert budget["currency"] == "TRY"
    assert Decimal(budget["remaining_amount"]) == Decimal("100.00")
    assert Decimal(budget["used_amount"]) == Decimal("0")
    assert budget["is_exhausted"] is False


def test_budget_end_before_start_is_rejected(client, campaign, seller_headers):
    now = datetime.now(timezone.utc)
    payload = budget_payload(
        campaign["id"], start_date=now.isoformat(), end_date=(now - timedelta(days=1)).isoformat()
    )
    response = client.post("/ads/budgets", json=payload, headers=seller_headers)
    assert response.status_code == 400
    assert response.json()["errors"] == ["end_date must not be before start_date"]


def test_budget_requires_campaign_owner(client, campaign, other_seller_headers):
    response = client.post("/ads/budgets", json=budget_payload(campaign["id"]), headers=other_seller_headers)
    assert response.status_code == 403


def test_budget_usage_drives_utilization(client, campaign, seller_headers, admin_headers):
    end = datetime.now(timezone.utc) + timedelta(days=10)
    budget = client.post(
        "/ads/budgets",
        json=budget_payload(campaign["id"], end_date=end.isoformat()),
        headers=seller_headers,
    ).json()

    denied = client.post(f"/ads/budgets/{budget['id']}/usage", json={"amount": "40.00"}, headers=seller_headers)
    assert denied.status_code == 403

    used = client.post(f"/ads/budgets/{budget['id']}/usage", json={"amount": "40.00"}, headers=admin_headers)
    assert used.status_code == 200
    assert Decimal(used.json()["remaining_amount"]) == Decimal("60.00")

    [entry] = client.get(f"/ads/campaigns/{campaign['id']}/budget-utilization", headers=seller_headers).json()
    assert entry["utilization_percentage"] == pytest.approx(40.0)
    assert entry["status"] == "UNDER_BUDGET"
    assert entry["days_remaining"] in (9, 10)

    client.post(f"/ads/budgets/{budget['id']}/usage", json={"amount": "50.00"}, headers=admin_headers)
    [entry] = client.get(f"/ads/campaigns/{campaign['id']}/budget-utilization", headers=seller_headers).json()
    assert entry["utilization_percentage"] == pytest.approx(90.0)
    assert entry["status"] == "ON_TRACK"


def test_unknown_budget_usage_returns_404(client, admin_headers):
    response = client.post("/ads/budgets/missing/usage", json={"amount": "1.00"}, headers=admin_headers)
    assert response.status_code == 404


def test_performance_report_for_quiet_campaign(client, campaign, seller_headers):
    response = client.get(f"/ads/campaigns/{campaign['id']}/reports", headers=seller_headers)
    assert response.status_code == 200
    report = response.json()
    assert report["campaign_id"] == campaign["id"]
    assert report["summary"]["impressions"] == 0
    assert "Low click-through rate suggests ad relevance issues" in report["insights"]
    assert "Negative return on ad spend" in report["insights"]
    assert report["recommendations"] == [
        "Consider improving ad title and description",
        "Review targeting and landing page optimization",
    ]
    start = datetime.fromisoformat(report["date_range"]["start"].replace("Z", "+00:00"))
    end = datetime.fromisoformat(report["date_range"]["end"].replace("Z", "+00:00"))
    assert (end - start).days == 30


def test_bid_recommendation_derives_competition(client, campaign, seller_headers):
    response = client.get(f"/ads/campaigns/{campaign['id']}/bid-recommendation", headers=seller_headers)
    assert response.status_code == 200
    recommendation = response.json()
    # 1.00 x 0.9 (quality 3.5) x 0.9 (no rivals) x 0.8 (no clicks yet)
    assert Decimal(recommendation["recommended_bid"]) == Decimal("0.65")
    assert recommendation["confidence"] == "HIGH"
    assert "Low competition allows for lower bids." in recommendation["reasoning"]


def test_bid_recommendation_with_explicit_competition(client, campaign, seller_headers):
    response = client.get(
        f"/ads/campaigns/{campaign['id']}/bid-recommendation",
        params={"competition_level": "HIGH"},
        headers=seller_headers,
    )
    assert Decimal(response.json()["recommended_bid"]) == Decimal("0.86")
    assert "High competition requires higher bids." in response.json()["reasoning"]


def test_health(client):
    response = client.get("/ads/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["details"]["database_connected"] is True
