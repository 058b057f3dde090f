"""Impression and click tracking, click charging and campaign statistics."""

from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql

from ads_api.repositories.ad_campaign import AdCampaignRepository

TRACK = "?tenant_id=tenant-a"


@pytest.fixture
def live_ad(builder, seller, seller_headers):
    return builder.launch(
        seller_headers,
        seller.id,
        "Trail Running Shoes",
        "Lightweight running shoes for trail runners",
        "2.00",
        balance="10.00",
    )


def impression(client, launched, **overrides):
    payload = {
        "campaign_id": launched["campaign"]["id"],
        "ad_id": launched["ad"]["id"],
        "slot": "SEARCH_TOP",
    }
    payload.update(overrides)
    return client.post(f"/ads/impressions{TRACK}", json=payload)


def click(client, launched, cost="0", **overrides):
    payload = {
        "campaign_id": launched["campaign"]["id"],
        "ad_id": launched["ad"]["id"],
        "slot": "SEARCH_TOP",
        "cost": cost,
    }
    payload.update(overrides)
    return client.post(f"/ads/clicks{TRACK}", json=payload)


def test_impression_is_recorded(client, live_ad):
    response = impression(client, live_ad, position=2, search_query="running shoes")
    assert response.status_code == 201
    data = response.json()
    assert data["impression_type"] == "VIEW"
    assert data["position"] == 2


def test_tracking_requires_tenant(client, live_ad):
    response = client.post(
        "/ads/impressions",
        json={"campaign_id": live_ad["campaign"]["id"], "ad_id": live_ad["ad"]["id"], "slot": "SEARCH_TOP"},
    )
    assert response.status_code == 400


def test_tracking_rejects_ad_from_other_campaign(client, builder, live_ad, seller_headers):
    other = builder.campaign(seller_headers, name="Other campaign")
    response = impression(client, live_ad, campaign_id=other["id"])
    assert response.status_code == 400
    assert response.json()["errors"] == ["Ad does not belong to campaign"]


def test_tracking_unknown_ad_returns_404(client, live_ad):
    response = click(client, live_ad, ad_id="missing")
    assert response.status_code == 404


def test_click_charges_wallet_and_updates_campaign(client, live_ad, seller, seller_headers):
    impression(client, live_ad)
    response = click(client, live_ad, cost="1.01")
    assert response.status_code == 201
    click_data = response.json()
    assert Decimal(click_data["cost"]) == Decimal("1.01")
    assert click_data["currency"] == "TRY"

    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("8.99")
    assert Decimal(wallet["total_spent"]) == Decimal("1.01")

    transactions = client.get(f"/ads/wallets/{wallet['id']}/transactions", headers=seller_headers).json()
    [spend] = [t for t in transactions if t["type"] == "SPEND"]
    assert spend["reference"] == f"click:{click_data['id']}"
    assert spend["ad_id"] == live_ad["ad"]["id"]
    assert Decimal(spend["balance_before"]) == Decimal("10.00")
    assert Decimal(spend["balance_after"]) == Decimal("8.99")

    campaign = client.get(f"/ads/campaigns/{live_ad['campaign']['id']}", headers=seller_headers).json()
    assert campaign["impressions"] == 1
    assert campaign["clicks"] == 1
    assert Decimal(campaign["spend"]) == Decimal("1.01")


def test_free_click_leaves_wallet_untouched(client, live_ad, seller, seller_headers):
    assert click(client, live_ad).status_code == 201
    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("10.00")


def test_click_costing_more_than_balance_empties_wallet(client, live_ad, seller, seller_headers):
    wallet_id = live_ad["wallet"]["id"]
    withdrawn = client.post(f"/ads/wallets/{wallet_id}/withdraw", json={"amount": "9.00"}, headers=seller_headers)
    assert withdrawn.status_code == 201

    assert click(client, live_ad, cost="2.00").status_code == 201
    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("0")


def test_click_cost_above_bid_is_rejected(client, live_ad, seller, seller_headers):
    response = click(client, live_ad, cost="9.99")
    assert response.status_code == 400
    assert response.json()["errors"] == ["cost 9.99 exceeds the ad's bid of 2.00"]

    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("10.00")
    campaign = client.get(f"/ads/campaigns/{live_ad['campaign']['id']}", headers=seller_headers).json()
    assert campaign["clicks"] == 0


def test_click_cost_equal_to_bid_is_charged(client, live_ad, seller, seller_headers):
    assert click(client, live_ad, cost="2.00").status_code == 201
    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("8.00")


def test_click_in_foreign_currency_is_rejected(client, live_ad, seller, seller_headers):
    response = click(client, live_ad, cost="1.00", currency="USD")
    assert response.status_code == 400
    assert response.json()["errors"] == ["Click currency USD does not match wallet currency TRY"]

    wallet = client.get(f"/ads/wallets/seller/{seller.id}", headers=seller_headers).json()
    assert Decimal(wallet["balance"]) == Decimal("10.00")
    assert Decimal(wallet["total_spent"]) == Decimal("0")


def test_click_in_wallet_currency_is_accepted(client, live_ad):
    response = click(client, live_ad, cost="1.00", currency="try")
    assert response.status_code == 201
    assert response.json()["currency"] == "TRY"



def test_negative_click_cost_is_rejected(client, live_ad):
    assert click(client, live_ad, cost="-1").status_code == 422


def test_conversion_counts_toward_statistics(client, live_ad, seller_headers):
    for _ in range(4):
        impression(client, live_ad)
    click(client, live_ad, cost="1.00")
    click(client, live_ad, cost="1.00", is_conversion=True, conversion_value="10.00")

    response = client.get(f"/ads/campaigns/{live_ad['campaign']['id']}/statistics", headers=seller_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["impressions"] == 4
    assert stats["clicks"] == 2
    assert stats["conversions"] == 1
    assert stats["spend"] == pytest.approx(2.0)
    assert stats["revenue"] == pytest.approx(10.0)
    assert stats["ctr"] == pytest.approx(50.0)
    assert stats["cpc"] == pytest.approx(1.0)
    assert stats["roas"] == pytest.approx(5.0)


def test_statistics_hidden_from_other_sellers(client, live_ad, other_seller_headers):
    response = client.get(
        f"/ads/campaigns/{live_ad['campaign']['id']}/statistics", headers=other_seller_headers
    )
    assert response.status_code == 403


def test_slot_statistics(client, live_ad, seller_headers):
    impression(client, live_ad)
    impression(client, live_ad)
    impression(client, live_ad, slot="HOME_BANNER")
    click(client, live_ad, cost="0.50")

    response = client.get("/ads/slots/SEARCH_TOP/statistics", headers=seller_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_impressions"] == 2
    assert stats["total_clicks"] == 1
    assert Decimal(stats["total_revenue"]) == Decimal("0.50")
    assert stats["average_ctr"] == pytest.approx(50.0)
    assert stats["average_cpc"] == pytest.approx(0.5)


def test_exhausted_budget_removes_campaign_from_auctions(client, live_ad, seller_headers):
    budget = client.post(
        "/ads/budgets",
        json={
            "campaign_id": live_ad["campaign"]["id"],
            "budget_type": "TOTAL",
            "amount": "1.00",
            "start_date": live_ad["campaign"]["start_date"],
        },
        headers=seller_headers,
    )
    assert budget.status_code == 201

    click(client, live_ad, cost="1.01")

    [entry] = client.get(
        f"/ads/campaigns/{live_ad['campaign']['id']}/budget-utilization", headers=seller_headers
    ).json()
    assert entry["status"] == "EXHAUSTED"
    assert entry["budget"]["is_exhausted"] is True
    assert Decimal(entry["budget"]["remaining_amount"]) == Decimal("0")

    data = client.post(
        f"/ads/slots/allocate{TRACK}",
        json={"slot_type": "SEARCH_TOP", "search_query": "running shoes"},
    ).json()
    assert data["allocated_ads"] == []
    assert data["metadata"]["excluded"] == {live_ad["ad"]["id"]: "Campaign budget exhausted"}


def test_daily_budget_spent_removes_campaign_until_tomorrow(client, builder, seller, seller_headers):
    campaign = builder.campaign(seller_headers, name="Trail Running Shoes", daily_budget="1.00", bid_amount="2.00")
    ad = builder.ad(seller_headers, campaign["id"], "Trail Running Shoes", "Running shoes", "2.00")
    builder.fund(seller.id, "10.00")
    launched = {"campaign": campaign, "ad": ad}

    query = {"slot_type": "SEARCH_TOP", "search_query": "running shoes"}
    before = client.post(f"/ads/slots/allocate{TRACK}", json=query).json()
    assert [w["ad_id"] for w in before["allocated_ads"]] == [ad["id"]]

    assert click(client, launched, cost="0.60").status_code == 201
    assert click(client, launched, cost="0.40").status_code == 201

    after = client.post(f"/ads/slots/allocate{TRACK}", json=query).json()
    assert after["allocated_ads"] == []
    assert after["metadata"]["excluded"] == {ad["id"]: "Campaign daily budget spent"}


def test_click_charge_locks_wallet_and_budget_rows(db_session):
    repo = AdCampaignRepository(db_session)
    dialect = postgresql.dialect()

    wallet_sql = str(repo.seller_wallet_query("seller-1", "tenant-a", for_update=True).statement.compile(dialect=dialect))
    budget_sql = str(repo.active_budgets_query("campaign-1", for_update=True).statement.compile(dialect=dialect))
    assert "FOR UPDATE" in wallet_sql
    assert "FOR UPDATE" in budget_sql

    plain_sql = str(repo.seller_wallet_query("seller-1", "tenant-a").statement.compile(dialect=dialect))
    assert "FOR UPDATE" not in plain_sql
