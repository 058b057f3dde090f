from decimal import Decimal
from types import SimpleNamespace

import pytest

from ads_domain.auction import (
    calculate_actual_cost,
    calculate_slot_revenue,
    get_max_ads_for_slot,
    is_ad_eligible_for_slot,
    run_ad_auction,
)
from ads_domain.types import AdCampaignContext, CompetingAd, SlotType

CONTEXT = AdCampaignContext(SlotType.SEARCH_TOP)


def competitor(ad_id, bid, quality, relevance=1.0, max_bid=None):
    return CompetingAd(
        ad_id=ad_id,
        campaign_id=f"camp-{ad_id}",
        bid_amount=Decimal(bid),
        quality_score=quality,
        relevance_score=relevance,
        max_bid_amount=Decimal(max_bid) if max_bid else None,
    )


def three_bidders():
    return [
        competitor("c", "1.00", 3.0),
        competitor("a", "2.00", 5.0),
        competitor("b", "1.50", 4.0),
    ]


def test_winners_ranked_by_score_and_priced_by_next_ad():
    results = run_ad_auction(SlotType.SEARCH_TOP, 1, three_bidders(), CONTEXT)

    assert [r.ad_id for r in results] == ["a", "b", "c"]
    assert [r.position for r in results] == [1, 2, 3]
    # score 6 / (5 * 1 * 1) + 0.01, score 3 / 4 + 0.01, last pays 80% of bid
    assert [r.cost for r in results] == [Decimal("1.21"), Decimal("0.76"), Decimal("0.80")]
    assert all(r.is_winner for r in results)
    assert results[0].metadata == {"slot_type": "SEARCH_TOP", "auction_rank": 1, "total_competitors": 3}


def test_result_does_not_depend_on_input_order():
    forward = run_ad_auction(SlotType.SEARCH_TOP, 1, three_bidders(), CONTEXT)
    backward = run_ad_auction(SlotType.SEARCH_TOP, 1, list(reversed(three_bidders())), CONTEXT)
    assert [(r.ad_id, r.cost) for r in forward] == [(r.ad_id, r.cost) for r in backward]


def test_cost_never_exceeds_bid():
    ads = [competitor("cheap", "1.00", 1.0), competitor("rich", "2.00", 0.5)]
    results = run_ad_auction(SlotType.SEARCH_TOP, 1, ads, CONTEXT)

    # Equal scores: the higher bid ranks first
    assert [r.ad_id for r in results] == ["rich", "cheap"]
    assert results[0].cost == Decimal("2.00")
    for result in results:
        assert result.cost <= result.bid_amount


def test_ties_fall_back_to_ad_id():
    ads = [competitor("b", "1.00", 2.0), competitor("a", "1.00", 2.0)]
    results = run_ad_auction(SlotType.SEARCH_TOP, 1, ads, CONTEXT)
    assert [r.ad_id for r in results] == ["a", "b"]


def test_reserve_price_is_a_floor():
    results = run_ad_auction(
        SlotType.SEARCH_TOP, 1, three_bidders(), CONTEXT, reserve_price=Decimal("1.00")
    )
    assert [r.cost for r in results] == [Decimal("1.21"), Decimal("1.00"), Decimal("1.00")]


def test_max_bid_caps_effective_bid():
    ad = competitor("x", "3.00", 5.0, max_bid="2.00")
    [result] = run_ad_auction(SlotType.SEARCH_TOP, 1, [ad], CONTEXT)
    assert result.bid_amount == Decimal("2.00")
    assert result.cost == Decimal("1.60")


def test_slot_limit_and_max_ads_override():
    assert len(run_ad_auction(SlotType.SEARCH_SIDE, 1, three_bidders(), CONTEXT)) == 1
    assert len(run_ad_auction(SlotType.SEARCH_TOP, 1, three_bidders(), CONTEXT, max_ads=2)) == 2


def test_positions_start_at_requested_position():
    context = AdCampaignContext(SlotType.SEARCH_TOP, position=2)
    results = run_ad_auction(SlotType.SEARCH_TOP, 2, three_bidders(), context)
    assert [r.position for r in results] == [2, 3, 4]


def test_empty_auction():
    assert run_ad_auction(SlotType.SEARCH_TOP, 1, [], CONTEXT) == []
    assert calculate_slot_revenue([]) == Decimal("0")


def test_revenue_is_sum_of_costs():
    results = run_ad_auction(SlotType.SEARCH_TOP, 1, three_bidders(), CONTEXT)
    assert calculate_slot_revenue(results) == Decimal("2.77")


def test_actual_cost_without_quality_uses_fallback():
    ad = competitor("z", "1.00", 0.0)
    assert calculate_actual_cost(ad, 5.0, CONTEXT) == Decimal("0.80")


@pytest.mark.parametrize(
    "slot_type, expected",
    [(SlotType.SEARCH_TOP, 3), (SlotType.CATEGORY_TOP, 4), (SlotType.HOME_BANNER, 1), ("UNKNOWN", 1)],
)
def test_max_ads_for_slot(slot_type, expected):
    assert get_max_ads_for_slot(slot_type) == expected


def slot(**overrides):
    fields = dict(min_bid_amount=Decimal("0.50"), reserve_price=None, target_categories=[], target_keywords=[])
    fields.update(overrides)
    return SimpleNamespace(**fields)


def listing(**overrides):
    fields = dict(status="ACTIVE", is_active=True, is_approved=True, bid_amount=Decimal("1.00"), max_bid_amount=None)
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize(
    "ad_fields, slot_fields, context_fields, reason",
    [
        ({"status": "PAUSED"}, {}, {}, "Ad is not active"),
        ({"is_active": False}, {}, {}, "Ad is paused"),
        ({"is_approved": False}, {}, {}, "Ad is not approved"),
        ({"bid_amount": Decimal("0.40")}, {}, {}, "Bid amount below minimum"),
        ({}, {"reserve_price": Decimal("1.50")}, {}, "Bid amount below reserve price"),
        ({"max_bid_amount": Decimal("0.80")}, {}, {}, "Bid amount exceeds maximum"),
        ({}, {"target_categories": ["shoes"]}, {"category_id": "bags"}, "Ad not targeted for this category"),
        ({}, {"target_keywords": ["laptop"]}, {"search_query": "red shoes"}, "No matching keywords found"),
    ],
)
def test_ineligible_reasons(ad_fields, slot_fields, context_fields, reason):
    context = AdCampaignContext(SlotType.SEARCH_TOP, **context_fields)
    result = is_ad_eligible_for_slot(listing(**ad_fields), slot(**slot_fields), context)
    assert not result.eligible
    assert result.reason == reason


def test_eligible_ad():
    context = AdCampaignContext(SlotType.SEARCH_TOP, search_query="gaming laptops", category_id="tech")
    result = is_ad_eligible_for_slot(
        listing(), slot(target_categories=["tech"], target_keywords=["laptop"]), context
    )
    assert result.eligible
    assert result.reason is None
