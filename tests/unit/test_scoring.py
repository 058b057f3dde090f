from decimal import Decimal
from types import SimpleNamespace

import pytest

from ads_domain.scoring import (
    DEFAULT_RELEVANCE,
    MIN_RELEVANCE,
    calculate_ad_format_score,
    calculate_expected_ctr,
    calculate_final_bid_score,
    calculate_landing_page_score,
    calculate_quality_score,
    calculate_relevance_score,
    context_multiplier,
    normalised_relevance,
)
from ads_domain.types import AdCampaignContext, Location, SlotType

TITLE = "Red Running Shoes"
DESCRIPTION = "Light running shoes for daily training"


def make_ad(**overrides):
    fields = dict(
        title=TITLE,
        description=DESCRIPTION,
        landing_page_url="https://www.shop.com/p/1",
        impressions=100,
        clicks=10,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_relevance_counts_title_and_description_matches():
    context = AdCampaignContext(SlotType.SEARCH_TOP, search_query="running shoes")
    assert calculate_relevance_score(TITLE, DESCRIPTION, context) == pytest.approx(3.0)

    partial = AdCampaignContext(SlotType.SEARCH_TOP, search_query="running boots")
    # one of two words in the title and in the description
    assert calculate_relevance_score(TITLE, DESCRIPTION, partial) == pytest.approx(1.5)


def test_relevance_is_capped_with_category_match():
    context = AdCampaignContext(
        SlotType.SEARCH_TOP, search_query="running shoes", search_category="shoes", category_id="shoes"
    )
    assert calculate_relevance_score(TITLE, DESCRIPTION, context) == 3.0


def test_expected_ctr_adjusts_for_position_and_device():
    desktop = AdCampaignContext(SlotType.SEARCH_TOP)
    assert calculate_expected_ctr(100, 10, desktop) == pytest.approx(1.0)

    mobile_second = AdCampaignContext(SlotType.SEARCH_TOP, position=2, device_type="mobile")
    assert calculate_expected_ctr(100, 10, mobile_second) == pytest.approx(0.96)

    assert calculate_expected_ctr(0, 0, desktop) == 0.0


def test_landing_page_score():
    assert calculate_landing_page_score("https://www.shop.com/p/1") == 2.5
    assert calculate_landing_page_score("http://shop.com/p?id=1") == 1.0


def test_ad_format_score():
    assert calculate_ad_format_score(TITLE, DESCRIPTION) == 1.0
    assert calculate_ad_format_score("Short", None) == 0.0


def test_quality_score_sums_components():
    context = AdCampaignContext(SlotType.SEARCH_TOP, search_query="running shoes")
    assert calculate_quality_score(make_ad(), context) == pytest.approx(7.5)


def test_normalised_relevance_defaults_without_signal():
    ad = make_ad()
    assert normalised_relevance(ad, AdCampaignContext(SlotType.HOME_BANNER)) == DEFAULT_RELEVANCE
    unrelated = AdCampaignContext(SlotType.SEARCH_TOP, search_query="garden hose")
    assert normalised_relevance(ad, unrelated) == MIN_RELEVANCE
    matching = AdCampaignContext(SlotType.SEARCH_TOP, search_query="running shoes")
    assert normalised_relevance(ad, matching) == pytest.approx(1.0)


def test_context_multiplier_combines_position_device_and_location():
    context = AdCampaignContext(
        SlotType.SEARCH_TOP, position=3, device_type="Mobile", location=Location(country="TR")
    )
    assert context_multiplier(context) == pytest.approx(1.2 * 1.1 * 1.05)


def test_final_bid_score():
    context = AdCampaignContext(SlotType.SEARCH_TOP)
    assert calculate_final_bid_score(Decimal("2.00"), 5.0, 0.5, context) == pytest.approx(5.0)


def test_context_rejects_position_below_one():
    with pytest.raises(ValueError):
        AdCampaignContext(SlotType.SEARCH_TOP, position=0)
