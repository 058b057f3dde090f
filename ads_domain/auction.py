"""Slot auction: ranking, generalised second-price costs and eligibility."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

from .money import DEFAULT_CURRENCY, Money, to_decimal
from .scoring import calculate_final_bid_score, context_multiplier
from .types import (
    AdCampaignContext,
    AdStatus,
    BiddingResult,
    CompetingAd,
    EligibilityResult,
    SlotType,
)

SLOT_LIMITS = {
    SlotType.SEARCH_TOP: 3,
    SlotType.SEARCH_SIDE: 1,
    SlotType.SEARCH_BOTTOM: 2,
    SlotType.CATEGORY_TOP: 4,
    SlotType.CATEGORY_SIDE: 2,
    SlotType.PRODUCT_TOP: 2,
    SlotType.PRODUCT_SIDE: 1,
    SlotType.HOME_BANNER: 1,
    SlotType.HOME_SIDEBAR: 3,
    SlotType.CHECKOUT_TOP: 1,
    SlotType.CART_SIDEBAR: 2,
}

# A winner without a competitor below it pays this share of its bid.
NO_COMPETITION_COST_FACTOR = Decimal("0.8")
MIN_BID_INCREMENT = Decimal("0.01")


def get_max_ads_for_slot(slot_type: Any) -> int:
    try:
        return SLOT_LIMITS[SlotType(slot_type)]
    except ValueError:
        return 1


def calculate_actual_cost(
    ad: CompetingAd,
    runner_up_score: Optional[float],
    context: AdCampaignContext,
    reserve_price: Optional[Decimal] = None,
    currency: str = DEFAULT_CURRENCY,
) -> Decimal:
    """Price a winner pays: just enough to keep its rank over ``runner_up_score``.

    Bounded below by ``reserve_price`` and above by the winner's own bid.
    """
    bid = ad.effective_bid
    denominator = ad.quality_score * ad.relevance_score * context_multiplier(context)

    if runner_up_score is not None and denominator > 0:
        price = to_decimal(runner_up_score / denominator) + MIN_BID_INCREMENT
    else:
        price = bid * NO_COMPETITION_COST_FACTOR

    if reserve_price is not None and price < reserve_price:
        price = reserve_price
    if price > bid:
        price = bid
    return Money(price, currency).amount


def _rank_key(entry):
    ad, score = entry
    return (-score, -ad.effective_bid, ad.ad_id)


def run_ad_auction(
    slot_type: Any,
    position: int,
    competing_ads: Sequence[CompetingAd],
    context: AdCampaignContext,
    reserve_price: Optional[Decimal] = None,
    max_ads: Optional[int] = None,
    currency: str = DEFAULT_CURRENCY,
) -> List[BiddingResult]:
    """Rank ``competing_ads`` for one slot and price the winners.

    Ads are ordered by final bid score, then bid, then ad id, so the outcome
    does not depend on input order. The top ``max_ads`` (the slot limit by
    default) win consecutive positions starting at ``position``.
    """
    if not competing_ads:
        return []

    slot_type = SlotType(slot_type)
    scored = [
        (
            ad,
            calculate_final_bid_score(ad.effective_bid, ad.quality_score, ad.relevance_score, context),
        )
        for ad in competing_ads
    ]
    ranked = sorted(scored, key=_rank_key)

    limit = max_ads if max_ads is not None else get_max_ads_for_slot(slot_type)
    winners = ranked[: max(0, limit)]

    results: List[BiddingResult] = []
    for rank, (ad, score) in enumerate(winners):
        runner_up_score = ranked[rank + 1][1] if rank + 1 < len(ranked) else None
        cost = calculate_actual_cost(ad, runner_up_score, context, reserve_price, currency)
        results.append(
            BiddingResult(
                ad_id=ad.ad_id,
                campaign_id=ad.campaign_id,
                bid_amount=ad.effective_bid,
                quality_score=ad.quality_score,
                relevance_score=ad.relevance_score,
                final_score=score,
                is_winner=True,
                position=position + rank,
                cost=cost,
                metadata={
                    "slot_type": slot_type.value,
                    "auction_rank": rank + 1,
                    "total_competitors": len(competing_ads),
                },
            )
        )
    return results


def calculate_slot_revenue(allocated_ads: Iterable[Any]) -> Decimal:
    """Total paid by the winners of one slot."""
    total = Decimal("0")
    for ad in allocated_ads:
        total += to_decimal(ad.cost)
    return total


def is_ad_eligible_for_slot(ad: Any, slot: Any, context: AdCampaignContext) -> EligibilityResult:
    """Check an ad against a slot's floor prices and targeting.

    ``ad`` exposes ``status``, ``is_active``, ``is_approved``, ``bid_amount`` and
    ``max_bid_amount``; ``slot`` exposes ``min_bid_amount``, ``reserve_price``,
    ``target_categories`` and ``target_keywords``.
    """
    if AdStatus(ad.status) is not AdStatus.ACTIVE:
        return EligibilityResult(False, "Ad is not active")
    if not ad.is_active:
        return EligibilityResult(False, "Ad is paused")
    if not ad.is_approved:
        return EligibilityResult(False, "Ad is not approved")

    bid = to_decimal(ad.bid_amount)
    if bid < to_decimal(slot.min_bid_amount or 0):
        return EligibilityResult(False, "Bid amount below minimum")
    if slot.reserve_price and bid < to_decimal(slot.reserve_price):
        return EligibilityResult(False, "Bid amount below reserve price")
    if ad.max_bid_amount and bid > to_decimal(ad.max_bid_amount):
        return EligibilityResult(False, "Bid amount exceeds maximum")

    target_categories = list(slot.target_categories or [])
    if target_categories and context.category_id:
        if context.category_id not in target_categories:
            return EligibilityResult(False, "Ad not targeted for this category")

    target_keywords = list(slot.target_keywords or [])
    if target_keywords and context.search_query:
        query_words = context.search_query.lower().split()
        has_matching_keyword = any(
            keyword.lower() in word for keyword in target_keywords for word in query_words
        )
        if not has_matching_keyword:
            return EligibilityResult(False, "No matching keywords found")

    return EligibilityResult(True)
