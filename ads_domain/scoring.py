"""Quality, relevance and bid scoring for ad auctions.

All functions are pure. ``ad`` arguments are any object exposing ``title``,
``description``, ``landing_page_url``, ``impressions`` and ``clicks``
attributes (an ORM row or a plain dataclass both work).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Union

from .types import AdCampaignContext

MAX_QUALITY_SCORE = 10.0
MAX_RELEVANCE_SCORE = 3.0
MAX_EXPECTED_CTR_SCORE = 3.0
MAX_LANDING_PAGE_SCORE = 3.0
MAX_FORMAT_SCORE = 1.0

# Relevance multiplier used when the context carries no query or category.
DEFAULT_RELEVANCE = 0.8
MIN_RELEVANCE = 0.1

PREMIUM_COUNTRY = "TR"


def _words(text: Optional[str]) -> list:
    return (text or "").lower().split()


def calculate_relevance_score(
    title: str, description: Optional[str], context: AdCampaignContext
) -> float:
    """Keyword and category relevance on a 0-3 scale."""
    score = 0.0

    if context.search_query:
        query_words = _words(context.search_query)
        if query_words:
            title_words = set(_words(title))
            description_words = set(_words(description))
            title_matches = sum(1 for word in query_words if word in title_words)
            description_matches = sum(1 for word in query_words if word in description_words)
            score += (title_matches / len(query_words)) * 2
            score += (description_matches / len(query_words)) * 1

    if context.search_category and context.category_id:
        if context.search_category == context.category_id:
            score += 1

    return min(MAX_RELEVANCE_SCORE, score)


def calculate_expected_ctr(impressions: int, clicks: int, context: AdCampaignContext) -> float:
    """Historical CTR adjusted for position and device, on a 0-3 scale."""
    historical_ctr = clicks / impressions if impressions > 0 else 0.0
    position_factor = max(0.1, 1 - (context.position - 1) * 0.2)
    device_factor = 1.2 if context.is_mobile else 1.0
    expected_ctr = historical_ctr * position_factor * device_factor
    return min(MAX_EXPECTED_CTR_SCORE, expected_ctr * 10)


def calculate_landing_page_score(landing_page_url: str) -> float:
    score = 0.0
    url = landing_page_url or ""

    if "https://" in url:
        score += 0.5
    if len(url) < 100:
        score += 0.5

    if "www." in url:
        score += 0.5
    if "?" not in url:
        score += 0.5

    # Mobile friendliness needs a page fetch; every page gets the baseline.
    score += 0.5

    return min(MAX_LANDING_PAGE_SCORE, score)


def calculate_ad_format_score(title: str, description: Optional[str]) -> float:
    score = 0.0
    if 10 <= len(title or "") <= 60:
        score += 0.5
    if description and 20 <= len(description) <= 160:
        score += 0.5
    return min(MAX_FORMAT_SCORE, score)


def calculate_quality_score(ad: Any, context: AdCampaignContext) -> float:
    """Quality score on a 0-10 scale.

    Sum of relevance (0-3), expected CTR (0-3), landing page experience (0-3)
    and ad format (0-1).
    """
    score = calculate_relevance_score(ad.title, ad.description, context)
    score += calculate_expected_ctr(ad.impressions or 0, ad.clicks or 0, context)
    score += calculate_landing_page_score(ad.landing_page_url)
    score += calculate_ad_format_score(ad.title, ad.description)
    return min(MAX_QUALITY_SCORE, max(0.0, score))


def normalised_relevance(ad: Any, context: AdCampaignContext) -> float:
    """Relevance multiplier in (0, 1] used by the final bid score."""
    if not context.search_query and not (context.search_category and context.category_id):
        return DEFAULT_RELEVANCE
    relevance = calculate_relevance_score(ad.title, ad.description, context)
    return max(MIN_RELEVANCE, relevance / MAX_RELEVANCE_SCORE)


def context_multiplier(context: AdCampaignContext) -> float:
    """Position, device and location boost shared by every ad in one auction."""
    position_factor = 1 + (context.position - 1) * 0.1
    device_factor = 1.1 if context.is_mobile else 1.0
    location_factor = (
        1.05 if context.location is not None and context.location.country == PREMIUM_COUNTRY else 1.0
    )
    return position_factor * device_factor * location_factor


def calculate_final_bid_score(
    bid_amount: Union[Decimal, float],
    quality_score: float,
    relevance_score: float,
    context: AdCampaignContext,
) -> float:
    """Ad rank: bid x quality x relevance x context boost."""
    base_score = float(bid_amount) * quality_score * relevance_score
    return base_score * context_multiplier(context)
