"""Campaign performance metrics, reports, budget pacing and bid advice."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional, Union

from .money import to_decimal
from .types import (
    BidRecommendation,
    BudgetStatus,
    BudgetUtilization,
    CompetitionLevel,
    Confidence,
    DateRange,
    PerformanceMetrics,
    PerformanceReport,
)

Number = Union[int, float, Decimal]


def calculate_performance_metrics(
    impressions: int,
    clicks: int,
    conversions: int,
    spend: Number,
    revenue: Number,
) -> PerformanceMetrics:
    spend = float(spend or 0)
    revenue = float(revenue or 0)
    ctr = (clicks / impressions) * 100 if impressions > 0 else 0.0
    cpc = spend / clicks if clicks > 0 else 0.0
    cpm = (spend / impressions) * 1000 if impressions > 0 else 0.0
    cpa = spend / conversions if conversions > 0 else 0.0
    roas = revenue / spend if spend > 0 else 0.0
    return PerformanceMetrics(
        impressions=impressions,
        clicks=clicks,
        conversions=conversions,
        spend=spend,
        revenue=revenue,
        ctr=ctr,
        cpc=cpc,
        cpm=cpm,
        cpa=cpa,
        roas=roas,
    )


def generate_ad_performance_report(
    campaign_id: str,
    date_range: DateRange,
    metrics: PerformanceMetrics,
    additional_data: Optional[Dict[str, Any]] = None,
) -> PerformanceReport:
    insights = []
    recommendations = []

    if metrics.ctr > 5:
        insights.append("High click-through rate indicates strong ad relevance")
    elif metrics.ctr < 1:
        insights.append("Low click-through rate suggests ad relevance issues")
        recommendations.append("Consider improving ad title and description")

    if metrics.cpc > 2:
        insights.append("High cost per click may indicate competitive keywords")
        recommendations.append("Consider targeting long-tail keywords or adjusting bids")

    if metrics.roas > 4:
        insights.append("Excellent return on ad spend")
    elif metrics.roas < 1:
        insights.append("Negative return on ad spend")
        recommendations.append("Review targeting and landing page optimization")

    if metrics.conversions > 0 and metrics.cpa > 50:
        insights.append("High cost per acquisition")
        recommendations.append("Optimize landing page for better conversion rates")

    return PerformanceReport(
        campaign_id=campaign_id,
        date_range=date_range,
        summary=metrics,
        insights=insights,
        recommendations=recommendations,
        additional_data=additional_data,
    )


def calculate_budget_utilization(
    total_budget: Number, used_amount: Number, remaining_amount: Number
) -> BudgetUtilization:
    total = to_decimal(total_budget)
    used = to_decimal(used_amount)
    utilization = float(used / total * 100) if total > 0 else 0.0

    if to_decimal(remaining_amount) <= 0:
        status = BudgetStatus.EXHAUSTED
    elif utilization > 100:
        status = BudgetStatus.OVER_BUDGET
    elif utilization > 80:
        status = BudgetStatus.ON_TRACK
    else:
        status = BudgetStatus.UNDER_BUDGET

    return BudgetUtilization(utilization_percentage=utilization, status=status)


def generate_bid_recommendations(
    current_bid: Number,
    quality_score: float,
    competition_level: CompetitionLevel,
    performance_history: Mapping[str, Number],
) -> BidRecommendation:
    """Suggest a bid from quality, competition and historical CTR.

    ``performance_history`` needs ``impressions`` and ``clicks``.
    """
    recommended = to_decimal(current_bid)
    reasons = []
    confidence = Confidence.MEDIUM

    if quality_score > 7:
        recommended *= Decimal("1.1")
        reasons.append("High quality score allows for higher bids.")
    elif quality_score < 4:
        recommended *= Decimal("0.9")
        reasons.append("Low quality score suggests reducing bid.")

    competition_level = CompetitionLevel(competition_level)
    if competition_level is CompetitionLevel.LOW:
        recommended *= Decimal("0.9")
        reasons.append("Low competition allows for lower bids.")
    elif competition_level is CompetitionLevel.HIGH:
        recommended *= Decimal("1.2")
        reasons.append("High competition requires higher bids.")

    impressions = performance_history.get("impressions", 0) or 0
    clicks = performance_history.get("clicks", 0) or 0
    ctr = clicks / impressions if impressions > 0 else 0

    if ctr > 0.05:
        recommended *= Decimal("1.1")
        reasons.append("Good CTR performance supports higher bids.")
        confidence = Confidence.HIGH
    elif ctr < 0.01:
        recommended *= Decimal("0.8")
        reasons.append("Poor CTR performance suggests lower bids.")
        confidence = Confidence.HIGH

    return BidRecommendation(
        recommended_bid=recommended.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        reasoning=" ".join(reasons),
        confidence=confidence,
    )
