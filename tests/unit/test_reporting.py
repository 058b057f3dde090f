from datetime import datetime
from decimal import Decimal

import pytest

from ads_domain.reporting import (
    calculate_budget_utilization,
    calculate_performance_metrics,
    generate_ad_performance_report,
    generate_bid_recommendations,
)
from ads_domain.types import BudgetStatus, CompetitionLevel, Confidence, DateRange


def test_performance_metrics():
    metrics = calculate_performance_metrics(1000, 50, 5, Decimal("25.00"), Decimal("150.00"))
    assert metrics.ctr == pytest.approx(5.0)
    assert metrics.cpc == pytest.approx(0.5)
    assert metrics.cpm == pytest.approx(25.0)
    assert metrics.cpa == pytest.approx(5.0)
    assert metrics.roas == pytest.approx(6.0)


def test_performance_metrics_without_traffic():
    metrics = calculate_performance_metrics(0, 0, 0, 0, 0)
    assert (metrics.ctr, metrics.cpc, metrics.cpm, metrics.cpa, metrics.roas) == (0.0, 0.0, 0.0, 0.0, 0.0)


def test_report_insights_for_weak_campaign():
    metrics = calculate_performance_metrics(1000, 5, 0, Decimal("15.00"), Decimal("0"))
    report = generate_ad_performance_report(
        "camp-1", DateRange(datetime(2026, 1, 1), datetime(2026, 1, 31)), metrics
    )
    assert report.summary is metrics
    assert "Low click-through rate suggests ad relevance issues" in report.insights
    assert "High cost per click may indicate competitive keywords" in report.insights
    assert "Negative return on ad spend" in report.insights
    assert "Review targeting and landing page optimization" in report.recommendations


def test_report_insights_for_strong_campaign():
    metrics = calculate_performance_metrics(100, 10, 2, Decimal("5.00"), Decimal("50.00"))
    report = generate_ad_performance_report(
        "camp-1", DateRange(datetime(2026, 1, 1), datetime(2026, 1, 31)), metrics
    )
    assert report.insights == [
        "High click-through rate indicates strong ad relevance",
        "Excellent return on ad spend",
    ]
    assert report.recommendations == []


@pytest.mark.parametrize(
    "used, remaining, status",
    [
        ("10", "90", BudgetStatus.UNDER_BUDGET),
        ("85", "15", BudgetStatus.ON_TRACK),
        ("110", "1", BudgetStatus.OVER_BUDGET),
        ("100", "0", BudgetStatus.EXHAUSTED),
    ],
)
def test_budget_utilization(used, remaining, status):
    result = calculate_budget_utilization(Decimal("100"), Decimal(used), Decimal(remaining))
    assert result.status is status
    assert result.utilization_percentage == pytest.approx(float(used))


def test_bid_recommendation_compounds_adjustments():
    recommendation = generate_bid_recommendations(
        Decimal("1.00"), 8.0, CompetitionLevel.HIGH, {"impressions": 100, "clicks": 10}
    )
    # 1.00 x 1.1 x 1.2 x 1.1
    assert recommendation.recommended_bid == Decimal("1.45")
    assert recommendation.confidence is Confidence.HIGH
    assert recommendation.reasoning.startswith("High quality score allows for higher bids.")


def test_bid_recommendation_without_history_lowers_bid():
    recommendation = generate_bid_recommendations(Decimal("2.00"), 5.0, CompetitionLevel.MEDIUM, {})
    assert recommendation.recommended_bid == Decimal("1.60")
    assert recommendation.reasoning == "Poor CTR performance suggests lower bids."
