"""Pure rules for marketplace ad slots: scoring, auctions, wallets, reporting."""

from .auction import (
    SLOT_LIMITS,
    calculate_slot_revenue,
    get_max_ads_for_slot,
    is_ad_eligible_for_slot,
    run_ad_auction,
)
from .money import Money, money, parse_money
from .reporting import (
    calculate_budget_utilization,
    calculate_performance_metrics,
    generate_ad_performance_report,
    generate_bid_recommendations,
)
from .scoring import calculate_final_bid_score, calculate_quality_score
from .wallet import calculate_wallet_balance, validate_wallet_transaction

__version__ = "0.1.0"

__all__ = [
    "Money",
    "money",
    "parse_money",
    "SLOT_LIMITS",
    "calculate_quality_score",
    "calculate_final_bid_score",
    "run_ad_auction",
    "get_max_ads_for_slot",
    "calculate_slot_revenue",
    "is_ad_eligible_for_slot",
    "calculate_wallet_balance",
    "validate_wallet_transaction",
    "calculate_performance_metrics",
    "generate_ad_performance_report",
    "calculate_budget_utilization",
    "generate_bid_recommendations",
]
