"""Value types shared by the scoring, auction, wallet and reporting rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from .money import DEFAULT_CURRENCY


class SlotType(str, Enum):
    SEARCH_TOP = "SEARCH_TOP"
    SEARCH_SIDE = "SEARCH_SIDE"
    SEARCH_BOTTOM = "SEARCH_BOTTOM"
    CATEGORY_TOP = "CATEGORY_TOP"
    CATEGORY_SIDE = "CATEGORY_SIDE"
    PRODUCT_TOP = "PRODUCT_TOP"
    PRODUCT_SIDE = "PRODUCT_SIDE"
    HOME_BANNER = "HOME_BANNER"
    HOME_SIDEBAR = "HOME_SIDEBAR"
    CHECKOUT_TOP = "CHECKOUT_TOP"
    CART_SIDEBAR = "CART_SIDEBAR"


class WalletTransactionType(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    SPEND = "SPEND"
    REFUND = "REFUND"
    BONUS = "BONUS"
    PENALTY = "PENALTY"


CREDIT_TRANSACTIONS = frozenset(
    {WalletTransactionType.DEPOSIT, WalletTransactionType.REFUND, WalletTransactionType.BONUS}
)
DEBIT_TRANSACTIONS = frozenset(
    {WalletTransactionType.WITHDRAWAL, WalletTransactionType.SPEND, WalletTransactionType.PENALTY}
)


class CampaignType(str, Enum):
    SEARCH = "SEARCH"
    DISPLAY = "DISPLAY"
    SHOPPING = "SHOPPING"
    VIDEO = "VIDEO"
    SOCIAL = "SOCIAL"
    RETARGETING = "RETARGETING"
    BRAND = "BRAND"


class TargetingType(str, Enum):
    KEYWORD = "KEYWORD"
    CATEGORY = "CATEGORY"
    PRODUCT = "PRODUCT"
    AUDIENCE = "AUDIENCE"
    LOCATION = "LOCATION"
    DEMOGRAPHIC = "DEMOGRAPHIC"
    BEHAVIORAL = "BEHAVIORAL"
    LOOKALIKE = "LOOKALIKE"


class BidType(str, Enum):
    CPC = "CPC"
    CPM = "CPM"
    CPA = "CPA"
    CPV = "CPV"
    CPE = "CPE"
    CPO = "CPO"


class BudgetType(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
    TOTAL = "TOTAL"
    LIFETIME = "LIFETIME"


class RecurringType(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class CampaignStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AdStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    REJECTED = "REJECTED"


class BudgetStatus(str, Enum):
    UNDER_BUDGET = "UNDER_BUDGET"
    ON_TRACK = "ON_TRACK"
    OVER_BUDGET = "OVER_BUDGET"
    EXHAUSTED = "EXHAUSTED"


class CompetitionLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Confidence(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ImpressionType(str, Enum):
    VIEW = "VIEW"
    VIEWABLE = "VIEWABLE"
    RENDER = "RENDER"


class ClickType(str, Enum):
    CLICK = "CLICK"
    CALL_TO_ACTION = "CALL_TO_ACTION"
    IMAGE = "IMAGE"
    TITLE = "TITLE"


@dataclass(frozen=True)
class Location:
    country: str
    city: str = ""
    region: str = ""


@dataclass
class AdCampaignContext:
    """Where and for whom a slot is being filled."""

    slot_type: SlotType
    position: int = 1
    campaign_id: Optional[str] = None
    ad_id: Optional[str] = None
    search_query: Optional[str] = None
    search_category: Optional[str] = None
    product_id: Optional[str] = None
    category_id: Optional[str] = None
    seller_id: Optional[str] = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    device_type: Optional[str] = None
    location: Optional[Location] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.position < 1:
            raise ValueError("position must be >= 1")
        self.slot_type = SlotType(self.slot_type)

    @property
    def is_mobile(self) -> bool:
        return (self.device_type or "").lower() == "mobile"


@dataclass
class CompetingAd:
    ad_id: str
    campaign_id: str
    bid_amount: Decimal
    quality_score: float
    relevance_score: float
    max_bid_amount: Optional[Decimal] = None

    @property
    def effective_bid(self) -> Decimal:
        if self.max_bid_amount is not None and self.bid_amount > self.max_bid_amount:
            return self.max_bid_amount
        return self.bid_amount


@dataclass
class BiddingResult:
    ad_id: str
    campaign_id: str
    bid_amount: Decimal
    quality_score: float
    relevance_score: float
    final_score: float
    is_winner: bool
    position: int
    cost: Decimal
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SlotAllocationResult:
    slot_type: SlotType
    position: int
    allocated_ads: List[BiddingResult]
    total_revenue: Decimal
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PerformanceMetrics:
    impressions: int
    clicks: int
    conversions: int
    spend: float
    revenue: float
    ctr: float
    cpc: float
    cpm: float
    cpa: float
    roas: float
    quality_score: float = 0.0
    relevance_score: float = 0.0


@dataclass
class WalletTransaction:
    type: WalletTransactionType
    amount: Decimal
    currency: str = DEFAULT_CURRENCY
    description: Optional[str] = None
    reference: Optional[str] = None
    campaign_id: Optional[str] = None
    ad_id: Optional[str] = None
    payment_method: Optional[str] = None

    def __post_init__(self) -> None:
        self.type = WalletTransactionType(self.type)


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reason: Optional[str] = None


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class BudgetUtilization:
    utilization_percentage: float
    status: BudgetStatus
    days_remaining: Optional[int] = None


@dataclass
class BidRecommendation:
    recommended_bid: Decimal
    reasoning: str
    confidence: Confidence


@dataclass
class DateRange:
    start: datetime
    end: datetime


@dataclass
class PerformanceReport:
    campaign_id: str
    date_range: DateRange
    summary: PerformanceMetrics
    insights: List[str]
    recommendations: List[str]
    additional_data: Optional[Dict[str, Any]] = None
