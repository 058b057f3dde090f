from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ads_domain.types import Confidence


class PerformanceMetricsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class DateRangeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    start: datetime
    end: datetime


class PerformanceReportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    campaign_id: str
    date_range: DateRangeOut
    summary: PerformanceMetricsOut
    insights: List[str]
    recommendations: List[str]
    additional_data: Optional[Dict[str, Any]] = None


class BidRecommendationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recommended_bid: Decimal
    reasoning: str
    confidence: Confidence


class HealthOut(BaseModel):
    status: str
    message: str
    details: Dict[str, Any]
