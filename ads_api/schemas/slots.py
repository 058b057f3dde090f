"""Slot auction requests and results."""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ads_domain.types import AdCampaignContext, Location, SlotType


class LocationIn(BaseModel):
    country: str
    city: str = ""
    region: str = ""


class SlotContextRequest(BaseModel):
    slot_type: SlotType
    position: int = Field(default=1, ge=1)
    search_query: Optional[str] = None
    search_category: Optional[str] = None
    product_id: Optional[str] = None
    category_id: Optional[str] = None
    seller_id: Optional[str] = None
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    device_type: Optional[str] = None
    location: Optional[LocationIn] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_context(self) -> AdCampaignContext:
        data = self.model_dump(exclude={"location"})
        location = Location(**self.location.model_dump()) if self.location else None
        return AdCampaignContext(location=location, **data)


class BiddingResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ad_id: str
    campaign_id: str
    bid_amount: Decimal
    quality_score: float
    relevance_score: float
    final_score: float
    is_winner: bool
    position: int
    cost: Decimal
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SlotAllocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slot_type: SlotType
    position: int
    allocated_ads: List[BiddingResultOut]
    total_revenue: Decimal
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SlotConfigRequest(BaseModel):
    slot_type: SlotType
    name: Optional[str] = None
    position: int = Field(default=1, ge=1)
    min_bid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    reserve_price: Optional[Decimal] = Field(default=None, ge=0)
    max_ads: Optional[int] = Field(default=None, ge=1)
    target_categories: List[str] = Field(default_factory=list)
    target_keywords: List[str] = Field(default_factory=list)
    is_active: bool = True

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"slot_type"})


class SlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    slot_type: SlotType
    name: Optional[str]
    position: int
    min_bid_amount: Decimal
    reserve_price: Optional[Decimal]
    max_ads: Optional[int]
    target_categories: List[str]
    target_keywords: List[str]
    is_active: bool


class SlotStatisticsOut(BaseModel):
    slot_type: SlotType
    total_impressions: int
    total_clicks: int
    total_revenue: Decimal
    average_ctr: float
    average_cpc: float
