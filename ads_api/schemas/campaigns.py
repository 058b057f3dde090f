"""Request and response models for campaigns, ad groups and ads."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ads_domain.types import AdStatus, BidType, CampaignStatus, CampaignType, TargetingType


class CampaignCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[CampaignStatus] = None
    campaign_type: CampaignType
    targeting_type: Optional[TargetingType] = None
    target_keywords: List[str] = Field(default_factory=list)
    target_categories: List[str] = Field(default_factory=list)
    target_locations: List[str] = Field(default_factory=list)
    target_audiences: List[str] = Field(default_factory=list)
    daily_budget: Decimal = Field(gt=0)
    total_budget: Optional[Decimal] = Field(default=None, gt=0)
    bid_type: BidType = BidType.CPC
    bid_amount: Decimal = Field(gt=0)
    max_bid_amount: Optional[Decimal] = Field(default=None, gt=0)
    start_date: datetime
    end_date: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None
    # Admins may create campaigns on behalf of a seller
    seller_id: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude={"metadata", "seller_id"}, exclude_none=True)
        if self.metadata is not None:
            fields["extra"] = self.metadata
        return fields


class CampaignUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[CampaignStatus] = None
    targeting_type: Optional[TargetingType] = None
    target_keywords: Optional[List[str]] = None
    target_categories: Optional[List[str]] = None
    target_locations: Optional[List[str]] = None
    target_audiences: Optional[List[str]] = None
    daily_budget: Optional[Decimal] = Field(default=None, gt=0)
    total_budget: Optional[Decimal] = Field(default=None, gt=0)
    bid_amount: Optional[Decimal] = Field(default=None, gt=0)
    max_bid_amount: Optional[Decimal] = Field(default=None, gt=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_paused: Optional[bool] = None
    tags: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator(
        "name",
        "status",
        "target_keywords",
        "target_categories",
        "target_locations",
        "target_audiences",
        "daily_budget",
        "bid_amount",
        "start_date",
        "is_paused",
        "tags",
    )
    @classmethod
    def _not_null(cls, value):
        # Omit a field to leave it unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("may not be null")
        return value

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude={"metadata"}, exclude_unset=True)
        if "metadata" in self.model_fields_set:
            fields["extra"] = self.metadata
        return fields


class CampaignOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    seller_id: Optional[str]
    name: str
    description: Optional[str]
    status: CampaignStatus
    campaign_type: CampaignType
    targeting_type: Optional[TargetingType]
    target_keywords: List[str]
    target_categories: List[str]
    target_locations: List[str]
    target_audiences: List[str]
    daily_budget: Decimal
    total_budget: Optional[Decimal]
    bid_type: BidType
    bid_amount: Decimal
    max_bid_amount: Optional[Decimal]
    start_date: datetime
    end_date: Optional[datetime]
    is_active: bool
    is_paused: bool
    impressions: int
    clicks: int
    conversions: int
    spend: Decimal
    revenue: Decimal
    quality_score: float
    tags: List[str]
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("extra", "metadata")
    )
    created_at: datetime
    updated_at: datetime


class CampaignPage(BaseModel):
    campaigns: List[CampaignOut]
    total: int
    page: int
    limit: int
    has_more: bool


class AdGroupCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    campaign_id: str
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    negative_keywords: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    bid_type: BidType = BidType.CPC
    bid_amount: Decimal = Field(gt=0)
    max_bid_amount: Optional[Decimal] = Field(default=None, gt=0)


class AdGroupOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    name: str
    description: Optional[str]
    status: str
    keywords: List[str]
    negative_keywords: List[str]
    categories: List[str]
    locations: List[str]
    bid_type: BidType
    bid_amount: Decimal
    max_bid_amount: Optional[Decimal]
    impressions: int
    clicks: int
    conversions: int
    spend: Decimal


class AdCreate(BaseModel):
    campaign_id: str
    ad_group_id: str
    product_id: Optional[str] = None
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    headline: Optional[str] = None
    call_to_action: Optional[str] = None
    image_url: Optional[str] = None
    landing_page_url: str = Field(min_length=1)
    final_url: Optional[str] = None
    priority: int = Field(default=1, ge=0)
    metadata: Optional[Dict[str, Any]] = None

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude={"metadata"})
        if self.metadata is not None:
            fields["extra"] = self.metadata
        return fields


class AdOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    ad_group_id: str
    product_id: Optional[str]
    title: str
    description: Optional[str]
    headline: Optional[str]
    call_to_action: Optional[str]
    image_url: Optional[str]
    landing_page_url: str
    final_url: Optional[str]
    status: AdStatus
    is_active: bool
    priority: int
    bid_amount: Decimal
    impressions: int
    clicks: int
    conversions: int
    spend: Decimal
    is_approved: bool
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    rejection_reason: Optional[str]


class AdRejectRequest(BaseModel):
    reason: str = Field(min_length=1)
