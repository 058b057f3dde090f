from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ads_domain.types import ClickType, ImpressionType, SlotType


class ImpressionCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    campaign_id: str
    ad_id: str
    impression_type: ImpressionType = ImpressionType.VIEW
    slot: SlotType
    position: int = Field(default=1, ge=1)
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    device_type: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    search_query: Optional[str] = None
    search_category: Optional[str] = None
    product_id: Optional[str] = None
    category_id: Optional[str] = None
    is_visible: bool = True
    view_time: Optional[float] = Field(default=None, ge=0)


class ImpressionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    ad_id: str
    impression_type: ImpressionType
    slot: SlotType
    position: int
    created_at: datetime


class ClickCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    campaign_id: str
    ad_id: str
    impression_id: Optional[str] = None
    click_type: ClickType = ClickType.CLICK
    slot: SlotType
    position: int = Field(default=1, ge=1)
    user_id: Optional[str] = None
    session_id: Optional[str] = None
    device_type: Optional[str] = None
    search_query: Optional[str] = None
    product_id: Optional[str] = None
    category_id: Optional[str] = None
    is_conversion: bool = False
    conversion_value: Optional[Decimal] = Field(default=None, ge=0)
    conversion_type: Optional[str] = None
    cost: Decimal = Field(default=Decimal("0"), ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class ClickOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    ad_id: str
    click_type: ClickType
    slot: SlotType
    position: int
    is_conversion: bool
    conversion_value: Optional[Decimal]
    cost: Decimal
    currency: str
    created_at: datetime
