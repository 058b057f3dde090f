from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ads_domain.types import WalletTransactionType


class WalletCreate(BaseModel):
    initial_balance: Decimal = Field(default=Decimal("0"), ge=0)
    daily_spend_limit: Optional[Decimal] = Field(default=None, gt=0)
    monthly_spend_limit: Optional[Decimal] = Field(default=None, gt=0)


class WalletOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    seller_id: str
    balance: Decimal
    currency: str
    is_active: bool
    daily_spend_limit: Optional[Decimal]
    monthly_spend_limit: Optional[Decimal]
    total_spent: Decimal
    total_deposited: Decimal
    last_spent_at: Optional[datetime]
    last_deposited_at: Optional[datetime]
    is_suspended: bool


class DepositRequest(BaseModel):
    # Validated by the wallet rules so that a zero deposit reports the rule message
    amount: Decimal
    payment_method: str = Field(default="manual", min_length=1, max_length=32)
    reference: Optional[str] = Field(default=None, max_length=255)


class WithdrawRequest(BaseModel):
    amount: Decimal
    description: Optional[str] = None


class WalletTransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    wallet_id: str
    type: WalletTransactionType
    amount: Decimal
    currency: str
    balance_before: Decimal
    balance_after: Decimal
    description: Optional[str]
    reference: Optional[str]
    campaign_id: Optional[str]
    ad_id: Optional[str]
    payment_method: Optional[str]
    status: str
    created_at: datetime
