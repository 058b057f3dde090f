from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class WalletTopUpRequest(BaseModel):
    amount: Decimal = Field(gt=0)
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None


class CheckoutSessionResponse(BaseModel):
    url: str
