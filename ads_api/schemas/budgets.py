from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ads_domain.types import BudgetStatus, BudgetType, RecurringType


class BudgetCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    campaign_id: str
    budget_type: BudgetType
    amount: Decimal = Field(gt=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    start_date: datetime
    end_date: Optional[datetime] = None
    is_recurring: bool = False
    recurring_type: Optional[RecurringType] = None
    description: Optional[str] = None

    def to_fields(self):
        return self.model_dump(exclude_none=True)


class BudgetUsageRequest(BaseModel):
    amount: Decimal = Field(gt=0)


class BudgetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    campaign_id: str
    budget_type: BudgetType
    amount: Decimal
    currency: str
    start_date: datetime
    end_date: Optional[datetime]
    is_recurring: bool
    recurring_type: Optional[RecurringType]
    used_amount: Decimal
    remaining_amount: Decimal
    status: str
    is_exhausted: bool


class BudgetUtilizationOut(BaseModel):
    budget: BudgetOut
    utilization_percentage: float
    status: BudgetStatus
    days_remaining: Optional[int] = None
