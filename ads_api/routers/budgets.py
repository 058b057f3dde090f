from typing import List

from fastapi import APIRouter, Depends

from ..dependencies import ensure_campaign_access, get_service
from ..models import User
from ..schemas.budgets import BudgetCreate, BudgetOut, BudgetUsageRequest, BudgetUtilizationOut
from ..security.jwt import get_current_user, require_admin
from ..services.ad_campaign import AdCampaignService

router = APIRouter(prefix="/ads", tags=["budgets"])


@router.post("/budgets", response_model=BudgetOut, status_code=201)
def create_budget(
    request: BudgetCreate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_campaign_access(service.get_campaign(request.campaign_id, current_user.tenant_id), current_user)
    return service.create_budget(current_user.tenant_id, request.to_fields())


@router.post("/budgets/{budget_id}/usage", response_model=BudgetOut)
def record_budget_usage(
    budget_id: str,
    request: BudgetUsageRequest,
    admin: User = Depends(require_admin),
    service: AdCampaignService = Depends(get_service),
):
    """Manual usage adjustment; clicks charge budgets automatically."""
    return service.update_budget_usage(budget_id, request.amount, admin.tenant_id)


@router.get("/campaigns/{campaign_id}/budget-utilization", response_model=List[BudgetUtilizationOut])
def budget_utilization(
    campaign_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_campaign_access(service.get_campaign(campaign_id, current_user.tenant_id), current_user)
    return [
        BudgetUtilizationOut(
            budget=BudgetOut.model_validate(budget),
            utilization_percentage=utilization.utilization_percentage,
            status=utilization.status,
            days_remaining=utilization.days_remaining,
        )
        for budget, utilization in service.get_budget_utilization(campaign_id, current_user.tenant_id)
    ]
