"""Impression and click tracking called by the storefront."""

from fastapi import APIRouter, Depends

from ..dependencies import get_service, require_tenant_id
from ..schemas.tracking import ClickCreate, ClickOut, ImpressionCreate, ImpressionOut
from ..services.ad_campaign import AdCampaignService

router = APIRouter(prefix="/ads", tags=["tracking"])


@router.post("/impressions", response_model=ImpressionOut, status_code=201)
def record_impression(
    request: ImpressionCreate,
    tenant_id: str = Depends(require_tenant_id),
    service: AdCampaignService = Depends(get_service),
):
    return service.record_impression(tenant_id, request.model_dump())


@router.post("/clicks", response_model=ClickOut, status_code=201)
def record_click(
    request: ClickCreate,
    tenant_id: str = Depends(require_tenant_id),
    service: AdCampaignService = Depends(get_service),
):
    """Record a click and charge its cost to the seller's wallet and budgets."""
    return service.record_click(tenant_id, request.model_dump())
