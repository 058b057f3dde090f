"""Promoted listing slots: storefront auctions and per-tenant slot configuration."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from ads_domain.types import SlotType

from ..dependencies import get_service, require_tenant_id
from ..models import User
from ..schemas.slots import (
    BiddingResultOut,
    SlotAllocationOut,
    SlotConfigRequest,
    SlotContextRequest,
    SlotOut,
    SlotStatisticsOut,
)
from ..security.jwt import get_current_user, require_admin
from ..services.ad_campaign import AdCampaignService

router = APIRouter(prefix="/ads/slots", tags=["slots"])


@router.post("/allocate", response_model=SlotAllocationOut)
def allocate_slot(
    request: SlotContextRequest,
    tenant_id: str = Depends(require_tenant_id),
    service: AdCampaignService = Depends(get_service),
):
    """Run the auction for a slot and return the winners with their prices."""
    result = service.allocate_slot(tenant_id, request.to_context())
    return SlotAllocationOut.model_validate(result)


@router.post("/auction", response_model=List[BiddingResultOut])
def run_auction(
    request: SlotContextRequest,
    tenant_id: str = Depends(require_tenant_id),
    service: AdCampaignService = Depends(get_service),
):
    results = service.run_auction(tenant_id, request.to_context())
    return [BiddingResultOut.model_validate(result) for result in results]


@router.put("", response_model=SlotOut)
def configure_slot(
    request: SlotConfigRequest,
    admin: User = Depends(require_admin),
    service: AdCampaignService = Depends(get_service),
):
    return service.configure_slot(admin.tenant_id, request.slot_type, request.to_fields())


@router.get("/{slot_type}/statistics", response_model=SlotStatisticsOut)
def slot_statistics(
    slot_type: SlotType,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    return service.get_slot_statistics(slot_type, current_user.tenant_id, date_from, date_to)
