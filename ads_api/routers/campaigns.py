"""Campaign, ad group and ad management.

Sellers manage their own campaigns; admins see the whole tenant and moderate ads.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ads_domain.types import CampaignStatus, CampaignType, TargetingType

from ..dependencies import ensure_campaign_access, get_service
from ..models import User
from ..repositories.ad_campaign import CampaignSearchParams
from ..schemas.campaigns import (
    AdCreate,
    AdGroupCreate,
    AdGroupOut,
    AdOut,
    AdRejectRequest,
    CampaignCreate,
    CampaignOut,
    CampaignPage,
    CampaignUpdate,
)
from ..security.jwt import get_current_user, require_admin
from ..services.ad_campaign import AdCampaignService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ads", tags=["campaigns"])


def _owned_campaign(service: AdCampaignService, campaign_id: str, user: User):
    return ensure_campaign_access(service.get_campaign(campaign_id, user.tenant_id), user)


@router.post("/campaigns", response_model=CampaignOut, status_code=201)
def create_campaign(
    request: CampaignCreate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    seller_id = request.seller_id if current_user.is_admin else current_user.id
    return service.create_campaign(
        current_user.tenant_id, request.to_fields(), seller_id=seller_id, created_by=current_user.id
    )


@router.get("/campaigns", response_model=CampaignPage)
def search_campaigns(
    status: Optional[CampaignStatus] = None,
    campaign_type: Optional[CampaignType] = None,
    targeting_type: Optional[TargetingType] = None,
    seller_id: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    params = CampaignSearchParams(
        tenant_id=current_user.tenant_id,
        seller_id=seller_id if current_user.is_admin else current_user.id,
        status=status.value if status else None,
        campaign_type=campaign_type.value if campaign_type else None,
        targeting_type=targeting_type.value if targeting_type else None,
        date_from=date_from,
        date_to=date_to,
        page=page,
        limit=limit,
    )
    return service.search_campaigns(params)


@router.get("/campaigns/{campaign_id}", response_model=CampaignOut)
def get_campaign(
    campaign_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    return _owned_campaign(service, campaign_id, current_user)


@router.put("/campaigns/{campaign_id}", response_model=CampaignOut)
def update_campaign(
    campaign_id: str,
    request: CampaignUpdate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, campaign_id, current_user)
    return service.update_campaign(campaign_id, current_user.tenant_id, request.to_fields())


@router.delete("/campaigns/{campaign_id}", status_code=204)
def delete_campaign(
    campaign_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, campaign_id, current_user)
    service.delete_campaign(campaign_id, current_user.tenant_id)
    return Response(status_code=204)


@router.post("/ad-groups", response_model=AdGroupOut, status_code=201)
def create_ad_group(
    request: AdGroupCreate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, request.campaign_id, current_user)
    return service.create_ad_group(current_user.tenant_id, request.model_dump())


@router.get("/campaigns/{campaign_id}/ad-groups", response_model=List[AdGroupOut])
def list_ad_groups(
    campaign_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, campaign_id, current_user)
    return service.get_ad_groups_by_campaign(campaign_id, current_user.tenant_id)


@router.post("/ads", response_model=AdOut, status_code=201)
def create_ad(
    request: AdCreate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, request.campaign_id, current_user)
    return service.create_ad(current_user.tenant_id, request.to_fields())


@router.get("/campaigns/{campaign_id}/ads", response_model=List[AdOut])
def list_ads(
    campaign_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    _owned_campaign(service, campaign_id, current_user)
    return service.get_ads_by_campaign(campaign_id, current_user.tenant_id)


@router.post("/ads/{ad_id}/approve", response_model=AdOut)
def approve_ad(
    ad_id: str,
    admin: User = Depends(require_admin),
    service: AdCampaignService = Depends(get_service),
):
    return service.approve_ad(ad_id, admin.tenant_id, approved_by=admin.id)


@router.post("/ads/{ad_id}/reject", response_model=AdOut)
def reject_ad(
    ad_id: str,
    request: AdRejectRequest,
    admin: User = Depends(require_admin),
    service: AdCampaignService = Depends(get_service),
):
    return service.reject_ad(ad_id, admin.tenant_id, request.reason, rejected_by=admin.id)
