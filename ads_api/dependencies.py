"""Shared FastAPI dependencies: services, tenant resolution and ownership checks."""

from typing import Optional

from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ads_domain.errors import PermissionDeniedError

from .db import get_db
from .models import AdCampaign, SellerWallet, User
from .services.ad_campaign import AdCampaignService


def get_service(db: Session = Depends(get_db)) -> AdCampaignService:
    return AdCampaignService(db)


def require_tenant_id(tenant_id: Optional[str] = Query(default=None)) -> str:
    """Tenant for public storefront calls, which carry no user token."""
    if not tenant_id or not tenant_id.strip():
        raise HTTPException(status_code=400, detail="tenant_id is required")
    return tenant_id.strip()


def ensure_campaign_access(campaign: AdCampaign, user: User) -> AdCampaign:
    if not user.is_admin and campaign.seller_id != user.id:
        raise PermissionDeniedError("Campaign belongs to another seller")
    return campaign


def ensure_wallet_access(wallet: SellerWallet, user: User) -> SellerWallet:
    if not user.is_admin and wallet.seller_id != user.id:
        raise PermissionDeniedError("Wallet belongs to another seller")
    return wallet


def ensure_seller_access(seller_id: str, user: User) -> str:
    if not user.is_admin and seller_id != user.id:
        raise PermissionDeniedError("Sellers may only access their own wallet")
    return seller_id


__all__ = [
    "get_db",
    "get_service",
    "require_tenant_id",
    "ensure_campaign_access",
    "ensure_wallet_access",
    "ensure_seller_access",
]
