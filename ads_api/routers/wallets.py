"""Seller wallets and their transaction ledger."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..dependencies import ensure_seller_access, ensure_wallet_access, get_service
from ..models import User
from ..schemas.wallets import (
    DepositRequest,
    WalletCreate,
    WalletOut,
    WalletTransactionOut,
    WithdrawRequest,
)
from ..security.jwt import get_current_user, require_admin
from ..services.ad_campaign import AdCampaignService

router = APIRouter(prefix="/ads/wallets", tags=["wallets"])


@router.get("/seller/{seller_id}", response_model=WalletOut)
def get_seller_wallet(
    seller_id: str,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_seller_access(seller_id, current_user)
    return service.get_seller_wallet(seller_id, current_user.tenant_id)


@router.post("/seller/{seller_id}", response_model=WalletOut, status_code=201)
def create_seller_wallet(
    seller_id: str,
    request: WalletCreate,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_seller_access(seller_id, current_user)
    # Only admins may open a wallet with money already in it
    initial_balance = request.initial_balance if current_user.is_admin else 0
    return service.create_seller_wallet(
        seller_id,
        current_user.tenant_id,
        initial_balance=initial_balance,
        daily_spend_limit=request.daily_spend_limit,
        monthly_spend_limit=request.monthly_spend_limit,
    )


@router.post("/{wallet_id}/deposit", response_model=WalletTransactionOut, status_code=201)
def deposit(
    wallet_id: str,
    request: DepositRequest,
    admin: User = Depends(require_admin),
    service: AdCampaignService = Depends(get_service),
):
    """Manual credit by an administrator; sellers top up through billing."""
    return service.deposit_to_wallet(
        wallet_id,
        request.amount,
        request.payment_method,
        reference=request.reference,
        tenant_id=admin.tenant_id,
    )


@router.post("/{wallet_id}/withdraw", response_model=WalletTransactionOut, status_code=201)
def withdraw(
    wallet_id: str,
    request: WithdrawRequest,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_wallet_access(service.get_wallet(wallet_id, current_user.tenant_id), current_user)
    return service.withdraw_from_wallet(
        wallet_id, request.amount, request.description, tenant_id=current_user.tenant_id
    )


@router.get("/{wallet_id}/transactions", response_model=List[WalletTransactionOut])
def list_transactions(
    wallet_id: str,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    current_user: User = Depends(get_current_user),
    service: AdCampaignService = Depends(get_service),
):
    ensure_wallet_access(service.get_wallet(wallet_id, current_user.tenant_id), current_user)
    return service.get_wallet_transactions(wallet_id, current_user.tenant_id, date_from, date_to)
