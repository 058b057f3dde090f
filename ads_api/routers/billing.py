"""Billing router: Stripe Checkout wallet top-ups and the Stripe webhook."""

import logging
import os
from decimal import Decimal

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ads_domain.errors import NotFoundError
from ads_domain.money import get_minor_units, to_decimal

from ..config import FRONTEND_BASE_URL, STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET
from ..db import get_db
from ..models import User
from ..schemas.billing import CheckoutSessionResponse, WalletTopUpRequest
from ..security.jwt import get_current_user
from ..services.ad_campaign import AdCampaignService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["billing"])

TOPUP_PURPOSE = "wallet_topup"


def _to_minor_units(amount: Decimal, currency: str) -> int:
    return int(to_decimal(amount).scaleb(get_minor_units(currency)))


@router.post("/wallet-topup", response_model=CheckoutSessionResponse)
def create_wallet_topup(
    request: WalletTopUpRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Start a Stripe Checkout payment that credits the caller's wallet once paid."""
    secret_key = os.getenv("STRIPE_SECRET_KEY", STRIPE_SECRET_KEY)
    if not secret_key:
        raise HTTPException(status_code=503, detail="Billing unavailable")
    stripe.api_key = secret_key

    wallet = AdCampaignService(db).get_seller_wallet(current_user.id, current_user.tenant_id)
    frontend_base = os.getenv("FRONTEND_BASE_URL", FRONTEND_BASE_URL)

    session_params = {
        "mode": "payment",
        "line_items": [
            {
                "price_data": {
                    "currency": wallet.currency.lower(),
                    "unit_amount": _to_minor_units(request.amount, wallet.currency),
                    "product_data": {"name": "Advertising wallet top-up"},
                },
                "quantity": 1,
            }
        ],
        "success_url": request.success_url or f"{frontend_base}/wallet/success",
        "cancel_url": request.cancel_url or f"{frontend_base}/wallet/cancel",
        "customer_email": current_user.email,
        "client_reference_id": wallet.id,
        "metadata": {
            "purpose": TOPUP_PURPOSE,
            "user_id": str(current_user.id),
            "tenant_id": current_user.tenant_id,
            "wallet_id": wallet.id,
            "amount": str(request.amount),
        },
    }
    try:
        session = stripe.checkout.Session.create(**session_params)
    except stripe.StripeError as e:
        logger.exception("Stripe API error: %s", str(e))
        raise HTTPException(status_code=500, detail="Failed to create checkout session")
    logger.info("Wallet top-up session created for wallet %s (%s)", wallet.id, request.amount)
    return CheckoutSessionResponse(url=session.url)


@router.post("/webhook")
async def stripe_webhook(request: Request, db: Session = Depends(get_db)):
    """Verify a Stripe event and credit paid wallet top-ups exactly once."""
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")

    webhook_secret = os.getenv("STRIPE_WEBHOOK_SECRET", STRIPE_WEBHOOK_SECRET)
    if not webhook_secret:
        raise HTTPException(status_code=500, detail="Webhook secret not configured")

    try:
        event = stripe.Webhook.construct_event(payload, sig_header, webhook_secret)
    except stripe.SignatureVerificationError:
        raise HTTPException(status_code=400, detail="Invalid signature")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payload")

    event_type = event.get("type")
    data_object = event.get("data", {}).get("object", {})
    metadata = data_object.get("metadata") or {}

    if (
        event_type == "checkout.session.completed"
        and metadata.get("purpose") == TOPUP_PURPOSE
        and data_object.get("payment_status") == "paid"
    ):
        wallet_id = metadata.get("wallet_id") or data_object.get("client_reference_id")
        amount = metadata.get("amount")
        if not wallet_id or not amount:
            logger.warning("Top-up session %s is missing wallet metadata", data_object.get("id"))
            return {"received": True}
        try:
            AdCampaignService(db).deposit_once(
                wallet_id, to_decimal(amount), "stripe", reference=data_object.get("id")
            )
        except NotFoundError:
            logger.warning("Top-up session %s names unknown wallet %s", data_object.get("id"), wallet_id)

    return {"received": True}
