"""Persistence for campaigns, ads, budgets, tracking events, wallets and slots.

The repository flushes but never commits; the service owns the transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from ads_domain.money import to_decimal
from ads_domain.types import AdCampaignContext, AdStatus, CampaignStatus, WalletTransaction
from ads_domain.wallet import calculate_wallet_balance

from ..models import (
    Ad,
    AdBudget,
    AdCampaign,
    AdClick,
    AdGroup,
    AdImpression,
    PromotedListingSlot,
    SellerWallet,
    WalletTransactionRecord,
    _utcnow,
)

logger = logging.getLogger(__name__)


@dataclass
class CampaignSearchParams:
    tenant_id: str
    seller_id: Optional[str] = None
    status: Optional[str] = None
    campaign_type: Optional[str] = None
    targeting_type: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    page: int = 1
    limit: int = 50


def _naive(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; compare like with like
    if value is not None and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _within(query, column, date_from: Optional[datetime], date_to: Optional[datetime]):
    if date_from is not None:
        query = query.filter(column >= _naive(date_from))
    if date_to is not None:
        query = query.filter(column <= _naive(date_to))
    return query


class AdCampaignRepository:
    def __init__(self, session: Session):
        self.session = session

    # Campaigns

    def create_campaign(self, **fields: Any) -> AdCampaign:
        campaign = AdCampaign(**fields)
        self.session.add(campaign)
        self.session.flush()
        return campaign

    def update_campaign(self, campaign: AdCampaign, fields: Dict[str, Any]) -> AdCampaign:
        for key, value in fields.items():
            setattr(campaign, key, value)
        self.session.flush()
        return campaign

    def get_campaign(self, campaign_id: str, tenant_id: Optional[str] = None) -> Optional[AdCampaign]:
        query = self.session.query(AdCampaign).filter(AdCampaign.id == campaign_id)
        if tenant_id is not None:
            query = query.filter(AdCampaign.tenant_id == tenant_id)
        return query.first()

    def delete_campaign(self, campaign: AdCampaign) -> None:
        self.session.delete(campaign)
        self.session.flush()

    def search_campaigns(self, params: CampaignSearchParams) -> Dict[str, Any]:
        query = self.session.query(AdCampaign).filter(AdCampaign.tenant_id == params.tenant_id)
        if params.seller_id:
            query = query.filter(AdCampaign.seller_id == params.seller_id)
        if params.status:
            query = query.filter(AdCampaign.status == params.status)
        if params.campaign_type:
            query = query.filter(AdCampaign.campaign_type == params.campaign_type)
        if params.targeting_type:
            query = query.filter(AdCampaign.targeting_type == params.targeting_type)
        query = _within(query, AdCampaign.created_at, params.date_from, params.date_to)

        page = max(1, params.page)
        limit = max(1, params.limit)
        total = query.count()
        campaigns = (
            query.order_by(AdCampaign.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "campaigns": campaigns,
            "total": total,
            "page": page,
            "limit": limit,
            "has_more": page * limit < total,
        }

    def get_active_campaigns(self, tenant_id: str) -> List[AdCampaign]:
        return (
            self.session.query(AdCampaign)
            .filter(
                AdCampaign.tenant_id == tenant_id,
                AdCampaign.status == CampaignStatus.ACTIVE.value,
                AdCampaign.is_active.is_(True),
                AdCampaign.is_paused.is_(False),
            )
            .all()
        )

    # Ad groups and ads

    def create_ad_group(self, **fields: Any) -> AdGroup:
        ad_group = AdGroup(**fields)
        self.session.add(ad_group)
        self.session.flush()
        return ad_group

    def get_ad_group(self, ad_group_id: str, tenant_id: Optional[str] = None) -> Optional[AdGroup]:
        query = self.session.query(AdGroup).filter(AdGroup.id == ad_group_id)
        if tenant_id is not None:
            query = query.filter(AdGroup.tenant_id == tenant_id)
        return query.first()

    def get_ad_groups_by_campaign(self, campaign_id: str) -> List[AdGroup]:
        return (
            self.session.query(AdGroup)
            .filter(AdGroup.campaign_id == campaign_id)
            .order_by(AdGroup.created_at.asc())
            .all()
        )

    def create_ad(self, **fields: Any) -> Ad:
        ad = Ad(**fields)
        self.session.add(ad)
        self.session.flush()
        return ad

    def get_ad(self, ad_id: str, tenant_id: Optional[str] = None) -> Optional[Ad]:
        query = self.session.query(Ad).filter(Ad.id == ad_id)
        if tenant_id is not None:
            query = query.filter(Ad.tenant_id == tenant_id)
        return query.first()

    def get_ads_by_campaign(self, campaign_id: str) -> List[Ad]:
        return (
            self.session.query(Ad)
            .filter(Ad.campaign_id == campaign_id)
            .order_by(Ad.priority.desc(), Ad.created_at.asc())
            .all()
        )

    def get_eligible_ads_for_slot(self, tenant_id: str, context: AdCampaignContext) -> List[Ad]:
        """Approved, running ads whose campaign is live and matches the context.

        Any query word found in the title or description qualifies an ad; a
        campaign without target categories matches every category.
        """
        now = _naive(_utcnow())
        query = (
            self.session.query(Ad)
            .join(AdCampaign, Ad.campaign_id == AdCampaign.id)
            .options(joinedload(Ad.campaign), joinedload(Ad.ad_group))
            .filter(
                Ad.tenant_id == tenant_id,
                Ad.status == AdStatus.ACTIVE.value,
                Ad.is_active.is_(True),
                Ad.is_approved.is_(True),
                AdCampaign.status == CampaignStatus.ACTIVE.value,
                AdCampaign.is_active.is_(True),
                AdCampaign.is_paused.is_(False),
                AdCampaign.start_date <= now,
                or_(AdCampaign.end_date.is_(None), AdCampaign.end_date >= now),
            )
        )

        if context.search_query:
            words = context.search_query.lower().split()
            if words:
                query = query.filter(
                    or_(
                        *[
                            or_(
                                func.lower(Ad.title).contains(word, autoescape=True),
                                func.lower(func.coalesce(Ad.description, "")).contains(word, autoescape=True),
                            )
                            for word in words
                        ]
                    )
                )

        if context.seller_id:
            query = query.filter(AdCampaign.seller_id == context.seller_id)

        ads = query.order_by(Ad.priority.desc(), Ad.created_at.asc()).all()

        if context.category_id:
            ads = [
                ad
                for ad in ads
                if not ad.campaign.target_categories
                or context.category_id in ad.campaign.target_categories
            ]
        return ads

    # Budgets

    def create_budget(self, **fields: Any) -> AdBudget:
        fields.setdefault("remaining_amount", fields["amount"])
        budget = AdBudget(**fields)
        self.session.add(budget)
        self.session.flush()
        return budget

    def get_budget(self, budget_id: str, tenant_id: Optional[str] = None) -> Optional[AdBudget]:
        query = self.session.query(AdBudget).filter(AdBudget.id == budget_id)
        if tenant_id is not None:
            query = query.filter(AdBudget.tenant_id == tenant_id)
        return query.first()

    def get_budgets_by_campaign(self, campaign_id: str) -> List[AdBudget]:
        return (
            self.session.query(AdBudget)
            .filter(AdBudget.campaign_id == campaign_id)
            .order_by(AdBudget.created_at.asc())
            .all()
        )

    def active_budgets_query(self, campaign_id: str, for_update: bool = False):
        query = self.session.query(AdBudget).filter(
            AdBudget.campaign_id == campaign_id, AdBudget.is_exhausted.is_(False)
        )
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.order_by(AdBudget.created_at.asc())

    def get_active_budgets(self, campaign_id: str, for_update: bool = False) -> List[AdBudget]:
        return self.active_budgets_query(campaign_id, for_update).all()

    def update_budget_usage(self, budget: AdBudget, amount: Decimal) -> AdBudget:
        budget.used_amount = to_decimal(budget.used_amount) + amount
        budget.remaining_amount = max(Decimal("0"), to_decimal(budget.amount) - budget.used_amount)
        if budget.remaining_amount <= 0:
            budget.is_exhausted = True
            budget.status = "EXHAUSTED"
        self.session.flush()
        return budget

    # Tracking

    def create_impression(self, **fields: Any) -> AdImpression:
        impression = AdImpression(**fields)
        self.session.add(impression)
        self.session.flush()
        return impression

    def create_click(self, **fields: Any) -> AdClick:
        click = AdClick(**fields)
        self.session.add(click)
        self.session.flush()
        return click

    def get_campaign_spend_today(self, campaign_id: str) -> Decimal:
        """Click cost charged to the campaign since 00:00 UTC."""
        midnight = _naive(_utcnow()).replace(hour=0, minute=0, second=0, microsecond=0)
        total = (
            self.session.query(func.coalesce(func.sum(AdClick.cost), 0))
            .filter(AdClick.campaign_id == campaign_id, AdClick.created_at >= midnight)
            .scalar()
        )
        return to_decimal(str(total))

    def increment_metrics(
        self,
        ad: Ad,
        impressions: int = 0,
        clicks: int = 0,
        conversions: int = 0,
        spend: Decimal = Decimal("0"),
        revenue: Decimal = Decimal("0"),
    ) -> None:
        """Bump counters on the ad, its ad group and its campaign."""
        for row in (ad, ad.ad_group, ad.campaign):
            if row is None:
                continue
            row.impressions = (row.impressions or 0) + impressions
            row.clicks = (row.clicks or 0) + clicks
            row.conversions = (row.conversions or 0) + conversions
            row.spend = to_decimal(row.spend or 0) + spend
        ad.campaign.revenue = to_decimal(ad.campaign.revenue or 0) + revenue
        self.session.flush()

    # Wallets

    def get_wallet(self, wallet_id: str) -> Optional[SellerWallet]:
        return self.session.get(SellerWallet, wallet_id)

    def seller_wallet_query(self, seller_id: str, tenant_id: str, for_update: bool = False):
        query = self.session.query(SellerWallet).filter(
            SellerWallet.seller_id == seller_id, SellerWallet.tenant_id == tenant_id
        )
        if for_update:
            # Row lock so concurrent charges serialise on the balance
            query = query.with_for_update().populate_existing()
        return query

    def get_seller_wallet(
        self, seller_id: str, tenant_id: str, for_update: bool = False
    ) -> Optional[SellerWallet]:
        return self.seller_wallet_query(seller_id, tenant_id, for_update).first()

    def create_seller_wallet(
        self, seller_id: str, tenant_id: str, currency: str, **fields: Any
    ) -> SellerWallet:
        wallet = SellerWallet(
            seller_id=seller_id,
            tenant_id=tenant_id,
            currency=currency,
            balance=Decimal("0"),
            total_deposited=Decimal("0"),
            total_spent=Decimal("0"),
            **fields,
        )
        self.session.add(wallet)
        self.session.flush()
        return wallet

    def apply_wallet_transaction(
        self, wallet: SellerWallet, transaction: WalletTransaction, **fields: Any
    ) -> WalletTransactionRecord:
        """Write a ledger row and move the wallet balance in one flush."""
        balance_before = to_decimal(wallet.balance)
        balance_after = calculate_wallet_balance(balance_before, transaction)
        record = WalletTransactionRecord(
            tenant_id=wallet.tenant_id,
            wallet_id=wallet.id,
            seller_id=wallet.seller_id,
            type=transaction.type.value,
            amount=to_decimal(transaction.amount),
            currency=transaction.currency,
            balance_before=balance_before,
            balance_after=balance_after,
            description=transaction.description,
            reference=transaction.reference,
            campaign_id=transaction.campaign_id,
            ad_id=transaction.ad_id,
            payment_method=transaction.payment_method,
            **fields,
        )
        now = _utcnow()
        wallet.balance = balance_after
        if balance_after > balance_before:
            wallet.total_deposited = to_decimal(wallet.total_deposited) + (balance_after - balance_before)
            wallet.last_deposited_at = now
        elif balance_after < balance_before:
            wallet.total_spent = to_decimal(wallet.total_spent) + (balance_before - balance_after)
            wallet.last_spent_at = now
        self.session.add(record)
        self.session.flush()
        return record

    def find_transaction_by_reference(
        self, wallet_id: str, reference: str
    ) -> Optional[WalletTransactionRecord]:
        return (
            self.session.query(WalletTransactionRecord)
            .filter(
                WalletTransactionRecord.wallet_id == wallet_id,
                WalletTransactionRecord.reference == reference,
            )
            .first()
        )

    def get_wallet_transactions(
        self,
        wallet_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[WalletTransactionRecord]:
        query = self.session.query(WalletTransactionRecord).filter(
            WalletTransactionRecord.wallet_id == wallet_id
        )
        query = _within(query, WalletTransactionRecord.created_at, date_from, date_to)
        return query.order_by(WalletTransactionRecord.created_at.desc()).all()

    # Slots

    def get_slot(self, slot_type: str, tenant_id: str) -> Optional[PromotedListingSlot]:
        return (
            self.session.query(PromotedListingSlot)
            .filter(
                PromotedListingSlot.slot_type == slot_type,
                PromotedListingSlot.tenant_id == tenant_id,
                PromotedListingSlot.is_active.is_(True),
            )
            .first()
        )

    def get_slots(self, tenant_id: str) -> List[PromotedListingSlot]:
        return (
            self.session.query(PromotedListingSlot)
            .filter(PromotedListingSlot.tenant_id == tenant_id, PromotedListingSlot.is_active.is_(True))
            .order_by(PromotedListingSlot.position.asc())
            .all()
        )

    def upsert_slot(self, tenant_id: str, slot_type: str, **fields: Any) -> PromotedListingSlot:
        slot = (
            self.session.query(PromotedListingSlot)
            .filter(
                PromotedListingSlot.tenant_id == tenant_id,
                PromotedListingSlot.slot_type == slot_type,
            )
            .first()
        )
        if slot is None:
            slot = PromotedListingSlot(tenant_id=tenant_id, slot_type=slot_type)
            self.session.add(slot)
        for key, value in fields.items():
            setattr(slot, key, value)
        self.session.flush()
        return slot

    # Statistics

    def get_campaign_statistics(
        self,
        campaign_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        impressions = _within(
            self.session.query(func.count(AdImpression.id)).filter(AdImpression.campaign_id == campaign_id),
            AdImpression.created_at,
            date_from,
            date_to,
        ).scalar() or 0

        clicks_query = _within(
            self.session.query(
                func.count(AdClick.id),
                func.coalesce(func.sum(AdClick.cost), 0),
            ).filter(AdClick.campaign_id == campaign_id),
            AdClick.created_at,
            date_from,
            date_to,
        )
        clicks, spend = clicks_query.one()

        conversions_query = _within(
            self.session.query(
                func.count(AdClick.id),
                func.coalesce(func.sum(AdClick.conversion_value), 0),
            ).filter(AdClick.campaign_id == campaign_id, AdClick.is_conversion.is_(True)),
            AdClick.created_at,
            date_from,
            date_to,
        )
        conversions, revenue = conversions_query.one()

        return {
            "impressions": int(impressions),
            "clicks": int(clicks or 0),
            "conversions": int(conversions or 0),
            "spend": to_decimal(spend or 0),
            "revenue": to_decimal(revenue or 0),
        }

    def get_slot_statistics(
        self,
        slot_type: str,
        tenant_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        impressions = _within(
            self.session.query(func.count(AdImpression.id)).filter(
                AdImpression.slot == slot_type, AdImpression.tenant_id == tenant_id
            ),
            AdImpression.created_at,
            date_from,
            date_to,
        ).scalar() or 0

        clicks, revenue = _within(
            self.session.query(
                func.count(AdClick.id),
                func.coalesce(func.sum(AdClick.cost), 0),
            ).filter(AdClick.slot == slot_type, AdClick.tenant_id == tenant_id),
            AdClick.created_at,
            date_from,
            date_to,
        ).one()

        return {
            "impressions": int(impressions),
            "clicks": int(clicks or 0),
            "revenue": to_decimal(revenue or 0),
        }

