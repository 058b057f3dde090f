"""Ad campaign service.

Orchestrates the pure rules in ``ads_domain`` over the repository: campaign
management, slot auctions, tracking, wallets, budgets and reporting. Each
mutating call commits its own unit of work and raises ``ads_domain.errors``
types on failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ads_domain.auction import calculate_slot_revenue, is_ad_eligible_for_slot, run_ad_auction
from ads_domain.errors import ConflictError, NotFoundError, ValidationError, WalletError
from ads_domain.money import Money, to_decimal
from ads_domain.reporting import (
    calculate_budget_utilization,
    calculate_performance_metrics,
    generate_ad_performance_report,
    generate_bid_recommendations,
)
from ads_domain.scoring import calculate_quality_score, normalised_relevance
from ads_domain.types import (
    AdCampaignContext,
    AdStatus,
    BiddingResult,
    BidRecommendation,
    BudgetUtilization,
    CampaignStatus,
    CompetingAd,
    CompetitionLevel,
    DateRange,
    PerformanceReport,
    SlotAllocationResult,
    SlotType,
    WalletTransaction,
    WalletTransactionType,
)
from ads_domain.wallet import validate_wallet_transaction

from ..config import DEFAULT_CURRENCY, HEALTH_CHECK_TENANT_ID
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
from ..repositories.ad_campaign import AdCampaignRepository, CampaignSearchParams, _naive

logger = logging.getLogger(__name__)


def _naive_dates(data: Dict[str, Any]) -> Dict[str, Any]:
    for key in ("start_date", "end_date"):
        if data.get(key) is not None:
            data[key] = _naive(data[key])
    return data


def competition_for(competitors: int) -> CompetitionLevel:
    """Competition level from the number of campaigns bidding in the tenant."""
    if competitors < 3:
        return CompetitionLevel.LOW
    if competitors < 10:
        return CompetitionLevel.MEDIUM
    return CompetitionLevel.HIGH


@dataclass
class AuctionRound:
    """Candidates for one slot before and after filtering."""

    context: AdCampaignContext
    slot: Optional[PromotedListingSlot]
    eligible: List[Ad] = field(default_factory=list)
    competing: List[CompetingAd] = field(default_factory=list)
    excluded: Dict[str, str] = field(default_factory=dict)


class AdCampaignService:
    def __init__(self, session: Session, currency: str = DEFAULT_CURRENCY):
        self.session = session
        self.currency = currency
        self.repo = AdCampaignRepository(session)

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(f"Conflicting write: {exc.orig}") from exc
        except SQLAlchemyError:
            self.session.rollback()
            raise

    # Campaigns

    def create_campaign(
        self,
        tenant_id: str,
        data: Dict[str, Any],
        seller_id: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> AdCampaign:
        logger.info("Creating campaign %r for tenant %s", data.get("name"), tenant_id)
        _naive_dates(data)
        self._validate_campaign_fields(data)
        data.setdefault("status", CampaignStatus.ACTIVE.value)
        campaign = self.repo.create_campaign(
            tenant_id=tenant_id, seller_id=seller_id, created_by=created_by, **data
        )
        self._commit()
        logger.info("Campaign created: %s", campaign.id)
        return campaign

    def update_campaign(self, campaign_id: str, tenant_id: str, data: Dict[str, Any]) -> AdCampaign:
        _naive_dates(data)
        campaign = self.get_campaign(campaign_id, tenant_id)
        merged = {
            "start_date": campaign.start_date,
            "end_date": campaign.end_date,
            "bid_amount": campaign.bid_amount,
            "max_bid_amount": campaign.max_bid_amount,
        }
        merged.update(data)
        self._validate_campaign_fields(merged)
        self.repo.update_campaign(campaign, data)
        self._commit()
        logger.info("Campaign updated: %s", campaign_id)
        return campaign

    def get_campaign(self, campaign_id: str, tenant_id: str) -> AdCampaign:
        campaign = self.repo.get_campaign(campaign_id, tenant_id)
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    def search_campaigns(self, params: CampaignSearchParams) -> Dict[str, Any]:
        return self.repo.search_campaigns(params)

    def delete_campaign(self, campaign_id: str, tenant_id: str) -> None:
        campaign = self.get_campaign(campaign_id, tenant_id)
        self.repo.delete_campaign(campaign)
        self._commit()
        logger.info("Campaign deleted: %s", campaign_id)

    @staticmethod
    def _validate_campaign_fields(data: Dict[str, Any]) -> None:
        errors = []
        start, end = data.get("start_date"), data.get("end_date")
        if start is not None and end is not None and end < start:
            errors.append("end_date must not be before start_date")
        bid, max_bid = data.get("bid_amount"), data.get("max_bid_amount")
        if bid is not None and max_bid is not None and to_decimal(max_bid) < to_decimal(bid):
            errors.append("max_bid_amount must be at least bid_amount")
        if errors:
            raise ValidationError(errors)

    # Ad groups and ads

    def create_ad_group(self, tenant_id: str, data: Dict[str, Any]) -> AdGroup:
        self.get_campaign(data["campaign_id"], tenant_id)
        bid, max_bid = data.get("bid_amount"), data.get("max_bid_amount")
        if max_bid is not None and to_decimal(max_bid) < to_decimal(bid):
            raise ValidationError(["max_bid_amount must be at least bid_amount"])
        ad_group = self.repo.create_ad_group(tenant_id=tenant_id, **data)
        self._commit()
        logger.info("Ad group created: %s (campaign %s)", ad_group.id, ad_group.campaign_id)
        return ad_group

    def get_ad_groups_by_campaign(self, campaign_id: str, tenant_id: str) -> List[AdGroup]:
        self.get_campaign(campaign_id, tenant_id)
        return self.repo.get_ad_groups_by_campaign(campaign_id)

    def create_ad(self, tenant_id: str, data: Dict[str, Any]) -> Ad:
        self.get_campaign(data["campaign_id"], tenant_id)
        ad_group = self.repo.get_ad_group(data["ad_group_id"], tenant_id)
        if ad_group is None:
            raise NotFoundError("Ad group", data["ad_group_id"])
        if ad_group.campaign_id != data["campaign_id"]:
            raise ValidationError(["Ad group does not belong to campaign"])
        ad = self.repo.create_ad(tenant_id=tenant_id, status=AdStatus.PENDING.value, **data)
        self._commit()
        logger.info("Ad created: %s (%r), awaiting approval", ad.id, ad.title)
        return ad

    def get_ad(self, ad_id: str, tenant_id: str) -> Ad:
        ad = self.repo.get_ad(ad_id, tenant_id)
        if ad is None:
            raise NotFoundError("Ad", ad_id)
        return ad

    def get_ads_by_campaign(self, campaign_id: str, tenant_id: str) -> List[Ad]:
        self.get_campaign(campaign_id, tenant_id)
        return self.repo.get_ads_by_campaign(campaign_id)

    def approve_ad(self, ad_id: str, tenant_id: str, approved_by: str) -> Ad:
        ad = self.get_ad(ad_id, tenant_id)
        ad.is_approved = True
        ad.approved_by = approved_by
        ad.approved_at = _utcnow()
        ad.rejection_reason = None
        ad.status = AdStatus.ACTIVE.value
        self._commit()
        logger.info("Ad approved: %s by %s", ad_id, approved_by)
        return ad

    def reject_ad(self, ad_id: str, tenant_id: str, reason: str, rejected_by: str) -> Ad:
        ad = self.get_ad(ad_id, tenant_id)
        ad.is_approved = False
        ad.rejection_reason = reason
        ad.status = AdStatus.REJECTED.value
        self._commit()
        logger.info("Ad rejected: %s by %s (%s)", ad_id, rejected_by, reason)
        return ad

    # Slots and auctions

    def configure_slot(self, tenant_id: str, slot_type: SlotType, data: Dict[str, Any]) -> PromotedListingSlot:
        reserve, minimum = data.get("reserve_price"), data.get("min_bid_amount")
        if reserve is not None and minimum is not None and to_decimal(reserve) < to_decimal(minimum):
            raise ValidationError(["reserve_price must be at least min_bid_amount"])
        slot = self.repo.upsert_slot(tenant_id, SlotType(slot_type).value, **data)
        self._commit()
        return slot

    def _collect_candidates(self, tenant_id: str, context: AdCampaignContext) -> AuctionRound:
        slot = self.repo.get_slot(context.slot_type.value, tenant_id)
        auction = AuctionRound(context=context, slot=slot)
        auction.eligible = self.repo.get_eligible_ads_for_slot(tenant_id, context)

        wallets: Dict[str, Optional[SellerWallet]] = {}
        for ad in auction.eligible:
            if slot is not None:
                verdict = is_ad_eligible_for_slot(ad, slot, context)
                if not verdict.eligible:
                    auction.excluded[ad.id] = verdict.reason
                    continue

            reason = self._spend_blocker(ad, wallets)
            if reason is not None:
                auction.excluded[ad.id] = reason
                continue

            auction.competing.append(
                CompetingAd(
                    ad_id=ad.id,
                    campaign_id=ad.campaign_id,
                    bid_amount=to_decimal(ad.bid_amount),
                    quality_score=calculate_quality_score(ad, context),
                    relevance_score=normalised_relevance(ad, context),
                    max_bid_amount=to_decimal(ad.max_bid_amount) if ad.max_bid_amount is not None else None,
                )
            )
        return auction

    def _spend_blocker(self, ad: Ad, wallets: Dict[str, Optional[SellerWallet]]) -> Optional[str]:
        """Why the ad's campaign cannot pay for a click right now, or None."""
        campaign = ad.campaign
        if campaign.total_budget is not None and to_decimal(campaign.spend) >= to_decimal(campaign.total_budget):
            return "Campaign total budget spent"
        budgets = campaign.budgets
        if budgets and all(budget.is_exhausted for budget in budgets):
            return "Campaign budget exhausted"
        daily_budget = to_decimal(campaign.daily_budget or 0)
        if daily_budget > 0 and self.repo.get_campaign_spend_today(campaign.id) >= daily_budget:
            return "Campaign daily budget spent"

        if campaign.seller_id is None:
            # House ads are not wallet funded
            return None
        if campaign.seller_id not in wallets:
            wallets[campaign.seller_id] = self.repo.get_seller_wallet(campaign.seller_id, campaign.tenant_id)
        wallet = wallets[campaign.seller_id]
        if wallet is None:
            return "Seller has no wallet"
        if wallet.is_suspended or not wallet.is_active:
            return "Seller wallet suspended"

        validation = validate_wallet_transaction(
            WalletTransaction(WalletTransactionType.SPEND, to_decimal(ad.bid_amount), wallet.currency),
            wallet.balance,
            wallet.daily_spend_limit,
            wallet.monthly_spend_limit,
        )
        if not validation.is_valid:
            return validation.errors[0]
        return None

    def _auction(self, auction: AuctionRound) -> List[BiddingResult]:
        slot = auction.slot
        context = auction.context
        reserve = to_decimal(slot.reserve_price) if slot is not None and slot.reserve_price else None
        max_ads = slot.max_ads if slot is not None and slot.max_ads else None
        return run_ad_auction(
            context.slot_type,
            context.position,
            auction.competing,
            context,
            reserve_price=reserve,
            max_ads=max_ads,
            currency=self.currency,
        )

    def run_auction(self, tenant_id: str, context: AdCampaignContext) -> List[BiddingResult]:
        auction = self._collect_candidates(tenant_id, context)
        return self._auction(auction)

    def allocate_slot(self, tenant_id: str, context: AdCampaignContext) -> SlotAllocationResult:
        logger.info("Allocating slot %s position %s", context.slot_type.value, context.position)
        auction = self._collect_candidates(tenant_id, context)
        results = self._auction(auction)
        total_revenue = calculate_slot_revenue(results)
        logger.info(
            "Slot %s allocated: %d winners of %d competing, revenue %s",
            context.slot_type.value,
            len(results),
            len(auction.competing),
            total_revenue,
        )
        return SlotAllocationResult(
            slot_type=context.slot_type,
            position=context.position,
            allocated_ads=results,
            total_revenue=total_revenue,
            metadata={
                "total_eligible_ads": len(auction.eligible),
                "total_competing_ads": len(auction.competing),
                "allocated_ads": len(results),
                "excluded": dict(auction.excluded),
            },
        )

    # Tracking

    def _tracked_ad(self, tenant_id: str, campaign_id: str, ad_id: str) -> Ad:
        ad = self.get_ad(ad_id, tenant_id)
        if ad.campaign_id != campaign_id:
            raise ValidationError(["Ad does not belong to campaign"])
        return ad

    def record_impression(self, tenant_id: str, data: Dict[str, Any]) -> AdImpression:
        ad = self._tracked_ad(tenant_id, data["campaign_id"], data["ad_id"])
        impression = self.repo.create_impression(tenant_id=tenant_id, **data)
        self.repo.increment_metrics(ad, impressions=1)
        self._commit()
        logger.debug("Impression recorded for ad %s", ad.id)
        return impression

    def record_click(self, tenant_id: str, data: Dict[str, Any]) -> AdClick:
        """Store the click, bump metrics and charge the seller wallet and budgets."""
        ad = self._tracked_ad(tenant_id, data["campaign_id"], data["ad_id"])
        seller_id = ad.campaign.seller_id
        wallet = self.repo.get_seller_wallet(seller_id, tenant_id) if seller_id is not None else None
        account_currency = wallet.currency if wallet is not None else self.currency
        currency = (data.pop("currency", None) or account_currency).upper()
        if currency != account_currency:
            raise ValidationError([f"Click currency {currency} does not match wallet currency {account_currency}"])
        for budget in self.repo.get_active_budgets(ad.campaign_id):
            if budget.currency != currency:
                raise ValidationError([f"Click currency {currency} does not match budget currency {budget.currency}"])

        cost = Money(to_decimal(data.pop("cost")), currency).amount
        if cost < 0:
            raise ValidationError(["cost must not be negative"])
        ceiling = to_decimal(ad.bid_amount)
        if ad.max_bid_amount is not None:
            ceiling = min(ceiling, to_decimal(ad.max_bid_amount))
        ceiling = Money(ceiling, currency).amount
        if cost > ceiling:
            raise ValidationError([f"cost {cost} exceeds the ad's bid of {ceiling}"])
        is_conversion = bool(data.get("is_conversion"))
        revenue = to_decimal(data.get("conversion_value") or 0) if is_conversion else Decimal("0")

        click = self.repo.create_click(tenant_id=tenant_id, cost=cost, currency=currency, **data)
        self.repo.increment_metrics(
            ad, clicks=1, conversions=1 if is_conversion else 0, spend=cost, revenue=revenue
        )

        if cost > 0:
            self._charge_click(ad, cost, currency, click.id)
        self._commit()
        logger.info("Click recorded for ad %s, cost %s %s", ad.id, cost, currency)
        return click

    def _charge_click(self, ad: Ad, cost: Decimal, currency: str, click_id: str) -> None:
        for budget in self.repo.get_active_budgets(ad.campaign_id, for_update=True):
            self.repo.update_budget_usage(budget, cost)
            if budget.is_exhausted:
                logger.info("Budget %s exhausted for campaign %s", budget.id, ad.campaign_id)

        seller_id = ad.campaign.seller_id
        if seller_id is None:
            return
        wallet = self.repo.get_seller_wallet(seller_id, ad.tenant_id, for_update=True)
        if wallet is None:
            logger.warning("Click on ad %s has no seller wallet to charge", ad.id)
            return
        if to_decimal(wallet.balance) < cost:
            logger.warning(
                "Wallet %s balance %s short of click cost %s; charging remainder",
                wallet.id,
                wallet.balance,
                cost,
            )
        self.repo.apply_wallet_transaction(
            wallet,
            WalletTransaction(
                type=WalletTransactionType.SPEND,
                amount=cost,
                currency=currency,
                description="Ad click charge",
                reference=f"click:{click_id}",
                campaign_id=ad.campaign_id,
                ad_id=ad.id,
            ),
        )

    # Wallets

    def get_wallet(self, wallet_id: str, tenant_id: Optional[str] = None) -> SellerWallet:
        wallet = self.repo.get_wallet(wallet_id)
        if wallet is None or (tenant_id is not None and wallet.tenant_id != tenant_id):
            raise NotFoundError("Wallet", wallet_id)
        return wallet

    def get_seller_wallet(self, seller_id: str, tenant_id: str) -> SellerWallet:
        wallet = self.repo.get_seller_wallet(seller_id, tenant_id)
        if wallet is None:
            raise NotFoundError("Wallet for seller", seller_id)
        return wallet

    def create_seller_wallet(
        self,
        seller_id: str,
        tenant_id: str,
        initial_balance: Decimal = Decimal("0"),
        daily_spend_limit: Optional[Decimal] = None,
        monthly_spend_limit: Optional[Decimal] = None,
    ) -> SellerWallet:
        if self.repo.get_seller_wallet(seller_id, tenant_id) is not None:
            raise ConflictError("Seller already has a wallet")
        logger.info("Creating wallet for seller %s", seller_id)
        wallet = self.repo.create_seller_wallet(
            seller_id,
            tenant_id,
            self.currency,
            daily_spend_limit=daily_spend_limit,
            monthly_spend_limit=monthly_spend_limit,
        )
        if to_decimal(initial_balance) > 0:
            self.repo.apply_wallet_transaction(
                wallet,
                WalletTransaction(
                    WalletTransactionType.DEPOSIT,
                    to_decimal(initial_balance),
                    wallet.currency,
                    description="Opening balance",
                ),
            )
        self._commit()
        return wallet

    def deposit_to_wallet(
        self,
        wallet_id: str,
        amount: Decimal,
        payment_method: str,
        reference: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> WalletTransactionRecord:
        wallet = self.get_wallet(wallet_id, tenant_id)
        logger.info("Depositing %s into wallet %s via %s", amount, wallet_id, payment_method)
        transaction = WalletTransaction(
            type=WalletTransactionType.DEPOSIT,
            amount=to_decimal(amount),
            currency=wallet.currency,
            description=f"Deposit via {payment_method}",
            reference=reference,
            payment_method=payment_method,
        )
        validation = validate_wallet_transaction(transaction, wallet.balance)
        if not validation.is_valid:
            raise ValidationError(validation.errors)
        record = self.repo.apply_wallet_transaction(wallet, transaction, payment_status="completed")
        self._commit()
        return record

    def deposit_once(
        self, wallet_id: str, amount: Decimal, payment_method: str, reference: str
    ) -> Tuple[WalletTransactionRecord, bool]:
        """Deposit unless a transaction with ``reference`` already exists.

        Returns the transaction and whether it was created by this call.
        """
        existing = self.repo.find_transaction_by_reference(wallet_id, reference)
        if existing is not None:
            logger.info("Deposit %s already applied to wallet %s", reference, wallet_id)
            return existing, False
        return self.deposit_to_wallet(wallet_id, amount, payment_method, reference), True

    def withdraw_from_wallet(
        self,
        wallet_id: str,
        amount: Decimal,
        description: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> WalletTransactionRecord:
        wallet = self.get_wallet(wallet_id, tenant_id)
        logger.info("Withdrawing %s from wallet %s", amount, wallet_id)
        if wallet.is_suspended:
            raise WalletError("Wallet is suspended")
        transaction = WalletTransaction(
            type=WalletTransactionType.WITHDRAWAL,
            amount=to_decimal(amount),
            currency=wallet.currency,
            description=description or "Withdrawal from wallet",
        )
        validation = validate_wallet_transaction(
            transaction, wallet.balance, wallet.daily_spend_limit, wallet.monthly_spend_limit
        )
        if not validation.is_valid:
            raise ValidationError(validation.errors)
        record = self.repo.apply_wallet_transaction(wallet, transaction)
        self._commit()
        return record

    def get_wallet_transactions(
        self,
        wallet_id: str,
        tenant_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[WalletTransactionRecord]:
        wallet = self.get_wallet(wallet_id, tenant_id)
        return self.repo.get_wallet_transactions(wallet.id, date_from, date_to)

    # Budgets

    def create_budget(self, tenant_id: str, data: Dict[str, Any]) -> AdBudget:
        _naive_dates(data)
        self.get_campaign(data["campaign_id"], tenant_id)
        if data.get("end_date") is not None and data["end_date"] < data["start_date"]:
            raise ValidationError(["end_date must not be before start_date"])
        data.setdefault("currency", self.currency)
        logger.info("Creating %s budget for campaign %s", data.get("budget_type"), data["campaign_id"])
        budget = self.repo.create_budget(tenant_id=tenant_id, **data)
        self._commit()
        return budget

    def update_budget_usage(self, budget_id: str, amount: Decimal, tenant_id: str) -> AdBudget:
        budget = self.repo.get_budget(budget_id, tenant_id)
        if budget is None:
            raise NotFoundError("Budget", budget_id)
        self.repo.update_budget_usage(budget, to_decimal(amount))
        self._commit()
        return budget

    def get_budget_utilization(
        self, campaign_id: str, tenant_id: str
    ) -> List[Tuple[AdBudget, BudgetUtilization]]:
        self.get_campaign(campaign_id, tenant_id)
        report = []
        now = _utcnow().replace(tzinfo=None)
        for budget in self.repo.get_budgets_by_campaign(campaign_id):
            utilization = calculate_budget_utilization(
                budget.amount, budget.used_amount, budget.remaining_amount
            )
            if budget.end_date is not None:
                utilization.days_remaining = max(0, (budget.end_date - now).days)
            report.append((budget, utilization))
        return report

    # Statistics and reporting

    def get_campaign_statistics(
        self,
        campaign_id: str,
        tenant_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ):
        self.get_campaign(campaign_id, tenant_id)
        stats = self.repo.get_campaign_statistics(campaign_id, date_from, date_to)
        return calculate_performance_metrics(
            stats["impressions"], stats["clicks"], stats["conversions"], stats["spend"], stats["revenue"]
        )

    def get_slot_statistics(
        self,
        slot_type: SlotType,
        tenant_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        stats = self.repo.get_slot_statistics(SlotType(slot_type).value, tenant_id, date_from, date_to)
        impressions, clicks, revenue = stats["impressions"], stats["clicks"], stats["revenue"]
        return {
            "slot_type": SlotType(slot_type).value,
            "total_impressions": impressions,
            "total_clicks": clicks,
            "total_revenue": revenue,
            "average_ctr": (clicks / impressions) * 100 if impressions > 0 else 0.0,
            "average_cpc": float(revenue) / clicks if clicks > 0 else 0.0,
        }

    def generate_performance_report(
        self, campaign_id: str, tenant_id: str, date_range: DateRange
    ) -> PerformanceReport:
        metrics = self.get_campaign_statistics(campaign_id, tenant_id, date_range.start, date_range.end)
        campaign = self.get_campaign(campaign_id, tenant_id)
        metrics.quality_score = campaign.quality_score
        return generate_ad_performance_report(campaign_id, date_range, metrics)

    def recommend_bid(
        self,
        campaign_id: str,
        tenant_id: str,
        competition_level: Optional[CompetitionLevel] = None,
    ) -> BidRecommendation:
        campaign = self.get_campaign(campaign_id, tenant_id)
        if competition_level is None:
            competitors = len(self.repo.get_active_campaigns(tenant_id)) - 1
            competition_level = competition_for(max(0, competitors))
        ads = self.repo.get_ads_by_campaign(campaign_id)
        quality = campaign.quality_score
        if ads:
            context = AdCampaignContext(slot_type=SlotType.SEARCH_TOP)
            quality = sum(calculate_quality_score(ad, context) for ad in ads) / len(ads)
        return generate_bid_recommendations(
            campaign.bid_amount,
            quality,
            competition_level,
            {
                "impressions": campaign.impressions,
                "clicks": campaign.clicks,
                "conversions": campaign.conversions,
                "spend": campaign.spend,
            },
        )

    # Health

    def health_check(self, tenant_id: str = HEALTH_CHECK_TENANT_ID) -> Dict[str, Any]:
        try:
            self.session.execute(text("SELECT 1"))
            active = self.repo.get_active_campaigns(tenant_id)
        except SQLAlchemyError as exc:
            logger.exception("Ad campaign health check failed")
            return {
                "status": "unhealthy",
                "message": f"Ad campaign service health check failed: {exc}",
                "details": {"database_connected": False},
            }
        return {
            "status": "healthy",
            "message": "Ad campaign service is healthy",
            "details": {"active_campaigns": len(active), "database_connected": True},
        }
