"""SQLAlchemy models for the marketplace ads API.

Users, campaigns with their ad groups/ads/budgets, tracking events, seller
wallets with their transaction ledger, and per-tenant slot configuration.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import uuid4
from zoneinfo import ZoneInfo

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ads_domain.types import AdStatus, CampaignStatus

MONEY = Numeric(12, 2)


def _utcnow() -> datetime:
    return datetime.now(ZoneInfo("UTC"))


def _uuid() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    # Python-side defaults avoid SQLite 'now()' server-function issues
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=_utcnow, onupdate=_utcnow, nullable=False
    )


class User(TimestampMixin, Base):
    """A seller or tenant administrator."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), default="seller", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AdCampaign(TimestampMixin, Base):
    __tablename__ = "ad_campaigns"
    __table_args__ = (Index("ix_ad_campaigns_tenant_seller", "tenant_id", "seller_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    seller_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=CampaignStatus.DRAFT.value, nullable=False)
    campaign_type: Mapped[str] = mapped_column(String(16), nullable=False)
    targeting_type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    target_keywords: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    target_categories: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    target_locations: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    target_audiences: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    daily_budget: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_budget: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    bid_type: Mapped[str] = mapped_column(String(8), default="CPC", nullable=False)
    bid_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    max_bid_amount: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_paused: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    impressions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    spend: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    revenue: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    quality_score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    # "metadata" is reserved on declarative classes
    extra: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)

    ad_groups: Mapped[List["AdGroup"]] = relationship(
        back_populates="campaign", cascade="all, delete-orphan"
    )
    ads: Mapped[List["Ad"]] = relationship(back_populates="campaign", cascade="all, delete-orphan")
    budgets: Mapped[List["AdBudget"]] = relationship(
        back_populates="campaign", cascade="all, delete-orphan"
    )


class AdGroup(TimestampMixin, Base):
    __tablename__ = "ad_groups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    campaign_id: Mapped[str] = mapped_column(
        ForeignKey("ad_campaigns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=CampaignStatus.ACTIVE.value, nullable=False)
    keywords: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    negative_keywords: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    categories: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    locations: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    bid_type: Mapped[str] = mapped_column(String(8), default="CPC", nullable=False)
    bid_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    max_bid_amount: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    impressions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    spend: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)

    campaign: Mapped[AdCampaign] = relationship(back_populates="ad_groups")
    ads: Mapped[List["Ad"]] = relationship(back_populates="ad_group")


class Ad(TimestampMixin, Base):
    __tablename__ = "ads"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    campaign_id: Mapped[str] = mapped_column(
        ForeignKey("ad_campaigns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ad_group_id: Mapped[str] = mapped_column(
        ForeignKey("ad_groups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    headline: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    call_to_action: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    landing_page_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    final_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=AdStatus.PENDING.value, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    impressions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    spend: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    quality_score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    relevance_score: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    approved_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    extra: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)

    campaign: Mapped[AdCampaign] = relationship(back_populates="ads")
    ad_group: Mapped[AdGroup] = relationship(back_populates="ads")

    @property
    def bid_amount(self) -> Decimal:
        """Ad group bid, falling back to the campaign bid."""
        if self.ad_group is not None and self.ad_group.bid_amount is not None:
            return self.ad_group.bid_amount
        return self.campaign.bid_amount

    @property
    def max_bid_amount(self) -> Optional[Decimal]:
        if self.ad_group is not None and self.ad_group.max_bid_amount is not None:
            return self.ad_group.max_bid_amount
        return self.campaign.max_bid_amount


class AdBudget(TimestampMixin, Base):
    __tablename__ = "ad_budgets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    campaign_id: Mapped[str] = mapped_column(
        ForeignKey("ad_campaigns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    budget_type: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    recurring_type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    used_amount: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    remaining_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="ACTIVE", nullable=False)
    is_exhausted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    campaign: Mapped[AdCampaign] = relationship(back_populates="budgets")


class AdImpression(Base):
    __tablename__ = "ad_impressions"
    __table_args__ = (Index("ix_ad_impressions_tenant_slot", "tenant_id", "slot"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    campaign_id: Mapped[str] = mapped_column(
        ForeignKey("ad_campaigns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ad_id: Mapped[str] = mapped_column(ForeignKey("ads.id", ondelete="CASCADE"), nullable=False)
    impression_type: Mapped[str] = mapped_column(String(16), nullable=False)
    slot: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    session_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    device_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    search_query: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    search_category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    product_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    category_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    view_time: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)


class AdClick(Base):
    __tablename__ = "ad_clicks"
    __table_args__ = (Index("ix_ad_clicks_tenant_slot", "tenant_id", "slot"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    campaign_id: Mapped[str] = mapped_column(
        ForeignKey("ad_campaigns.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ad_id: Mapped[str] = mapped_column(ForeignKey("ads.id", ondelete="CASCADE"), nullable=False)
    impression_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    click_type: Mapped[str] = mapped_column(String(16), nullable=False)
    slot: Mapped[str] = mapped_column(String(32), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    session_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    device_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    search_query: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    product_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    category_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    is_conversion: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    conversion_value: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    conversion_type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    cost: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)


class SellerWallet(TimestampMixin, Base):
    __tablename__ = "seller_wallets"
    __table_args__ = (UniqueConstraint("tenant_id", "seller_id", name="uq_seller_wallet_tenant_seller"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    seller_id: Mapped[str] = mapped_column(String(36), nullable=False)
    balance: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    daily_spend_limit: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    monthly_spend_limit: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    total_spent: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    total_deposited: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    last_spent_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    last_deposited_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    is_suspended: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    suspension_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    transactions: Mapped[List["WalletTransactionRecord"]] = relationship(
        back_populates="wallet",
        cascade="all, delete-orphan",
        order_by="WalletTransactionRecord.created_at.desc()",
    )


class WalletTransactionRecord(Base):
    """Ledger row; ``balance_before``/``balance_after`` make every movement auditable."""

    __tablename__ = "wallet_transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    wallet_id: Mapped[str] = mapped_column(
        ForeignKey("seller_wallets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    seller_id: Mapped[str] = mapped_column(String(36), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    balance_before: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    balance_after: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reference: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    campaign_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    ad_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    payment_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="COMPLETED", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, nullable=False)

    wallet: Mapped[SellerWallet] = relationship(back_populates="transactions")


class PromotedListingSlot(TimestampMixin, Base):
    """Per-tenant floor prices and targeting for one slot type."""

    __tablename__ = "promoted_listing_slots"
    __table_args__ = (UniqueConstraint("tenant_id", "slot_type", name="uq_slot_tenant_type"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    slot_type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    min_bid_amount: Mapped[Decimal] = mapped_column(MONEY, default=Decimal("0"), nullable=False)
    reserve_price: Mapped[Optional[Decimal]] = mapped_column(MONEY, nullable=True)
    max_ads: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    target_categories: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    target_keywords: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
