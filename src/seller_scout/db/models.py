"""Database models for the product store, trends, filter state, profiles and research."""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from seller_scout.db.base import Base
from seller_scout.scoring.models import Product, ProductTrend, SellerType
from seller_scout.scoring.sellers import SellerAnalysisRequest


class SubscriptionTier(str, enum.Enum):
    """User subscription tier."""

    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"


def _new_id() -> str:
    return str(uuid.uuid4())


class ProductRecord(Base):
    """Catalog product row."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500))
    category: Mapped[str] = mapped_column(String(200), index=True)
    subcategory: Mapped[str] = mapped_column(String(200), default="")
    brand: Mapped[str] = mapped_column(String(200), default="")

    # Pricing
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    mrp: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    margin: Mapped[Decimal] = mapped_column(Numeric(8, 4))

    # Market data
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), default=Decimal("0"))
    review_count: Mapped[int] = mapped_column(BigInteger, default=0)
    bsr: Mapped[int] = mapped_column(BigInteger)
    estimated_monthly_sales: Mapped[int] = mapped_column(BigInteger, default=0)

    # Fulfillment
    available_stock: Mapped[int] = mapped_column(BigInteger, default=0)
    seller_type: Mapped[SellerType] = mapped_column(
        Enum(SellerType),
        default=SellerType.FBA,
    )
    weight_kg: Mapped[Decimal | None] = mapped_column(Numeric(8, 3), nullable=True)

    # Media
    images: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def to_domain(self) -> Product:
        """Convert to the immutable scoring model."""
        last_modified = self.last_modified or datetime.now(timezone.utc)
        return Product(
            id=self.id,
            title=self.title,
            category=self.category,
            subcategory=self.subcategory or "",
            brand=self.brand or "",
            price=float(self.price),
            mrp=float(self.mrp or 0),
            margin=float(self.margin),
            rating=float(self.rating or 0),
            review_count=self.review_count or 0,
            bsr=self.bsr,
            estimated_monthly_sales=self.estimated_monthly_sales or 0,
            available_stock=self.available_stock or 0,
            seller_type=self.seller_type,
            weight_kg=float(self.weight_kg) if self.weight_kg is not None else None,
            last_modified=last_modified,
            images=list(self.images or []),
        )

    def __repr__(self) -> str:
        return f"<ProductRecord {self.id}: {self.title}>"


class ProductTrendRecord(Base):
    """Trend signals recorded for a product."""

    __tablename__ = "product_trends"

    product_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    rising_star: Mapped[bool] = mapped_column(Boolean, default=False)
    review_growth_spike: Mapped[bool] = mapped_column(Boolean, default=False)
    price_increase_trend: Mapped[bool] = mapped_column(Boolean, default=False)
    seasonal_demand_pattern: Mapped[bool] = mapped_column(Boolean, default=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def to_domain(self) -> ProductTrend:
        return ProductTrend(
            rising_star=self.rising_star,
            review_growth_spike=self.review_growth_spike,
            price_increase_trend=self.price_increase_trend,
            seasonal_demand_pattern=self.seasonal_demand_pattern,
        )

    def __repr__(self) -> str:
        return f"<ProductTrendRecord {self.product_id}>"


class FilterStateRecord(Base):
    """Serialized filter specification scoped to a browsing session."""

    __tablename__ = "filter_states"
    __table_args__ = (UniqueConstraint("session_id", "storage_key"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(255), index=True)
    storage_key: Mapped[str] = mapped_column(String(100))
    payload: Mapped[str] = mapped_column(Text)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<FilterStateRecord {self.session_id}/{self.storage_key}>"


class UserProfileRecord(Base):
    """User profile keyed by the identity provider's principal."""

    __tablename__ = "user_profiles"

    principal: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        Enum(SubscriptionTier),
        default=SubscriptionTier.FREE,
    )
    alert_preferences: Mapped[list[str]] = mapped_column(JSON, default=list)
    saved_product_lists: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<UserProfileRecord {self.principal}: {self.subscription_tier.value}>"


class KeywordResearchRecord(Base):
    """Saved keyword research."""

    __tablename__ = "keyword_research"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    keyword: Mapped[str] = mapped_column(String(255), index=True)
    search_volume_estimate: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    keyword_difficulty_score: Mapped[Decimal | None] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    cpc_estimate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    long_tail_suggestions: Mapped[list[str]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<KeywordResearchRecord {self.keyword}>"


class SellerAnalysisRecord(Base):
    """Saved analysis of the sellers competing on a product."""

    __tablename__ = "seller_analyses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    product_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("products.id", ondelete="CASCADE"),
        index=True,
    )
    average_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    average_reviews: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    average_rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    weakness_detection: Mapped[list[str]] = mapped_column(JSON, default=list)
    listing_quality_score: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    def to_request(self) -> SellerAnalysisRequest:
        return SellerAnalysisRequest(
            average_price=float(self.average_price) if self.average_price is not None else None,
            average_reviews=self.average_reviews,
            average_rating=float(self.average_rating) if self.average_rating is not None else None,
            weakness_detection=list(self.weakness_detection or []),
            listing_quality_score=(
                float(self.listing_quality_score)
                if self.listing_quality_score is not None
                else None
            ),
        )

    def __repr__(self) -> str:
        return f"<SellerAnalysisRecord {self.id} for {self.product_id}>"
