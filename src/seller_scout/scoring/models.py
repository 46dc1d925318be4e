"""Data models for opportunity scoring and filtering."""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SellerType(str, Enum):
    """How a listing is fulfilled."""

    FBA = "fba"  # Fulfilled by Amazon
    EASY_SHIP = "easyShip"
    SELLER_FULFILLED = "sellerFulfilled"


class Recommendation(str, Enum):
    """Recommendation label shown next to an opportunity score."""

    RECOMMENDED = "recommended"
    MODERATE = "moderate"
    AVOID = "avoid"


class Product(BaseModel):
    """Catalog product as read from the product store."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Identification
    id: str = Field(..., min_length=1, description="Unique product identifier")
    title: str = Field(..., description="Product display name")
    category: str = Field(..., description="Top-level category")
    subcategory: str = Field("", description="Subcategory")
    brand: str = Field("", description="Brand name, empty if unbranded")

    # Pricing (INR)
    price: float = Field(..., gt=0, description="Current selling price")
    mrp: float = Field(0.0, ge=0, description="List price (MRP)")
    margin: float = Field(..., description="Margin as decimal (e.g., 0.25 = 25%)")

    # Market data
    rating: float = Field(0.0, ge=0, le=5, description="Average star rating (0-5)")
    review_count: int = Field(0, ge=0, description="Number of customer reviews")
    bsr: int = Field(..., ge=1, description="Best Seller Rank, lower is better")
    estimated_monthly_sales: int = Field(0, ge=0, description="Estimated units sold per month")

    # Fulfillment
    available_stock: int = Field(0, ge=0, description="Units in stock")
    seller_type: SellerType = Field(SellerType.FBA, description="Fulfillment mode")
    weight_kg: Optional[float] = Field(None, ge=0, description="Shipping weight if known")

    # Metadata
    last_modified: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last time the store updated this record",
    )
    images: list[str] = Field(default_factory=list, description="Media asset URLs")

    @property
    def monthly_revenue(self) -> float:
        """Estimated monthly revenue (price x estimated monthly sales)."""
        return self.price * self.estimated_monthly_sales


class ProductTrend(BaseModel):
    """Trend signals recorded for a product."""

    model_config = ConfigDict(frozen=True)

    rising_star: bool = False
    review_growth_spike: bool = False
    price_increase_trend: bool = False
    seasonal_demand_pattern: bool = False


class ScoringConfig(BaseModel):
    """Tunable policy for opportunity scoring.

    The four weights blend the sub-scores into the composite and must sum to 1.0.
    """

    # Composite weights
    demand_weight: float = Field(0.25, ge=0, le=1)
    competition_weight: float = Field(0.25, ge=0, le=1)
    margin_weight: float = Field(0.25, ge=0, le=1)
    growth_weight: float = Field(0.25, ge=0, le=1)

    # Demand
    demand_saturation_sales: int = Field(
        1000, gt=0, description="Monthly units at which demand score reaches 100"
    )

    # Competition
    review_ceiling: int = Field(
        10000, gt=0, description="Review count at which the review part reaches 0"
    )
    bsr_ceiling: int = Field(
        100000, gt=1, description="BSR at which the rank part reaches 0"
    )
    competition_review_weight: float = Field(
        0.5, ge=0, le=1, description="Share of the review part in competition score"
    )

    # Margin
    margin_full_score_at: float = Field(
        0.30, gt=0, description="Margin at which margin score reaches 100"
    )

    # Growth
    growth_baseline: float = Field(50.0, ge=0, le=100, description="Score with no signals")
    rising_star_bonus: float = Field(20.0, ge=0)
    review_growth_spike_bonus: float = Field(15.0, ge=0)
    seasonal_demand_bonus: float = Field(10.0, ge=0)
    price_increase_bonus: float = Field(5.0, ge=0)

    @model_validator(mode="after")
    def check_weights(self) -> "ScoringConfig":
        total = (
            self.demand_weight
            + self.competition_weight
            + self.margin_weight
            + self.growth_weight
        )
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Score weights must sum to 1.0, got {total:.4f}")
        return self


class OpportunityScore(BaseModel):
    """Opportunity score for a product (all values 0-100)."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    demand_score: float = Field(..., ge=0, le=100)
    competition_score: float = Field(..., ge=0, le=100)
    margin_score: float = Field(..., ge=0, le=100)
    growth_score: float = Field(..., ge=0, le=100)
    score: float = Field(..., ge=0, le=100, description="Weighted composite score")
    recommendation: Recommendation


class OpportunityScoreFilters(BaseModel):
    """Post-hoc filter over computed opportunity scores."""

    min_score: float = Field(0.0, ge=0, le=100, description="Keep composite >= this")
    category: Optional[str] = Field(None, description="Restrict to a category")
