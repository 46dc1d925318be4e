"""Competing seller analysis for a product listing."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from seller_scout.scoring.models import Product

HIGH_LISTING_QUALITY_ABOVE = 70.0


class SellerAnalysisRequest(BaseModel):
    """Aggregate metrics for the sellers competing on a product."""

    model_config = ConfigDict(allow_inf_nan=False)

    average_price: Optional[float] = Field(None, ge=0, lt=1e10, description="INR")
    average_reviews: Optional[int] = Field(None, ge=0)
    average_rating: Optional[float] = Field(None, ge=0, le=5)
    weakness_detection: list[str] = Field(
        default_factory=list, description="Weaknesses spotted in competing listings"
    )
    listing_quality_score: Optional[float] = Field(None, ge=0, le=100)


class SellerAnalysis(BaseModel):
    """Seller analysis compared against the product's own listing."""

    product_id: str
    average_price: Optional[float]
    average_reviews: Optional[int]
    average_rating: Optional[float]
    weakness_detection: list[str]
    listing_quality_score: Optional[float]
    high_listing_quality: Optional[bool] = Field(
        None, description="Competitors' listing quality is above 70"
    )
    price_vs_average: Optional[float] = Field(
        None, description="Product price relative to the competitor average (0.1 = 10% above)"
    )
    rating_gap: Optional[float] = Field(
        None, description="Product rating minus the competitor average"
    )


def clean_weaknesses(weaknesses: list[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate, keeping first-seen order."""
    seen: dict[str, None] = {}
    for weakness in weaknesses:
        weakness = weakness.strip()
        if weakness:
            seen.setdefault(weakness, None)
    return list(seen)


def analyze_sellers(product: Product, request: SellerAnalysisRequest) -> SellerAnalysis:
    """Compare a product against the averages of its competing sellers."""
    quality = request.listing_quality_score

    price_vs_average = None
    if request.average_price:
        price_vs_average = round(
            (product.price - request.average_price) / request.average_price, 4
        )

    rating_gap = None
    if request.average_rating is not None:
        rating_gap = round(product.rating - request.average_rating, 2)

    return SellerAnalysis(
        product_id=product.id,
        average_price=request.average_price,
        average_reviews=request.average_reviews,
        average_rating=request.average_rating,
        weakness_detection=clean_weaknesses(request.weakness_detection),
        listing_quality_score=quality,
        high_listing_quality=quality > HIGH_LISTING_QUALITY_ABOVE if quality is not None else None,
        price_vs_average=price_vs_average,
        rating_gap=rating_gap,
    )
