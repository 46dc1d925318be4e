"""Opportunity score API endpoints.

Endpoints:
- GET /products/{id}/opportunity-score - score a single product
- POST /opportunity-scores/filter - products with composite score >= min_score
- GET /opportunity-scores/leaderboard - top products by score, revenue, competition or growth
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.base import get_db
from seller_scout.scoring.models import OpportunityScore, OpportunityScoreFilters, Product
from seller_scout.scoring.scorer import (
    SortKey,
    filter_by_min_score,
    opportunity_level,
    rank_products,
    score_product,
)
from seller_scout.services.catalog import ProductCatalog, ProductNotFoundError

router = APIRouter(tags=["opportunity"])


class ProductScoreResponse(BaseModel):
    """Opportunity score with the margin band badge."""

    score: OpportunityScore
    opportunity_level: str


class LeaderboardEntry(BaseModel):
    """A ranked product."""

    rank: int
    product: Product
    score: OpportunityScore
    monthly_revenue: float


@router.get("/products/{product_id}/opportunity-score", response_model=ProductScoreResponse)
async def get_opportunity_score(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> ProductScoreResponse:
    """Compute the opportunity score for a product."""
    catalog = ProductCatalog(db)
    try:
        product = await catalog.fetch_by_id(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    trend = await catalog.get_trend(product_id)
    return ProductScoreResponse(
        score=score_product(product, trend),
        opportunity_level=opportunity_level(product.margin),
    )


@router.post("/opportunity-scores/filter", response_model=list[Product])
async def filter_by_opportunity_score(
    filters: OpportunityScoreFilters,
    db: AsyncSession = Depends(get_db),
) -> list[Product]:
    """List products whose opportunity score meets the minimum."""
    catalog = ProductCatalog(db)
    products = await catalog.fetch_all()
    trends = await catalog.get_trends(product.id for product in products)
    return filter_by_min_score(products, filters, trends)


@router.get("/opportunity-scores/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    sort_by: SortKey = Query(SortKey.SCORE, description="score, revenue, competition or growth"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
) -> list[LeaderboardEntry]:
    """Top opportunities, best first."""
    catalog = ProductCatalog(db)
    products = await catalog.fetch_all()
    trends = await catalog.get_trends(product.id for product in products)

    ranked = rank_products(products, sort_by=sort_by, trends=trends, limit=limit)
    return [
        LeaderboardEntry(
            rank=index,
            product=product,
            score=score,
            monthly_revenue=product.monthly_revenue,
        )
        for index, (product, score) in enumerate(ranked, start=1)
    ]
