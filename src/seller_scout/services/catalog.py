"""Product catalog backed by the local database.

Implements the product read interface used by the dashboard:
- fetch_all / fetch_by_id
- search with a FilterSpecification
- product, trend and seller analysis writes
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.models import ProductRecord, ProductTrendRecord, SellerAnalysisRecord
from seller_scout.scoring.filters import FilterConfig, FilterSpecification, filter_products
from seller_scout.scoring.models import Product, ProductTrend, SellerType
from seller_scout.scoring.sellers import SellerAnalysis, SellerAnalysisRequest, analyze_sellers

logger = logging.getLogger(__name__)


class ProductNotFoundError(LookupError):
    """Raised when a product id is not in the store."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class SearchErrorKind(str, Enum):
    """Failure categories so callers can offer different remediation."""

    CONNECTIVITY = "connectivity"
    AUTHORIZATION = "authorization"
    SERVER = "server"
    INVALID_REQUEST = "invalid_request"


class SearchError(Exception):
    """A product store read that failed."""

    def __init__(self, message: str, kind: SearchErrorKind, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


@dataclass
class ProductSearchResult:
    """Outcome of a product search: either products or an error."""

    kind: Literal["success", "error"]
    products: list[Product] = field(default_factory=list)
    error: Optional[SearchError] = None

    @classmethod
    def success(cls, products: list[Product]) -> "ProductSearchResult":
        return cls(kind="success", products=products)

    @classmethod
    def failure(cls, error: SearchError) -> "ProductSearchResult":
        return cls(kind="error", error=error)

    @property
    def ok(self) -> bool:
        return self.kind == "success"


class ProductAddRequest(BaseModel):
    """Product creation schema.

    Bounds follow the column precision so a stored product always reads back
    as a valid Product.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    title: str = Field(..., min_length=1)
    category: str
    subcategory: str = ""
    brand: str = ""
    price: float = Field(..., ge=0.01, lt=1e10)
    mrp: float = Field(0.0, ge=0, lt=1e10)
    margin: float = Field(..., gt=-1e4, lt=1e4)
    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    bsr: int = Field(..., ge=1)
    estimated_monthly_sales: int = Field(0, ge=0)
    available_stock: int = Field(0, ge=0)
    seller_type: SellerType = SellerType.FBA
    weight_kg: Optional[float] = Field(None, ge=0, lt=1e5)
    images: list[str] = Field(default_factory=list)


class ProductCatalog:
    """Product store operations over an async database session.

    Usage:
        catalog = ProductCatalog(session)
        result = await catalog.search(spec)
        if result.ok:
            products = result.products
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_record(self, product_id: str) -> ProductRecord:
        result = await self.session.execute(
            select(ProductRecord).where(ProductRecord.id == product_id)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise ProductNotFoundError(product_id)
        return record

    async def fetch_all(self) -> list[Product]:
        """Get all products ordered by title.

        Rows that no longer form a valid Product are logged and skipped.
        """
        result = await self.session.execute(select(ProductRecord).order_by(ProductRecord.title))

        products = []
        for record in result.scalars().all():
            try:
                products.append(record.to_domain())
            except ValidationError as e:
                logger.warning(f"Skipping invalid product {record.id}: {e}")
        return products

    async def fetch_by_id(self, product_id: str) -> Product:
        """Get a product by id.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        record = await self._get_record(product_id)
        return record.to_domain()

    async def search(
        self,
        spec: FilterSpecification,
        config: FilterConfig | None = None,
    ) -> ProductSearchResult:
        """Filter the catalog with a specification.

        Store failures are returned as an error result rather than raised.
        """
        try:
            products = await self.fetch_all()
            trends = await self.get_trends(product.id for product in products)
        except SQLAlchemyError as e:
            logger.error(f"Product search failed: {e}")
            return ProductSearchResult.failure(
                SearchError(f"Product store unavailable: {e}", SearchErrorKind.SERVER)
            )

        matched = filter_products(products, spec, trends, config)
        logger.info(f"Search matched {len(matched)} of {len(products)} products")
        return ProductSearchResult.success(matched)

    async def add_product(self, request: ProductAddRequest) -> str:
        """Add a product to the catalog and return its id."""
        record = ProductRecord(
            title=request.title,
            category=request.category,
            subcategory=request.subcategory,
            brand=request.brand,
            price=Decimal(str(request.price)),
            mrp=Decimal(str(request.mrp)),
            margin=Decimal(str(request.margin)),
            rating=Decimal(str(request.rating)),
            review_count=request.review_count,
            bsr=request.bsr,
            estimated_monthly_sales=request.estimated_monthly_sales,
            available_stock=request.available_stock,
            seller_type=request.seller_type,
            weight_kg=Decimal(str(request.weight_kg)) if request.weight_kg is not None else None,
            images=list(request.images),
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)

        logger.info(f"Added product {record.id} ({record.title})")
        return record.id

    async def save_trend(self, product_id: str, trend: ProductTrend) -> ProductTrend:
        """Create or replace the trend signals for a product.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        await self._get_record(product_id)

        record = await self.session.get(ProductTrendRecord, product_id)
        if record is None:
            record = ProductTrendRecord(product_id=product_id)
            self.session.add(record)

        record.rising_star = trend.rising_star
        record.review_growth_spike = trend.review_growth_spike
        record.price_increase_trend = trend.price_increase_trend
        record.seasonal_demand_pattern = trend.seasonal_demand_pattern
        await self.session.flush()

        logger.info(f"Saved trend for product {product_id}")
        return trend

    async def get_trend(self, product_id: str) -> ProductTrend | None:
        """Get recorded trend signals for a product, if any."""
        record = await self.session.get(ProductTrendRecord, product_id)
        return record.to_domain() if record is not None else None

    async def get_trends(
        self,
        product_ids: Iterable[str] | None = None,
    ) -> dict[str, ProductTrend]:
        """Get recorded trends keyed by product id."""
        query = select(ProductTrendRecord)
        if product_ids is not None:
            ids = list(product_ids)
            if not ids:
                return {}
            query = query.where(ProductTrendRecord.product_id.in_(ids))

        result = await self.session.execute(query)
        return {record.product_id: record.to_domain() for record in result.scalars().all()}

    async def save_seller_analysis(
        self,
        product_id: str,
        request: SellerAnalysisRequest,
    ) -> SellerAnalysis:
        """Save competing seller metrics for a product and compare them to it.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.fetch_by_id(product_id)
        analysis = analyze_sellers(product, request)

        record = SellerAnalysisRecord(
            product_id=product_id,
            average_price=_to_decimal(analysis.average_price),
            average_reviews=analysis.average_reviews,
            average_rating=_to_decimal(analysis.average_rating),
            weakness_detection=analysis.weakness_detection,
            listing_quality_score=_to_decimal(analysis.listing_quality_score),
        )
        self.session.add(record)
        await self.session.flush()

        logger.info(f"Saved seller analysis {record.id} for product {product_id}")
        return analysis

    async def get_seller_analyses(self, product_id: str) -> list[SellerAnalysis]:
        """Get saved seller analyses for a product, oldest first.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.fetch_by_id(product_id)
        result = await self.session.execute(
            select(SellerAnalysisRecord)
            .where(SellerAnalysisRecord.product_id == product_id)
            .order_by(SellerAnalysisRecord.created_at)
        )
        return [
            analyze_sellers(product, record.to_request()) for record in result.scalars().all()
        ]


def _to_decimal(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None
