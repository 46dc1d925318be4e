"""Product catalog API endpoints.

Endpoints:
- GET /products - list all products
- GET /products/{id} - get a product
- POST /products - add a product
- POST /products/search - search with raw filter form input
- PUT /products/{id}/trend - record trend signals for a product
- POST /products/{id}/seller-analysis - save competing seller metrics
- GET /products/{id}/seller-analysis - list saved seller analyses
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.base import get_db
from seller_scout.integrations.catalog_backend import CatalogBackendClient, CatalogBackendConfig
from seller_scout.scoring.filters import FilterSpecification
from seller_scout.scoring.models import Product, ProductTrend
from seller_scout.scoring.normalizer import RawFilterInput, has_active_filters, normalize
from seller_scout.scoring.sellers import SellerAnalysis, SellerAnalysisRequest
from seller_scout.services.catalog import (
    ProductAddRequest,
    ProductCatalog,
    ProductNotFoundError,
    ProductSearchResult,
    SearchErrorKind,
)

router = APIRouter(prefix="/products", tags=["products"])

SEARCH_ERROR_STATUS = {
    SearchErrorKind.CONNECTIVITY: status.HTTP_503_SERVICE_UNAVAILABLE,
    SearchErrorKind.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    SearchErrorKind.SERVER: status.HTTP_502_BAD_GATEWAY,
    SearchErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
}


class ProductCreatedResponse(BaseModel):
    """Response for a newly added product."""

    id: str


class ProductSearchResponse(BaseModel):
    """Search results with the filters that were applied."""

    products: list[Product]
    total: int
    filters: FilterSpecification
    has_active_filters: bool


def _remote_search(config: CatalogBackendConfig, spec: FilterSpecification) -> ProductSearchResult:
    with CatalogBackendClient(config) as client:
        return client.search(spec)


@router.get("", response_model=list[Product])
async def list_products(db: AsyncSession = Depends(get_db)) -> list[Product]:
    """List all products."""
    return await ProductCatalog(db).fetch_all()


@router.post("", response_model=ProductCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_product(
    request: ProductAddRequest,
    db: AsyncSession = Depends(get_db),
) -> ProductCreatedResponse:
    """Add a product to the catalog."""
    product_id = await ProductCatalog(db).add_product(request)
    return ProductCreatedResponse(id=product_id)


@router.post("/search", response_model=ProductSearchResponse)
async def search_products(
    raw: RawFilterInput,
    db: AsyncSession = Depends(get_db),
) -> ProductSearchResponse:
    """Search products with filter form input.

    Malformed numbers and inverted ranges are ignored, widening the search.
    When a remote catalog backend is configured the search is delegated to it.
    """
    spec = normalize(raw)

    backend = CatalogBackendConfig.from_settings()
    if backend is not None:
        result = await run_in_threadpool(_remote_search, backend, spec)
    else:
        result = await ProductCatalog(db).search(spec)

    if not result.ok:
        raise HTTPException(
            status_code=SEARCH_ERROR_STATUS[result.error.kind],
            detail={"kind": result.error.kind.value, "message": str(result.error)},
        )

    return ProductSearchResponse(
        products=result.products,
        total=len(result.products),
        filters=spec,
        has_active_filters=has_active_filters(spec),
    )


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> Product:
    """Get a product by id."""
    try:
        return await ProductCatalog(db).fetch_by_id(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )


@router.put("/{product_id}/trend", response_model=ProductTrend)
async def save_product_trend(
    product_id: str,
    trend: ProductTrend,
    db: AsyncSession = Depends(get_db),
) -> ProductTrend:
    """Record trend signals used by growth scoring and the high review growth filter."""
    try:
        return await ProductCatalog(db).save_trend(product_id, trend)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )


@router.post(
    "/{product_id}/seller-analysis",
    response_model=SellerAnalysis,
    status_code=status.HTTP_201_CREATED,
)
async def save_seller_analysis(
    product_id: str,
    request: SellerAnalysisRequest,
    db: AsyncSession = Depends(get_db),
) -> SellerAnalysis:
    """Save competing seller metrics and compare them with the product."""
    try:
        return await ProductCatalog(db).save_seller_analysis(product_id, request)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )


@router.get("/{product_id}/seller-analysis", response_model=list[SellerAnalysis])
async def list_seller_analyses(
    product_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[SellerAnalysis]:
    """List saved seller analyses for a product."""
    try:
        return await ProductCatalog(db).get_seller_analyses(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
