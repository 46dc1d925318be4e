"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seller_scout.api.routers import filters, keywords, opportunity, products, profile, profit
from seller_scout.config import configure_logging, get_settings

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="seller-scout API",
    description="Product research API for Amazon India sellers",
    version="0.1.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(products.router, prefix=settings.api_prefix)
app.include_router(opportunity.router, prefix=settings.api_prefix)
app.include_router(profit.router, prefix=settings.api_prefix)
app.include_router(filters.router, prefix=settings.api_prefix)
app.include_router(keywords.router, prefix=settings.api_prefix)
app.include_router(profile.router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
