"""Pytest fixtures shared across the test suite."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from seller_scout.api.app import app
from seller_scout.db.base import Base, get_db
from seller_scout.scoring.models import Product, SellerType


# Use SQLite in-memory for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session with isolated transactions.

    Creates an in-memory SQLite database, creates all tables,
    and yields a session. Overrides app's get_db dependency.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

        app.dependency_overrides[get_db] = override_get_db

        try:
            yield session
        finally:
            app.dependency_overrides.clear()
            await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def water_bottle() -> Product:
    """Unbranded, lightweight, high-margin product with moderate competition."""
    return Product(
        id="prod-001",
        title="Stainless Steel Insulated Water Bottle 1L",
        category="Home & Kitchen",
        subcategory="Drinkware",
        brand="Generic",
        price=499.0,
        mrp=799.0,
        margin=0.32,
        rating=4.7,
        review_count=180,
        bsr=1500,
        estimated_monthly_sales=800,
        available_stock=450,
        seller_type=SellerType.EASY_SHIP,
        weight_kg=0.45,
    )


@pytest.fixture
def headphones() -> Product:
    """Branded, heavily reviewed electronics product."""
    return Product(
        id="prod-002",
        title="Wireless Bluetooth Headphones with Mic",
        category="Electronics",
        subcategory="Audio",
        brand="SoundMax",
        price=1999.0,
        mrp=2499.0,
        margin=0.25,
        rating=4.5,
        review_count=1200,
        bsr=800,
        estimated_monthly_sales=500,
        available_stock=300,
        seller_type=SellerType.FBA,
        weight_kg=1.4,
    )


@pytest.fixture
def yoga_mat() -> Product:
    """Mid-priced product with no weight recorded."""
    return Product(
        id="prod-003",
        title="Anti-Slip Yoga Mat 6mm",
        category="Sports",
        subcategory="Yoga",
        brand="FitCore",
        price=899.0,
        mrp=1299.0,
        margin=0.18,
        rating=4.0,
        review_count=90,
        bsr=12000,
        estimated_monthly_sales=30,
        available_stock=200,
        seller_type=SellerType.FBA,
    )
