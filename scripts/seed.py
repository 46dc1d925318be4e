#!/usr/bin/env python3
"""Seed the database with sample catalog products."""

import asyncio

from sqlalchemy import select

from seller_scout.db.base import async_session_maker
from seller_scout.db.models import ProductRecord
from seller_scout.scoring.models import ProductTrend, SellerType
from seller_scout.services.catalog import ProductAddRequest, ProductCatalog


SAMPLE_PRODUCTS = [
    {
        "title": "Wireless Bluetooth Headphones with Mic",
        "category": "Electronics",
        "subcategory": "Audio",
        "brand": "SoundMax",
        "price": 1999.0,
        "mrp": 2499.0,
        "margin": 0.25,
        "rating": 4.5,
        "review_count": 1200,
        "bsr": 800,
        "estimated_monthly_sales": 500,
        "available_stock": 300,
        "seller_type": SellerType.FBA,
        "weight_kg": 0.35,
    },
    {
        "title": "Stainless Steel Insulated Water Bottle 1L",
        "category": "Home & Kitchen",
        "subcategory": "Drinkware",
        "brand": "Generic",
        "price": 499.0,
        "mrp": 799.0,
        "margin": 0.32,
        "rating": 4.7,
        "review_count": 150,
        "bsr": 1500,
        "estimated_monthly_sales": 800,
        "available_stock": 450,
        "seller_type": SellerType.EASY_SHIP,
        "weight_kg": 0.45,
    },
    {
        "title": "Anti-Slip Yoga Mat 6mm",
        "category": "Sports",
        "subcategory": "Yoga",
        "brand": "FitCore",
        "price": 899.0,
        "mrp": 1299.0,
        "margin": 0.28,
        "rating": 4.6,
        "review_count": 1100,
        "bsr": 1000,
        "estimated_monthly_sales": 650,
        "available_stock": 200,
        "seller_type": SellerType.FBA,
        "weight_kg": 1.2,
    },
    {
        "title": "Cotton Kitchen Towels (Pack of 6)",
        "category": "Home & Kitchen",
        "subcategory": "Kitchen Linen",
        "brand": "Unbranded",
        "price": 349.0,
        "mrp": 599.0,
        "margin": 0.18,
        "rating": 4.1,
        "review_count": 90,
        "bsr": 12000,
        "estimated_monthly_sales": 120,
        "available_stock": 80,
        "seller_type": SellerType.SELLER_FULFILLED,
        "weight_kg": 0.4,
    },
]

SAMPLE_TRENDS = {
    "Stainless Steel Insulated Water Bottle 1L": ProductTrend(
        rising_star=True,
        review_growth_spike=True,
        seasonal_demand_pattern=True,
    ),
}


async def seed_products() -> None:
    async with async_session_maker() as session:
        catalog = ProductCatalog(session)
        for product_data in SAMPLE_PRODUCTS:
            # Check if product already exists
            result = await session.execute(
                select(ProductRecord).where(ProductRecord.title == product_data["title"])
            )
            existing = result.scalar_one_or_none()

            if existing:
                print(f"Product '{product_data['title']}' already exists, skipping...")
                continue

            product_id = await catalog.add_product(ProductAddRequest(**product_data))
            print(f"Created product: {product_data['title']} ({product_id})")

            trend = SAMPLE_TRENDS.get(product_data["title"])
            if trend is not None:
                await catalog.save_trend(product_id, trend)

        await session.commit()
        print("\nSeeding complete!")


if __name__ == "__main__":
    asyncio.run(seed_products())
