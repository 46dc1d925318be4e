"""Tests for competing seller analysis."""

import pytest
from pydantic import ValidationError

from seller_scout.scoring.models import Product
from seller_scout.scoring.sellers import (
    SellerAnalysisRequest,
    analyze_sellers,
    clean_weaknesses,
)


class TestSellerAnalysisRequest:
    def test_all_fields_optional(self) -> None:
        request = SellerAnalysisRequest()
        assert request.average_price is None
        assert request.weakness_detection == []

    @pytest.mark.parametrize(
        "field,value",
        [
            ("average_rating", 5.5),
            ("listing_quality_score", 101),
            ("average_reviews", -1),
            ("average_price", float("nan")),
            ("listing_quality_score", float("inf")),
        ],
    )
    def test_out_of_range_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            SellerAnalysisRequest(**{field: value})


class TestCleanWeaknesses:
    def test_strips_and_deduplicates(self) -> None:
        weaknesses = [" Poor images", "Low review count", "", "Poor images ", "  "]
        assert clean_weaknesses(weaknesses) == ["Poor images", "Low review count"]


class TestAnalyzeSellers:
    def test_compares_with_product(self, water_bottle: Product) -> None:
        analysis = analyze_sellers(
            water_bottle,
            SellerAnalysisRequest(
                average_price=400.0,
                average_reviews=650,
                average_rating=4.2,
                weakness_detection=["Poor images"],
                listing_quality_score=82.0,
            ),
        )

        assert analysis.product_id == "prod-001"
        assert analysis.price_vs_average == pytest.approx(0.2475)
        assert analysis.rating_gap == pytest.approx(0.5)
        assert analysis.high_listing_quality is True
        assert analysis.weakness_detection == ["Poor images"]

    @pytest.mark.parametrize("score,expected", [(70.0, False), (70.01, True), (0.0, False)])
    def test_listing_quality_threshold(
        self, water_bottle: Product, score: float, expected: bool
    ) -> None:
        analysis = analyze_sellers(water_bottle, SellerAnalysisRequest(listing_quality_score=score))
        assert analysis.high_listing_quality is expected

    def test_missing_metrics_leave_comparisons_empty(self, water_bottle: Product) -> None:
        analysis = analyze_sellers(water_bottle, SellerAnalysisRequest(average_price=0.0))

        assert analysis.price_vs_average is None
        assert analysis.rating_gap is None
        assert analysis.high_listing_quality is None
