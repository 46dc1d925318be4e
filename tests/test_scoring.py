"""Tests for opportunity scoring."""

import logging

import pytest
from pydantic import ValidationError

from seller_scout.scoring.models import (
    OpportunityScoreFilters,
    Product,
    ProductTrend,
    Recommendation,
    ScoringConfig,
)
from seller_scout.scoring.scorer import (
    SortKey,
    calculate_competition_score,
    calculate_demand_score,
    calculate_growth_score,
    calculate_margin_score,
    filter_by_min_score,
    opportunity_level,
    rank_products,
    recommendation_for,
    score_product,
    score_products,
)

ALL_SIGNALS = ProductTrend(
    rising_star=True,
    review_growth_spike=True,
    price_increase_trend=True,
    seasonal_demand_pattern=True,
)


class TestScoringConfig:
    """Tests for scoring configuration validation."""

    def test_default_weights_are_equal(self) -> None:
        config = ScoringConfig()
        assert config.demand_weight == config.competition_weight == 0.25
        assert config.margin_weight == config.growth_weight == 0.25

    def test_weights_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringConfig(demand_weight=0.5)

    def test_custom_weights_accepted(self) -> None:
        config = ScoringConfig(
            demand_weight=0.4, competition_weight=0.3, margin_weight=0.2, growth_weight=0.1
        )
        assert config.demand_weight == 0.4


class TestProductValidation:
    """Tests for the product model's numeric guards."""

    @pytest.mark.parametrize("field", ["margin", "price", "rating", "weight_kg"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_values_rejected(
        self, water_bottle: Product, field: str, value: float
    ) -> None:
        data = water_bottle.model_dump() | {field: value}
        with pytest.raises(ValidationError):
            Product(**data)

    def test_nan_margin_never_reaches_scoring(self, water_bottle: Product) -> None:
        """A NaN margin would otherwise score 100 and pass the high-margin flag."""
        data = water_bottle.model_dump() | {"margin": float("nan")}
        with pytest.raises(ValidationError, match="margin"):
            Product(**data)


class TestSubScores:
    """Tests for the individual sub-score functions."""

    def test_demand_saturates(self, water_bottle: Product) -> None:
        assert calculate_demand_score(
            water_bottle.model_copy(update={"estimated_monthly_sales": 0})
        ) == 0.0
        assert calculate_demand_score(
            water_bottle.model_copy(update={"estimated_monthly_sales": 1000})
        ) == pytest.approx(100.0)
        assert calculate_demand_score(
            water_bottle.model_copy(update={"estimated_monthly_sales": 50000})
        ) == 100.0

    def test_demand_is_monotonic(self, water_bottle: Product) -> None:
        scores = [
            calculate_demand_score(
                water_bottle.model_copy(update={"estimated_monthly_sales": sales})
            )
            for sales in (10, 100, 500, 900)
        ]
        assert scores == sorted(scores)

    def test_competition_extremes(self, water_bottle: Product) -> None:
        open_market = water_bottle.model_copy(update={"review_count": 0, "bsr": 1})
        crowded = water_bottle.model_copy(update={"review_count": 10000, "bsr": 100000})
        assert calculate_competition_score(open_market) == pytest.approx(100.0)
        assert calculate_competition_score(crowded) == pytest.approx(0.0)

    def test_fewer_reviews_means_less_competition(
        self, water_bottle: Product, headphones: Product
    ) -> None:
        assert calculate_competition_score(water_bottle) > calculate_competition_score(
            headphones
        )

    @pytest.mark.parametrize(
        "margin,expected",
        [(-0.1, 0.0), (0.0, 0.0), (0.15, 50.0), (0.30, 100.0), (0.45, 100.0)],
    )
    def test_margin_score(self, water_bottle: Product, margin: float, expected: float) -> None:
        product = water_bottle.model_copy(update={"margin": margin})
        assert calculate_margin_score(product) == pytest.approx(expected)

    def test_margin_score_is_monotonic(self, water_bottle: Product) -> None:
        margins = [-0.5, 0.0, 0.05, 0.19, 0.2, 0.29, 0.3, 0.8]
        scores = [
            calculate_margin_score(water_bottle.model_copy(update={"margin": m}))
            for m in margins
        ]
        assert scores == sorted(scores)

    def test_growth_without_trend_is_baseline(self) -> None:
        assert calculate_growth_score(None) == 50.0
        assert calculate_growth_score(ProductTrend()) == 50.0

    def test_growth_bonuses(self) -> None:
        assert calculate_growth_score(ProductTrend(rising_star=True)) == 70.0
        assert calculate_growth_score(ProductTrend(review_growth_spike=True)) == 65.0
        assert calculate_growth_score(ProductTrend(seasonal_demand_pattern=True)) == 60.0
        assert calculate_growth_score(ProductTrend(price_increase_trend=True)) == 55.0
        assert calculate_growth_score(ALL_SIGNALS) == 100.0

    def test_growth_is_capped(self) -> None:
        config = ScoringConfig(rising_star_bonus=90.0)
        assert calculate_growth_score(ALL_SIGNALS, config) == 100.0


class TestRecommendation:
    """Tests for recommendation bands."""

    @pytest.mark.parametrize(
        "composite,expected",
        [
            (100.0, Recommendation.RECOMMENDED),
            (70.0, Recommendation.RECOMMENDED),
            (69.99, Recommendation.MODERATE),
            (40.0, Recommendation.MODERATE),
            (39.99, Recommendation.AVOID),
            (0.0, Recommendation.AVOID),
        ],
    )
    def test_bands(self, composite: float, expected: Recommendation) -> None:
        assert recommendation_for(composite) is expected

    @pytest.mark.parametrize(
        "margin,expected",
        [(0.35, "High"), (0.30, "High"), (0.25, "Medium"), (0.20, "Medium"), (0.1, "Low")],
    )
    def test_opportunity_level(self, margin: float, expected: str) -> None:
        assert opportunity_level(margin) == expected


class TestScoreProduct:
    """Tests for the composite score."""

    def test_perfect_product(self, water_bottle: Product) -> None:
        product = water_bottle.model_copy(
            update={"estimated_monthly_sales": 1000, "review_count": 0, "bsr": 1, "margin": 0.3}
        )
        result = score_product(product, ALL_SIGNALS)

        assert result.product_id == "prod-001"
        assert result.score == pytest.approx(100.0)
        assert result.recommendation is Recommendation.RECOMMENDED

    def test_worst_product(self, water_bottle: Product) -> None:
        product = water_bottle.model_copy(
            update={
                "estimated_monthly_sales": 0,
                "review_count": 10000,
                "bsr": 100000,
                "margin": 0.0,
            }
        )
        result = score_product(product)

        assert result.demand_score == 0.0
        assert result.competition_score == 0.0
        assert result.margin_score == 0.0
        assert result.growth_score == 50.0
        assert result.score == pytest.approx(12.5)
        assert result.recommendation is Recommendation.AVOID

    def test_middle_of_the_road(self, water_bottle: Product) -> None:
        product = water_bottle.model_copy(
            update={
                "estimated_monthly_sales": 1000,
                "review_count": 10000,
                "bsr": 100000,
                "margin": 0.15,
            }
        )
        result = score_product(product)
        assert result.score == pytest.approx(50.0)
        assert result.recommendation is Recommendation.MODERATE

    def test_fixture_products(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        assert score_product(water_bottle).recommendation is Recommendation.RECOMMENDED
        assert score_product(headphones).recommendation is Recommendation.MODERATE
        assert score_product(yoga_mat).recommendation is Recommendation.MODERATE

    def test_scores_are_bounded(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        for product in (water_bottle, headphones, yoga_mat):
            result = score_product(product, ALL_SIGNALS)
            for value in (
                result.demand_score,
                result.competition_score,
                result.margin_score,
                result.growth_score,
                result.score,
            ):
                assert 0.0 <= value <= 100.0

    def test_deterministic(self, headphones: Product) -> None:
        assert score_product(headphones) == score_product(headphones)

    def test_weights_change_composite(self, water_bottle: Product) -> None:
        margin_only = ScoringConfig(
            demand_weight=0.0, competition_weight=0.0, margin_weight=1.0, growth_weight=0.0
        )
        assert score_product(water_bottle, config=margin_only).score == pytest.approx(100.0)


class TestBatchScoring:
    """Tests for scoring, filtering and ranking many products."""

    def test_unscorable_product_is_skipped(
        self,
        water_bottle: Product,
        headphones: Product,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        broken = headphones.model_copy(update={"id": "broken", "bsr": 0})

        with caplog.at_level(logging.WARNING):
            scored = score_products([broken, water_bottle])

        assert [product.id for product, _ in scored] == ["prod-001"]
        assert "broken" in caplog.text

    def test_filter_by_min_score(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        products = [yoga_mat, headphones, water_bottle]

        result = filter_by_min_score(products, OpportunityScoreFilters(min_score=60))
        assert [p.id for p in result] == ["prod-002", "prod-001"]

        result = filter_by_min_score(products, OpportunityScoreFilters(min_score=0))
        assert len(result) == 3

    def test_filter_by_min_score_and_category(
        self,
        water_bottle: Product,
        headphones: Product,
    ) -> None:
        filters = OpportunityScoreFilters(min_score=0, category="Electronics")
        result = filter_by_min_score([water_bottle, headphones], filters)
        assert [p.id for p in result] == ["prod-002"]

    def test_rank_by_score(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        ranked = rank_products([yoga_mat, headphones, water_bottle])
        assert [p.id for p, _ in ranked] == ["prod-001", "prod-002", "prod-003"]

    def test_rank_by_revenue(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        ranked = rank_products([yoga_mat, water_bottle, headphones], SortKey.REVENUE)
        assert [p.id for p, _ in ranked] == ["prod-002", "prod-001", "prod-003"]

    def test_rank_by_competition(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        ranked = rank_products([headphones, yoga_mat, water_bottle], "competition")
        assert [p.id for p, _ in ranked] == ["prod-001", "prod-003", "prod-002"]

    def test_rank_by_growth_uses_trends(
        self,
        water_bottle: Product,
        headphones: Product,
    ) -> None:
        trends = {"prod-002": ProductTrend(rising_star=True)}
        ranked = rank_products([water_bottle, headphones], SortKey.GROWTH, trends)
        assert [p.id for p, _ in ranked] == ["prod-002", "prod-001"]

    def test_ties_keep_input_order(self, water_bottle: Product, yoga_mat: Product) -> None:
        ranked = rank_products([yoga_mat, water_bottle], SortKey.GROWTH)
        assert [p.id for p, _ in ranked] == ["prod-003", "prod-001"]

    def test_limit(
        self,
        water_bottle: Product,
        headphones: Product,
        yoga_mat: Product,
    ) -> None:
        ranked = rank_products([water_bottle, headphones, yoga_mat], limit=2)
        assert len(ranked) == 2
