"""Opportunity scoring for catalog products.

Sub-scores (each 0-100):
| Factor      | Inputs                        | Shape                       |
|-------------|-------------------------------|-----------------------------|
| Demand      | Estimated monthly sales       | Log curve, saturates        |
| Competition | Review count, BSR             | Inverse log, blended        |
| Margin      | Margin fraction               | Linear 0 -> 30%, then flat  |
| Growth      | Trend signals                 | Baseline 50 + bonuses       |

Composite = weighted sum of sub-scores (weights from ScoringConfig).

Recommendation: composite >= 70 "recommended", < 40 "avoid", otherwise "moderate".
"""

import logging
import math
from collections.abc import Iterable, Mapping
from enum import Enum

from seller_scout.scoring.models import (
    OpportunityScore,
    OpportunityScoreFilters,
    Product,
    ProductTrend,
    Recommendation,
    ScoringConfig,
)

logger = logging.getLogger(__name__)

RECOMMENDED_THRESHOLD = 70.0
AVOID_THRESHOLD = 40.0

HIGH_MARGIN_BAND = 0.30
MEDIUM_MARGIN_BAND = 0.20


class SortKey(str, Enum):
    """Orderings offered by the product sort controls."""

    SCORE = "score"
    REVENUE = "revenue"
    COMPETITION = "competition"
    GROWTH = "growth"


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def calculate_demand_score(product: Product, config: ScoringConfig | None = None) -> float:
    """Score demand from estimated monthly sales on a saturating log curve."""
    if config is None:
        config = ScoringConfig()

    sales = product.estimated_monthly_sales
    score = 100 * math.log10(1 + sales) / math.log10(1 + config.demand_saturation_sales)
    return _clamp(score)


def calculate_competition_score(
    product: Product,
    config: ScoringConfig | None = None,
) -> float:
    """Score competition: fewer reviews and a better (lower) BSR score higher."""
    if config is None:
        config = ScoringConfig()

    review_part = _clamp(
        100 * (1 - math.log10(1 + product.review_count) / math.log10(1 + config.review_ceiling))
    )
    bsr_part = _clamp(100 * (1 - math.log10(product.bsr) / math.log10(config.bsr_ceiling)))

    weight = config.competition_review_weight
    return _clamp(weight * review_part + (1 - weight) * bsr_part)


def calculate_margin_score(product: Product, config: ScoringConfig | None = None) -> float:
    """Score margin linearly from 0 at 0% to 100 at the full-score margin."""
    if config is None:
        config = ScoringConfig()

    if product.margin <= 0:
        return 0.0
    if product.margin >= config.margin_full_score_at:
        return 100.0
    return _clamp(product.margin / config.margin_full_score_at * 100)


def calculate_growth_score(
    trend: ProductTrend | None,
    config: ScoringConfig | None = None,
) -> float:
    """Score growth from trend signals; no trend data gives the neutral baseline."""
    if config is None:
        config = ScoringConfig()

    score = config.growth_baseline
    if trend is None:
        return score

    if trend.rising_star:
        score += config.rising_star_bonus
    if trend.review_growth_spike:
        score += config.review_growth_spike_bonus
    if trend.seasonal_demand_pattern:
        score += config.seasonal_demand_bonus
    if trend.price_increase_trend:
        score += config.price_increase_bonus

    return _clamp(score)


def recommendation_for(composite: float) -> Recommendation:
    """Map a composite score to its recommendation label."""
    if composite >= RECOMMENDED_THRESHOLD:
        return Recommendation.RECOMMENDED
    if composite < AVOID_THRESHOLD:
        return Recommendation.AVOID
    return Recommendation.MODERATE


def opportunity_level(margin: float) -> str:
    """Margin band shown on product cards: High (>= 30%), Medium (>= 20%), else Low."""
    if margin >= HIGH_MARGIN_BAND:
        return "High"
    if margin >= MEDIUM_MARGIN_BAND:
        return "Medium"
    return "Low"


def score_product(
    product: Product,
    trend: ProductTrend | None = None,
    config: ScoringConfig | None = None,
) -> OpportunityScore:
    """Calculate the opportunity score for a product.

    This is the main entry point for scoring. It is deterministic and has
    no side effects.

    Args:
        product: Product to score
        trend: Recorded trend signals, if any
        config: Scoring configuration

    Returns:
        OpportunityScore with sub-scores, composite and recommendation
    """
    if config is None:
        config = ScoringConfig()

    demand = calculate_demand_score(product, config)
    competition = calculate_competition_score(product, config)
    margin = calculate_margin_score(product, config)
    growth = calculate_growth_score(trend, config)

    composite = _clamp(
        demand * config.demand_weight
        + competition * config.competition_weight
        + margin * config.margin_weight
        + growth * config.growth_weight
    )
    composite = round(composite, 2)

    return OpportunityScore(
        product_id=product.id,
        demand_score=round(demand, 2),
        competition_score=round(competition, 2),
        margin_score=round(margin, 2),
        growth_score=round(growth, 2),
        score=composite,
        recommendation=recommendation_for(composite),
    )


def score_products(
    products: Iterable[Product],
    trends: Mapping[str, ProductTrend] | None = None,
    config: ScoringConfig | None = None,
) -> list[tuple[Product, OpportunityScore]]:
    """Score many products, skipping (and logging) any that fail to score."""
    if trends is None:
        trends = {}

    scored: list[tuple[Product, OpportunityScore]] = []
    for product in products:
        try:
            scored.append((product, score_product(product, trends.get(product.id), config)))
        except (ValueError, ArithmeticError) as e:
            logger.warning(f"Failed to score product {product.id}: {e}")
    return scored


def filter_by_min_score(
    products: Iterable[Product],
    filters: OpportunityScoreFilters,
    trends: Mapping[str, ProductTrend] | None = None,
    config: ScoringConfig | None = None,
) -> list[Product]:
    """Keep products whose composite score is at least filters.min_score.

    Optionally narrowed to filters.category. Input order is preserved.
    """
    candidates = (
        product
        for product in products
        if filters.category is None or product.category == filters.category
    )
    return [
        product
        for product, score in score_products(candidates, trends, config)
        if score.score >= filters.min_score
    ]


def rank_products(
    products: Iterable[Product],
    sort_by: SortKey = SortKey.SCORE,
    trends: Mapping[str, ProductTrend] | None = None,
    config: ScoringConfig | None = None,
    limit: int | None = None,
) -> list[tuple[Product, OpportunityScore]]:
    """Rank products for the opportunity leaderboard, best first.

    Args:
        products: Products to rank
        sort_by: Ordering (score, revenue, competition or growth)
        trends: Recorded trends keyed by product id
        config: Scoring configuration
        limit: Maximum number of entries to return

    Returns:
        (product, score) pairs sorted descending; ties keep input order
    """
    sort_by = SortKey(sort_by)
    scored = score_products(products, trends, config)

    def sort_value(item: tuple[Product, OpportunityScore]) -> float:
        product, score = item
        if sort_by is SortKey.REVENUE:
            return product.monthly_revenue
        if sort_by is SortKey.COMPETITION:
            return score.competition_score
        if sort_by is SortKey.GROWTH:
            return score.growth_score
        return score.score

    ranked = sorted(scored, key=sort_value, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
