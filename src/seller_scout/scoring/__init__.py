"""Opportunity scoring and filtering module."""

from seller_scout.scoring.calculator import (
    FeeSchedule,
    ProfitBreakdown,
    ProfitCalculationError,
    ProfitInput,
    calculate_fulfillment_fee,
    calculate_profit,
)
from seller_scout.scoring.filters import (
    FilterConfig,
    FilterResult,
    FilterSpecification,
    evaluate_filters,
    filter_products,
    matches,
)
from seller_scout.scoring.models import (
    OpportunityScore,
    OpportunityScoreFilters,
    Product,
    ProductTrend,
    Recommendation,
    ScoringConfig,
    SellerType,
)
from seller_scout.scoring.normalizer import (
    RawFilterInput,
    dump_filter_state,
    has_active_filters,
    load_filter_state,
    normalize,
    serialize,
)
from seller_scout.scoring.scorer import (
    SortKey,
    filter_by_min_score,
    opportunity_level,
    rank_products,
    recommendation_for,
    score_product,
    score_products,
)

__all__ = [
    # Models
    "OpportunityScore",
    "OpportunityScoreFilters",
    "Product",
    "ProductTrend",
    "Recommendation",
    "ScoringConfig",
    "SellerType",
    # Calculator
    "FeeSchedule",
    "ProfitBreakdown",
    "ProfitCalculationError",
    "ProfitInput",
    "calculate_fulfillment_fee",
    "calculate_profit",
    # Filters
    "FilterConfig",
    "FilterResult",
    "FilterSpecification",
    "evaluate_filters",
    "filter_products",
    "matches",
    # Normalizer
    "RawFilterInput",
    "dump_filter_state",
    "has_active_filters",
    "load_filter_state",
    "normalize",
    "serialize",
    # Scorer
    "SortKey",
    "filter_by_min_score",
    "opportunity_level",
    "rank_products",
    "recommendation_for",
    "score_product",
    "score_products",
]
