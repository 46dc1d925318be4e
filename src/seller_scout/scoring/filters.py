"""Filter predicates for product search.

A FilterSpecification holds hard range/threshold filters plus boolean
preference flags. Every active predicate must hold for a product to match.
The same predicate semantics apply whether filtering runs locally or is
delegated to a remote catalog backend.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from seller_scout.scoring.models import Product, ProductTrend


# Brand values that count as "no brand"
UNBRANDED_SENTINELS: frozenset[str] = frozenset(
    {"", "generic", "no brand", "no-brand", "nobrand", "unbranded", "none"}
)


class FilterSpecification(BaseModel):
    """Validated product filters. Absent fields impose no constraint."""

    model_config = ConfigDict(frozen=True)

    # Exact match
    category: Optional[str] = None
    subcategory: Optional[str] = None

    # Ranges (inclusive) and thresholds
    price_range: Optional[tuple[float, float]] = None
    rating_threshold: Optional[float] = None
    review_count_max: Optional[int] = None
    bsr_range: Optional[tuple[int, int]] = None
    monthly_revenue_range: Optional[tuple[float, float]] = None

    # Preference flags
    lightweight_preference: bool = False
    non_branded_friendly: bool = False
    low_fba_count: bool = False
    high_review_growth: bool = False
    high_margin_threshold: bool = False

    @model_validator(mode="after")
    def check_ranges(self) -> "FilterSpecification":
        for name in ("price_range", "bsr_range", "monthly_revenue_range"):
            bounds = getattr(self, name)
            if bounds is not None and bounds[0] > bounds[1]:
                raise ValueError(f"{name} min {bounds[0]} is greater than max {bounds[1]}")
        return self


class FilterConfig(BaseModel):
    """Fixed thresholds behind the preference flags."""

    lightweight_max_kg: float = Field(1.0, description="Lightweight if weight < this")
    lightweight_price_proxy: float = Field(
        500.0, description="Lightweight if price <= this when weight is unknown"
    )
    low_competition_review_limit: int = Field(
        200, description="Low competition if review count < this"
    )
    high_growth_sales_ratio: float = Field(
        0.5, description="High growth if monthly sales >= this × review count"
    )
    high_margin_cutoff: float = Field(0.30, description="High margin if margin >= this")


@dataclass
class FilterResult:
    """Result of applying a filter specification to a product."""

    passed: bool
    reasons: list[str] = field(default_factory=list)

    def add_rejection(self, reason: str) -> None:
        """Add a rejection reason."""
        self.passed = False
        self.reasons.append(reason)


def is_unbranded(brand: str) -> bool:
    """Check whether a brand value means the product is unbranded."""
    return brand.strip().lower() in UNBRANDED_SENTINELS


def is_lightweight(product: Product, config: FilterConfig | None = None) -> bool:
    """Check the lightweight preference, using price as a proxy when weight is unknown."""
    if config is None:
        config = FilterConfig()

    if product.weight_kg is not None:
        return product.weight_kg < config.lightweight_max_kg
    return product.price <= config.lightweight_price_proxy


def has_high_review_growth(
    product: Product,
    trend: ProductTrend | None = None,
    config: FilterConfig | None = None,
) -> bool:
    """Check the high review growth preference.

    Uses the recorded trend when available; otherwise compares monthly sales
    to the existing review count.
    """
    if config is None:
        config = FilterConfig()

    if trend is not None:
        return trend.review_growth_spike
    return product.estimated_monthly_sales >= (
        config.high_growth_sales_ratio * max(product.review_count, 1)
    )


def evaluate_filters(
    product: Product,
    spec: FilterSpecification,
    trend: ProductTrend | None = None,
    config: FilterConfig | None = None,
) -> FilterResult:
    """Apply every active filter in a specification to a product.

    Args:
        product: Product to evaluate
        spec: Filter specification
        trend: Recorded trend signals for the product, if any
        config: Flag thresholds (uses defaults if None)

    Returns:
        FilterResult with pass/fail and one reason per failed predicate
    """
    if config is None:
        config = FilterConfig()

    result = FilterResult(passed=True)

    # --- Exact Match Filters ---

    if spec.category is not None and product.category != spec.category:
        result.add_rejection(f"Category {product.category!r} != {spec.category!r}")

    if spec.subcategory is not None and product.subcategory != spec.subcategory:
        result.add_rejection(f"Subcategory {product.subcategory!r} != {spec.subcategory!r}")

    # --- Range Filters ---

    if spec.price_range is not None:
        low, high = spec.price_range
        if not low <= product.price <= high:
            result.add_rejection(f"Price ₹{product.price:.2f} outside ₹{low:.2f}-₹{high:.2f}")

    if spec.bsr_range is not None:
        low, high = spec.bsr_range
        if not low <= product.bsr <= high:
            result.add_rejection(f"BSR {product.bsr} outside {low}-{high}")

    if spec.monthly_revenue_range is not None:
        low, high = spec.monthly_revenue_range
        revenue = product.monthly_revenue
        if not low <= revenue <= high:
            result.add_rejection(
                f"Monthly revenue ₹{revenue:.2f} outside ₹{low:.2f}-₹{high:.2f}"
            )

    if spec.review_count_max is not None and product.review_count > spec.review_count_max:
        result.add_rejection(
            f"Review count {product.review_count} > maximum {spec.review_count_max}"
        )

    if spec.rating_threshold is not None and product.rating < spec.rating_threshold:
        result.add_rejection(f"Rating {product.rating} < minimum {spec.rating_threshold}")

    # --- Preference Flags ---

    if spec.lightweight_preference and not is_lightweight(product, config):
        result.add_rejection("Not lightweight")

    if spec.non_branded_friendly and not is_unbranded(product.brand):
        result.add_rejection(f"Branded product ({product.brand})")

    if (
        spec.low_fba_count
        and product.review_count >= config.low_competition_review_limit
    ):
        result.add_rejection(
            f"Review count {product.review_count} >= low competition limit "
            f"{config.low_competition_review_limit}"
        )

    if spec.high_review_growth and not has_high_review_growth(product, trend, config):
        result.add_rejection("No high review growth signal")

    if spec.high_margin_threshold and product.margin < config.high_margin_cutoff:
        result.add_rejection(
            f"Margin {product.margin:.1%} < high margin cutoff {config.high_margin_cutoff:.1%}"
        )

    return result


def matches(
    product: Product,
    spec: FilterSpecification,
    trend: ProductTrend | None = None,
    config: FilterConfig | None = None,
) -> bool:
    """Return True if the product satisfies every active filter."""
    return evaluate_filters(product, spec, trend, config).passed


def filter_products(
    products: Iterable[Product],
    spec: FilterSpecification,
    trends: Mapping[str, ProductTrend] | None = None,
    config: FilterConfig | None = None,
) -> list[Product]:
    """Keep products matching the specification, preserving input order.

    Args:
        products: Products to filter
        spec: Filter specification
        trends: Recorded trends keyed by product id
        config: Flag thresholds (uses defaults if None)

    Returns:
        Matching products in their original order
    """
    if trends is None:
        trends = {}

    return [
        product
        for product in products
        if matches(product, spec, trends.get(product.id), config)
    ]
