"""Conversion between raw filter form input and FilterSpecification.

Invalid input never raises: malformed numbers, negative values and inverted
ranges make the corresponding field absent, which widens the filter instead
of failing the whole query.
"""

import json
import logging
import math
from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from pydantic import BaseModel, ValidationError

from seller_scout.scoring.filters import FilterSpecification

logger = logging.getLogger(__name__)

MAX_RATING = 5.0

# Integers with more digits than this are treated as malformed
MAX_INT_DIGITS = 100


class RawFilterInput(BaseModel):
    """Filter form values as entered by the user."""

    category: str = ""
    subcategory: str = ""
    price_min: str = ""
    price_max: str = ""
    rating_threshold: str = ""
    review_count_max: str = ""
    bsr_min: str = ""
    bsr_max: str = ""
    monthly_revenue_min: str = ""
    monthly_revenue_max: str = ""
    lightweight_preference: bool = False
    non_branded_friendly: bool = False
    low_fba_count: bool = False
    high_review_growth: bool = False
    high_margin_threshold: bool = False


def parse_float(text: str) -> float | None:
    """Parse a non-negative finite number, or None if empty/invalid."""
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_int(text: str) -> int | None:
    """Parse a non-negative integer exactly, flooring fractions; None if empty/invalid."""
    text = text.strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    if value.adjusted() >= MAX_INT_DIGITS:
        return None
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def _text(value: str) -> str | None:
    value = value.strip()
    return value or None


def _range(low, high):
    if low is None or high is None or low > high:
        return None
    return (low, high)


def normalize(raw: RawFilterInput) -> FilterSpecification:
    """Build a validated FilterSpecification from raw form input.

    A two-sided range is kept only when both bounds parse and min <= max;
    otherwise the whole range is dropped (never made one-sided).
    """
    rating = parse_float(raw.rating_threshold)
    if rating is not None and rating > MAX_RATING:
        rating = None

    return FilterSpecification(
        category=_text(raw.category),
        subcategory=_text(raw.subcategory),
        price_range=_range(parse_float(raw.price_min), parse_float(raw.price_max)),
        rating_threshold=rating,
        review_count_max=parse_int(raw.review_count_max),
        bsr_range=_range(parse_int(raw.bsr_min), parse_int(raw.bsr_max)),
        monthly_revenue_range=_range(
            parse_float(raw.monthly_revenue_min),
            parse_float(raw.monthly_revenue_max),
        ),
        lightweight_preference=raw.lightweight_preference,
        non_branded_friendly=raw.non_branded_friendly,
        low_fba_count=raw.low_fba_count,
        high_review_growth=raw.high_review_growth,
        high_margin_threshold=raw.high_margin_threshold,
    )


def _format(value) -> str:
    # repr() is the shortest string that parses back to the same float
    return "" if value is None else repr(value)


def serialize(spec: FilterSpecification) -> RawFilterInput:
    """Convert a specification back to its textual form input."""
    price = spec.price_range or (None, None)
    bsr = spec.bsr_range or (None, None)
    revenue = spec.monthly_revenue_range or (None, None)

    return RawFilterInput(
        category=spec.category or "",
        subcategory=spec.subcategory or "",
        price_min=_format(price[0]),
        price_max=_format(price[1]),
        rating_threshold=_format(spec.rating_threshold),
        review_count_max=_format(spec.review_count_max),
        bsr_min=_format(bsr[0]),
        bsr_max=_format(bsr[1]),
        monthly_revenue_min=_format(revenue[0]),
        monthly_revenue_max=_format(revenue[1]),
        lightweight_preference=spec.lightweight_preference,
        non_branded_friendly=spec.non_branded_friendly,
        low_fba_count=spec.low_fba_count,
        high_review_growth=spec.high_review_growth,
        high_margin_threshold=spec.high_margin_threshold,
    )


def has_active_filters(spec: FilterSpecification) -> bool:
    """True if any filter field is present or any preference flag is set."""
    return any(
        value is not None and value is not False
        for value in spec.model_dump().values()
    )


def dump_filter_state(spec: FilterSpecification) -> str:
    """Serialize a specification for session storage.

    Integer fields are written as decimal strings so review counts and BSR
    values reload without precision loss.
    """
    return serialize(spec).model_dump_json()


def load_filter_state(payload: str | None) -> FilterSpecification:
    """Load a specification from session storage; corrupt payloads load as empty."""
    if not payload:
        return FilterSpecification()
    try:
        raw = RawFilterInput.model_validate_json(payload)
    except (ValidationError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to parse stored filters, using defaults: {e}")
        return FilterSpecification()
    return normalize(raw)
