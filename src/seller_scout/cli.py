"""Command-line interface for the scoring and profit engine."""

import argparse
import json
import sys

from pydantic import ValidationError

from seller_scout.config import configure_logging
from seller_scout.scoring.calculator import ProfitCalculationError, ProfitInput, calculate_profit
from seller_scout.scoring.filters import evaluate_filters
from seller_scout.scoring.models import Product, ProductTrend, SellerType
from seller_scout.scoring.normalizer import RawFilterInput, normalize
from seller_scout.scoring.scorer import opportunity_level, score_product


def create_example_product() -> Product:
    """Create an example product for trying out the engine."""
    return Product(
        id="example-001",
        title="Stainless Steel Insulated Water Bottle 1L",
        category="Home & Kitchen",
        subcategory="Drinkware",
        brand="Generic",
        price=499.0,
        mrp=799.0,
        margin=0.32,
        rating=4.3,
        review_count=180,
        bsr=1500,
        estimated_monthly_sales=800,
        available_stock=450,
        seller_type=SellerType.EASY_SHIP,
        weight_kg=0.45,
    )


def _load_product(args: argparse.Namespace) -> Product:
    if args.json:
        return Product.model_validate_json(args.json)
    print("Using example product (use --json to provide your own)\n")
    return create_example_product()


def score_command(args: argparse.Namespace) -> int:
    """Score a product from JSON or use example."""
    product = _load_product(args)
    trend = ProductTrend.model_validate_json(args.trend) if args.trend else None

    result = score_product(product, trend)

    print(f"Product: {product.title}")
    print(f"{'=' * 50}")
    print(f"\nSub-scores:")
    print(f"  Demand:      {result.demand_score:6.2f}")
    print(f"  Competition: {result.competition_score:6.2f}")
    print(f"  Margin:      {result.margin_score:6.2f}  ({opportunity_level(product.margin)})")
    print(f"  Growth:      {result.growth_score:6.2f}")
    print(f"\n{'=' * 50}")
    print(f"Opportunity Score: {result.score:.2f}/100")
    print(f"Recommendation:    {result.recommendation.value}")
    return 0


def filter_command(args: argparse.Namespace) -> int:
    """Check a product against filter form input."""
    product = _load_product(args)
    raw = RawFilterInput.model_validate_json(args.filters) if args.filters else RawFilterInput()
    spec = normalize(raw)

    result = evaluate_filters(product, spec)

    print(f"Product: {product.title}")
    print(f"Filters: {spec.model_dump(exclude_defaults=True) or 'none'}")
    print(f"\nResult: {'MATCH' if result.passed else 'NO MATCH'}")
    for reason in result.reasons:
        print(f"  - {reason}")
    return 0 if result.passed else 2


def profit_command(args: argparse.Namespace) -> int:
    """Calculate unit profit."""
    try:
        result = calculate_profit(
            ProfitInput(
                selling_price=args.selling_price,
                cost_price=args.cost_price,
                weight=args.weight,
                ads_budget=args.ads_budget,
            )
        )
    except ProfitCalculationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Selling Price:     ₹{result.selling_price:.2f}")
    print(f"Cost Price:        ₹{result.cost_price:.2f}")
    print(f"{'-' * 40}")
    print(f"Referral Fee:      ₹{result.referral_fee:.2f}")
    print(f"Fulfillment Fee:   ₹{result.fulfillment_fee:.2f}")
    print(f"GST:               ₹{result.tax:.2f}")
    print(f"Shipping:          ₹{result.shipping_cost:.2f}")
    print(f"Packaging:         ₹{result.packaging_cost:.2f}")
    print(f"Ads Budget:        ₹{result.ads_budget:.2f}")
    print(f"{'-' * 40}")
    print(f"Total Costs:       ₹{result.total_costs:.2f}")
    print(f"Net Profit/Unit:   ₹{result.net_profit_per_unit:.2f}")
    print(f"ROI:               {result.roi_percentage:.1f}%")
    print(f"Break-even ACOS:   {result.break_even_acos:.1f}%")
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="seller-scout",
        description="Product opportunity scoring for Amazon India sellers",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Score command
    score_parser = subparsers.add_parser("score", help="Score a product")
    score_parser.add_argument("--json", type=str, help="Product data as JSON string")
    score_parser.add_argument("--trend", type=str, help="Trend signals as JSON string")

    # Filter command
    filter_parser = subparsers.add_parser("filter", help="Check a product against filters")
    filter_parser.add_argument("--json", type=str, help="Product data as JSON string")
    filter_parser.add_argument("--filters", type=str, help="Filter form input as JSON string")

    # Profit command
    profit_parser = subparsers.add_parser("profit", help="Calculate unit profit")
    profit_parser.add_argument("--selling-price", type=float, required=True)
    profit_parser.add_argument("--cost-price", type=float, required=True)
    profit_parser.add_argument("--weight", type=float, required=True, help="Weight in kg")
    profit_parser.add_argument("--ads-budget", type=float, default=0.0, help="Ad spend per unit")

    # Example command
    example_parser = subparsers.add_parser("example", help="Show example product JSON")
    example_parser.add_argument("--pretty", action="store_true", help="Pretty print JSON")

    args = parser.parse_args()
    configure_logging(args.log_level)

    try:
        if args.command == "score":
            return score_command(args)
        if args.command == "filter":
            return filter_command(args)
        if args.command == "profit":
            return profit_command(args)
    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    if args.command == "example":
        data = create_example_product().model_dump(mode="json", exclude={"last_modified"})
        print(json.dumps(data, indent=2 if args.pretty else None))
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
