"""Per-unit profitability calculations for Amazon India listings.

Formulas:
    Referral Fee     = Selling Price × 15%
    Fulfillment Fee  = 35 (≤ 0.5kg), 45 (≤ 1kg), 55 + 10 × (weight - 1) (> 1kg)
    GST              = Selling Price × 18%
    Shipping         = Weight × 20
    Packaging        = 15
    Net Profit       = Selling Price - (Cost + all fees + Ads Budget)
    ROI              = Net Profit / Cost Price × 100
    Break-even ACOS  = max(0, (Selling Price - Cost - fees) / Selling Price × 100)
"""

import math

from pydantic import BaseModel, Field


class ProfitCalculationError(ValueError):
    """Raised when profit inputs violate the calculator's preconditions."""


class FeeSchedule(BaseModel):
    """Fee assumptions used by the profit calculator (INR)."""

    referral_fee_rate: float = Field(0.15, description="Referral fee (flat 15% average)")
    gst_rate: float = Field(0.18, description="GST on selling price")

    # Fulfillment fee tiers by weight (kg)
    light_weight_limit: float = Field(0.5, description="Upper bound of the lightest tier")
    light_fee: float = Field(35.0, description="Fee for items up to 0.5kg")
    standard_weight_limit: float = Field(1.0, description="Upper bound of the standard tier")
    standard_fee: float = Field(45.0, description="Fee for items up to 1kg")
    heavy_base_fee: float = Field(55.0, description="Base fee for items over 1kg")
    heavy_fee_per_kg: float = Field(10.0, description="Additional fee per kg over 1kg")

    shipping_rate_per_kg: float = Field(20.0, description="Estimated shipping per kg")
    packaging_cost: float = Field(15.0, description="Flat packaging cost per unit")


class ProfitInput(BaseModel):
    """Manually entered unit economics."""

    selling_price: float = Field(..., description="Selling price per unit (INR)")
    cost_price: float = Field(..., description="Landed cost per unit (INR)")
    weight: float = Field(..., description="Shipping weight (kg)")
    ads_budget: float = Field(0.0, description="Ad spend per unit (INR)")


class ProfitBreakdown(BaseModel):
    """Result of a profit calculation."""

    # Inputs
    selling_price: float
    cost_price: float
    weight: float
    ads_budget: float

    # Fees
    referral_fee: float
    fulfillment_fee: float
    tax: float
    shipping_cost: float
    packaging_cost: float

    # Results
    total_costs: float = Field(..., description="Cost price + all fees + ads budget")
    net_profit_per_unit: float = Field(..., description="May be negative (loss)")
    roi_percentage: float = Field(..., description="May be negative (loss)")
    break_even_acos: float = Field(..., ge=0, description="Max ad spend % of sales at zero profit")


def _validate(profit_input: ProfitInput) -> None:
    values = {
        "selling_price": profit_input.selling_price,
        "cost_price": profit_input.cost_price,
        "weight": profit_input.weight,
        "ads_budget": profit_input.ads_budget,
    }
    for name, value in values.items():
        if not math.isfinite(value):
            raise ProfitCalculationError(f"{name} must be a finite number, got {value}")

    if profit_input.cost_price <= 0:
        raise ProfitCalculationError(
            f"cost_price must be greater than 0 to compute ROI, got {profit_input.cost_price}"
        )
    if profit_input.selling_price <= 0:
        raise ProfitCalculationError(
            f"selling_price must be greater than 0, got {profit_input.selling_price}"
        )
    if profit_input.weight < 0:
        raise ProfitCalculationError(f"weight cannot be negative, got {profit_input.weight}")
    if profit_input.ads_budget < 0:
        raise ProfitCalculationError(
            f"ads_budget cannot be negative, got {profit_input.ads_budget}"
        )


def calculate_fulfillment_fee(weight: float, fees: FeeSchedule | None = None) -> float:
    """Calculate the staged fulfillment fee for a shipping weight.

    Args:
        weight: Shipping weight in kg
        fees: Fee schedule (uses defaults if None)

    Returns:
        Fulfillment fee in INR
    """
    if fees is None:
        fees = FeeSchedule()

    if weight <= fees.light_weight_limit:
        return fees.light_fee
    if weight <= fees.standard_weight_limit:
        return fees.standard_fee
    return fees.heavy_base_fee + (weight - fees.standard_weight_limit) * fees.heavy_fee_per_kg


def calculate_profit(
    profit_input: ProfitInput,
    fees: FeeSchedule | None = None,
) -> ProfitBreakdown:
    """Calculate the per-unit profit breakdown.

    Args:
        profit_input: Selling price, cost, weight and ad spend per unit
        fees: Fee schedule (uses defaults if None)

    Returns:
        ProfitBreakdown with every fee and the resulting profit metrics

    Raises:
        ProfitCalculationError: If cost_price or selling_price <= 0, weight or
            ads_budget is negative, or any input is not finite.
    """
    if fees is None:
        fees = FeeSchedule()

    _validate(profit_input)

    selling_price = profit_input.selling_price
    cost_price = profit_input.cost_price

    referral_fee = selling_price * fees.referral_fee_rate
    fulfillment_fee = calculate_fulfillment_fee(profit_input.weight, fees)
    tax = selling_price * fees.gst_rate
    shipping_cost = profit_input.weight * fees.shipping_rate_per_kg
    packaging_cost = fees.packaging_cost

    fees_before_ads = referral_fee + fulfillment_fee + tax + shipping_cost + packaging_cost
    total_costs = cost_price + fees_before_ads + profit_input.ads_budget

    net_profit_per_unit = selling_price - total_costs
    roi_percentage = net_profit_per_unit / cost_price * 100
    break_even_acos = (selling_price - cost_price - fees_before_ads) / selling_price * 100

    return ProfitBreakdown(
        selling_price=selling_price,
        cost_price=cost_price,
        weight=profit_input.weight,
        ads_budget=profit_input.ads_budget,
        referral_fee=referral_fee,
        fulfillment_fee=fulfillment_fee,
        tax=tax,
        shipping_cost=shipping_cost,
        packaging_cost=packaging_cost,
        total_costs=total_costs,
        net_profit_per_unit=net_profit_per_unit,
        roi_percentage=roi_percentage,
        break_even_acos=max(0.0, break_even_acos),
    )
