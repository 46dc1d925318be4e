"""Tests for the profit calculator.

The main case is worked by hand:
    Selling price ₹1000, cost ₹500, weight 0.5kg, ads ₹50
    Referral 150 + Fulfillment 35 + GST 180 + Shipping 10 + Packaging 15
    Total costs = 500 + 390 + 50 = 940
    Net profit = 60, ROI = 12%, break-even ACOS = 110 / 1000 = 11%
"""

import math

import pytest

from seller_scout.scoring import (
    FeeSchedule,
    ProfitBreakdown,
    ProfitCalculationError,
    ProfitInput,
    calculate_fulfillment_fee,
    calculate_profit,
)


@pytest.fixture
def reference_input() -> ProfitInput:
    return ProfitInput(selling_price=1000, cost_price=500, weight=0.5, ads_budget=50)


class TestCalculateFulfillmentFee:
    """Tests for the staged fulfillment fee."""

    @pytest.mark.parametrize(
        "weight,expected",
        [
            (0.0, 35.0),
            (0.5, 35.0),
            (0.51, 45.0),
            (1.0, 45.0),
            (2.0, 65.0),
            (3.5, 80.0),
        ],
    )
    def test_weight_tiers(self, weight: float, expected: float) -> None:
        assert calculate_fulfillment_fee(weight) == pytest.approx(expected)

    def test_custom_schedule(self) -> None:
        fees = FeeSchedule(light_fee=30.0)
        assert calculate_fulfillment_fee(0.2, fees) == 30.0


class TestCalculateProfit:
    """Tests for the full profit breakdown."""

    def test_reference_case(self, reference_input: ProfitInput) -> None:
        result = calculate_profit(reference_input)

        assert isinstance(result, ProfitBreakdown)
        assert result.referral_fee == pytest.approx(150.0)
        assert result.fulfillment_fee == pytest.approx(35.0)
        assert result.tax == pytest.approx(180.0)
        assert result.shipping_cost == pytest.approx(10.0)
        assert result.packaging_cost == pytest.approx(15.0)
        assert result.total_costs == pytest.approx(940.0)
        assert result.net_profit_per_unit == pytest.approx(60.0)
        assert result.roi_percentage == pytest.approx(12.0)
        assert result.break_even_acos == pytest.approx(11.0)

    def test_inputs_echoed(self, reference_input: ProfitInput) -> None:
        result = calculate_profit(reference_input)
        assert result.selling_price == 1000
        assert result.cost_price == 500
        assert result.weight == 0.5
        assert result.ads_budget == 50

    def test_loss_is_negative_but_acos_floored(self) -> None:
        """A losing product has negative profit/ROI while break-even ACOS stays at 0.

        Fees: 45 + 35 + 54 + 4 + 15 = 153, total = 250 + 153 = 403
        """
        result = calculate_profit(
            ProfitInput(selling_price=300, cost_price=250, weight=0.2, ads_budget=0)
        )
        assert result.net_profit_per_unit == pytest.approx(-103.0)
        assert result.roi_percentage == pytest.approx(-41.2)
        assert result.break_even_acos == 0.0

    def test_heavy_item(self) -> None:
        result = calculate_profit(
            ProfitInput(selling_price=2000, cost_price=800, weight=2.0, ads_budget=100)
        )
        assert result.fulfillment_fee == pytest.approx(65.0)
        assert result.shipping_cost == pytest.approx(40.0)

    def test_results_are_finite(self, reference_input: ProfitInput) -> None:
        result = calculate_profit(reference_input)
        for value in result.model_dump().values():
            assert math.isfinite(value)


class TestProfitValidation:
    """Precondition violations raise instead of returning inf/NaN."""

    def test_zero_cost_price_raises(self) -> None:
        with pytest.raises(ProfitCalculationError, match="cost_price"):
            calculate_profit(ProfitInput(selling_price=1000, cost_price=0, weight=0.5))

    def test_negative_cost_price_raises(self) -> None:
        with pytest.raises(ProfitCalculationError):
            calculate_profit(ProfitInput(selling_price=1000, cost_price=-10, weight=0.5))

    def test_zero_selling_price_raises(self) -> None:
        with pytest.raises(ProfitCalculationError, match="selling_price"):
            calculate_profit(ProfitInput(selling_price=0, cost_price=100, weight=0.5))

    def test_negative_weight_raises(self) -> None:
        with pytest.raises(ProfitCalculationError, match="weight"):
            calculate_profit(ProfitInput(selling_price=1000, cost_price=100, weight=-1))

    def test_nan_input_raises(self) -> None:
        with pytest.raises(ProfitCalculationError, match="finite"):
            calculate_profit(
                ProfitInput(selling_price=float("nan"), cost_price=100, weight=0.5)
            )

    def test_error_is_value_error(self) -> None:
        assert issubclass(ProfitCalculationError, ValueError)
