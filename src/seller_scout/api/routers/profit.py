"""Profit calculator API endpoint."""

from fastapi import APIRouter, HTTPException, status

from seller_scout.scoring.calculator import (
    ProfitBreakdown,
    ProfitCalculationError,
    ProfitInput,
    calculate_profit,
)

router = APIRouter(prefix="/profit", tags=["profit"])


@router.post("/calculate", response_model=ProfitBreakdown)
async def calculate(profit_input: ProfitInput) -> ProfitBreakdown:
    """Calculate per-unit profit, ROI and break-even ACOS."""
    try:
        return calculate_profit(profit_input)
    except ProfitCalculationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
