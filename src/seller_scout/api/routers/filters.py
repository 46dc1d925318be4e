"""Session filter state API endpoints.

The browsing session is identified by the X-Session-Id header.

Endpoints:
- GET /filters/state - saved filters for the session
- PUT /filters/state - normalize and save filter form input
- DELETE /filters/state - reset saved filters
"""

from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.base import get_db
from seller_scout.scoring.filters import FilterSpecification
from seller_scout.scoring.normalizer import (
    RawFilterInput,
    has_active_filters,
    normalize,
    serialize,
)
from seller_scout.services.filter_state import FilterStateStore

router = APIRouter(prefix="/filters", tags=["filters"])


class FilterStateResponse(BaseModel):
    """Saved filters in both validated and form representations."""

    filters: FilterSpecification
    form: RawFilterInput
    has_active_filters: bool


def _response(spec: FilterSpecification) -> FilterStateResponse:
    return FilterStateResponse(
        filters=spec,
        form=serialize(spec),
        has_active_filters=has_active_filters(spec),
    )


@router.get("/state", response_model=FilterStateResponse)
async def get_filter_state(
    x_session_id: str = Header(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> FilterStateResponse:
    """Get the saved filters for this session."""
    spec = await FilterStateStore(db).load(x_session_id)
    return _response(spec)


@router.put("/state", response_model=FilterStateResponse)
async def save_filter_state(
    raw: RawFilterInput,
    x_session_id: str = Header(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> FilterStateResponse:
    """Normalize filter form input and save it for this session."""
    spec = normalize(raw)
    await FilterStateStore(db).save(x_session_id, spec)
    return _response(spec)


@router.delete("/state", status_code=status.HTTP_204_NO_CONTENT)
async def reset_filter_state(
    x_session_id: str = Header(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Reset saved filters for this session."""
    await FilterStateStore(db).reset(x_session_id)
