"""Keyword research API endpoint."""

from decimal import Decimal

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.base import get_db
from seller_scout.db.models import KeywordResearchRecord
from seller_scout.scoring.keywords import (
    KeywordAnalysis,
    KeywordResearchRequest,
    analyze_keyword,
)

router = APIRouter(prefix="/keywords", tags=["keywords"])


@router.post("/research", response_model=KeywordAnalysis, status_code=status.HTTP_201_CREATED)
async def save_keyword_research(
    request: KeywordResearchRequest,
    db: AsyncSession = Depends(get_db),
) -> KeywordAnalysis:
    """Analyze a keyword and save the research."""
    analysis = analyze_keyword(request)

    record = KeywordResearchRecord(
        keyword=analysis.keyword,
        search_volume_estimate=analysis.search_volume_estimate,
        keyword_difficulty_score=(
            Decimal(str(analysis.keyword_difficulty_score))
            if analysis.keyword_difficulty_score is not None
            else None
        ),
        cpc_estimate=(
            Decimal(str(analysis.cpc_estimate)) if analysis.cpc_estimate is not None else None
        ),
        long_tail_suggestions=analysis.long_tail_suggestions,
    )
    db.add(record)
    await db.flush()

    return analysis
