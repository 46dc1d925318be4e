"""Keyword research helpers."""

from typing import Optional

from pydantic import BaseModel, Field

EASY_DIFFICULTY_LIMIT = 30
MEDIUM_DIFFICULTY_LIMIT = 70

LONG_TAIL_TEMPLATES: tuple[str, ...] = (
    "{keyword} for home",
    "best {keyword}",
    "{keyword} online",
    "{keyword} price",
    "buy {keyword}",
)


class KeywordResearchRequest(BaseModel):
    """Keyword metrics entered or fetched for a search term."""

    keyword: str = Field(..., min_length=1, description="Search term")
    search_volume_estimate: Optional[int] = Field(None, ge=0, description="Monthly searches")
    keyword_difficulty_score: Optional[float] = Field(None, ge=0, le=100)
    cpc_estimate: Optional[float] = Field(None, ge=0, description="Cost per click (INR)")
    long_tail_suggestions: list[str] = Field(default_factory=list)


class KeywordAnalysis(BaseModel):
    """Keyword research result returned to the dashboard."""

    keyword: str
    search_volume_estimate: Optional[int]
    keyword_difficulty_score: Optional[float]
    difficulty_label: Optional[str]
    cpc_estimate: Optional[float]
    long_tail_suggestions: list[str]


def difficulty_label(score: float) -> str:
    """Easy below 30, Medium below 70, otherwise Hard."""
    if score < EASY_DIFFICULTY_LIMIT:
        return "Easy"
    if score < MEDIUM_DIFFICULTY_LIMIT:
        return "Medium"
    return "Hard"


def long_tail_suggestions(keyword: str) -> list[str]:
    """Generate long-tail variations of a keyword."""
    keyword = keyword.strip()
    if not keyword:
        return []
    return [template.format(keyword=keyword) for template in LONG_TAIL_TEMPLATES]


def analyze_keyword(request: KeywordResearchRequest) -> KeywordAnalysis:
    """Attach the difficulty label and fill in suggestions when none were given."""
    score = request.keyword_difficulty_score
    return KeywordAnalysis(
        keyword=request.keyword.strip(),
        search_volume_estimate=request.search_volume_estimate,
        keyword_difficulty_score=score,
        difficulty_label=difficulty_label(score) if score is not None else None,
        cpc_estimate=request.cpc_estimate,
        long_tail_suggestions=request.long_tail_suggestions
        or long_tail_suggestions(request.keyword),
    )
