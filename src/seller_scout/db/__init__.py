"""Database module."""

from seller_scout.db.base import get_db
from seller_scout.db.models import (
    FilterStateRecord,
    KeywordResearchRecord,
    ProductRecord,
    ProductTrendRecord,
    SellerAnalysisRecord,
    SubscriptionTier,
    UserProfileRecord,
)

__all__ = [
    "get_db",
    "FilterStateRecord",
    "KeywordResearchRecord",
    "ProductRecord",
    "ProductTrendRecord",
    "SellerAnalysisRecord",
    "SubscriptionTier",
    "UserProfileRecord",
]
