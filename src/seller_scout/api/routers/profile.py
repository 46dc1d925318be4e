"""User profile API endpoints.

The caller is identified by the X-Principal header supplied by the
identity provider in front of this service.
"""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.db.base import get_db
from seller_scout.db.models import SubscriptionTier, UserProfileRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


class UserProfile(BaseModel):
    """User profile schema."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    alert_preferences: list[str] = Field(default_factory=list)
    saved_product_lists: list[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


@router.get("", response_model=UserProfile)
async def get_profile(
    x_principal: str = Header(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> UserProfileRecord:
    """Get the caller's profile."""
    record = await db.get(UserProfileRecord, x_principal)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return record


@router.put("", response_model=UserProfile)
async def save_profile(
    profile: UserProfile,
    x_principal: str = Header(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    """Create or update the caller's profile."""
    record = await db.get(UserProfileRecord, x_principal)
    if record is None:
        record = UserProfileRecord(principal=x_principal)
        db.add(record)
        logger.info(f"Created profile for {x_principal}")

    record.name = profile.name
    record.email = profile.email
    record.subscription_tier = profile.subscription_tier
    record.alert_preferences = list(profile.alert_preferences)
    record.saved_product_lists = list(profile.saved_product_lists)
    await db.flush()

    return profile
