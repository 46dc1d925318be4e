"""Session-scoped persistence of the product filter state."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from seller_scout.config import get_settings
from seller_scout.db.models import FilterStateRecord
from seller_scout.scoring.filters import FilterSpecification
from seller_scout.scoring.normalizer import dump_filter_state, load_filter_state

logger = logging.getLogger(__name__)


class FilterStateStore:
    """Load/save a FilterSpecification per browsing session under a fixed key."""

    def __init__(self, session: AsyncSession, storage_key: str | None = None):
        self.session = session
        self.storage_key = storage_key or get_settings().filter_state_key

    async def _get_record(self, session_id: str) -> FilterStateRecord | None:
        result = await self.session.execute(
            select(FilterStateRecord).where(
                FilterStateRecord.session_id == session_id,
                FilterStateRecord.storage_key == self.storage_key,
            )
        )
        return result.scalar_one_or_none()

    async def load(self, session_id: str) -> FilterSpecification:
        """Load the saved filters; sessions with nothing saved get an empty spec."""
        record = await self._get_record(session_id)
        if record is None:
            return FilterSpecification()
        return load_filter_state(record.payload)

    async def save(self, session_id: str, spec: FilterSpecification) -> None:
        """Save filters for a session, replacing any previous state."""
        payload = dump_filter_state(spec)
        record = await self._get_record(session_id)
        if record is None:
            record = FilterStateRecord(
                session_id=session_id,
                storage_key=self.storage_key,
                payload=payload,
            )
            self.session.add(record)
        else:
            record.payload = payload
        await self.session.flush()
        logger.debug(f"Saved filters for session {session_id}")

    async def reset(self, session_id: str) -> None:
        """Remove saved filters for a session."""
        await self.session.execute(
            delete(FilterStateRecord).where(
                FilterStateRecord.session_id == session_id,
                FilterStateRecord.storage_key == self.storage_key,
            )
        )
        logger.info(f"Reset filters for session {session_id}")
