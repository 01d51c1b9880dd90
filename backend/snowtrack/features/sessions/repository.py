"""
Session repository.

Data access layer for completed sessions, keyed by session id.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from snowtrack.shared.repository import BaseRepository
from snowtrack.features.tracking.schemas import LiveStats, SnowboardSession
from .models import StoredSession

logger = logging.getLogger(__name__)


def _naive_utc(value: datetime) -> datetime:
    """DateTime columns hold naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _aware_utc(value: datetime) -> datetime:
    """Reattach UTC to a naive value read back from the store."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_row(session: SnowboardSession) -> StoredSession:
    """Convert a session schema into a (detached) database row."""
    return StoredSession(
        id=session.id,
        date=_naive_utc(session.date),
        status=session.status.value,
        route=[s.model_dump(mode="json") for s in session.route],
        runs=[r.model_dump(mode="json") for r in session.runs],
        **session.stats_fields(),
    )


def to_schema(row: StoredSession) -> SnowboardSession:
    """Convert a database row back into a session schema."""
    stats = {name: getattr(row, name) for name in LiveStats.model_fields}
    return SnowboardSession(
        id=row.id,
        date=_aware_utc(row.date),
        status=row.status,
        route=row.route or [],
        runs=row.runs or [],
        **stats,
    )


class SessionRepository(BaseRepository[StoredSession]):
    """Repository for completed sessions."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, StoredSession)

    async def save(self, session: SnowboardSession) -> SnowboardSession:
        """
        Insert or replace a session by id.

        Args:
            session: Completed session

        Returns:
            The session as stored
        """
        row = await self.merge(to_row(session))
        logger.info(f"Session {session.id} saved ({len(session.route)} points)")
        return to_schema(row)

    async def get_session(self, session_id: str) -> SnowboardSession | None:
        """
        Get session by ID.

        Returns:
            Session if found, None otherwise
        """
        row = await self.get_by_id(session_id)
        return to_schema(row) if row is not None else None

    async def list_sessions(self) -> list[SnowboardSession]:
        """All sessions, newest first."""
        rows = await self.get_all(order_by=StoredSession.date.desc())
        return [to_schema(row) for row in rows]

    async def delete_session(self, session_id: str) -> bool:
        """
        Delete session by ID.

        Returns:
            True if a session was deleted
        """
        row = await self.get_by_id(session_id)
        if row is None:
            return False
        await self.delete(row)
        logger.info(f"Session {session_id} deleted")
        return True
