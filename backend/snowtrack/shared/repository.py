"""
Base repository with common CRUD operations.

Provides generic database operations for feature repositories.
Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class SessionRepository(BaseRepository[StoredSession]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, StoredSession)
"""

from typing import TypeVar, Generic, Type, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    All methods are async for use with AsyncSession. Methods flush but
    never commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def get_by_id(self, id: str | int) -> T | None:
        """
        Get entity by primary key ID.

        Args:
            id: Primary key value (string UUID or integer)

        Returns:
            Entity if found, None otherwise
        """
        return await self.db.get(self.model, id)

    async def get_all(self, order_by: Optional[object] = None) -> list[T]:
        """
        Get all entities.

        Args:
            order_by: Optional column expression to sort by

        Returns:
            List of entities
        """
        query = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def merge(self, entity: T) -> T:
        """
        Insert entity or overwrite the row with the same primary key.

        Args:
            entity: Detached entity

        Returns:
            Persistent entity bound to the session
        """
        merged = await self.db.merge(entity)
        await self.db.flush()
        return merged

    async def delete(self, entity: T) -> None:
        """
        Delete entity.

        Args:
            entity: Entity to delete
        """
        await self.db.delete(entity)
        await self.db.flush()

    async def count(self) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self.model)
        result = await self.db.execute(query)
        return result.scalar() or 0
