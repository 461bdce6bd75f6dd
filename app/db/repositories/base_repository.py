"""
Base repository - generic CRUD interface (SOLID: Interface Segregation, Dependency Inversion).
Challenge: Consistent data access, testability via mocks, query optimization in one place.
Constraint violations surface as IntegrityError from add()/delete(); stale versioned
updates surface as ConcurrentModification from flush().
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConcurrentModification
from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by primary key, without ownership filtering."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_owned(self, owner_id: int, id: int) -> ModelType | None:
        """Fetch entity by id only if owner_id matches. Missing and foreign look the same."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id, self.model.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list_owned(
        self,
        owner_id: int,
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ModelType]:
        """Caller's entities ordered by id. limit=None returns everything."""
        stmt = (
            select(self.model)
            .where(self.model.owner_id == owner_id)
            .order_by(self.model.id)
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity inside a SAVEPOINT. Caller commits session.

        A unique/foreign-key violation rolls back only the savepoint and the
        IntegrityError propagates, so the request transaction stays usable.
        """
        async with self.session.begin_nested():
            self.session.add(entity)
            await self.session.flush()  # Get ID without committing
        await self.session.refresh(entity)
        return entity

    async def flush(self) -> None:
        """Write pending updates. A version mismatch means someone else wrote first."""
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise ConcurrentModification() from exc

    async def delete(self, entity: ModelType) -> None:
        """Remove entity from DB and flush so constraint errors surface here."""
        async with self.session.begin_nested():
            await self.session.delete(entity)
            await self.session.flush()

    @staticmethod
    def check_version(entity: ModelType, expected: int | None) -> None:
        """Optimistic concurrency: reject writes based on a stale read."""
        if expected is not None and expected != entity.version:
            raise ConcurrentModification()
