"""
ItemLocation repository - inventory assignment queries.
Challenge: Ownership is transitive through Item, so every read is join-then-filter.
Design: selectinload for item/location so responses never lazy load in async context.
"""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.db.models.item import Item
from app.db.models.item_location import ItemLocation
from app.db.repositories.base_repository import BaseRepository


class ItemLocationRepository(BaseRepository[ItemLocation]):
    """ItemLocation queries scoped by the owning Item's owner."""

    def __init__(self, session):
        super().__init__(session, ItemLocation)

    def _owned(self, owner_id: int):
        return (
            select(ItemLocation)
            .join(Item, ItemLocation.item_id == Item.id)
            .where(Item.owner_id == owner_id)
            .options(selectinload(ItemLocation.item), selectinload(ItemLocation.location))
        )

    async def get_owned(self, owner_id: int, id: int) -> ItemLocation | None:
        result = await self.session.execute(self._owned(owner_id).where(ItemLocation.id == id))
        return result.scalar_one_or_none()

    async def list_owned(
        self,
        owner_id: int,
        *,
        item_id: int | None = None,
        location_id: int | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ItemLocation]:
        """Caller's assignments, optionally filtered by item and/or location (equality only)."""
        stmt = self._owned(owner_id)
        if item_id is not None:
            stmt = stmt.where(ItemLocation.item_id == item_id)
        if location_id is not None:
            stmt = stmt.where(ItemLocation.location_id == location_id)
        stmt = stmt.order_by(ItemLocation.id).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_pair(self, item_id: int, location_id: int) -> ItemLocation | None:
        result = await self.session.execute(
            select(ItemLocation).where(
                ItemLocation.item_id == item_id, ItemLocation.location_id == location_id
            )
        )
        return result.scalar_one_or_none()
