"""
Location repository - location rows addressed by id; the tree is parent-id indirection.
Challenge: Tree reads are id queries (children by parent id, parent by id), no object graph.
"""

from sqlalchemy import delete, exists, select

from app.db.models.item_location import ItemLocation
from app.db.models.location import Location
from app.db.repositories.base_repository import BaseRepository


class LocationRepository(BaseRepository[Location]):
    """Location-specific queries."""

    def __init__(self, session):
        super().__init__(session, Location)

    async def get_children(self, owner_id: int, location_id: int) -> list[Location]:
        """Direct children of a location, ordered by id."""
        result = await self.session.execute(
            select(Location)
            .where(Location.parent_location_id == location_id, Location.owner_id == owner_id)
            .order_by(Location.id)
        )
        return list(result.scalars().all())

    async def has_children(self, location_id: int) -> bool:
        result = await self.session.execute(
            select(exists().where(Location.parent_location_id == location_id))
        )
        return bool(result.scalar())

    async def delete_with_assignments(self, location: Location) -> None:
        """Delete location and its ItemLocation rows. Parent link is RESTRICT, never cascaded."""
        await self.session.execute(
            delete(ItemLocation).where(ItemLocation.location_id == location.id)
        )
        await self.delete(location)
