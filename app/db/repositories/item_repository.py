"""
Item repository - item data access (SOLID: Single Responsibility).
"""

from sqlalchemy import delete

from app.db.models.item import Item
from app.db.models.item_location import ItemLocation
from app.db.repositories.base_repository import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Item-specific queries. Ownership filtering comes from BaseRepository.get_owned/list_owned."""

    def __init__(self, session):
        super().__init__(session, Item)

    async def delete_with_assignments(self, item: Item) -> None:
        """Delete item and its ItemLocation rows in the current transaction."""
        await self.session.execute(delete(ItemLocation).where(ItemLocation.item_id == item.id))
        await self.delete(item)
