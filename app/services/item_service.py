"""
Item service - business logic for items (SOLID: Single Responsibility).
Challenge: Ownership-scoped CRUD, cache invalidation, optimistic concurrency.
Design: Service depends on repositories; owner id is always passed in explicitly.
Only the item's own row is cached. Its inventory is read fresh on every detail
request, so assignment writes never have to touch the item cache.
"""

import logging

from app.cache.redis_client import cache_delete, cache_get, cache_set
from app.core.exceptions import ItemNotFound
from app.db.base import utcnow
from app.db.models.item import Item
from app.db.repositories.item_location_repository import ItemLocationRepository
from app.db.repositories.item_repository import ItemRepository
from app.db.session import after_commit
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from app.schemas.item_location import ItemDetailResponse, StockAtLocation

logger = logging.getLogger(__name__)

# Cache key prefix for item detail; owner is part of the key
CACHE_PREFIX = "item:"


def _cache_key(owner_id: int, item_id: int) -> str:
    return f"{CACHE_PREFIX}{owner_id}:{item_id}"


class ItemService:
    """Handles all item use cases for one caller at a time."""

    def __init__(self, item_repo: ItemRepository, assignment_repo: ItemLocationRepository):
        self.item_repo = item_repo
        self.assignment_repo = assignment_repo

    async def _get_owned(self, owner_id: int, item_id: int) -> Item:
        item = await self.item_repo.get_owned(owner_id, item_id)
        if item is None:
            raise ItemNotFound()
        return item

    def _invalidate(self, owner_id: int, item_id: int) -> None:
        # Deleting before commit would let a concurrent read re-cache the old row
        after_commit(self.item_repo.session, cache_delete, _cache_key(owner_id, item_id))

    async def list_items(self, owner_id: int, skip: int = 0, limit: int | None = None) -> list[ItemResponse]:
        items = await self.item_repo.list_owned(owner_id, skip=skip, limit=limit)
        return [ItemResponse.model_validate(i) for i in items]

    async def _get_row(self, owner_id: int, item_id: int) -> ItemResponse:
        """Item row via read-through Redis cache to reduce DB load."""
        key = _cache_key(owner_id, item_id)
        cached = await cache_get(key)
        if cached:
            return ItemResponse.model_validate_json(cached)
        resp = ItemResponse.model_validate(await self._get_owned(owner_id, item_id))
        await cache_set(key, resp.model_dump(mode="json"))
        return resp

    async def get(self, owner_id: int, item_id: int) -> ItemDetailResponse:
        """Item with the locations it is stored at."""
        row = await self._get_row(owner_id, item_id)
        stock = await self.assignment_repo.list_owned(owner_id, item_id=item_id)
        return ItemDetailResponse(
            **row.model_dump(),
            item_locations=[StockAtLocation.model_validate(s) for s in stock],
        )

    async def create(self, owner_id: int, data: ItemCreate) -> ItemResponse:
        now = utcnow()
        item = Item(
            owner_id=owner_id,
            name=data.name,
            price=data.price,
            description=data.description,
            sku=data.sku,
            created_at=now,
            updated_at=now,
        )
        item = await self.item_repo.add(item)
        logger.info("item created: id=%s owner_id=%s", item.id, owner_id)
        return ItemResponse.model_validate(item)

    async def update(self, owner_id: int, item_id: int, data: ItemUpdate) -> ItemResponse:
        """Apply only the fields present in the request; bump version and updated_at."""
        item = await self._get_owned(owner_id, item_id)
        self.item_repo.check_version(item, data.version)
        for field, value in data.model_dump(exclude_unset=True, exclude={"version"}).items():
            setattr(item, field, value)
        item.updated_at = utcnow()
        await self.item_repo.flush()
        self._invalidate(owner_id, item_id)
        return ItemResponse.model_validate(item)

    async def delete(self, owner_id: int, item_id: int) -> None:
        """Delete item together with its ItemLocation rows."""
        item = await self._get_owned(owner_id, item_id)
        await self.item_repo.delete_with_assignments(item)
        self._invalidate(owner_id, item_id)
        logger.info("item deleted: id=%s owner_id=%s", item_id, owner_id)
