"""
Inventory assignment service - how many units of an item sit at a location.
Challenge: Transitive ownership (through Item) and one record per (item, location),
including under concurrent creates.
Design: Pre-checks give specific errors; the unique index is the authoritative guard.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateAssignment, ItemNotFound, LocationNotFound, NotFound
from app.db.base import utcnow
from app.db.models.item_location import ItemLocation
from app.db.repositories.item_location_repository import ItemLocationRepository
from app.db.repositories.item_repository import ItemRepository
from app.db.repositories.location_repository import LocationRepository
from app.schemas.item_location import ItemLocationResponse

logger = logging.getLogger(__name__)


class InventoryAssignmentService:
    """Create, update, delete and list ItemLocation records for one caller."""

    def __init__(
        self,
        assignment_repo: ItemLocationRepository,
        item_repo: ItemRepository,
        location_repo: LocationRepository,
    ):
        self.assignment_repo = assignment_repo
        self.item_repo = item_repo
        self.location_repo = location_repo

    async def _get_owned(self, owner_id: int, assignment_id: int) -> ItemLocation:
        assignment = await self.assignment_repo.get_owned(owner_id, assignment_id)
        if assignment is None:
            raise NotFound("Item location not found")
        return assignment

    async def _ensure_item(self, owner_id: int, item_id: int) -> None:
        if await self.item_repo.get_owned(owner_id, item_id) is None:
            raise ItemNotFound()

    async def _ensure_location(self, owner_id: int, location_id: int) -> None:
        if await self.location_repo.get_owned(owner_id, location_id) is None:
            raise LocationNotFound()

    async def get(self, owner_id: int, assignment_id: int) -> ItemLocationResponse:
        return ItemLocationResponse.model_validate(await self._get_owned(owner_id, assignment_id))

    async def list_by(
        self,
        owner_id: int,
        location_id: int | None = None,
        item_id: int | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ItemLocationResponse]:
        """All of the caller's assignments, narrowed by equality filters when given."""
        rows = await self.assignment_repo.list_owned(
            owner_id, item_id=item_id, location_id=location_id, skip=skip, limit=limit
        )
        return [ItemLocationResponse.model_validate(r) for r in rows]

    async def list_by_item(self, owner_id: int, item_id: int) -> list[ItemLocationResponse]:
        await self._ensure_item(owner_id, item_id)
        return await self.list_by(owner_id, item_id=item_id)

    async def list_by_location(self, owner_id: int, location_id: int) -> list[ItemLocationResponse]:
        await self._ensure_location(owner_id, location_id)
        return await self.list_by(owner_id, location_id=location_id)

    async def create(self, owner_id: int, item_id: int, location_id: int, quantity: int) -> ItemLocationResponse:
        await self._ensure_item(owner_id, item_id)
        await self._ensure_location(owner_id, location_id)
        if await self.assignment_repo.get_pair(item_id, location_id):
            raise DuplicateAssignment()
        now = utcnow()
        assignment = ItemLocation(
            item_id=item_id,
            location_id=location_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        try:
            assignment = await self.assignment_repo.add(assignment)
        except IntegrityError:
            # Lost a race: either a concurrent create won the unique index or a
            # concurrent delete removed the item/location after our checks
            logger.warning("assignment race: item_id=%s location_id=%s", item_id, location_id)
            if await self.assignment_repo.get_pair(item_id, location_id):
                raise DuplicateAssignment()
            await self._ensure_item(owner_id, item_id)
            await self._ensure_location(owner_id, location_id)
            raise
        logger.info(
            "assignment created: id=%s item_id=%s location_id=%s quantity=%s",
            assignment.id, item_id, location_id, quantity,
        )
        # Reload with item/location loaded to avoid lazy load in async context (MissingGreenlet)
        return await self.get(owner_id, assignment.id)

    async def update(
        self, owner_id: int, assignment_id: int, quantity: int, version: int | None = None
    ) -> ItemLocationResponse:
        """Only quantity changes; item/location pairing is fixed after creation."""
        assignment = await self._get_owned(owner_id, assignment_id)
        self.assignment_repo.check_version(assignment, version)
        assignment.quantity = quantity
        assignment.updated_at = utcnow()
        await self.assignment_repo.flush()
        return ItemLocationResponse.model_validate(assignment)

    async def delete(self, owner_id: int, assignment_id: int) -> None:
        assignment = await self._get_owned(owner_id, assignment_id)
        await self.assignment_repo.delete(assignment)
        logger.info("assignment deleted: id=%s owner_id=%s", assignment_id, owner_id)
