"""
Location service - ownership-scoped CRUD over the location forest.
Challenge: Keep the parent graph acyclic and single-owner on every write.
Design: Tree rules live in LocationHierarchy; this class orchestrates and maps to responses.
"""

import logging

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import HasChildren, LocationNotFound, ValidationError
from app.db.base import utcnow
from app.db.models.item_location import ItemLocation
from app.db.models.location import Location
from app.db.repositories.item_location_repository import ItemLocationRepository
from app.db.repositories.location_repository import LocationRepository
from app.schemas.item_location import LocationDetailResponse, StockOfItem
from app.schemas.location import (
    LocationCreate,
    LocationResponse,
    LocationSummary,
    LocationUpdate,
)
from app.services.location_hierarchy import LocationHierarchy

logger = logging.getLogger(__name__)


def _location_to_detail(
    location: Location,
    parent: Location | None,
    children: list[Location],
    stock: list[ItemLocation],
) -> LocationDetailResponse:
    """Map model to API response with parent/children/inventory expansion."""
    data = LocationResponse.model_validate(location).model_dump()
    data["parent"] = LocationSummary.model_validate(parent) if parent else None
    data["children"] = [LocationSummary.model_validate(c) for c in children]
    data["item_locations"] = [StockOfItem.model_validate(s) for s in stock]
    return LocationDetailResponse(**data)


class LocationService:
    """Handles all location use cases for one caller at a time."""

    def __init__(
        self,
        location_repo: LocationRepository,
        hierarchy: LocationHierarchy,
        assignment_repo: ItemLocationRepository,
    ):
        self.location_repo = location_repo
        self.hierarchy = hierarchy
        self.assignment_repo = assignment_repo

    async def _get_owned(self, owner_id: int, location_id: int) -> Location:
        location = await self.location_repo.get_owned(owner_id, location_id)
        if location is None:
            raise LocationNotFound()
        return location

    async def _detail(self, owner_id: int, location: Location) -> LocationDetailResponse:
        parent = None
        if location.parent_location_id is not None:
            parent = await self.location_repo.get_owned(owner_id, location.parent_location_id)
        children = await self.location_repo.get_children(owner_id, location.id)
        stock = await self.assignment_repo.list_owned(owner_id, location_id=location.id)
        return _location_to_detail(location, parent, children, stock)

    async def list_locations(
        self, owner_id: int, skip: int = 0, limit: int | None = None
    ) -> list[LocationResponse]:
        locations = await self.location_repo.list_owned(owner_id, skip=skip, limit=limit)
        return [LocationResponse.model_validate(loc) for loc in locations]

    async def get(self, owner_id: int, location_id: int) -> LocationDetailResponse:
        return await self._detail(owner_id, await self._get_owned(owner_id, location_id))

    async def get_path(self, owner_id: int, location_id: int) -> list[LocationSummary]:
        path = await self.hierarchy.compute_path(owner_id, location_id)
        return [LocationSummary.model_validate(loc) for loc in path]

    async def create(self, owner_id: int, data: LocationCreate) -> LocationDetailResponse:
        if data.parent_location_id is not None:
            await self.hierarchy.lock(owner_id)
            await self.hierarchy.resolve_parent(owner_id, data.parent_location_id)
        now = utcnow()
        location = Location(
            owner_id=owner_id,
            name=data.name,
            description=data.description,
            address=data.address,
            location_type=data.location_type,
            parent_location_id=data.parent_location_id,
            created_at=now,
            updated_at=now,
        )
        try:
            location = await self.location_repo.add(location)
        except IntegrityError:
            # Parent deleted between the check and the insert
            raise ValidationError("Parent location not found")
        logger.info("location created: id=%s owner_id=%s parent=%s", location.id, owner_id, location.parent_location_id)
        return await self._detail(owner_id, location)

    async def update(self, owner_id: int, location_id: int, data: LocationUpdate) -> LocationDetailResponse:
        """Partial update. A parent change is checked for ownership and cycles first."""
        changes = data.model_dump(exclude_unset=True, exclude={"version"})
        if "parent_location_id" in changes:
            await self.hierarchy.lock(owner_id)
        location = await self._get_owned(owner_id, location_id)
        self.location_repo.check_version(location, data.version)
        if "parent_location_id" in changes:
            new_parent_id = changes["parent_location_id"]
            await self.hierarchy.resolve_parent(owner_id, new_parent_id)
            await self.hierarchy.ensure_acyclic(owner_id, location_id, new_parent_id)
        for field, value in changes.items():
            setattr(location, field, value)
        location.updated_at = utcnow()
        await self.location_repo.flush()
        return await self._detail(owner_id, location)

    async def delete(self, owner_id: int, location_id: int) -> None:
        """Delete a leaf location and its ItemLocation rows. Locations with children are kept."""
        await self.hierarchy.lock(owner_id)
        location = await self._get_owned(owner_id, location_id)
        await self.hierarchy.ensure_deletable(location_id)
        try:
            await self.location_repo.delete_with_assignments(location)
        except IntegrityError:
            # A child was attached concurrently; the RESTRICT foreign key caught it
            raise HasChildren()
        logger.info("location deleted: id=%s owner_id=%s", location_id, owner_id)
