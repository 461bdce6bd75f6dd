"""
Location hierarchy - tree invariants over parent_location_id.

Locations form a forest per owner. Nodes are rows addressed by id; walking the
tree means one query per parent hop. Every walk keeps a visited set, so even a
corrupted chain terminates with LocationCycleError instead of looping.
"""

from collections.abc import AsyncIterator

from app.core.exceptions import HasChildren, LocationCycleError, LocationNotFound, ValidationError
from app.db.models.location import Location
from app.db.repositories.location_repository import LocationRepository
from app.db.repositories.user_repository import UserRepository


class LocationHierarchy:
    """Parent/child rules for one owner's locations."""

    def __init__(self, location_repo: LocationRepository, user_repo: UserRepository):
        self.location_repo = location_repo
        self.user_repo = user_repo

    async def lock(self, owner_id: int) -> None:
        """Serialize hierarchy writes for this owner until the transaction ends."""
        await self.user_repo.lock(owner_id)

    async def walk_ancestors(self, owner_id: int, location_id: int) -> AsyncIterator[Location]:
        """Yield the node, then its parent, ... up to the root. Lazy: one row per step."""
        seen: set[int] = set()
        current_id: int | None = location_id
        while current_id is not None:
            if current_id in seen:
                raise LocationCycleError(f"Location {location_id} has a cyclic parent chain")
            seen.add(current_id)
            location = await self.location_repo.get_owned(owner_id, current_id)
            if location is None:
                return
            yield location
            current_id = location.parent_location_id

    async def compute_path(self, owner_id: int, location_id: int) -> list[Location]:
        """Locations from root to node (inclusive)."""
        path = [loc async for loc in self.walk_ancestors(owner_id, location_id)]
        if not path:
            raise LocationNotFound()
        path.reverse()
        return path

    async def resolve_parent(self, owner_id: int, parent_id: int | None) -> Location | None:
        """Parent must exist and belong to the same owner."""
        if parent_id is None:
            return None
        parent = await self.location_repo.get_owned(owner_id, parent_id)
        if parent is None:
            raise ValidationError("Parent location not found")
        return parent

    async def ensure_acyclic(self, owner_id: int, location_id: int, new_parent_id: int | None) -> None:
        """Reject a parent that is the node itself or any of its descendants.

        The new parent's ancestor chain must not contain the node.
        """
        if new_parent_id is None:
            return
        if new_parent_id == location_id:
            raise LocationCycleError("Location cannot be its own parent")
        async for ancestor in self.walk_ancestors(owner_id, new_parent_id):
            if ancestor.id == location_id:
                raise LocationCycleError()

    async def ensure_deletable(self, location_id: int) -> None:
        if await self.location_repo.has_children(location_id):
            raise HasChildren()
