"""
FastAPI dependencies - injection for DB, auth and services (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.db.session import DbSession
from app.db.repositories import (
    ItemLocationRepository,
    ItemRepository,
    LocationRepository,
    UserRepository,
)
from app.services.auth_service import AuthService
from app.services.inventory_service import InventoryAssignmentService
from app.services.item_service import ItemService
from app.services.location_hierarchy import LocationHierarchy
from app.services.location_service import LocationService

security = HTTPBearer(auto_error=False)


def get_auth_service(session: DbSession) -> AuthService:
    return AuthService(UserRepository(session))


def get_item_service(session: DbSession) -> ItemService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return ItemService(ItemRepository(session), ItemLocationRepository(session))


def get_location_service(session: DbSession) -> LocationService:
    location_repo = LocationRepository(session)
    return LocationService(
        location_repo,
        LocationHierarchy(location_repo, UserRepository(session)),
        ItemLocationRepository(session),
    )


def get_inventory_service(session: DbSession) -> InventoryAssignmentService:
    return InventoryAssignmentService(
        ItemLocationRepository(session), ItemRepository(session), LocationRepository(session)
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
InventoryServiceDep = Annotated[InventoryAssignmentService, Depends(get_inventory_service)]


async def get_current_user_id(
    auth: AuthServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Resolve JWT to user id. Raises Unauthenticated (401) if missing or invalid."""
    return await auth.resolve_identity(credentials.credentials if credentials else None)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
