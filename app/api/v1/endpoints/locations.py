"""
Location endpoints - CRUD plus parent/children expansion and root-to-node path.
"""

from fastapi import APIRouter, status, Query

from app.core.dependencies import CurrentUserId, LocationServiceDep
from app.schemas.location import (
    LocationCreate,
    LocationResponse,
    LocationSummary,
    LocationUpdate,
)
from app.schemas.item_location import LocationDetailResponse
from app.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("", response_model=list[LocationResponse])
async def list_locations(
    svc: LocationServiceDep,
    user_id: CurrentUserId,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=settings.max_page_size),
):
    return await svc.list_locations(user_id, skip=skip, limit=limit)


@router.get("/{location_id}", response_model=LocationDetailResponse)
async def get_location(svc: LocationServiceDep, user_id: CurrentUserId, location_id: int):
    """Location with its parent, direct children and the items stored there."""
    return await svc.get(user_id, location_id)


@router.get("/{location_id}/path", response_model=list[LocationSummary])
async def get_location_path(svc: LocationServiceDep, user_id: CurrentUserId, location_id: int):
    """Ancestors from the root down to this location (inclusive)."""
    return await svc.get_path(user_id, location_id)


@router.post("", response_model=LocationDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_location(svc: LocationServiceDep, user_id: CurrentUserId, data: LocationCreate):
    return await svc.create(user_id, data)


@router.put("/{location_id}", response_model=LocationDetailResponse)
async def update_location(
    svc: LocationServiceDep, user_id: CurrentUserId, location_id: int, data: LocationUpdate
):
    """Update location. Parent changes that would create a cycle are rejected (400)."""
    return await svc.update(user_id, location_id, data)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(svc: LocationServiceDep, user_id: CurrentUserId, location_id: int):
    """Delete a leaf location (409 while it has children)."""
    await svc.delete(user_id, location_id)
