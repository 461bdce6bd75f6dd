"""
ItemLocation endpoints - inventory quantities per (item, location).
Challenge: Ownership through the parent Item; 404 for anything not the caller's.
"""

from fastapi import APIRouter, status, Query

from app.core.dependencies import CurrentUserId, InventoryServiceDep
from app.schemas.item_location import ItemLocationCreate, ItemLocationResponse, ItemLocationUpdate

router = APIRouter()


@router.get("", response_model=list[ItemLocationResponse])
async def list_item_locations(
    svc: InventoryServiceDep,
    user_id: CurrentUserId,
    item_id: int | None = Query(None),
    location_id: int | None = Query(None),
):
    """All of the caller's assignments; optional equality filters."""
    return await svc.list_by(user_id, location_id=location_id, item_id=item_id)


@router.get("/bylocation/{location_id}", response_model=list[ItemLocationResponse])
async def list_by_location(svc: InventoryServiceDep, user_id: CurrentUserId, location_id: int):
    return await svc.list_by_location(user_id, location_id)


@router.get("/byitem/{item_id}", response_model=list[ItemLocationResponse])
async def list_by_item(svc: InventoryServiceDep, user_id: CurrentUserId, item_id: int):
    return await svc.list_by_item(user_id, item_id)


@router.get("/{item_location_id}", response_model=ItemLocationResponse)
async def get_item_location(svc: InventoryServiceDep, user_id: CurrentUserId, item_location_id: int):
    return await svc.get(user_id, item_location_id)


@router.post("", response_model=ItemLocationResponse, status_code=status.HTTP_201_CREATED)
async def create_item_location(svc: InventoryServiceDep, user_id: CurrentUserId, data: ItemLocationCreate):
    """Assign an item to a location. 409 if the pair already exists."""
    return await svc.create(user_id, data.item_id, data.location_id, data.quantity)


@router.put("/{item_location_id}", response_model=ItemLocationResponse)
async def update_item_location(
    svc: InventoryServiceDep, user_id: CurrentUserId, item_location_id: int, data: ItemLocationUpdate
):
    """Change quantity. Send `version` for optimistic concurrency (409 on stale)."""
    return await svc.update(user_id, item_location_id, data.quantity, data.version)


@router.delete("/{item_location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item_location(svc: InventoryServiceDep, user_id: CurrentUserId, item_location_id: int):
    await svc.delete(user_id, item_location_id)
