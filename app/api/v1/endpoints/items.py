"""
Item CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Challenge: Pagination, auth, validation, 404 handling.
Design: Thin controller; service layer holds business logic and raises domain errors.
"""

from fastapi import APIRouter, status, Query

from app.core.dependencies import CurrentUserId, ItemServiceDep
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from app.schemas.item_location import ItemDetailResponse
from app.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("", response_model=list[ItemResponse])
async def list_items(
    svc: ItemServiceDep,
    user_id: CurrentUserId,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1, le=settings.max_page_size),
):
    """List the caller's items. Without limit, returns all of them."""
    return await svc.list_items(user_id, skip=skip, limit=limit)


@router.get("/{item_id}", response_model=ItemDetailResponse)
async def get_item(svc: ItemServiceDep, user_id: CurrentUserId, item_id: int):
    """Get single item with its per-location quantities. Item row is served from Redis when cached."""
    return await svc.get(user_id, item_id)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(svc: ItemServiceDep, user_id: CurrentUserId, data: ItemCreate):
    """Create item owned by the caller (owner always from token)."""
    return await svc.create(user_id, data)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(svc: ItemServiceDep, user_id: CurrentUserId, item_id: int, data: ItemUpdate):
    """Update item. Send `version` to reject the write if someone changed it meanwhile."""
    return await svc.update(user_id, item_id, data)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(svc: ItemServiceDep, user_id: CurrentUserId, item_id: int):
    """Delete item and all of its location assignments."""
    await svc.delete(user_id, item_id)
