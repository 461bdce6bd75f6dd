"""ItemLocation (inventory assignment) schemas, plus the detail views that embed them."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.item import ItemResponse, ItemSummary
from app.schemas.location import LocationResponse, LocationSummary


class ItemLocationCreate(BaseModel):
    item_id: int
    location_id: int
    # 0 is a legal "tracked, currently empty" value
    quantity: int = Field(1, ge=0)


class ItemLocationUpdate(BaseModel):
    """Only quantity is mutable; re-pairing needs delete + create."""

    quantity: int = Field(..., ge=0)
    version: int | None = Field(None, ge=1)


class ItemLocationResponse(BaseModel):
    id: int
    item_id: int
    location_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime
    version: int
    item: ItemSummary
    location: LocationSummary

    model_config = {"from_attributes": True}


class StockAtLocation(BaseModel):
    """One assignment as seen from its item: where, and how many."""

    id: int
    location_id: int
    quantity: int
    version: int
    location: LocationSummary

    model_config = {"from_attributes": True}


class StockOfItem(BaseModel):
    """One assignment as seen from its location: what, and how many."""

    id: int
    item_id: int
    quantity: int
    version: int
    item: ItemSummary

    model_config = {"from_attributes": True}


class ItemDetailResponse(ItemResponse):
    item_locations: list[StockAtLocation] = []


class LocationDetailResponse(LocationResponse):
    parent: LocationSummary | None = None  # Populated by service layer
    children: list[LocationSummary] = []
    item_locations: list[StockOfItem] = []
