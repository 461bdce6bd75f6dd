"""Location request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.db.models.location import DEFAULT_LOCATION_TYPE


class LocationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    address: str | None = Field(None, max_length=500)
    location_type: str = Field(DEFAULT_LOCATION_TYPE, min_length=1, max_length=50)
    parent_location_id: int | None = None


class LocationCreate(LocationBase):
    pass


class LocationUpdate(BaseModel):
    """Partial update. parent_location_id=null detaches the location to a root."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    address: str | None = Field(None, max_length=500)
    location_type: str | None = Field(None, min_length=1, max_length=50)
    parent_location_id: int | None = None
    version: int | None = Field(None, ge=1)

    @field_validator("name", "location_type")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class LocationSummary(BaseModel):
    id: int
    name: str
    location_type: str
    parent_location_id: int | None = None

    model_config = {"from_attributes": True}


class LocationResponse(LocationBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime
    version: int

    model_config = {"from_attributes": True}
