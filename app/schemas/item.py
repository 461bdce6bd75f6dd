"""Item request/response schemas - REST API contract."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer, field_validator

# Stored as NUMERIC(18, 2); rendered as a JSON number
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=18, decimal_places=2)
    description: str | None = Field(None, max_length=1000)
    sku: str | None = Field(None, max_length=50)


class ItemCreate(ItemBase):
    """Owner comes from the token; any owner field in the body is ignored."""


class ItemUpdate(BaseModel):
    """Partial update. Omitted fields are untouched; null clears description/sku."""

    name: str | None = Field(None, min_length=1, max_length=200)
    price: Decimal | None = Field(None, ge=0, max_digits=18, decimal_places=2)
    description: str | None = Field(None, max_length=1000)
    sku: str | None = Field(None, max_length=50)
    version: int | None = Field(None, ge=1)

    @field_validator("name", "price")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ItemSummary(BaseModel):
    id: int
    name: str
    sku: str | None = None
    price: Price

    model_config = {"from_attributes": True}


class ItemResponse(BaseModel):
    id: int
    owner_id: int
    name: str
    price: Price
    description: str | None = None
    sku: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int

    model_config = {"from_attributes": True}
