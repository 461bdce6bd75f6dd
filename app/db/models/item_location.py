"""
ItemLocation model - quantity of one item stored at one location.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow

if TYPE_CHECKING:
    from app.db.models.item import Item
    from app.db.models.location import Location


class ItemLocation(Base):
    """Join entity between Item and Location. At most one row per (item, location)."""

    __tablename__ = "item_locations"
    __table_args__ = (
        UniqueConstraint("item_id", "location_id", name="uq_item_locations_item_location"),
        CheckConstraint("quantity >= 0", name="ck_item_locations_quantity_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True
    )
    location_id: Mapped[int] = mapped_column(
        ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )
    version: Mapped[int] = mapped_column(nullable=False, default=1)

    # Many-to-one only: no back-references on Item/Location
    item: Mapped["Item"] = relationship("Item")
    location: Mapped["Location"] = relationship("Location")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<ItemLocation(id={self.id}, item_id={self.item_id}, location_id={self.location_id})>"
