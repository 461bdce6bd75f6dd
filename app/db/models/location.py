"""
Location model - node of a per-owner location forest.

Parent/child links are plain ids (parent_location_id); the tree is walked by
querying, never through in-memory object pointers.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow

DEFAULT_LOCATION_TYPE = "General"


class Location(Base):
    """Location entity (warehouse, room, shelf, ...)."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_LOCATION_TYPE
    )
    # RESTRICT: children must be detached or deleted before their parent
    parent_location_id: Mapped[int | None] = mapped_column(
        ForeignKey("locations.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )
    version: Mapped[int] = mapped_column(nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name={self.name})>"
