"""
DeskMap - Map Model
Floor-plan images with their locale metadata
"""
import uuid
from datetime import datetime
from typing import List, TYPE_CHECKING

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deskmap.database import Base, utcnow

if TYPE_CHECKING:
    from deskmap.models.location import Location


class Map(Base):
    """
    Map model for storing floor plans.

    Employees are pinned onto maps through Location rows using fractional
    (0-1) X,Y coordinates, so pins survive a change of image resolution.
    Deleting a map deletes its locations.
    """
    __tablename__ = "maps"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Locale tuple, free text and not unique
    state: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    building: Mapped[str] = mapped_column(String(100), nullable=False)
    floor: Mapped[str] = mapped_column(String(50), nullable=False)

    # Public reference to the stored image (e.g. /uploads/<hex>.png)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    locations: Mapped[List["Location"]] = relationship(
        "Location",
        back_populates="map",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Map(id={self.id}, name='{self.name}', floor='{self.floor}')>"
