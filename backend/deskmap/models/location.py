"""
DeskMap - Location Model
A pin binding one employee to one map
"""
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deskmap.database import Base, utcnow

if TYPE_CHECKING:
    from deskmap.models.employee import Employee
    from deskmap.models.map import Map


class Location(Base):
    """
    Location model.

    x and y are fractions of the map image's width and height, both in [0, 1].
    """
    __tablename__ = "locations"
    __table_args__ = (
        CheckConstraint("x >= 0 AND x <= 1", name="ck_locations_x_range"),
        CheckConstraint("y >= 0 AND y <= 1", name="ck_locations_y_range"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    map_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("maps.id", ondelete="CASCADE"), nullable=False, index=True
    )
    employee_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True
    )
    x: Mapped[float] = mapped_column(Float, nullable=False)
    y: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    map: Mapped["Map"] = relationship("Map", back_populates="locations")
    employee: Mapped["Employee"] = relationship("Employee", back_populates="locations")

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, map_id={self.map_id}, x={self.x}, y={self.y})>"
