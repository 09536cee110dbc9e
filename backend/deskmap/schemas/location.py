"""
DeskMap - Location Pydantic Schemas

Request fields are optional at the schema level; presence and the [0, 1]
coordinate range are enforced by deskmap.services.validation so callers get
MissingFieldError / CoordinateRangeError instead of a generic parse failure.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from deskmap.schemas.base import CamelModel
from deskmap.schemas.employee import EmployeeResponse
from deskmap.schemas.map import MapResponse


def reject_bool(value):
    # JSON true/false would otherwise coerce to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Coordinate must be a number")
    return value


class LocationCreate(CamelModel):
    """Schema for pinning an employee on a map."""
    map_id: Optional[str] = Field(default=None, description="Map the pin is placed on")
    employee_id: Optional[str] = Field(default=None, description="Employee being located")
    x: Optional[float] = Field(default=None, description="Horizontal position as a fraction (0-1)")
    y: Optional[float] = Field(default=None, description="Vertical position as a fraction (0-1)")

    @field_validator("x", "y", mode="before")
    @classmethod
    def coordinates_are_numbers(cls, value):
        return reject_bool(value)


class LocationUpdate(CamelModel):
    """Schema for moving a pin. Either coordinate may be sent alone."""
    x: Optional[float] = None
    y: Optional[float] = None

    @field_validator("x", "y", mode="before")
    @classmethod
    def coordinates_are_numbers(cls, value):
        return reject_bool(value)


class LocationResponse(CamelModel):
    """Schema for location response."""
    id: str
    map_id: str
    employee_id: str
    x: float
    y: float
    created_at: datetime
    updated_at: datetime
    map: MapResponse
    employee: EmployeeResponse
