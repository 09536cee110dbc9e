"""
DeskMap - Employee Pydantic Schemas
"""
from datetime import datetime
from typing import List, Optional

from deskmap.schemas.base import CamelModel
from deskmap.schemas.map import MapResponse


class EmployeeResponse(CamelModel):
    """Schema for employee response."""
    id: str
    name: str
    phone: str
    email: str
    picture_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EmployeeLocationInfo(CamelModel):
    """One of the employee's pins, with the map it sits on."""
    id: str
    map_id: str
    employee_id: str
    x: float
    y: float
    map: MapResponse


class EmployeeDetail(EmployeeResponse):
    """Employee with every location and its map."""
    locations: List[EmployeeLocationInfo] = []
