"""
DeskMap - Map Pydantic Schemas
Maps are created and updated through multipart forms, so only responses live here.
"""
from datetime import datetime
from typing import List, Optional

from deskmap.schemas.base import CamelModel


class MapResponse(CamelModel):
    """Schema for map response."""
    id: str
    name: str
    state: str
    city: str
    building: str
    floor: str
    image_url: str
    created_at: datetime
    updated_at: datetime


class MapEmployeeInfo(CamelModel):
    """Employee summary shown on a map marker."""
    id: str
    name: str
    phone: str
    email: str
    picture_url: Optional[str] = None


class MapLocationInfo(CamelModel):
    """Location pinned on a map, with its employee."""
    id: str
    map_id: str
    employee_id: str
    x: float
    y: float
    employee: MapEmployeeInfo


class MapDetail(MapResponse):
    """Map response with positioned employees."""
    locations: List[MapLocationInfo] = []
