"""
DeskMap - Pydantic Schemas
"""
from deskmap.schemas.map import MapResponse, MapDetail
from deskmap.schemas.employee import EmployeeResponse, EmployeeDetail
from deskmap.schemas.location import LocationCreate, LocationUpdate, LocationResponse
from deskmap.schemas.search import SearchResponse

__all__ = [
    "MapResponse",
    "MapDetail",
    "EmployeeResponse",
    "EmployeeDetail",
    "LocationCreate",
    "LocationUpdate",
    "LocationResponse",
    "SearchResponse",
]
