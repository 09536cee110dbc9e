"""
DeskMap - Database Models
"""
from deskmap.models.map import Map
from deskmap.models.employee import Employee
from deskmap.models.location import Location

__all__ = [
    "Map",
    "Employee",
    "Location"
]
