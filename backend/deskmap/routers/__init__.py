"""
DeskMap - API Routers
"""
from deskmap.routers.employees import router as employees_router
from deskmap.routers.health import router as health_router
from deskmap.routers.locations import router as locations_router
from deskmap.routers.maps import router as maps_router
from deskmap.routers.search import router as search_router
from deskmap.routers.uploads import router as uploads_router

__all__ = [
    "employees_router",
    "health_router",
    "locations_router",
    "maps_router",
    "search_router",
    "uploads_router",
]
