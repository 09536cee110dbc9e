"""
DeskMap - Locations Router
Pinning employees on maps with fractional coordinates
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from deskmap.models.location import Location
from deskmap.schemas.base import MessageResponse
from deskmap.schemas.location import LocationCreate, LocationResponse, LocationUpdate
from deskmap.services.auth import Identity, require_admin, require_authenticated
from deskmap.services.locations import LocationManager
from deskmap.services.store import LOCATION_WITH_RELATIONS, EntityStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["locations"])


def get_location_manager(store: EntityStore = Depends(get_store)) -> LocationManager:
    return LocationManager(store)


@router.get("", response_model=List[LocationResponse])
async def list_locations(
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """List all locations with their map and employee."""
    return await store.find_many(
        Location,
        order_by=(Location.created_at, Location.id),
        include=LOCATION_WITH_RELATIONS
    )


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: str,
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    return await store.require(Location, location_id, LOCATION_WITH_RELATIONS)


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    data: LocationCreate,
    manager: LocationManager = Depends(get_location_manager),
    identity: Identity = Depends(require_admin)
):
    """
    Pin an employee on a map.

    - **mapId**: ID of the map
    - **employeeId**: ID of the employee
    - **x**, **y**: position as fractions of the image (0-1)
    """
    return await manager.create(data.model_dump())


@router.put("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: str,
    data: LocationUpdate,
    manager: LocationManager = Depends(get_location_manager),
    identity: Identity = Depends(require_admin)
):
    """Move a pin; x and y may be sent independently."""
    return await manager.update(location_id, data.model_dump(exclude_unset=True))


@router.delete("/{location_id}", response_model=MessageResponse)
async def delete_location(
    location_id: str,
    manager: LocationManager = Depends(get_location_manager),
    identity: Identity = Depends(require_admin)
):
    await manager.delete(location_id)
    logger.info(f"Location {location_id} deleted by {identity.email}")
    return MessageResponse(message="Location deleted successfully")
