"""
DeskMap - Location Lifecycle
Sequences validation, existence checks and the store write for pins
"""
import logging
from typing import Any, Dict

from deskmap.models.employee import Employee
from deskmap.models.location import Location
from deskmap.models.map import Map
from deskmap.services import validation
from deskmap.services.store import LOCATION_WITH_RELATIONS, EntityStore

logger = logging.getLogger(__name__)


class LocationManager:
    """
    Create, move and remove employee pins.

    All checks run before the single store write, so a rejected request never
    leaves a partially applied row behind.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def create(self, payload: Dict[str, Any]) -> Location:
        """
        Pin an employee on a map.

        Order: required fields, coordinate range, map exists, employee exists,
        insert. Returns the row with its map and employee loaded.
        """
        validation.validate_location_create(payload)

        map_obj = await self.store.require(Map, payload["map_id"])
        employee = await self.store.require(Employee, payload["employee_id"])

        location = await self.store.create(
            Location,
            {
                "map_id": map_obj.id,
                "employee_id": employee.id,
                "x": float(payload["x"]),
                "y": float(payload["y"]),
            },
            include=LOCATION_WITH_RELATIONS,
        )
        logger.info(
            f"Employee '{employee.name}' pinned on map '{map_obj.name}' "
            f"at ({location.x}, {location.y})"
        )
        return location

    async def update(self, location_id: str, changes: Dict[str, Any]) -> Location:
        """Move a pin. Only x and y are updatable; omitted or null axes keep their value."""
        await self.store.require(Location, location_id)

        coordinates = {
            axis: changes[axis]
            for axis in ("x", "y")
            if changes.get(axis) is not None
        }
        validation.validate_location_update(coordinates)

        if not coordinates:
            return await self.store.require(Location, location_id, LOCATION_WITH_RELATIONS)

        return await self.store.update(
            Location, location_id, coordinates, include=LOCATION_WITH_RELATIONS
        )

    async def delete(self, location_id: str) -> None:
        await self.store.delete(Location, location_id)
