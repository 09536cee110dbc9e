"""
DeskMap - Employee Search

Composes an optional free-text term with optional locale filters into one
query over Employee -> Location -> Map.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import and_, or_

from deskmap.models.employee import Employee
from deskmap.models.location import Location
from deskmap.models.map import Map
from deskmap.services.store import EMPLOYEE_WITH_MAPS, EntityStore

logger = logging.getLogger(__name__)

LOCALE_FIELDS = ("state", "city", "building", "floor")


@dataclass(frozen=True)
class SearchFilter:
    """Search criteria. None means the criterion was not supplied."""
    query: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    building: Optional[str] = None
    floor: Optional[str] = None

    @property
    def locale(self) -> dict:
        """Supplied locale filters only."""
        return {
            field: getattr(self, field)
            for field in LOCALE_FIELDS
            if getattr(self, field) is not None
        }

    @property
    def is_empty(self) -> bool:
        return self.query is None and not self.locale


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def build_search_filter(
    query: Optional[str] = None,
    state: Optional[str] = None,
    city: Optional[str] = None,
    building: Optional[str] = None,
    floor: Optional[str] = None
) -> SearchFilter:
    """Build a SearchFilter from raw request values; blank values count as absent."""
    return SearchFilter(
        query=_clean(query),
        state=_clean(state),
        city=_clean(city),
        building=_clean(building),
        floor=_clean(floor),
    )


def employee_criteria(search: SearchFilter) -> list:
    """
    WHERE clauses for a SearchFilter.

    - term: name or email contains it (case-insensitive), or phone contains it
    - locale: at least one of the employee's locations sits on a map matching
      ALL supplied locale filters; filters never combine across two locations
    """
    criteria = []

    if search.query is not None:
        term = search.query
        criteria.append(
            or_(
                Employee.name.icontains(term, autoescape=True),
                Employee.email.icontains(term, autoescape=True),
                Employee.phone.contains(term, autoescape=True),
            )
        )

    if search.locale:
        map_matches = and_(
            *[
                getattr(Map, field).icontains(value, autoescape=True)
                for field, value in search.locale.items()
            ]
        )
        criteria.append(Employee.locations.any(Location.map.has(map_matches)))

    return criteria


async def search_employees(store: EntityStore, search: SearchFilter) -> List[Employee]:
    """Employees matching the filter, by name ascending, each with locations and maps."""
    employees = await store.find_many(
        Employee,
        where=employee_criteria(search),
        order_by=(Employee.name, Employee.created_at, Employee.id),
        include=EMPLOYEE_WITH_MAPS,
    )
    logger.debug(f"Search {search} matched {len(employees)} employees")
    return employees
