"""
DeskMap - Search Router
"""
from typing import Optional

from fastapi import APIRouter, Depends

from deskmap.schemas.employee import EmployeeDetail
from deskmap.schemas.search import SearchResponse
from deskmap.services.auth import Identity, require_authenticated
from deskmap.services.search import build_search_filter, search_employees
from deskmap.services.store import EntityStore, get_store

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
async def search(
    query: Optional[str] = None,
    state: Optional[str] = None,
    city: Optional[str] = None,
    building: Optional[str] = None,
    floor: Optional[str] = None,
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """
    Search employees.

    - **query**: matches name or email (case-insensitive) or phone
    - **state**, **city**, **building**, **floor**: the employee must have a
      location on a map matching every supplied filter
    """
    search_filter = build_search_filter(query, state, city, building, floor)
    employees = await search_employees(store, search_filter)
    return SearchResponse(
        results=[EmployeeDetail.model_validate(e) for e in employees],
        count=len(employees)
    )
