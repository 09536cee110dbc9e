"""
DeskMap - Search Pydantic Schemas
"""
from typing import List

from pydantic import BaseModel

from deskmap.schemas.employee import EmployeeDetail


class SearchResponse(BaseModel):
    """Matching employees; count is employees, not locations."""
    results: List[EmployeeDetail]
    count: int
