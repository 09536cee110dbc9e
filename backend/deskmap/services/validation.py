"""
DeskMap - Validation Rules

Pure checks run before any store mutation. Each function returns None when
the candidate payload is accepted and raises the specific DirectoryError
otherwise; none of them touch the database.
"""
from typing import Mapping, Optional, Sequence

from deskmap.errors import (
    CoordinateRangeError,
    DuplicateEmailError,
    MissingFieldError,
    MissingImageError,
)

MAP_REQUIRED_FIELDS = ("name", "state", "city", "building", "floor")
EMPLOYEE_REQUIRED_FIELDS = ("name", "phone", "email")
LOCATION_REQUIRED_FIELDS = ("map_id", "employee_id", "x", "y")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: Mapping[str, object], fields: Sequence[str]) -> None:
    """Raise MissingFieldError listing every required field that is absent or blank."""
    missing = [field for field in fields if _is_blank(payload.get(field))]
    if missing:
        raise MissingFieldError(missing)


def reject_blank_updates(changes: Mapping[str, object]) -> None:
    """A partial update may omit a field, but may not blank it out."""
    blank = [field for field, value in changes.items() if value is not None and _is_blank(value)]
    if blank:
        raise MissingFieldError(blank)


def validate_map_create(payload: Mapping[str, Optional[str]], has_image: bool) -> None:
    require_fields(payload, MAP_REQUIRED_FIELDS)
    if not has_image:
        raise MissingImageError()


def validate_map_update(changes: Mapping[str, Optional[str]]) -> None:
    reject_blank_updates(changes)


def validate_employee_create(payload: Mapping[str, Optional[str]]) -> None:
    require_fields(payload, EMPLOYEE_REQUIRED_FIELDS)


def validate_employee_update(changes: Mapping[str, Optional[str]]) -> None:
    reject_blank_updates(changes)


def check_email_available(
    email: str,
    holder_id: Optional[str],
    current_id: Optional[str] = None
) -> None:
    """
    Enforce email uniqueness.

    Args:
        email: Candidate email
        holder_id: Id of the employee already using this email, if any
        current_id: Id of the employee being updated (None on create)
    """
    if holder_id is not None and holder_id != current_id:
        raise DuplicateEmailError(email)


def check_coordinate(axis: str, value: Optional[float]) -> None:
    """Accept None (not supplied) or a value in the closed interval [0, 1]."""
    if value is None:
        return
    # Written so NaN fails the comparison and is rejected
    if not (0.0 <= value <= 1.0):
        raise CoordinateRangeError(axis)


def validate_coordinates(x: Optional[float], y: Optional[float]) -> None:
    check_coordinate("x", x)
    check_coordinate("y", y)


def validate_location_create(payload: Mapping[str, object]) -> None:
    require_fields(payload, LOCATION_REQUIRED_FIELDS)
    validate_coordinates(payload.get("x"), payload.get("y"))


def validate_location_update(changes: Mapping[str, Optional[float]]) -> None:
    validate_coordinates(changes.get("x"), changes.get("y"))
