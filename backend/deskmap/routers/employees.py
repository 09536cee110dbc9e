"""
DeskMap - Employees Router
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from deskmap.errors import DuplicateEmailError, StoreConflictError, UnexpectedStoreError
from deskmap.models.employee import Employee
from deskmap.schemas.base import MessageResponse
from deskmap.schemas.employee import EmployeeDetail, EmployeeResponse
from deskmap.services import validation
from deskmap.services.auth import Identity, require_admin, require_authenticated
from deskmap.services.store import EMPLOYEE_WITH_MAPS, EntityStore, get_store
from deskmap.services.uploads import ImageStorage, get_image_storage, is_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=List[EmployeeDetail])
async def list_employees(
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """List all employees by name, with their locations and maps."""
    return await store.find_many(
        Employee,
        order_by=(Employee.name, Employee.created_at, Employee.id),
        include=EMPLOYEE_WITH_MAPS
    )


@router.get("/{employee_id}", response_model=EmployeeDetail)
async def get_employee(
    employee_id: str,
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """Get an employee with their locations."""
    return await store.require(Employee, employee_id, EMPLOYEE_WITH_MAPS)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    picture_url: Optional[str] = Form(None, alias="pictureUrl"),
    picture: Optional[UploadFile] = File(None),
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """
    Create a directory entry.

    - **name**, **phone**, **email**: required; email must be unused
    - **picture**: optional image upload, wins over **pictureUrl**
    """
    payload = {"name": name, "phone": phone, "email": email}
    validation.validate_employee_create(payload)
    validation.check_email_available(email, await store.find_employee_id_by_email(email))

    if is_upload(picture):
        picture_url = await images.save(picture)

    try:
        employee = await store.create(Employee, {**payload, "picture_url": picture_url})
    except StoreConflictError as e:
        # A concurrent create took the email after the check above
        await images.remove(picture_url)
        raise DuplicateEmailError(email) from e
    except UnexpectedStoreError:
        await images.remove(picture_url)
        raise

    logger.info(f"Employee '{employee.email}' created by {identity.email}")
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    picture_url: Optional[str] = Form(None, alias="pictureUrl"),
    picture: Optional[UploadFile] = File(None),
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """Update any subset of employee fields; a changed email is re-checked for uniqueness."""
    existing = await store.require(Employee, employee_id)
    previous_picture = existing.picture_url
    current_email = existing.email

    fields = {"name": name, "phone": phone, "email": email}
    changes = {field: value for field, value in fields.items() if value is not None}
    validation.validate_employee_update(changes)

    if email is not None and email != current_email:
        validation.check_email_available(
            email, await store.find_employee_id_by_email(email), current_id=employee_id
        )

    if is_upload(picture):
        changes["picture_url"] = await images.save(picture)
    elif picture_url is not None:
        changes["picture_url"] = picture_url

    try:
        employee = await store.update(Employee, employee_id, changes)
    except StoreConflictError as e:
        if is_upload(picture):
            await images.remove(changes.get("picture_url"))
        raise DuplicateEmailError(changes.get("email", current_email)) from e
    except UnexpectedStoreError:
        if is_upload(picture):
            await images.remove(changes.get("picture_url"))
        raise

    if changes.get("picture_url", previous_picture) != previous_picture:
        await images.remove(previous_picture)

    logger.info(f"Employee '{employee.email}' updated by {identity.email}")
    return employee


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str,
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """Delete an employee and their locations."""
    employee = await store.delete(Employee, employee_id)
    await images.remove(employee.picture_url)

    logger.info(f"Employee '{employee.email}' deleted by {identity.email}")
    return MessageResponse(message="Employee deleted successfully")
