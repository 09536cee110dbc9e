"""
DeskMap - Maps Router
Floor-plan upload and locale metadata
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from deskmap.errors import UnexpectedStoreError
from deskmap.models.map import Map
from deskmap.schemas.base import MessageResponse
from deskmap.schemas.map import MapDetail, MapResponse
from deskmap.services import validation
from deskmap.services.auth import Identity, require_admin, require_authenticated
from deskmap.services.store import MAP_WITH_EMPLOYEES, EntityStore, get_store
from deskmap.services.uploads import ImageStorage, get_image_storage, is_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maps", tags=["maps"])


@router.get("", response_model=List[MapResponse])
async def list_maps(
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """List all maps ordered by state, city, building."""
    return await store.find_many(Map, order_by=(Map.state, Map.city, Map.building))


@router.get("/{map_id}", response_model=MapDetail)
async def get_map(
    map_id: str,
    store: EntityStore = Depends(get_store),
    identity: Identity = Depends(require_authenticated)
):
    """Get a map with its positioned employees."""
    return await store.require(Map, map_id, MAP_WITH_EMPLOYEES)


@router.post("", response_model=MapResponse, status_code=status.HTTP_201_CREATED)
async def create_map(
    name: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    building: Optional[str] = Form(None),
    floor: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """
    Create a new map by uploading a floor plan image.

    - **name**: Map name (e.g., "HQ 1st floor")
    - **state**, **city**, **building**, **floor**: locale metadata
    - **image**: Floor plan image (JPG, JPEG, PNG)
    """
    payload = {"name": name, "state": state, "city": city, "building": building, "floor": floor}
    validation.validate_map_create(payload, has_image=is_upload(image))

    image_url = await images.save(image)
    try:
        map_obj = await store.create(Map, {**payload, "image_url": image_url})
    except UnexpectedStoreError:
        await images.remove(image_url)
        raise

    logger.info(f"Map '{map_obj.name}' created by {identity.email}")
    return map_obj


@router.put("/{map_id}", response_model=MapResponse)
async def update_map(
    map_id: str,
    name: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    building: Optional[str] = Form(None),
    floor: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """Update any subset of map fields, optionally replacing the image."""
    existing = await store.require(Map, map_id)
    previous_image = existing.image_url

    fields = {"name": name, "state": state, "city": city, "building": building, "floor": floor}
    changes = {field: value for field, value in fields.items() if value is not None}
    validation.validate_map_update(changes)

    if is_upload(image):
        changes["image_url"] = await images.save(image)

    try:
        map_obj = await store.update(Map, map_id, changes)
    except UnexpectedStoreError:
        await images.remove(changes.get("image_url"))
        raise

    if "image_url" in changes:
        await images.remove(previous_image)

    logger.info(f"Map '{map_obj.name}' updated by {identity.email}")
    return map_obj


@router.delete("/{map_id}", response_model=MessageResponse)
async def delete_map(
    map_id: str,
    store: EntityStore = Depends(get_store),
    images: ImageStorage = Depends(get_image_storage),
    identity: Identity = Depends(require_admin)
):
    """Delete a map, its locations and its image file."""
    map_obj = await store.delete(Map, map_id)
    await images.remove(map_obj.image_url)

    logger.info(f"Map '{map_obj.name}' deleted by {identity.email}")
    return MessageResponse(message="Map deleted successfully")
