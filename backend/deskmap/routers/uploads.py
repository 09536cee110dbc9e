"""
DeskMap - Uploaded Image Router
"""
import os

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from deskmap.config import get_settings
from deskmap.services.uploads import ImageStorage, get_image_storage

settings = get_settings()

router = APIRouter(prefix=settings.upload_url_prefix.rstrip("/"), tags=["uploads"])


@router.get("/{filename}")
async def get_image(filename: str, images: ImageStorage = Depends(get_image_storage)):
    """Serve stored map images and employee pictures."""
    file_path = images.path_for(f"{images.url_prefix}/{os.path.basename(filename)}")

    if file_path is None or not os.path.isfile(file_path):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Image not found"
        )

    return FileResponse(file_path)
