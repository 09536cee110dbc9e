"""
DeskMap - Image Storage
Stores uploaded floor plans and pictures, returns a public reference
"""
import os
import uuid
import logging
from typing import Optional

import aiofiles
import aiofiles.os
from fastapi import Depends, UploadFile

from deskmap.config import Settings, get_settings
from deskmap.errors import InvalidImageError

logger = logging.getLogger(__name__)


class ImageStorage:
    """Validate and persist image uploads under a generated filename."""

    def __init__(self, settings: Settings):
        self.directory = settings.upload_dir
        self.url_prefix = settings.upload_url_prefix.rstrip("/")
        self.max_size = settings.max_upload_size
        self.allowed_extensions = {ext.lower() for ext in settings.allowed_image_extensions}

    def validate_extension(self, filename: Optional[str]) -> str:
        file_ext = os.path.splitext(filename or "")[1].lower()
        if file_ext not in self.allowed_extensions:
            raise InvalidImageError(
                f"Invalid file type. Allowed: {', '.join(sorted(self.allowed_extensions))}"
            )
        return file_ext

    def validate_size(self, size: int) -> None:
        if size > self.max_size:
            raise InvalidImageError(
                f"File too large. Maximum size: {self.max_size // (1024 * 1024)}MB"
            )

    async def save(self, upload: UploadFile) -> str:
        """Validate and write an upload; returns its public reference (e.g. /uploads/<hex>.png)."""
        file_ext = self.validate_extension(upload.filename)

        content = await upload.read()
        self.validate_size(len(content))

        os.makedirs(self.directory, exist_ok=True)
        filename = f"{uuid.uuid4().hex}{file_ext}"
        file_path = os.path.join(self.directory, filename)

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        logger.info(f"Image saved: {file_path} ({len(content)} bytes)")
        return f"{self.url_prefix}/{filename}"

    def path_for(self, reference: Optional[str]) -> Optional[str]:
        """Local path for a reference we own; None for external URLs."""
        if not reference or not reference.startswith(f"{self.url_prefix}/"):
            return None
        filename = os.path.basename(reference)
        if not filename:
            return None
        return os.path.join(self.directory, filename)

    async def remove(self, reference: Optional[str]) -> None:
        """Delete a stored image. External URLs and missing files are ignored."""
        file_path = self.path_for(reference)
        if file_path is None or not os.path.exists(file_path):
            return
        await aiofiles.os.remove(file_path)
        logger.info(f"Deleted image: {file_path}")


def is_upload(value) -> bool:
    """True when a multipart field actually carried a file."""
    return value is not None and bool(getattr(value, "filename", None))


async def get_image_storage(settings: Settings = Depends(get_settings)) -> ImageStorage:
    """Dependency providing image storage configured from settings."""
    return ImageStorage(settings)
