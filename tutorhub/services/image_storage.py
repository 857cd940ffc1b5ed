"""
TutorHub Backend — Image Storage (Upload Adapter)
==================================================

What:  Validates and stores profile images uploaded at registration and
       hands back a public URL for them.
How:   Extension, size and MIME checks, then an async write to
       `storage_root/YYYY/MM/DD/<uuid>.<ext>`. Files are served back by the
       `/uploads/{path}` route.
Who:   Called by PrincipalService.register when the form carries an image.

Security Model:
    1. Extension check:   rejects obviously wrong files before reading content
    2. Size check:        empty and oversized uploads are rejected
    3. MIME check:        python-magic inspects the header bytes
    4. UUID filename:     no user input ever reaches the file system path
"""

import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from tutorhub.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}

# Prefix under which stored files are served
UPLOADS_PREFIX = "/uploads"


@dataclass(frozen=True)
class StoredImage:
    path: str          # absolute path on disk
    relative_path: str
    url: str           # public URL persisted as profilePicture


class ImageStorage:
    """
    Manages the lifecycle of uploaded images.

    Directory Structure:
        storage/
        └── 2024/
            └── 01/
                └── 15/
                    ├── a1b2c3d4-5678.jpg
                    └── e5f6g7h8-9012.png
    """

    def __init__(
        self,
        storage_root: str,
        public_base_url: str = "",
        max_file_size: int = 10_485_760,
    ):
        self.storage_root = Path(storage_root).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        self.max_file_size = max_file_size
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("ImageStorage initialized with storage_root=%s", self.storage_root)

    def validate_extension(self, filename: str) -> str:
        """Returns the normalized extension (lowercase, with dot) or raises ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, size: int) -> None:
        if size == 0:
            raise ValidationError(message="Uploaded image is empty.", field="image")

        if size > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"Image is too large. Maximum size is {max_mb:.0f}MB.",
                field="image",
                context={"max_size": self.max_file_size, "actual_size": size},
            )

    def validate_mime_type(self, content: bytes) -> str:
        """Detects the real content type from the header bytes."""
        # Imported lazily: libmagic is a system library and only uploads need it
        import magic

        mime_type = magic.from_buffer(content[:2048], mime=True)
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message=(
                    f"File content type '{mime_type}' is not supported. "
                    f"The file must be a valid image (PNG or JPEG)."
                ),
                field="image",
                context={"detected_mime": mime_type},
            )
        return mime_type

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        now = datetime.now(timezone.utc)
        relative_path = f"{now.strftime('%Y/%m/%d')}/{uuid.uuid4()}{extension}"
        return self.storage_root / relative_path, relative_path

    def url_for(self, relative_path: str) -> str:
        return f"{self.public_base_url}{UPLOADS_PREFIX}/{relative_path}"

    def resolve(self, relative_path: str) -> Optional[Path]:
        """Absolute path for a stored file, or None if it would escape the storage root."""
        full_path = (self.storage_root / relative_path).resolve()
        if not full_path.is_relative_to(self.storage_root):
            return None
        return full_path

    async def store(self, filename: str, content: bytes) -> StoredImage:
        """
        Validate and write an uploaded image.

        Raises:
            ValidationError: bad extension, size or content type (400)
            FileStorageError: the write itself failed (500)
        """
        ext = self.validate_extension(filename)
        self.validate_size(len(content))
        self.validate_mime_type(content)

        absolute_path, relative_path = self._generate_storage_path(ext)
        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(context={"path": str(absolute_path), "os_error": str(e)})

        logger.info("Image stored: %s (%d bytes)", relative_path, len(content))
        return StoredImage(
            path=str(absolute_path),
            relative_path=relative_path,
            url=self.url_for(relative_path),
        )

    async def remove(self, file_path: str) -> None:
        """
        Best-effort delete, used to undo a store when the surrounding
        operation fails. Never raises.
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))
