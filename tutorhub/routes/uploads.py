"""
TutorHub Backend — Uploaded Image Route
========================================

What:  Serves profile images stored at registration.
Who:   Clients following a `profilePicture` URL.

Security:
    Paths are resolved against the storage root; anything that would land
    outside it (`../` segments, absolute paths) is rejected before touching
    the file system.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from tutorhub.dependencies import get_image_storage
from tutorhub.exceptions import NotFoundError, ValidationError
from tutorhub.schemas.common import ErrorResponse
from tutorhub.services.image_storage import UPLOADS_PREFIX, ImageStorage

router = APIRouter(prefix=UPLOADS_PREFIX, tags=["Uploads"])


@router.get(
    "/{file_path:path}",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid file path", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded image",
)
async def serve_upload(
    file_path: str,
    storage: ImageStorage = Depends(get_image_storage),
) -> FileResponse:
    full_path = storage.resolve(file_path)
    if full_path is None:
        raise ValidationError(message="Invalid file path")

    if not full_path.is_file():
        raise NotFoundError(resource="File", resource_id=file_path)

    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
