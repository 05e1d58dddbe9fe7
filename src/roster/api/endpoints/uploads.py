"""Employee photo upload endpoint."""

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from ...config import settings
from ...logging import get_logger
from ...storage import StorageException

router = APIRouter(tags=["uploads"])
logger = get_logger(__name__)


@router.post("/upload")
async def upload_employee_photo(request: Request, photo: UploadFile | None = File(None)) -> dict:
    """
    Store an employee profile picture and return its URL.

    The returned URL is what clients put in ``employee_photo`` when adding or
    updating an employee.

    Raises:
        HTTPException: 400 when no acceptable image is sent, 413 when too large
    """
    content_type = (photo.content_type or "").lower() if photo is not None else ""
    if photo is None or content_type not in settings.allowed_upload_content_types:
        raise HTTPException(
            status_code=400,
            detail='No file uploaded. Send an image in a field named "photo".',
        )

    try:
        content = await photo.read()
    except Exception as e:
        logger.error("Failed to read uploaded file", error=str(e), filename=photo.filename)
        raise HTTPException(status_code=400, detail="Failed to read uploaded file") from e

    if len(content) > settings.max_upload_size:
        raise HTTPException(
            status_code=413,
            detail=(
                f"File size {len(content)} bytes exceeds maximum allowed size "
                f"of {settings.max_upload_size} bytes"
            ),
        )

    store = request.app.state.photo_store
    try:
        url = await store.save_photo(content, content_type)
    except StorageException as e:
        logger.error("Photo upload failed", error=str(e), filename=photo.filename)
        raise HTTPException(status_code=500, detail="Upload failed") from e

    logger.info("Photo uploaded", url=url, size=len(content))
    return {"url": url}
