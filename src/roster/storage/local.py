"""Local filesystem store for employee photos."""

import uuid
from pathlib import Path
from urllib.parse import quote

import aiofiles

from ..logging import get_logger

logger = get_logger(__name__)

PHOTO_FOLDER = "employee-photos"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class StorageException(Exception):
    """Base exception for storage operations."""

    pass


class SecurityException(StorageException):
    """Security-related storage exception."""

    pass


class LocalPhotoStore:
    """Writes uploaded photos under ``base_path`` and serves them from ``public_url_base``."""

    def __init__(self, base_path: Path | str, public_url_base: str = "/uploads"):
        self.base_path = Path(base_path).resolve()
        self.public_url_base = public_url_base
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_safe_file_path(self, key: str) -> Path:
        """Get file path with security validation."""
        file_path = (self.base_path / key).resolve()
        try:
            file_path.relative_to(self.base_path)
        except ValueError as e:
            raise SecurityException(f"Path traversal detected: {key}") from e
        return file_path

    def _get_public_url(self, key: str) -> str:
        encoded_key = quote(key, safe="/")
        return f"{self.public_url_base.rstrip('/')}/{encoded_key}"

    @staticmethod
    def generate_key(content_type: str) -> str:
        extension = _EXTENSIONS.get(content_type.lower(), "")
        return f"{PHOTO_FOLDER}/{uuid.uuid4().hex}{extension}"

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Write ``content`` at ``key`` and return its public URL."""
        logger.info("Uploading file", key=key, content_type=content_type, size=len(content))
        file_path = self._get_safe_file_path(key)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"File system error uploading {key}: {e}")
            raise StorageException(f"Failed to write file: {e}") from e

        return self._get_public_url(key)

    async def save_photo(self, content: bytes, content_type: str) -> str:
        return await self.upload(self.generate_key(content_type), content, content_type)
