# =============================================================================
# core/services/storage_service.py - Image File Storage
# =============================================================================
# Handles saving and removing uploaded images on local disk.
# Files are written under UPLOAD_DIR and served by the app at /uploads.
# =============================================================================

import logging
import secrets
import time
from pathlib import Path

from app.config import settings
from app.exceptions import FileTooLargeError, InvalidFileTypeError

logger = logging.getLogger(__name__)

# Public URL prefix the upload directory is mounted under
UPLOADS_URL_PREFIX = "/uploads/"


class StorageService:
    """
    Service for image file storage.

    Validates uploads (extension, content type, size), writes them under
    a generated name and deletes them again when an artwork goes away.
    """

    def __init__(
        self,
        upload_dir: str | Path,
        max_bytes: int,
        allowed_extensions: list[str],
        allowed_content_types: list[str],
    ):
        self.upload_dir = Path(upload_dir).resolve()
        self.max_bytes = max_bytes
        self.allowed_extensions = [ext.lower() for ext in allowed_extensions]
        self.allowed_content_types = [ct.lower() for ct in allowed_content_types]

    @classmethod
    def from_settings(cls) -> "StorageService":
        return cls(
            upload_dir=settings.UPLOAD_DIR,
            max_bytes=settings.max_upload_size_bytes,
            allowed_extensions=settings.allowed_extensions_list,
            allowed_content_types=settings.allowed_content_types_list,
        )

    @property
    def max_mb(self) -> int:
        return max(1, self.max_bytes // (1024 * 1024))

    def validate(self, filename: str, content_type: str | None) -> str:
        """
        Check an upload's extension and declared content type.

        Both must be on their allowlists.

        Returns:
            The lower-cased extension (e.g. ".png")

        Raises:
            InvalidFileTypeError: If either check fails
        """
        ext = Path(filename or "").suffix.lower()
        ct = (content_type or "").split(";")[0].strip().lower()

        if ext not in self.allowed_extensions or ct not in self.allowed_content_types:
            raise InvalidFileTypeError(filename, content_type, self.allowed_extensions)
        return ext

    def generate_filename(self, ext: str) -> str:
        """Unique stored filename: art-<epoch millis>-<random><ext>."""
        millis = int(time.time() * 1000)
        return f"art-{millis}-{secrets.randbelow(1_000_000_000)}{ext}"

    def save_image(self, filename: str, content_type: str | None, content: bytes) -> str:
        """
        Validate and store an uploaded image.

        Args:
            filename: Original client filename (only its extension is kept)
            content_type: Declared MIME type
            content: File bytes

        Returns:
            Public image URL, e.g. "/uploads/art-1705312200000-123456789.png"

        Raises:
            InvalidFileTypeError: If the file isn't an allowed image type
            FileTooLargeError: If the file exceeds the size limit
        """
        ext = self.validate(filename, content_type)

        if len(content) > self.max_bytes:
            raise FileTooLargeError(self.max_mb)

        self.upload_dir.mkdir(parents=True, exist_ok=True)

        stored_name = self.generate_filename(ext)
        path = self.upload_dir / stored_name
        while path.exists():
            stored_name = self.generate_filename(ext)
            path = self.upload_dir / stored_name

        path.write_bytes(content)
        logger.info(f"Stored image {stored_name} ({len(content)} bytes)")

        return f"{UPLOADS_URL_PREFIX}{stored_name}"

    def path_for(self, image_url: str) -> Path | None:
        """
        Map a public image URL back to its file path.

        Returns None for URLs that don't point inside the upload directory.
        """
        if not image_url or not image_url.startswith(UPLOADS_URL_PREFIX):
            return None

        name = image_url[len(UPLOADS_URL_PREFIX):]
        path = (self.upload_dir / name).resolve()
        if path.parent != self.upload_dir:
            return None
        return path

    def delete_image(self, image_url: str) -> bool:
        """
        Remove a stored image. Missing files are not an error.

        Returns:
            True if a file was removed
        """
        path = self.path_for(image_url)
        if path is None:
            logger.warning(f"Not deleting image outside upload dir: {image_url}")
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            return False

        logger.info(f"Deleted image {path.name}")
        return True
