# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles image upload/removal in Supabase Storage for vendor galleries
# and beauty product detail images.
# =============================================================================

import logging
import mimetypes
import secrets
import time

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    Validates images, uploads them, and cleans up objects whose database
    row could not be written.
    """

    @staticmethod
    def file_extension(filename: str | None) -> str:
        """Lower-cased extension without the dot ("" when missing)."""
        if not filename or "." not in filename:
            return ""
        return filename.rsplit(".", 1)[-1].lower()

    @staticmethod
    def validate_image(filename: str | None, content: bytes, max_mb: int) -> str:
        """
        Check extension and size of an uploaded image.

        Args:
            filename: Original filename from the multipart part
            content: File bytes
            max_mb: Size limit in MB

        Returns:
            The validated extension

        Raises:
            InvalidFileTypeError: Extension not in ALLOWED_IMAGE_EXTENSIONS
            FileTooLargeError: File over max_mb
        """
        allowed = settings.allowed_image_extensions_list
        ext = StorageService.file_extension(filename)
        if ext not in allowed:
            raise InvalidFileTypeError(filename or "", allowed)

        size_bytes = len(content)
        if size_bytes > max_mb * 1024 * 1024:
            raise FileTooLargeError(size_bytes / (1024 * 1024), max_mb)

        return ext

    @staticmethod
    def unique_name(prefix: str, ext: str) -> str:
        """
        Collision-resistant object path: {prefix}/{epoch_ms}_{random6}.{ext}

        Example:
            unique_name("550e8400-...", "png")  # "550e8400-.../1718000000000_a1b2c3.png"
        """
        return f"{prefix}/{int(time.time() * 1000)}_{secrets.token_hex(3)}.{ext}"

    @staticmethod
    def upload_image(
        bucket: str,
        path: str,
        content: bytes,
        content_type: str | None = None,
        upsert: bool = False,
    ) -> str:
        """
        Upload image bytes to storage.

        Returns:
            Storage path where file was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        content_type = content_type or mimetypes.guess_type(path)[0] or "application/octet-stream"

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "true" if upsert else "false",
                }
            )
            logger.info(f"Uploaded image to storage: {bucket}/{path}")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

    @staticmethod
    def remove(bucket: str, paths: list[str]) -> bool:
        """
        Remove objects, best effort.

        Failures are logged and reported as False; callers use this for
        cleanup where the database state matters more than the object.
        """
        paths = [p for p in paths if p]
        if not paths:
            return True

        client = SupabaseClient.get_client()
        try:
            client.storage.from_(bucket).remove(paths)
            logger.info(f"Removed from storage: {bucket}/{paths}")
            return True
        except Exception as e:
            logger.warning(f"Storage removal failed for {bucket}/{paths}: {e}")
            return False

    @staticmethod
    def public_url(bucket: str, path: str) -> str:
        return SupabaseClient.public_url(bucket, path)
