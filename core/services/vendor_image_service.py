# =============================================================================
# core/services/vendor_image_service.py - Vendor Gallery Management
# =============================================================================
# Vendor images live in two places: the object in the vendor_images bucket
# and a vendor_images row pointing at it. This service keeps them in step
# and enforces at most one primary image per vendor.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import drop_none
from app.config import settings
from app.exceptions import (
    BadRequestError,
    DatabaseError,
    ResourceNotFoundError,
)
from core.models.vendor import VendorImageUpdate
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

IMAGE_TABLE = "vendor_images"


class VendorImageService:
    """Service for vendor image rows and their stored files."""

    @staticmethod
    def list_images(vendor_id: str | UUID) -> list[dict[str, Any]]:
        """All images of a vendor, sort_order first, newest within a slot."""
        client = SupabaseClient.get_client()
        images = (
            client.table(IMAGE_TABLE)
            .select("*")
            .eq("vendor_id", str(vendor_id))
            .order("sort_order")
            .order("created_at", desc=True)
            .execute()
        ).data or []

        for image in images:
            if image.get("storage_path"):
                image["image_url"] = StorageService.public_url(
                    settings.VENDOR_IMAGE_BUCKET, image["storage_path"]
                )
        return images

    @staticmethod
    def _clear_primary(vendor_id: str | UUID) -> None:
        client = SupabaseClient.get_client()
        try:
            client.table(IMAGE_TABLE).update({"is_primary": False}).eq("vendor_id", str(vendor_id)).execute()
        except Exception as e:
            logger.warning(f"Failed to clear primary image for vendor {vendor_id}: {e}")

    @staticmethod
    def upload_image(
        vendor_id: str | UUID,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
        alt_text: str | None = None,
        is_primary: bool = False,
        sort_order: int = 0,
    ) -> dict[str, Any]:
        """
        Store an image file and record it.

        The file goes up first. If the row insert then fails, the file is
        removed again so the bucket holds no orphans.

        Returns:
            The new vendor_images row

        Raises:
            BadRequestError: No file content
            InvalidFileTypeError / FileTooLargeError: Validation failed
            StorageUploadError: Upload failed
            DatabaseError: Row insert failed (file already cleaned up)
        """
        if not content:
            raise BadRequestError("No file provided", suggestion="Send the image as multipart field 'file'")

        ext = StorageService.validate_image(filename, content, settings.VENDOR_IMAGE_MAX_MB)
        path = StorageService.unique_name(str(vendor_id), ext)
        bucket = settings.VENDOR_IMAGE_BUCKET

        StorageService.upload_image(bucket, path, content, content_type=content_type)

        if is_primary:
            VendorImageService._clear_primary(vendor_id)

        row = {
            "vendor_id": str(vendor_id),
            "storage_path": path,
            "alt_text": alt_text or None,
            "is_primary": is_primary,
            "sort_order": sort_order,
            "status": "approved",
        }
        try:
            image = SupabaseClient.insert_one(IMAGE_TABLE, row)
        except Exception as e:
            logger.error(f"Image row insert failed for vendor {vendor_id}, removing {path}: {e}")
            StorageService.remove(bucket, [path])
            raise DatabaseError("save image", str(e))

        image["image_url"] = StorageService.public_url(bucket, path)
        logger.info(f"Uploaded image {image.get('id')} for vendor {vendor_id}")
        return image

    @staticmethod
    def _vendor_image(vendor_id: str | UUID, image_id: str | UUID, columns: str = "*") -> dict[str, Any]:
        """
        Fetch an image that belongs to the vendor.

        Raises:
            ResourceNotFoundError: No such image for this vendor
        """
        client = SupabaseClient.get_client()
        rows = (
            client.table(IMAGE_TABLE)
            .select(columns)
            .eq("id", str(image_id))
            .eq("vendor_id", str(vendor_id))
            .limit(1)
            .execute()
        ).data
        if not rows:
            raise ResourceNotFoundError("Image", image_id)
        return rows[0]

    @staticmethod
    def delete_image(vendor_id: str | UUID, image_id: str | None) -> None:
        """
        Delete one of a vendor's images, row and file.

        A storage failure is logged and the row is still deleted.

        Raises:
            BadRequestError: image_id missing
            ResourceNotFoundError: No such image for this vendor
        """
        if not image_id:
            raise BadRequestError("image_id is required", suggestion="Pass ?image_id=<uuid>")

        image = VendorImageService._vendor_image(vendor_id, image_id, columns="id, storage_path")

        StorageService.remove(settings.VENDOR_IMAGE_BUCKET, [image.get("storage_path")])
        client = SupabaseClient.get_client()
        (
            client.table(IMAGE_TABLE)
            .delete()
            .eq("id", str(image_id))
            .eq("vendor_id", str(vendor_id))
            .execute()
        )
        logger.info(f"Deleted image {image_id} of vendor {vendor_id}")

    @staticmethod
    def update_image(
        vendor_id: str | UUID,
        image_id: str | UUID,
        request: VendorImageUpdate,
    ) -> dict[str, Any]:
        """
        Update image metadata. Setting is_primary clears it on the vendor's other images.

        The image is looked up first, so an unknown id leaves the vendor's
        primary image untouched.

        Raises:
            ResourceNotFoundError: Image not found for this vendor
        """
        data = drop_none(request.model_dump(exclude_unset=True))
        if not data:
            raise BadRequestError("Nothing to update", suggestion="Send alt_text, is_primary, sort_order or status")

        VendorImageService._vendor_image(vendor_id, image_id, columns="id")

        if data.get("is_primary") is True:
            VendorImageService._clear_primary(vendor_id)

        client = SupabaseClient.get_client()
        rows = (
            client.table(IMAGE_TABLE)
            .update(data)
            .eq("id", str(image_id))
            .eq("vendor_id", str(vendor_id))
            .execute()
        ).data
        if not rows:
            raise ResourceNotFoundError("Image", image_id)

        return rows[0]
