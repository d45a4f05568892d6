# =============================================================================
# app/routers/manager/vendors.py - Vendor Administration
# =============================================================================
# Listing, CRUD, advertisement settings, search embeddings, partner
# outreach SMS and image management for vendors.
#
# Literal paths (/count, /send-sms, /category/...) are declared before
# /{vendor_id} so they are not captured by it.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status

from app.auth import AuthUser, require_manager
from app.responses import counted, ok, paginated
from core.models.vendor import (
    AdvertisementUpdate,
    EmbeddingRequest,
    SmsSendRequest,
    VendorCreate,
    VendorImageUpdate,
    VendorUpdate,
)
from core.services.vendor_image_service import VendorImageService
from core.services.vendor_service import VendorService

logger = logging.getLogger(__name__)

router = APIRouter()

VendorId = Annotated[UUID, Path(description="Vendor UUID")]


# =============================================================================
# Listing
# =============================================================================

@router.get("")
async def list_vendors(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: Annotated[str | None, Query(description="Matches name, description and phone")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    category_id: str | None = None,
    is_advertisement: Annotated[bool | None, Query(description="true: ad running; false: expired or never set")] = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """
    List vendors with their categories.

    Default order is priority_score descending.
    """
    vendors, total = VendorService.list_for_admin(
        page=page,
        limit=limit,
        search=search,
        status=status_filter,
        category_id=category_id,
        is_advertisement=is_advertisement,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return paginated(vendors, page, limit, total)


@router.get("/count")
async def count_vendors(
    search: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    category_id: str | None = None,
    is_advertisement: bool | None = None,
):
    """Count vendors matching the list filters."""
    return counted(VendorService.count_for_admin(
        search=search,
        status=status_filter,
        category_id=category_id,
        is_advertisement=is_advertisement,
    ))


@router.get("/category/{category_id}")
async def list_vendors_by_category(
    category_id: Annotated[str, Path(description="Vendor category id")],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    is_advertisement: bool | None = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    vendors, total = VendorService.list_by_category(
        category_id,
        page=page,
        limit=limit,
        search=search,
        status=status_filter,
        is_advertisement=is_advertisement,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return paginated(vendors, page, limit, total)


# =============================================================================
# Partner Outreach
# =============================================================================

@router.get("/send-sms")
async def preview_partner_sms(
    vendor_id: Annotated[str | None, Query(description="Vendor to preview the message for")] = None,
):
    """Preview the partner outreach message for a vendor."""
    return ok(VendorService.preview_partner_sms(vendor_id))


@router.post("/send-sms")
async def send_partner_sms(request: SmsSendRequest):
    """
    Send the partner outreach message.

    Raises:
        400: Missing vendor_id / to_number, or malformed number
        503: SMS gateway credentials not configured
        502: Gateway rejected the message
    """
    result = VendorService.send_partner_sms(request.vendor_id, request.to_number)
    return ok(result, message="SMS sent")


# =============================================================================
# CRUD
# =============================================================================

@router.post("", status_code=status.HTTP_201_CREATED)
async def create_vendor(request: VendorCreate):
    """Create a vendor. The slug is generated from the name."""
    vendor = VendorService.create_vendor(request)
    return ok(vendor, message="Vendor created")


@router.get("/{vendor_id}")
async def get_vendor(vendor_id: VendorId):
    """Get a vendor with its categories."""
    return ok(VendorService.get_vendor(vendor_id))


@router.put("/{vendor_id}")
async def update_vendor(vendor_id: VendorId, request: VendorUpdate):
    vendor = VendorService.update_vendor(vendor_id, request)
    return ok(vendor, message="Vendor updated")


@router.delete("/{vendor_id}")
async def delete_vendor(vendor_id: VendorId):
    VendorService.delete_vendor(vendor_id)
    return ok(message="Vendor deleted")


# =============================================================================
# Advertisement
# =============================================================================

@router.get("/{vendor_id}/advertisement")
async def get_advertisement(vendor_id: VendorId):
    return ok(VendorService.get_advertisement(vendor_id))


@router.put("/{vendor_id}/advertisement")
async def update_advertisement(
    vendor_id: VendorId,
    request: AdvertisementUpdate,
    user: AuthUser = Depends(require_manager),
):
    """Activate, extend or end a vendor's advertisement. Each change is logged."""
    vendor = VendorService.set_advertisement(vendor_id, request, actor=str(user.id))
    return ok(vendor, message="Advertisement updated")


# =============================================================================
# Search Embedding
# =============================================================================

@router.post("/{vendor_id}/embedding")
async def refresh_embedding(
    vendor_id: VendorId,
    request: EmbeddingRequest | None = None,
):
    """
    Recompute the vendor's search embedding.

    Uses description_md from the body, or the stored description when the
    body omits it.
    """
    description = request.description_md if request else None
    if description is None:
        description = VendorService.get_vendor(vendor_id).get("description_md")

    vendor = VendorService.refresh_embedding(vendor_id, description)
    return ok({"id": vendor["id"]}, message="Embedding updated")


# =============================================================================
# Images
# =============================================================================

@router.get("/{vendor_id}/images")
async def list_images(vendor_id: VendorId):
    images = VendorImageService.list_images(vendor_id)
    return ok(images)


@router.post("/{vendor_id}/images", status_code=status.HTTP_201_CREATED)
async def upload_image(
    vendor_id: VendorId,
    file: UploadFile = File(..., description="jpg, jpeg, png, gif or webp"),
    alt_text: str | None = Form(default=None),
    is_primary: bool = Form(default=False),
    sort_order: int = Form(default=0),
):
    """
    Upload a vendor image.

    Raises:
        400: Unsupported file type
        413: File larger than VENDOR_IMAGE_MAX_MB
    """
    content = await file.read()
    image = VendorImageService.upload_image(
        vendor_id,
        file.filename,
        content,
        content_type=file.content_type,
        alt_text=alt_text,
        is_primary=is_primary,
        sort_order=sort_order,
    )
    return ok(image, message="Image uploaded")


@router.delete("/{vendor_id}/images")
async def delete_image(
    vendor_id: VendorId,
    image_id: Annotated[str | None, Query(description="Image to delete")] = None,
):
    VendorImageService.delete_image(vendor_id, image_id)
    return ok(message="Image deleted")


@router.put("/{vendor_id}/images/{image_id}")
async def update_image(
    vendor_id: VendorId,
    image_id: Annotated[str, Path(description="Image id")],
    request: VendorImageUpdate,
):
    image = VendorImageService.update_image(vendor_id, image_id, request)
    return ok(image, message="Image updated")
