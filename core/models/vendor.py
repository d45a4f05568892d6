# =============================================================================
# core/models/vendor.py - Vendor Schemas
# =============================================================================
# Request bodies for the manager vendor endpoints:
# - VendorCreate / VendorUpdate: listing fields + category assignment
# - AdvertisementUpdate: paid-promotion settings
# - VendorImageUpdate: image metadata (alt text, order, primary flag)
# - SmsSendRequest / EmbeddingRequest: outreach and search helpers
#
# Required fields are checked by the services (400 MISSING_FIELDS) so the
# manager UI gets the same error shape for every form.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class VendorStatus(str, Enum):
    """Listing lifecycle. Only published vendors appear on the public site."""
    DRAFT = "draft"
    PUBLISHED = "published"
    HIDDEN = "hidden"


class VendorFields(BaseModel):
    """Columns shared by create and update."""
    description_md: str | None = Field(default=None, description="Markdown description shown on the detail page")
    phone: str | None = None
    mobile: str | None = None
    email: str | None = None
    website: str | None = None
    address: str | None = None
    state: str | None = Field(default=None, description="Region used by the public region filter")
    service_areas: str | None = Field(default=None, examples=["서울, 경기"], description="Comma-separated service regions")
    business_hours: str | None = None
    kakao_channel: str | None = None
    consultation_url: str | None = None
    is_certified: bool | None = None
    highlight_badge: str | None = None
    priority_score: int | None = Field(default=None, description="Higher sorts first")
    advertisement_tier: str | None = None
    advertisement_image_url: str | None = None
    advertisement_expires_at: str | None = None
    category_ids: list[str] | None = Field(default=None, description="vendor_categories ids")


class VendorCreate(VendorFields):
    """Body for POST /manager-api/vendors."""
    name: str | None = Field(default=None, examples=["메디서포트 인테리어"])
    status: VendorStatus = VendorStatus.PUBLISHED


class VendorUpdate(VendorFields):
    """Body for PUT /manager-api/vendors/{id}. None fields are left unchanged."""
    name: str | None = None
    status: VendorStatus | None = None


class AdvertisementUpdate(BaseModel):
    """
    Body for PUT /manager-api/vendors/{id}/advertisement.

    A tier other than "none" activates the ad; the expiry becomes now plus
    advertisement_duration_days. Any other tier deactivates it immediately.
    """
    advertisement_tier: str | None = Field(default=None, examples=["premium"])
    advertisement_image_url: str | None = None
    advertisement_expires_at: str | None = None
    priority_score: int | None = None
    advertisement_duration_days: int | None = Field(default=None, ge=1, le=3650)

    @property
    def is_active(self) -> bool:
        return bool(self.advertisement_tier) and self.advertisement_tier != "none"


class VendorImageUpdate(BaseModel):
    """Body for PUT /manager-api/vendors/{id}/images/{image_id}."""
    alt_text: str | None = None
    is_primary: bool | None = None
    sort_order: int | None = None
    status: str | None = None


class SmsSendRequest(BaseModel):
    """Body for POST /manager-api/vendors/send-sms."""
    vendor_id: str | None = None
    to_number: str | None = Field(default=None, examples=["010-1234-5678"])


class EmbeddingRequest(BaseModel):
    """Body for POST /manager-api/vendors/{id}/embedding."""
    description_md: str | None = None
