# =============================================================================
# core/models/listing.py - Job Post, Seminar, Clinic Location & Webinar Schemas
# =============================================================================
# Request bodies for the classified-style listings on the consumer site and
# their manager counterparts.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Job Posts
# =============================================================================

class JobPostStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    DELETED = "deleted"


class JobPostFields(BaseModel):
    title: str | None = Field(default=None, examples=["피부과 봉직의 모집"])
    hospital_name: str | None = None
    location: str | None = Field(default=None, examples=["서울 강남구"])
    job_type: str | None = Field(default=None, examples=["정규직"])
    salary: str | None = None
    experience: str | None = None
    description: str | None = None
    full_description: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    departments: list[str] | None = None


class JobPostCreate(JobPostFields):
    """Body for POST /api/job-posts."""
    is_paid: bool = False
    urgent: bool = False


class JobPostUpdate(JobPostFields):
    """Body for PUT /api/job-posts/{id}. Owner only."""


class JobPostAdminUpdate(BaseModel):
    """Body for PUT /manager-api/job-posts (moderation)."""
    id: str
    status: JobPostStatus | None = None
    paid_ad_approved: bool | None = None
    paid_ad_approved_by: str | None = None


# =============================================================================
# Seminars
# =============================================================================

class SeminarFields(BaseModel):
    title: str | None = Field(default=None, examples=["2025 피부미용 학술 세미나"])
    category: str | None = None
    location: str | None = None
    date: str | None = Field(default=None, examples=["2025-03-15"])
    time: str | None = None
    fee: str | None = None
    organizer: str | None = None
    description: str | None = None


class SeminarCreate(SeminarFields):
    """Body for POST /api/seminars and /manager-api/seminars."""
    participants: int = 0
    status: str = "upcoming"
    is_active: bool = True


class SeminarUpdate(SeminarFields):
    """Body for PUT /manager-api/seminars/{id}."""
    participants: int | None = None
    status: str | None = None
    is_active: bool | None = None


# =============================================================================
# Clinic Locations
# =============================================================================

class ClinicLocationFields(BaseModel):
    title: str | None = Field(default=None, examples=["강남역 3번 출구 메디컬빌딩 5층"])
    address: str | None = None
    region: str | None = Field(default=None, examples=["서울"])
    type: str | None = Field(default=None, examples=["임대"])
    size_sqm: float | None = None
    floor: str | None = None
    monthly_rent: int | None = None
    deposit: int | None = None
    description: str | None = None
    contact_phone: str | None = None
    available_date: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class ClinicLocationCreate(ClinicLocationFields):
    """Body for POST /api/clinic-locations and /manager-api/clinic-locations."""
    parking_spaces: int = 0
    facilities: list[str] = Field(default_factory=list)
    rating: float = 0.0
    images: list[str] = Field(default_factory=list)
    is_active: bool = True


class ClinicLocationUpdate(ClinicLocationFields):
    """Body for PUT .../clinic-locations/{id}. None fields are left unchanged."""
    parking_spaces: int | None = None
    facilities: list[str] | None = None
    rating: float | None = None
    images: list[str] | None = None
    is_active: bool | None = None


class FavoriteAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class FavoriteRequest(BaseModel):
    """Body for POST /api/clinic-locations/favorites."""
    location_id: str | None = None
    action: str | None = Field(default=None, description="\"add\" or \"remove\"")


# =============================================================================
# Webinars
# =============================================================================

class WebinarCreate(BaseModel):
    """Body for POST /api/webinar."""
    title: str | None = None
    description: str | None = None
    scheduled_date: str | None = None
    thumbnail: str | None = None
    presenter: str | None = None
    duration: int | None = Field(default=None, description="Minutes")
    status: str = "scheduled"
    vimeo_embed_url: str | None = None
    is_active: bool = True
