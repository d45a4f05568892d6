# =============================================================================
# core/models/ - Pydantic Request Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - vendor.py: Vendor listing, advertisement, image and outreach bodies
# - category.py: Vendor category and medical department bodies
# - beauty_product.py: Beauty product, category, link and contact bodies
# - listing.py: Job post, seminar, clinic location and webinar bodies
# - community.py: Q&A, user moderation and advertisement log bodies
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Vendor Models - Directory listings
# -----------------------------------------------------------------------------
from .vendor import (
    AdvertisementUpdate,
    EmbeddingRequest,
    SmsSendRequest,
    VendorCreate,
    VendorImageUpdate,
    VendorStatus,
    VendorUpdate,
)

# -----------------------------------------------------------------------------
# Category Models
# -----------------------------------------------------------------------------
from .category import (
    CategoryVendorsLink,
    DepartmentCreate,
    VendorCategoryCreate,
    VendorCategoryUpdate,
)

# -----------------------------------------------------------------------------
# Beauty Product Models
# -----------------------------------------------------------------------------
from .beauty_product import (
    BeautyCategoryCreate,
    BeautyCategoryUpdate,
    BeautyProductCreate,
    BeautyProductUpdate,
    ContactFields,
    ProductContactCreate,
    ProductContactUpdate,
    ProductLink,
    ToggleActiveRequest,
)

# -----------------------------------------------------------------------------
# Listing Models - Job posts, seminars, clinic locations, webinars
# -----------------------------------------------------------------------------
from .listing import (
    ClinicLocationCreate,
    ClinicLocationUpdate,
    FavoriteAction,
    FavoriteRequest,
    JobPostAdminUpdate,
    JobPostCreate,
    JobPostStatus,
    JobPostUpdate,
    SeminarCreate,
    SeminarUpdate,
    WebinarCreate,
)

# -----------------------------------------------------------------------------
# Community Models - Q&A, users, logs
# -----------------------------------------------------------------------------
from .community import (
    AdvertisementAction,
    AdvertisementLogCreate,
    AnswerCreate,
    QuestionCreate,
    UserAdminUpdate,
    VoteRequest,
    VoteType,
)

__all__ = [
    # Vendor
    "AdvertisementUpdate",
    "EmbeddingRequest",
    "SmsSendRequest",
    "VendorCreate",
    "VendorImageUpdate",
    "VendorStatus",
    "VendorUpdate",
    # Category
    "CategoryVendorsLink",
    "DepartmentCreate",
    "VendorCategoryCreate",
    "VendorCategoryUpdate",
    # Beauty products
    "BeautyCategoryCreate",
    "BeautyCategoryUpdate",
    "BeautyProductCreate",
    "BeautyProductUpdate",
    "ContactFields",
    "ProductContactCreate",
    "ProductContactUpdate",
    "ProductLink",
    "ToggleActiveRequest",
    # Listings
    "ClinicLocationCreate",
    "ClinicLocationUpdate",
    "FavoriteAction",
    "FavoriteRequest",
    "JobPostAdminUpdate",
    "JobPostCreate",
    "JobPostStatus",
    "JobPostUpdate",
    "SeminarCreate",
    "SeminarUpdate",
    "WebinarCreate",
    # Community
    "AdvertisementAction",
    "AdvertisementLogCreate",
    "AnswerCreate",
    "QuestionCreate",
    "UserAdminUpdate",
    "VoteRequest",
    "VoteType",
]
