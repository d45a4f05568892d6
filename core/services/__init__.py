# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .vendor_service import VendorService
from .vendor_image_service import VendorImageService
from .category_service import CategoryService, DepartmentService
from .society_service import SocietyService
from .beauty_product_service import BeautyProductService
from .beauty_category_service import BeautyCategoryService
from .product_contact_service import ProductContactService
from .job_post_service import JobPostService
from .seminar_service import SeminarService
from .clinic_location_service import ClinicLocationService
from .qna_service import QnaService
from .webinar_service import WebinarService
from .user_service import LoginLogService, UserService
from .advertisement_log_service import AdvertisementLogService

__all__ = [
    "StorageService",
    "VendorService",
    "VendorImageService",
    "CategoryService",
    "DepartmentService",
    "SocietyService",
    "BeautyProductService",
    "BeautyCategoryService",
    "ProductContactService",
    "JobPostService",
    "SeminarService",
    "ClinicLocationService",
    "QnaService",
    "WebinarService",
    "UserService",
    "LoginLogService",
    "AdvertisementLogService",
]
