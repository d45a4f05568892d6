# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# Public routers, mounted under /api in main.py:
# - health.py: Health check endpoints
# - vendors.py: Vendor directory, categories and regions
# - societies.py: Medical societies
# - beauty_products.py: Beauty product catalogue
# - job_posts.py: Job board
# - qna.py: Doctor Q&A
# - seminars.py: Seminar listings
# - clinic_locations.py: Clinic premises listings and favourites
# - webinars.py: Webinars and engagement counters
#
# Manager routers live in the manager/ subpackage.
# =============================================================================

from . import health
from . import vendors
from . import societies
from . import beauty_products
from . import job_posts
from . import qna
from . import seminars
from . import clinic_locations
from . import webinars
from . import manager

__all__ = [
    "health",
    "vendors",
    "societies",
    "beauty_products",
    "job_posts",
    "qna",
    "seminars",
    "clinic_locations",
    "webinars",
    "manager",
]
