# =============================================================================
# app/routers/manager/ - Back-Office Routes
# =============================================================================
# Everything here is mounted under /manager-api with require_manager as a
# router-level dependency (see app/main.py):
# - vendors.py: vendors, advertisements, embeddings, outreach SMS, images
# - categories.py: vendor categories, category quick-create, departments
# - beauty_products.py: products, product categories, contacts
# - listings.py: clinic locations, job posts, seminars
# - users.py: members, login logs, advertisement logs
# =============================================================================

from . import vendors
from . import categories
from . import beauty_products
from . import listings
from . import users

__all__ = [
    "vendors",
    "categories",
    "beauty_products",
    "listings",
    "users",
]
