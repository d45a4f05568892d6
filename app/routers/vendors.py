# =============================================================================
# app/routers/vendors.py - Public Vendor Directory
# =============================================================================
# Published vendors for the consumer site, plus the category and region
# lists that drive its filters. No authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.responses import listed, ok
from core.services.category_service import CategoryService
from core.services.vendor_service import VendorService

router = APIRouter()


@router.get("/vendors")
async def list_vendors(
    limit: Annotated[int, Query(ge=1, le=200, description="Page size")] = 50,
    offset: Annotated[int, Query(ge=0, description="Rows to skip")] = 0,
    search: Annotated[str | None, Query(description="Matches name, description and phone")] = None,
    category: Annotated[str | None, Query(description="Vendor category slug")] = None,
    region: Annotated[str | None, Query(description="Matches the vendor's state")] = None,
):
    """
    List published vendors.

    Ordered by priority_score, then newest. Each vendor carries its
    approved images, primary first.
    """
    vendors, total = VendorService.list_published(
        limit=limit,
        offset=offset,
        search=search,
        category_slug=category,
        region=region,
    )
    return listed(vendors, total)


@router.get("/vendors/{vendor_id}")
async def get_vendor(
    vendor_id: Annotated[UUID, Path(description="Vendor UUID")],
):
    """Get one published vendor with its images."""
    return ok(VendorService.get_published(vendor_id))


@router.get("/categories")
async def list_categories():
    """List vendor categories by name."""
    categories = CategoryService.list_categories()
    return listed(categories)


@router.get("/regions")
async def list_regions():
    """Distinct service areas across published vendors, sorted."""
    regions = VendorService.list_regions()
    return listed(regions)
