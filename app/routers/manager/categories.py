# =============================================================================
# app/routers/manager/categories.py - Vendor Categories & Departments
# =============================================================================
# Three routers:
# - vendor_categories_router: /manager-api/vendor-categories (full CRUD + links)
# - categories_router: /manager-api/categories (list / quick create)
# - departments_router: /manager-api/departments
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.responses import listed, ok
from core.models.category import (
    CategoryVendorsLink,
    DepartmentCreate,
    VendorCategoryCreate,
    VendorCategoryUpdate,
)
from core.services.category_service import CategoryService, DepartmentService

vendor_categories_router = APIRouter()
categories_router = APIRouter()
departments_router = APIRouter()

CategoryId = Annotated[str, Path(description="Vendor category id")]


# =============================================================================
# /vendor-categories
# =============================================================================

@vendor_categories_router.get("")
async def list_vendor_categories(
    search: Annotated[str | None, Query(description="Matches name and slug")] = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """List categories with the number of vendors in each."""
    categories = CategoryService.list_with_counts(
        search=search,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return listed(categories)


@vendor_categories_router.post("", status_code=status.HTTP_201_CREATED)
async def create_vendor_category(request: VendorCategoryCreate):
    category = CategoryService.create_category(request)
    return ok(category, message="Category created")


@vendor_categories_router.get("/{category_id}")
async def get_vendor_category(category_id: CategoryId):
    """Get a category with its vendors."""
    return ok(CategoryService.get_category(category_id))


@vendor_categories_router.put("/{category_id}")
async def update_vendor_category(category_id: CategoryId, request: VendorCategoryUpdate):
    category = CategoryService.update_category(category_id, request)
    return ok(category, message="Category updated")


@vendor_categories_router.delete("/{category_id}")
async def delete_vendor_category(category_id: CategoryId):
    """Delete a category. Its vendors stay, without this category."""
    CategoryService.delete_category(category_id)
    return ok(message="Category deleted; its vendors are now uncategorised")


@vendor_categories_router.post("/{category_id}/vendors")
async def link_vendors(category_id: CategoryId, request: CategoryVendorsLink):
    rows = CategoryService.link_vendors(category_id, request.vendor_ids)
    return ok(rows, message=f"{len(rows)} vendors added")


@vendor_categories_router.delete("/{category_id}/vendors")
async def unlink_vendor(
    category_id: CategoryId,
    vendor_id: Annotated[str | None, Query(description="Vendor to remove")] = None,
):
    CategoryService.unlink_vendor(category_id, vendor_id)
    return ok(message="Vendor removed from category")


# =============================================================================
# /categories
# =============================================================================

@categories_router.get("")
async def list_categories():
    return listed(CategoryService.list_categories())


@categories_router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(request: VendorCategoryCreate):
    category = CategoryService.create_category(request)
    return ok(category, message="Category created")


# =============================================================================
# /departments
# =============================================================================

@departments_router.get("")
async def list_departments():
    return listed(DepartmentService.list_departments())


@departments_router.post("", status_code=status.HTTP_201_CREATED)
async def create_department(request: DepartmentCreate):
    department = DepartmentService.create_department(request)
    return ok(department, message="Department created")
