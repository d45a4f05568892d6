# =============================================================================
# core/services/category_service.py - Vendor Categories & Departments
# =============================================================================
# Vendor categories group the directory (인테리어, 의료기기, ...). Vendors
# join them through vendor_category_map. Medical departments are a flat
# lookup table used by job posts.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder, parse_sort
from lib.utils import drop_none, generate_slug, utc_now_iso, validate_required_fields
from app.exceptions import BadRequestError, MissingFieldsError, ResourceNotFoundError
from core.models.category import (
    DepartmentCreate,
    VendorCategoryCreate,
    VendorCategoryUpdate,
)

logger = logging.getLogger(__name__)

CATEGORY_TABLE = "vendor_categories"
CATEGORY_MAP_TABLE = "vendor_category_map"
DEPARTMENT_TABLE = "medical_departments"

CATEGORY_VENDOR_COLUMNS = "id, name, phone, email, city, state, status"


class CategoryService:
    """Service for vendor categories and their vendor links."""

    @staticmethod
    def list_categories() -> list[dict[str, Any]]:
        """All vendor categories ordered by name."""
        client = SupabaseClient.get_client()
        return (
            client.table(CATEGORY_TABLE)
            .select("*")
            .order("name")
            .execute()
        ).data or []

    @staticmethod
    def list_with_counts(
        search: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Categories for the manager table, each with vendor_count.

        Counts come from a single read of the mapping rows for the listed
        categories.
        """
        client = SupabaseClient.get_client()
        column, descending = parse_sort(sort_field, sort_direction, "name", "asc")

        categories, _ = (
            QueryBuilder(client.table(CATEGORY_TABLE).select("*"))
            .search(search, ["name", "slug"])
            .sort(column, "desc" if descending else "asc")
            .execute()
        )
        if not categories:
            return []

        mappings = (
            client.table(CATEGORY_MAP_TABLE)
            .select("category_id")
            .in_("category_id", [c["id"] for c in categories])
            .execute()
        ).data or []

        counts: dict[str, int] = {}
        for row in mappings:
            key = str(row["category_id"])
            counts[key] = counts.get(key, 0) + 1

        for category in categories:
            category["vendor_count"] = counts.get(str(category["id"]), 0)
        return categories

    @staticmethod
    def create_category(request: VendorCategoryCreate) -> dict[str, Any]:
        """
        Create a vendor category. The slug falls back to one generated from the name.

        Raises:
            MissingFieldsError: If name is blank
        """
        missing = validate_required_fields(request.model_dump(), ["name"])
        if missing:
            raise MissingFieldsError(missing)

        data = {
            "name": request.name,
            "slug": request.slug or generate_slug(request.name),
            "description": request.description,
            "is_active": request.is_active,
        }
        category = SupabaseClient.insert_one(CATEGORY_TABLE, data)
        logger.info(f"Created vendor category: {category['id']} ({category['name']})")
        return category

    @staticmethod
    def get_category(category_id: str | UUID) -> dict[str, Any]:
        """
        A category with the vendors linked to it.

        Raises:
            ResourceNotFoundError: If category doesn't exist
        """
        category = SupabaseClient.fetch_one(CATEGORY_TABLE, category_id)
        if not category:
            raise ResourceNotFoundError("Category", category_id)

        vendor_ids = [
            row["vendor_id"]
            for row in (
                SupabaseClient.get_client()
                .table(CATEGORY_MAP_TABLE)
                .select("vendor_id")
                .eq("category_id", str(category_id))
                .execute()
            ).data or []
        ]

        vendors = []
        if vendor_ids:
            vendors = (
                SupabaseClient.get_client()
                .table("vendors")
                .select(CATEGORY_VENDOR_COLUMNS)
                .in_("id", vendor_ids)
                .execute()
            ).data or []

        category["vendors"] = vendors
        return category

    @staticmethod
    def update_category(category_id: str | UUID, request: VendorCategoryUpdate) -> dict[str, Any]:
        """Update a category; a new name also regenerates the slug."""
        data = drop_none(request.model_dump(exclude_unset=True))
        if data.get("name"):
            data["slug"] = generate_slug(data["name"])
        data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(CATEGORY_TABLE, data, category_id)
        if not rows:
            raise ResourceNotFoundError("Category", category_id)

        logger.info(f"Updated vendor category: {category_id}")
        return rows[0]

    @staticmethod
    def delete_category(category_id: str | UUID) -> None:
        """
        Delete a category. Its vendors become uncategorised, not deleted.

        Raises:
            ResourceNotFoundError: If category doesn't exist
        """
        if not SupabaseClient.fetch_one(CATEGORY_TABLE, category_id, columns="id"):
            raise ResourceNotFoundError("Category", category_id)

        SupabaseClient.delete_rows(CATEGORY_MAP_TABLE, category_id, column="category_id")
        SupabaseClient.delete_rows(CATEGORY_TABLE, category_id)
        logger.info(f"Deleted vendor category: {category_id}")

    # -------------------------------------------------------------------------
    # Vendor Links
    # -------------------------------------------------------------------------

    @staticmethod
    def link_vendors(category_id: str | UUID, vendor_ids: list[str]) -> list[dict[str, Any]]:
        """
        Add vendors to a category. Re-adding an existing link is a no-op.

        Raises:
            BadRequestError: If vendor_ids is empty
        """
        if not vendor_ids:
            raise BadRequestError("vendor_ids must be a non-empty list", suggestion="Send {\"vendor_ids\": [...]}")

        client = SupabaseClient.get_client()
        rows = [{"category_id": str(category_id), "vendor_id": str(vid)} for vid in dict.fromkeys(vendor_ids)]
        response = (
            client.table(CATEGORY_MAP_TABLE)
            .upsert(rows, on_conflict="category_id,vendor_id")
            .execute()
        )

        logger.info(f"Linked {len(rows)} vendors to category {category_id}")
        return response.data or []

    @staticmethod
    def unlink_vendor(category_id: str | UUID, vendor_id: str | None) -> None:
        if not vendor_id:
            raise BadRequestError("vendor_id is required", suggestion="Pass ?vendor_id=<uuid>")

        client = SupabaseClient.get_client()
        (
            client.table(CATEGORY_MAP_TABLE)
            .delete()
            .eq("category_id", str(category_id))
            .eq("vendor_id", vendor_id)
            .execute()
        )
        logger.info(f"Unlinked vendor {vendor_id} from category {category_id}")


class DepartmentService:
    """Service for the medical_departments lookup table."""

    @staticmethod
    def list_departments() -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        return (
            client.table(DEPARTMENT_TABLE)
            .select("*")
            .order("name")
            .execute()
        ).data or []

    @staticmethod
    def create_department(request: DepartmentCreate) -> dict[str, Any]:
        """
        Create a department.

        Raises:
            MissingFieldsError: If name is blank
        """
        missing = validate_required_fields(request.model_dump(), ["name"])
        if missing:
            raise MissingFieldsError(missing)

        department = SupabaseClient.insert_one(
            DEPARTMENT_TABLE,
            {
                "name": request.name,
                "description": request.description,
                "slug": request.slug or generate_slug(request.name),
            },
        )
        logger.info(f"Created department: {department['id']} ({department['name']})")
        return department
