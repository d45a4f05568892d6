# =============================================================================
# core/services/beauty_category_service.py - Beauty Product Categories
# =============================================================================
# beauty_product_category columns -> admin fields:
#   CategoryNameKO / CategoryName  -> name
#   CategorySEO                    -> slug
#   CategoryDetail                 -> description
#   show_order                     -> display_order
#   is_main_category               -> is_active
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import validate_required_fields
from app.exceptions import BadRequestError, MissingFieldsError, ResourceNotFoundError
from core.models.beauty_product import BeautyCategoryCreate, BeautyCategoryUpdate

logger = logging.getLogger(__name__)

CATEGORY_TABLE = "beauty_product_category"
CATEGORY_MAP_TABLE = "beauty_product_category_map_uuid"


def format_category(category: dict[str, Any]) -> dict[str, Any]:
    """
    Admin view of a category row.

    A missing is_main_category counts as active.
    """
    is_main = category.get("is_main_category")
    return {
        "id": category["id"],
        "name": category.get("CategoryNameKO") or category.get("CategoryName"),
        "slug": category.get("CategorySEO") or category.get("CategoryName"),
        "description": category.get("CategoryDetail"),
        "display_order": category.get("show_order") or 0,
        "is_active": True if is_main is None else bool(is_main),
    }


class BeautyCategoryService:
    """Service for beauty_product_category."""

    @staticmethod
    def list_categories() -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()
        rows = (
            client.table(CATEGORY_TABLE)
            .select("*")
            .order("show_order")
            .execute()
        ).data or []
        return [format_category(row) for row in rows]

    @staticmethod
    def get_category(category_id: str | UUID) -> dict[str, Any]:
        category = SupabaseClient.fetch_one(CATEGORY_TABLE, category_id)
        if not category:
            raise ResourceNotFoundError("Product category", category_id)
        return format_category(category)

    @staticmethod
    def create_category(request: BeautyCategoryCreate) -> dict[str, Any]:
        """
        Create a category. The name fills both name columns.

        Raises:
            MissingFieldsError: If name is blank
        """
        missing = validate_required_fields(request.model_dump(), ["name"])
        if missing:
            raise MissingFieldsError(missing)

        category = SupabaseClient.insert_one(
            CATEGORY_TABLE,
            {
                "CategoryName": request.name,
                "CategoryNameKO": request.name,
                "CategorySEO": request.slug,
                "CategoryDetail": request.description,
                "show_order": request.display_order or 0,
                "is_main_category": request.is_active is not False,
            },
        )
        logger.info(f"Created product category: {category['id']} ({request.name})")
        return format_category(category)

    @staticmethod
    def update_category(category_id: str | UUID, request: BeautyCategoryUpdate) -> dict[str, Any]:
        fields = request.model_dump(exclude_unset=True)
        data: dict[str, Any] = {}
        if fields.get("name") is not None:
            data["CategoryName"] = fields["name"]
            data["CategoryNameKO"] = fields["name"]
        if "slug" in fields:
            data["CategorySEO"] = fields["slug"]
        if "description" in fields:
            data["CategoryDetail"] = fields["description"]
        if fields.get("display_order") is not None:
            data["show_order"] = fields["display_order"]
        if fields.get("is_active") is not None:
            data["is_main_category"] = fields["is_active"]

        if not data:
            return BeautyCategoryService.get_category(category_id)

        rows = SupabaseClient.update_rows(CATEGORY_TABLE, data, category_id)
        if not rows:
            raise ResourceNotFoundError("Product category", category_id)

        logger.info(f"Updated product category: {category_id}")
        return format_category(rows[0])

    @staticmethod
    def delete_category(category_id: str | UUID) -> None:
        """
        Delete a category that no product uses.

        Raises:
            BadRequestError: Products are still mapped to it
        """
        client = SupabaseClient.get_client()
        in_use = (
            client.table(CATEGORY_MAP_TABLE)
            .select("id")
            .eq("category_id", str(category_id))
            .limit(1)
            .execute()
        ).data
        if in_use:
            raise BadRequestError(
                "Category is used by products and cannot be deleted",
                suggestion="Remove the category from its products first",
            )

        SupabaseClient.delete_rows(CATEGORY_TABLE, category_id)
        logger.info(f"Deleted product category: {category_id}")
