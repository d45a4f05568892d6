# =============================================================================
# core/services/clinic_location_service.py - Clinic Location Listings
# =============================================================================
# Premises available for opening a clinic (임대/매매), plus per-user
# favourites in clinic_location_favorites.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder, parse_sort
from lib.utils import drop_none, is_all, utc_now_iso
from app.exceptions import BadRequestError, MissingFieldsError, ResourceNotFoundError
from core.models.listing import (
    ClinicLocationCreate,
    ClinicLocationUpdate,
    FavoriteAction,
    FavoriteRequest,
)

logger = logging.getLogger(__name__)

LOCATION_TABLE = "clinic_locations"
FAVORITE_TABLE = "clinic_location_favorites"
SEARCH_FIELDS = ["title", "address", "description"]


class ClinicLocationService:
    """Service for clinic location operations."""

    @staticmethod
    def list_locations(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        region: str | None = None,
        location_type: str | None = None,
        min_size: float | None = None,
        max_size: float | None = None,
        include_inactive: bool = False,
        sort_by: str | None = None,
        sort_direction: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Clinic locations, newest first by default.

        Args:
            include_inactive: Also list deactivated rows (manager view)
            min_size / max_size: Bounds on size_sqm, inclusive
        """
        client = SupabaseClient.get_client()
        column, descending = parse_sort(sort_by, sort_direction, "created_at", "desc")

        return (
            QueryBuilder(client.table(LOCATION_TABLE).select("*", count="exact"))
            .filter(not include_inactive, lambda q: q.eq("is_active", True))
            .search(search, SEARCH_FIELDS)
            .filter(not is_all(region), lambda q: q.eq("region", region))
            .filter(not is_all(location_type), lambda q: q.eq("type", location_type))
            .filter(min_size is not None, lambda q: q.gte("size_sqm", min_size))
            .filter(max_size is not None, lambda q: q.lte("size_sqm", max_size))
            .sort(column, "desc" if descending else "asc")
            .paginate(page, limit)
            .execute()
        )

    @staticmethod
    def get_location(location_id: str | UUID) -> dict[str, Any]:
        location = SupabaseClient.fetch_one(LOCATION_TABLE, location_id)
        if not location:
            raise ResourceNotFoundError("Clinic location", location_id)
        return location

    @staticmethod
    def create_location(request: ClinicLocationCreate) -> dict[str, Any]:
        location = SupabaseClient.insert_one(LOCATION_TABLE, request.model_dump())
        logger.info(f"Created clinic location {location['id']}")
        return location

    @staticmethod
    def update_location(location_id: str | UUID, request: ClinicLocationUpdate) -> dict[str, Any]:
        data = drop_none(request.model_dump(exclude_unset=True))
        data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(LOCATION_TABLE, data, location_id)
        if not rows:
            raise ResourceNotFoundError("Clinic location", location_id)

        logger.info(f"Updated clinic location {location_id}")
        return rows[0]

    @staticmethod
    def set_active(location_id: str | UUID, is_active: bool | None = None) -> dict[str, Any]:
        """
        Set is_active, or flip it when is_active is None.

        Returns:
            {"id", "is_active"} after the change
        """
        if is_active is None:
            current = SupabaseClient.fetch_one(LOCATION_TABLE, location_id, columns="id, is_active")
            if not current:
                raise ResourceNotFoundError("Clinic location", location_id)
            is_active = not current.get("is_active")

        rows = SupabaseClient.update_rows(LOCATION_TABLE, {"is_active": is_active}, location_id)
        if not rows:
            raise ResourceNotFoundError("Clinic location", location_id)

        logger.info(f"Clinic location {location_id} is_active={is_active}")
        return {"id": rows[0]["id"], "is_active": rows[0]["is_active"]}

    @staticmethod
    def delete_location(location_id: str | UUID) -> None:
        if not SupabaseClient.delete_rows(LOCATION_TABLE, location_id):
            raise ResourceNotFoundError("Clinic location", location_id)
        logger.info(f"Deleted clinic location {location_id}")

    # -------------------------------------------------------------------------
    # Favourites
    # -------------------------------------------------------------------------

    @staticmethod
    def update_favorite(user_id: str | UUID, request: FavoriteRequest) -> FavoriteAction:
        """
        Add or remove a favourite for the user.

        Raises:
            MissingFieldsError: location_id or action missing
            BadRequestError: action is neither "add" nor "remove"
        """
        missing = [f for f in ("location_id", "action") if not getattr(request, f)]
        if missing:
            raise MissingFieldsError(missing)

        try:
            action = FavoriteAction(request.action)
        except ValueError:
            raise BadRequestError(
                f"Unknown action: {request.action}",
                suggestion="Use \"add\" or \"remove\"",
            )

        client = SupabaseClient.get_client()
        if action is FavoriteAction.ADD:
            SupabaseClient.insert_one(
                FAVORITE_TABLE,
                {"user_id": str(user_id), "location_id": request.location_id},
            )
        else:
            (
                client.table(FAVORITE_TABLE)
                .delete()
                .eq("user_id", str(user_id))
                .eq("location_id", request.location_id)
                .execute()
            )

        logger.info(f"Favourite {action.value} for user {user_id}: {request.location_id}")
        return action
