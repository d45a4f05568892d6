# =============================================================================
# core/services/seminar_service.py - Seminar Listings
# =============================================================================

import logging
import re
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from lib.utils import drop_none, is_all, utc_now_iso
from app.exceptions import ResourceNotFoundError
from core.models.listing import SeminarCreate, SeminarUpdate

logger = logging.getLogger(__name__)

SEMINAR_TABLE = "seminars"
SEARCH_FIELDS = ["title", "organizer", "description"]


def month_pattern(month: str | None) -> str | None:
    """
    ilike pattern for a month label against ISO dates.

    Example:
        month_pattern("3월")   # "%-03-%"
        month_pattern("12월")  # "%-12-%"
    """
    if is_all(month):
        return None
    digits = re.sub(r"\D", "", month)
    if not digits:
        return None
    return f"%-{digits.zfill(2)}-%"


class SeminarService:
    """Service for seminars (public listing and manager CRUD)."""

    @staticmethod
    def list_seminars(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        category: str | None = None,
        location: str | None = None,
        month: str | None = None,
        status: str | None = None,
        active_only: bool = True,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Seminars ordered by date.

        Args:
            active_only: Public callers see is_active rows only
            month: "3월"-style label matched against the date column
        """
        client = SupabaseClient.get_client()
        pattern = month_pattern(month)

        return (
            QueryBuilder(client.table(SEMINAR_TABLE).select("*", count="exact"))
            .filter(active_only, lambda q: q.eq("is_active", True))
            .search(search, SEARCH_FIELDS)
            .filter(not is_all(category), lambda q: q.eq("category", category))
            .filter(not is_all(location), lambda q: q.ilike("location", f"%{location}%"))
            .filter(pattern, lambda q: q.ilike("date", pattern))
            .status(status)
            .sort("date", "asc")
            .paginate(page, limit)
            .execute()
        )

    @staticmethod
    def get_seminar(seminar_id: str | UUID) -> dict[str, Any]:
        seminar = SupabaseClient.fetch_one(SEMINAR_TABLE, seminar_id)
        if not seminar:
            raise ResourceNotFoundError("Seminar", seminar_id)
        return seminar

    @staticmethod
    def create_seminar(request: SeminarCreate) -> dict[str, Any]:
        seminar = SupabaseClient.insert_one(SEMINAR_TABLE, request.model_dump())
        logger.info(f"Created seminar {seminar['id']} ({seminar.get('title')})")
        return seminar

    @staticmethod
    def update_seminar(seminar_id: str | UUID, request: SeminarUpdate) -> dict[str, Any]:
        data = drop_none(request.model_dump(exclude_unset=True))
        data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(SEMINAR_TABLE, data, seminar_id)
        if not rows:
            raise ResourceNotFoundError("Seminar", seminar_id)

        logger.info(f"Updated seminar {seminar_id}")
        return rows[0]

    @staticmethod
    def delete_seminar(seminar_id: str | UUID) -> None:
        if not SupabaseClient.delete_rows(SEMINAR_TABLE, seminar_id):
            raise ResourceNotFoundError("Seminar", seminar_id)
        logger.info(f"Deleted seminar {seminar_id}")
