# =============================================================================
# core/services/society_service.py - Medical Society Directory
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from app.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

SOCIETY_TABLE = "medical_societies"


class SocietyService:
    """Read-only access to medical_societies."""

    @staticmethod
    def list_societies(
        limit: int = 50,
        offset: int = 0,
        category: str | None = None,
        search: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        client = SupabaseClient.get_client()
        query = client.table(SOCIETY_TABLE).select("*", count="exact")

        return (
            QueryBuilder(query)
            .filter(category, lambda q: q.eq("category", category))
            .search(search, ["name", "name_en", "description"])
            .sort("name", "asc")
            .slice(offset, limit)
            .execute()
        )

    @staticmethod
    def get_society(society_id: str | UUID) -> dict[str, Any]:
        society = SupabaseClient.fetch_one(SOCIETY_TABLE, society_id)
        if not society:
            raise ResourceNotFoundError("Society", society_id)
        return society
