# =============================================================================
# core/services/webinar_service.py - Webinars
# =============================================================================
# Webinar listings plus three engagement counters kept by database
# functions:
#   increment_rebroadcast_requests  one per user (webinar_rebroadcast_requests)
#   increment_interested_count      one per user (webinar_interests)
#   increment_webinar_views         anonymous, every call
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from app.exceptions import DuplicateRequestError, ResourceNotFoundError
from core.models.listing import WebinarCreate

logger = logging.getLogger(__name__)

WEBINAR_TABLE = "webinars"
REBROADCAST_TABLE = "webinar_rebroadcast_requests"
INTEREST_TABLE = "webinar_interests"


class WebinarService:
    """Service for webinar operations."""

    @staticmethod
    def list_webinars(
        page: int = 1,
        limit: int = 20,
        status: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        client = SupabaseClient.get_client()
        return (
            QueryBuilder(client.table(WEBINAR_TABLE).select("*", count="exact").eq("is_active", True))
            .status(status)
            .sort("scheduled_date", "asc")
            .paginate(page, limit)
            .execute()
        )

    @staticmethod
    def get_webinar(webinar_id: str | UUID) -> dict[str, Any]:
        webinar = SupabaseClient.fetch_one(WEBINAR_TABLE, webinar_id)
        if not webinar:
            raise ResourceNotFoundError("Webinar", webinar_id)
        return webinar

    @staticmethod
    def create_webinar(request: WebinarCreate) -> dict[str, Any]:
        webinar = SupabaseClient.insert_one(WEBINAR_TABLE, request.model_dump())
        logger.info(f"Created webinar {webinar['id']} ({webinar.get('title')})")
        return webinar

    @staticmethod
    def _increment(function: str, webinar_id: str | UUID) -> None:
        """Call a counter function. Failures are logged; the counter is advisory."""
        client = SupabaseClient.get_client()
        try:
            client.rpc(function, {"webinar_id": str(webinar_id)}).execute()
        except Exception as e:
            logger.warning(f"{function} failed for webinar {webinar_id}: {e}")

    @staticmethod
    def _record_once(table: str, action: str, webinar_id: str | UUID, user_id: str | UUID) -> None:
        """
        Insert a (webinar, user) row unless one exists.

        Raises:
            DuplicateRequestError: The user already did this for the webinar
        """
        client = SupabaseClient.get_client()
        existing = (
            client.table(table)
            .select("id")
            .eq("webinar_id", str(webinar_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        ).data
        if existing:
            raise DuplicateRequestError(action, str(webinar_id))

        SupabaseClient.insert_one(table, {"webinar_id": str(webinar_id), "user_id": str(user_id)})

    @staticmethod
    def request_rebroadcast(webinar_id: str | UUID, user_id: str | UUID) -> None:
        WebinarService._record_once(REBROADCAST_TABLE, "rebroadcast request", webinar_id, user_id)
        WebinarService._increment("increment_rebroadcast_requests", webinar_id)
        logger.info(f"Rebroadcast requested for webinar {webinar_id} by {user_id}")

    @staticmethod
    def mark_interested(webinar_id: str | UUID, user_id: str | UUID) -> None:
        WebinarService._record_once(INTEREST_TABLE, "interest", webinar_id, user_id)
        WebinarService._increment("increment_interested_count", webinar_id)
        logger.info(f"Interest recorded for webinar {webinar_id} by {user_id}")

    @staticmethod
    def record_view(webinar_id: str | UUID) -> None:
        WebinarService._increment("increment_webinar_views", webinar_id)
