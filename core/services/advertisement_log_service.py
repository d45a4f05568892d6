# =============================================================================
# core/services/advertisement_log_service.py - Advertisement Audit Trail
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from lib.utils import validate_required_fields
from app.exceptions import MissingFieldsError
from core.models.community import AdvertisementLogCreate

logger = logging.getLogger(__name__)

AD_LOG_TABLE = "advertisement_logs"


class AdvertisementLogService:
    """Service for advertisement_logs."""

    @staticmethod
    def list_logs(
        page: int = 1,
        limit: int = 20,
        vendor_id: str | None = None,
        action: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Newest log entries first, each with "vendors": {id, name}.
        """
        client = SupabaseClient.get_client()
        logs, total = (
            QueryBuilder(client.table(AD_LOG_TABLE).select("*", count="exact"))
            .filter(vendor_id, lambda q: q.eq("vendor_id", vendor_id))
            .filter(action, lambda q: q.eq("action", action))
            .filter(start_date, lambda q: q.gte("created_at", start_date))
            .filter(end_date, lambda q: q.lte("created_at", end_date))
            .sort("created_at", "desc")
            .paginate(page, limit)
            .execute()
        )

        vendor_ids = list({log["vendor_id"] for log in logs if log.get("vendor_id")})
        vendors = {}
        if vendor_ids:
            vendors = {
                row["id"]: row
                for row in (client.table("vendors").select("id, name").in_("id", vendor_ids).execute()).data or []
            }
        for log in logs:
            log["vendors"] = vendors.get(log.get("vendor_id"))

        return logs, total

    @staticmethod
    def create_log(request: AdvertisementLogCreate, created_by: str) -> dict[str, Any]:
        """
        Record a manual log entry.

        Raises:
            MissingFieldsError: vendor_id or action missing
        """
        data = request.model_dump()
        missing = validate_required_fields(data, ["vendor_id", "action"])
        if missing:
            raise MissingFieldsError(missing)

        log = SupabaseClient.insert_one(AD_LOG_TABLE, {**data, "created_by": created_by})
        logger.info(f"Advertisement log {log['id']}: {request.action} for vendor {request.vendor_id}")
        return log
