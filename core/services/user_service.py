# =============================================================================
# core/services/user_service.py - Member Administration
# =============================================================================
# Members are read through user_management_view (users joined with
# user_info). Writes go to the underlying tables: is_active and role on
# users, is_doctor_verified on user_info (created on first verification).
# Login history is read from user_login_logs.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from lib.utils import utc_now_iso
from app.exceptions import ResourceNotFoundError
from core.models.community import UserAdminUpdate

logger = logging.getLogger(__name__)

USER_VIEW = "user_management_view"
USER_TABLE = "users"
USER_INFO_TABLE = "user_info"
LOGIN_LOG_TABLE = "user_login_logs"


def _bool_filter(builder: QueryBuilder, value: str | None, column: str) -> QueryBuilder:
    """
    "true" matches true; "false" matches false or NULL (never set).
    """
    return (
        builder
        .filter(value == "true", lambda q: q.eq(column, True))
        .filter(value == "false", lambda q: q.or_(f"{column}.eq.false,{column}.is.null"))
    )


class UserService:
    """Service for member administration."""

    @staticmethod
    def list_users(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        doctor_verified: str | None = None,
        is_active: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        client = SupabaseClient.get_client()
        builder = QueryBuilder(client.table(USER_VIEW).select("*", count="exact"))
        builder.search(search, ["name", "nickname", "phone_number"])
        _bool_filter(builder, doctor_verified, "is_doctor_verified")
        _bool_filter(builder, is_active, "is_active")

        return builder.sort("created_at", "desc").paginate(page, limit).execute()

    @staticmethod
    def get_user(user_id: str | UUID) -> dict[str, Any]:
        user = SupabaseClient.fetch_one(USER_VIEW, user_id)
        if not user:
            raise ResourceNotFoundError("User", user_id)
        return user

    @staticmethod
    def update_user(user_id: str | UUID, request: UserAdminUpdate) -> dict[str, Any]:
        """
        Apply moderation changes and return the refreshed view row.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        fields = request.model_dump(exclude_unset=True)

        user_update = {k: fields[k] for k in ("is_active", "role") if fields.get(k) is not None}
        if user_update:
            user_update["updated_at"] = utc_now_iso()
            if not SupabaseClient.update_rows(USER_TABLE, user_update, user_id):
                raise ResourceNotFoundError("User", user_id)

        if fields.get("is_doctor_verified") is not None:
            verified = fields["is_doctor_verified"]
            existing = SupabaseClient.fetch_one(USER_INFO_TABLE, user_id, columns="id", id_column="user_id")
            if existing:
                SupabaseClient.update_rows(
                    USER_INFO_TABLE,
                    {"is_doctor_verified": verified, "updated_at": utc_now_iso()},
                    user_id,
                    column="user_id",
                )
            else:
                SupabaseClient.insert_one(
                    USER_INFO_TABLE,
                    {"user_id": str(user_id), "is_doctor_verified": verified},
                )

        logger.info(f"Updated user {user_id}: {sorted(fields)}")
        return UserService.get_user(user_id)

    @staticmethod
    def get_profile(user_id: str | UUID) -> dict[str, Any] | None:
        """Raw users row for the signed-in manager (None if not provisioned)."""
        return SupabaseClient.fetch_one(USER_TABLE, user_id)


class LoginLogService:
    """Read access to user_login_logs."""

    @staticmethod
    def list_logs(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        user_id: str | None = None,
        login_method: str | None = None,
        success: str | None = None,
        device_type: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        client = SupabaseClient.get_client()
        return (
            QueryBuilder(client.table(LOGIN_LOG_TABLE).select("*", count="exact"))
            .search(search, ["email", "ip_address", "user_agent"])
            .filter(user_id, lambda q: q.eq("user_id", user_id))
            .filter(login_method, lambda q: q.eq("login_method", login_method))
            .filter(success == "true", lambda q: q.eq("success", True))
            .filter(success == "false", lambda q: q.eq("success", False))
            .filter(device_type, lambda q: q.eq("device_type", device_type))
            .filter(start_date, lambda q: q.gte("created_at", start_date))
            .filter(end_date, lambda q: q.lte("created_at", end_date))
            .sort("created_at", "desc")
            .paginate(page, limit)
            .execute()
        )
