# =============================================================================
# core/services/job_post_service.py - Job Post Board
# =============================================================================
# Clinics post openings that stay visible for JOB_POST_TTL_DAYS. Each user
# may hold one live (active, unexpired) post at a time. Owners edit and
# soft-delete their own posts; managers moderate any post and approve
# paid placement.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.query_builder import QueryBuilder
from lib.utils import (
    days_from_now_iso,
    drop_none,
    is_all,
    utc_now_iso,
    validate_required_fields,
)
from app.config import settings
from app.exceptions import (
    BadRequestError,
    ForbiddenError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from core.models.listing import (
    JobPostAdminUpdate,
    JobPostCreate,
    JobPostStatus,
    JobPostUpdate,
)

logger = logging.getLogger(__name__)

JOB_POST_TABLE = "job_posts"
SEARCH_FIELDS = ["title", "hospital_name", "description"]
REQUIRED_FIELDS = ["title", "hospital_name", "location", "job_type", "description"]


class JobPostService:
    """Service for job post operations."""

    # -------------------------------------------------------------------------
    # Public Board
    # -------------------------------------------------------------------------

    @staticmethod
    def list_live(
        limit: int = 20,
        offset: int = 0,
        location: str | None = None,
        job_type: str | None = None,
        department: str | None = None,
        search: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Active, unexpired posts. Paid first, then urgent, then newest.

        "전체" (or empty) disables the location, job type and department filters.
        """
        client = SupabaseClient.get_client()
        query = (
            client.table(JOB_POST_TABLE)
            .select("*", count="exact")
            .eq("status", JobPostStatus.ACTIVE.value)
            .gt("expires_at", utc_now_iso())
        )

        return (
            QueryBuilder(query)
            .filter(not is_all(location), lambda q: q.ilike("location", f"%{location}%"))
            .filter(not is_all(job_type), lambda q: q.eq("job_type", job_type))
            .filter(not is_all(department), lambda q: q.contains("departments", [department]))
            .search(search, SEARCH_FIELDS)
            .sort("is_paid", "desc")
            .sort("urgent", "desc")
            .sort("created_at", "desc")
            .slice(offset, limit)
            .execute()
        )

    @staticmethod
    def get_post(post_id: str | UUID) -> dict[str, Any]:
        post = SupabaseClient.fetch_one(JOB_POST_TABLE, post_id)
        if not post:
            raise ResourceNotFoundError("Job post", post_id)
        return post

    @staticmethod
    def has_live_post(user_id: str | UUID) -> bool:
        client = SupabaseClient.get_client()
        rows = (
            client.table(JOB_POST_TABLE)
            .select("id")
            .eq("user_id", str(user_id))
            .eq("status", JobPostStatus.ACTIVE.value)
            .gt("expires_at", utc_now_iso())
            .limit(1)
            .execute()
        ).data
        return bool(rows)

    @staticmethod
    def create_post(user_id: str | UUID, request: JobPostCreate) -> dict[str, Any]:
        """
        Create a post for a user.

        Raises:
            BadRequestError: User already has a live post
            MissingFieldsError: Required fields or departments missing
        """
        if JobPostService.has_live_post(user_id):
            raise BadRequestError(
                "An active job post already exists. Only one post is allowed at a time.",
                suggestion="Close or wait for the existing post to expire",
            )

        body = request.model_dump()
        missing = validate_required_fields(body, REQUIRED_FIELDS)
        if not request.departments:
            missing.append("departments")
        if missing:
            raise MissingFieldsError(missing)

        data = {
            **body,
            "user_id": str(user_id),
            "status": JobPostStatus.ACTIVE.value,
            "paid_ad_approved": False,
            "expires_at": days_from_now_iso(settings.JOB_POST_TTL_DAYS),
        }
        post = SupabaseClient.insert_one(JOB_POST_TABLE, data)
        logger.info(f"Created job post {post['id']} for user {user_id}")
        return post

    @staticmethod
    def _owned_post(post_id: str | UUID, user_id: str | UUID, action: str) -> dict[str, Any]:
        post = SupabaseClient.fetch_one(JOB_POST_TABLE, post_id, columns="id, user_id")
        if not post or str(post.get("user_id")) != str(user_id):
            raise ForbiddenError(f"You do not have permission to {action} this job post")
        return post

    @staticmethod
    def update_post(post_id: str | UUID, user_id: str | UUID, request: JobPostUpdate) -> dict[str, Any]:
        """
        Owner update. Only sent fields change.

        Raises:
            ForbiddenError: Post missing or owned by someone else
        """
        JobPostService._owned_post(post_id, user_id, "edit")

        data = drop_none(request.model_dump(exclude_unset=True))
        data["updated_at"] = utc_now_iso()
        rows = SupabaseClient.update_rows(JOB_POST_TABLE, data, post_id)
        logger.info(f"Updated job post {post_id}")
        return rows[0] if rows else {}

    @staticmethod
    def soft_delete_post(post_id: str | UUID, user_id: str | UUID) -> None:
        JobPostService._owned_post(post_id, user_id, "delete")
        SupabaseClient.update_rows(
            JOB_POST_TABLE,
            {"status": JobPostStatus.DELETED.value, "updated_at": utc_now_iso()},
            post_id,
        )
        logger.info(f"Soft-deleted job post {post_id}")

    # -------------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------------

    @staticmethod
    def list_for_admin(
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
        status: str | None = None,
        job_type: str | None = None,
        is_paid: str | None = None,
    ) -> tuple[list[dict[str, Any]], int]:
        """All posts in any status. "all" disables status and job type filters."""
        client = SupabaseClient.get_client()
        return (
            QueryBuilder(client.table(JOB_POST_TABLE).select("*", count="exact"))
            .search(search, SEARCH_FIELDS)
            .status(status)
            .filter(not is_all(job_type), lambda q: q.eq("job_type", job_type))
            .filter(is_paid == "true", lambda q: q.eq("is_paid", True))
            .filter(is_paid == "false", lambda q: q.eq("is_paid", False))
            .sort("created_at", "desc")
            .paginate(page, limit)
            .execute()
        )

    @staticmethod
    def moderate_post(request: JobPostAdminUpdate) -> dict[str, Any]:
        """
        Change status and/or paid placement approval.

        Approving stamps paid_ad_approved_at (and the approver when given).
        """
        data: dict[str, Any] = {"updated_at": utc_now_iso()}
        if request.status:
            data["status"] = request.status.value
        if request.paid_ad_approved is not None:
            data["paid_ad_approved"] = request.paid_ad_approved
            if request.paid_ad_approved:
                data["paid_ad_approved_at"] = utc_now_iso()
                if request.paid_ad_approved_by:
                    data["paid_ad_approved_by"] = request.paid_ad_approved_by

        rows = SupabaseClient.update_rows(JOB_POST_TABLE, data, request.id)
        if not rows:
            raise ResourceNotFoundError("Job post", request.id)

        logger.info(f"Moderated job post {request.id}: {sorted(data)}")
        return rows[0]

    @staticmethod
    def hard_delete_post(post_id: str | None) -> None:
        if not post_id:
            raise MissingFieldsError(["id"])
        SupabaseClient.delete_rows(JOB_POST_TABLE, post_id)
        logger.info(f"Deleted job post {post_id}")
