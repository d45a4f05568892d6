# =============================================================================
# app/routers/job_posts.py - Public Job Board
# =============================================================================
# Reading is open. Posting, editing and deleting need a signed-in user;
# edits and deletes are limited to the post's author.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.responses import listed, ok
from core.models.listing import JobPostCreate, JobPostUpdate
from core.services.job_post_service import JobPostService

router = APIRouter()


@router.get("")
async def list_job_posts(
    location: Annotated[str | None, Query(description="Partial match; 전체 for all")] = None,
    job_type: Annotated[str | None, Query(alias="jobType")] = None,
    department: Annotated[str | None, Query(description="Post must list this department")] = None,
    search: Annotated[str | None, Query(description="Matches title, hospital and description")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """
    List live job posts.

    Paid posts first, then urgent ones, then newest. Expired posts are
    never listed.
    """
    posts, total = JobPostService.list_live(
        limit=limit,
        offset=offset,
        location=location,
        job_type=job_type,
        department=department,
        search=search,
    )
    return listed(posts, total)


@router.get("/{post_id}")
async def get_job_post(
    post_id: Annotated[UUID, Path(description="Job post UUID")],
):
    return ok(JobPostService.get_post(post_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job_post(
    request: JobPostCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a job post for the signed-in user.

    A user may have one live post at a time. The post expires after
    JOB_POST_TTL_DAYS.
    """
    post = JobPostService.create_post(user.id, request)
    return ok(post, message="Job post created")


@router.put("/{post_id}")
async def update_job_post(
    post_id: Annotated[UUID, Path(description="Job post UUID")],
    request: JobPostUpdate,
    user: AuthUser = Depends(get_current_user),
):
    post = JobPostService.update_post(post_id, user.id, request)
    return ok(post, message="Job post updated")


@router.delete("/{post_id}")
async def delete_job_post(
    post_id: Annotated[UUID, Path(description="Job post UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Soft delete: the post's status becomes "deleted"."""
    JobPostService.soft_delete_post(post_id, user.id)
    return ok(message="Job post deleted")
