# =============================================================================
# app/routers/manager/listings.py - Listing Moderation
# =============================================================================
# Three routers:
# - clinic_locations_router: /manager-api/clinic-locations
# - job_posts_router: /manager-api/job-posts
# - seminars_router: /manager-api/seminars
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.responses import ok, paginated
from core.models.beauty_product import ToggleActiveRequest
from core.models.listing import (
    ClinicLocationCreate,
    ClinicLocationUpdate,
    JobPostAdminUpdate,
    SeminarCreate,
    SeminarUpdate,
)
from core.services.clinic_location_service import ClinicLocationService
from core.services.job_post_service import JobPostService
from core.services.seminar_service import SeminarService

clinic_locations_router = APIRouter()
job_posts_router = APIRouter()
seminars_router = APIRouter()

LocationId = Annotated[str, Path(description="Clinic location id")]
SeminarId = Annotated[str, Path(description="Seminar id")]


# =============================================================================
# /clinic-locations
# =============================================================================

@clinic_locations_router.get("")
async def list_clinic_locations(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
    region: str | None = None,
    location_type: Annotated[str | None, Query(alias="type")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """List every clinic location, active or not."""
    locations, total = ClinicLocationService.list_locations(
        page=page,
        limit=limit,
        search=search,
        region=region,
        location_type=location_type,
        include_inactive=True,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return paginated(locations, page, limit, total)


@clinic_locations_router.post("", status_code=status.HTTP_201_CREATED)
async def create_clinic_location(request: ClinicLocationCreate):
    location = ClinicLocationService.create_location(request)
    return ok(location, message="Clinic location created")


@clinic_locations_router.get("/{location_id}")
async def get_clinic_location(location_id: LocationId):
    return ok(ClinicLocationService.get_location(location_id))


@clinic_locations_router.put("/{location_id}")
async def update_clinic_location(location_id: LocationId, request: ClinicLocationUpdate):
    location = ClinicLocationService.update_location(location_id, request)
    return ok(location, message="Clinic location updated")


@clinic_locations_router.delete("/{location_id}")
async def delete_clinic_location(location_id: LocationId):
    ClinicLocationService.delete_location(location_id)
    return ok(message="Clinic location deleted")


@clinic_locations_router.patch("/{location_id}/toggle")
async def toggle_clinic_location(location_id: LocationId, request: ToggleActiveRequest):
    return ok(ClinicLocationService.set_active(location_id, request.is_active))


# =============================================================================
# /job-posts
# =============================================================================

@job_posts_router.get("")
async def list_job_posts(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status", description="\"all\" for every status")] = None,
    job_type: Annotated[str | None, Query(alias="jobType")] = None,
    is_paid: Annotated[str | None, Query(alias="isPaid", description="\"true\" / \"false\" / \"all\"")] = None,
):
    """List job posts in any state, newest first."""
    posts, total = JobPostService.list_for_admin(
        page=page,
        limit=limit,
        search=search,
        status=status_filter,
        job_type=job_type,
        is_paid=is_paid,
    )
    return paginated(posts, page, limit, total)


@job_posts_router.put("")
async def moderate_job_post(request: JobPostAdminUpdate):
    """Change a post's status or paid-ad approval."""
    post = JobPostService.moderate_post(request)
    return ok(post, message="Job post updated")


@job_posts_router.delete("")
async def delete_job_post(
    post_id: Annotated[str | None, Query(alias="id", description="Job post to delete")] = None,
):
    """Permanently delete a job post."""
    JobPostService.hard_delete_post(post_id)
    return ok(message="Job post deleted")


# =============================================================================
# /seminars
# =============================================================================

@seminars_router.get("")
async def list_seminars(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: str | None = None,
    category: str | None = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
):
    """List seminars, including inactive ones."""
    seminars, total = SeminarService.list_seminars(
        page=page,
        limit=limit,
        search=search,
        category=category,
        status=status_filter,
        active_only=False,
    )
    return paginated(seminars, page, limit, total)


@seminars_router.post("", status_code=status.HTTP_201_CREATED)
async def create_seminar(request: SeminarCreate):
    seminar = SeminarService.create_seminar(request)
    return ok(seminar, message="Seminar created")


@seminars_router.get("/{seminar_id}")
async def get_seminar(seminar_id: SeminarId):
    return ok(SeminarService.get_seminar(seminar_id))


@seminars_router.put("/{seminar_id}")
async def update_seminar(seminar_id: SeminarId, request: SeminarUpdate):
    seminar = SeminarService.update_seminar(seminar_id, request)
    return ok(seminar, message="Seminar updated")


@seminars_router.delete("/{seminar_id}")
async def delete_seminar(seminar_id: SeminarId):
    SeminarService.delete_seminar(seminar_id)
    return ok(message="Seminar deleted")
