# =============================================================================
# app/routers/seminars.py - Public Seminar Listings
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.responses import ok, paginated
from core.models.listing import SeminarCreate
from core.services.seminar_service import SeminarService

router = APIRouter()


@router.get("")
async def list_seminars(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: Annotated[str | None, Query(description="Matches title, organizer and description")] = None,
    category: str | None = None,
    location: Annotated[str | None, Query(description="Partial match")] = None,
    month: Annotated[str | None, Query(description="Korean month label, e.g. 3월")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
):
    """List active seminars, soonest first."""
    seminars, total = SeminarService.list_seminars(
        page=page,
        limit=limit,
        search=search,
        category=category,
        location=location,
        month=month,
        status=status_filter,
    )
    return paginated(seminars, page, limit, total)


@router.get("/{seminar_id}")
async def get_seminar(
    seminar_id: Annotated[str, Path(description="Seminar id")],
):
    return ok(SeminarService.get_seminar(seminar_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_seminar(
    request: SeminarCreate,
    user: AuthUser = Depends(get_current_user),
):
    seminar = SeminarService.create_seminar(request)
    return ok(seminar, message="Seminar created")
