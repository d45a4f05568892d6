# =============================================================================
# app/routers/webinars.py - Webinars
# =============================================================================
# Listing and detail are public. Rebroadcast requests and interest marks
# are one per signed-in user; views are anonymous.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.responses import ok, paginated
from core.models.listing import WebinarCreate
from core.services.webinar_service import WebinarService

router = APIRouter()

WebinarId = Annotated[str, Path(description="Webinar id")]


@router.get("")
async def list_webinars(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
):
    """List active webinars by scheduled date."""
    webinars, total = WebinarService.list_webinars(page=page, limit=limit, status=status_filter)
    return paginated(webinars, page, limit, total)


@router.get("/{webinar_id}")
async def get_webinar(webinar_id: WebinarId):
    return ok(WebinarService.get_webinar(webinar_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_webinar(
    request: WebinarCreate,
    user: AuthUser = Depends(get_current_user),
):
    webinar = WebinarService.create_webinar(request)
    return ok(webinar, message="Webinar created")


@router.post("/{webinar_id}/rebroadcast-request")
async def request_rebroadcast(
    webinar_id: WebinarId,
    user: AuthUser = Depends(get_current_user),
):
    """
    Ask for a rebroadcast.

    Raises:
        400: The user already asked for this webinar
    """
    WebinarService.request_rebroadcast(webinar_id, user.id)
    return ok({"webinar_id": webinar_id}, message="Rebroadcast requested")


@router.post("/{webinar_id}/interested")
async def mark_interested(
    webinar_id: WebinarId,
    user: AuthUser = Depends(get_current_user),
):
    WebinarService.mark_interested(webinar_id, user.id)
    return ok({"webinar_id": webinar_id}, message="Interest recorded")


@router.post("/{webinar_id}/view")
async def record_view(webinar_id: WebinarId):
    WebinarService.record_view(webinar_id)
    return ok({"webinar_id": webinar_id})
