# =============================================================================
# app/routers/clinic_locations.py - Public Clinic Location Listings
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.responses import ok, paginated
from core.models.listing import ClinicLocationCreate, ClinicLocationUpdate, FavoriteRequest
from core.services.clinic_location_service import ClinicLocationService

router = APIRouter()


@router.get("")
async def list_clinic_locations(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: Annotated[str | None, Query(description="Matches title, address and description")] = None,
    region: Annotated[str | None, Query(description="전체 for all")] = None,
    location_type: Annotated[str | None, Query(alias="type", description="임대 / 매매; 전체 for all")] = None,
    min_size: Annotated[float | None, Query(alias="minSize", ge=0)] = None,
    max_size: Annotated[float | None, Query(alias="maxSize", ge=0)] = None,
    show_all: Annotated[bool, Query(alias="showAll", description="Include inactive listings")] = False,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
):
    """List clinic locations, newest first unless sorted otherwise."""
    locations, total = ClinicLocationService.list_locations(
        page=page,
        limit=limit,
        search=search,
        region=region,
        location_type=location_type,
        min_size=min_size,
        max_size=max_size,
        include_inactive=show_all,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    return paginated(locations, page, limit, total)


@router.post("/favorites")
async def update_favorite(
    request: FavoriteRequest,
    user: AuthUser = Depends(get_current_user),
):
    """Add or remove a location from the user's favourites."""
    action = ClinicLocationService.update_favorite(user.id, request)
    return ok(
        {"location_id": request.location_id, "action": action.value},
        message=f"Favorite {action.value}",
    )


@router.get("/{location_id}")
async def get_clinic_location(
    location_id: Annotated[str, Path(description="Clinic location id")],
):
    return ok(ClinicLocationService.get_location(location_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_clinic_location(
    request: ClinicLocationCreate,
    user: AuthUser = Depends(get_current_user),
):
    location = ClinicLocationService.create_location(request)
    return ok(location, message="Clinic location created")


@router.put("/{location_id}")
async def update_clinic_location(
    location_id: Annotated[str, Path(description="Clinic location id")],
    request: ClinicLocationUpdate,
    user: AuthUser = Depends(get_current_user),
):
    location = ClinicLocationService.update_location(location_id, request)
    return ok(location, message="Clinic location updated")


@router.patch("/{location_id}/toggle")
async def toggle_clinic_location(
    location_id: Annotated[str, Path(description="Clinic location id")],
    user: AuthUser = Depends(get_current_user),
):
    """Flip is_active."""
    return ok(ClinicLocationService.set_active(location_id))
