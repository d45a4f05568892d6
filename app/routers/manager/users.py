# =============================================================================
# app/routers/manager/users.py - Members & Audit Logs
# =============================================================================
# Three routers:
# - users_router: /manager-api/users
# - login_logs_router: /manager-api/login-logs
# - advertisement_logs_router: /manager-api/advertisement-logs
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, require_manager
from app.responses import ok, paginated
from core.models.community import AdvertisementLogCreate, UserAdminUpdate
from core.services.advertisement_log_service import AdvertisementLogService
from core.services.user_service import LoginLogService, UserService

users_router = APIRouter()
login_logs_router = APIRouter()
advertisement_logs_router = APIRouter()


# =============================================================================
# /users
# =============================================================================

@users_router.get("")
async def list_users(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: Annotated[str | None, Query(description="Matches name, nickname and phone number")] = None,
    doctor_verified: Annotated[str | None, Query(description="\"true\" / \"false\" (false includes unset)")] = None,
    is_active: Annotated[str | None, Query(description="\"true\" / \"false\" (false includes unset)")] = None,
):
    """List members, newest first."""
    users, total = UserService.list_users(
        page=page,
        limit=limit,
        search=search,
        doctor_verified=doctor_verified,
        is_active=is_active,
    )
    return paginated(users, page, limit, total)


@users_router.get("/{user_id}")
async def get_user(user_id: Annotated[str, Path(description="User UUID")]):
    return ok(UserService.get_user(user_id))


@users_router.patch("/{user_id}")
async def update_user(
    user_id: Annotated[str, Path(description="User UUID")],
    request: UserAdminUpdate,
):
    """Change a member's active flag, role or doctor verification."""
    user = UserService.update_user(user_id, request)
    return ok(user, message="User updated")


# =============================================================================
# /login-logs
# =============================================================================

@login_logs_router.get("")
async def list_login_logs(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    search: Annotated[str | None, Query(description="Matches email, IP and user agent")] = None,
    user_id: str | None = None,
    login_method: str | None = None,
    success: Annotated[str | None, Query(description="\"true\" / \"false\"")] = None,
    device_type: str | None = None,
    start_date: Annotated[str | None, Query(description="ISO timestamp, inclusive")] = None,
    end_date: Annotated[str | None, Query(description="ISO timestamp, inclusive")] = None,
):
    logs, total = LoginLogService.list_logs(
        page=page,
        limit=limit,
        search=search,
        user_id=user_id,
        login_method=login_method,
        success=success,
        device_type=device_type,
        start_date=start_date,
        end_date=end_date,
    )
    return paginated(logs, page, limit, total)


# =============================================================================
# /advertisement-logs
# =============================================================================

@advertisement_logs_router.get("")
async def list_advertisement_logs(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=200)] = 20,
    vendor_id: str | None = None,
    action: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
):
    """Advertisement changes, newest first, each with its vendor."""
    logs, total = AdvertisementLogService.list_logs(
        page=page,
        limit=limit,
        vendor_id=vendor_id,
        action=action,
        start_date=start_date,
        end_date=end_date,
    )
    return paginated(logs, page, limit, total)


@advertisement_logs_router.post("", status_code=status.HTTP_201_CREATED)
async def create_advertisement_log(
    request: AdvertisementLogCreate,
    user: AuthUser = Depends(require_manager),
):
    log = AdvertisementLogService.create_log(request, created_by=str(user.id))
    return ok(log, message="광고 로그가 생성되었습니다.")
