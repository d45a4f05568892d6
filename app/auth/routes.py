# =============================================================================
# app/auth/routes.py - Manager Session Routes
# =============================================================================
# Lets the back-office UI check who is signed in.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes only read the verified token and the public.users row.
# =============================================================================

import logging
from fastapi import APIRouter, Depends

from app.auth.dependencies import require_manager
from app.auth.models import AuthUser, UserResponse
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_manager(
    user: AuthUser = Depends(require_manager)
) -> UserResponse:
    """
    Get the signed-in manager's profile.

    Falls back to token claims when the users row doesn't exist yet.

    Raises:
        401: If not authenticated
    """
    try:
        profile = SupabaseClient.fetch_one("users", user.id)
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch user profile: {e}")
        profile = None

    if profile:
        return UserResponse(**{**profile, "email": profile.get("email") or user.email})

    return UserResponse(id=user.id, email=user.email, role=user.role)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(require_manager)
) -> dict:
    """
    Verify that the current token is valid for the manager area.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
        "role": user.role,
    }
