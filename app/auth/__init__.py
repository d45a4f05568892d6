# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/qna")
#   async def ask(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user, require_manager
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "get_current_user",
    "require_manager",
    "AuthUser",
    "UserResponse",
]
