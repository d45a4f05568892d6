# =============================================================================
# core/models/community.py - Q&A, User & Log Schemas
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Q&A
# =============================================================================

class QuestionCreate(BaseModel):
    """Body for POST /api/qna."""
    title: str | None = None
    content: str | None = None
    category_id: str | None = Field(default=None, alias="categoryId")

    model_config = {"populate_by_name": True}


class AnswerCreate(BaseModel):
    """Body for POST /api/qna/{id}/answers."""
    content: str | None = None


class VoteType(str, Enum):
    UP = "up"
    DOWN = "down"


class VoteRequest(BaseModel):
    """Body for POST /api/qna/{id}/vote."""
    type: VoteType | None = None


# =============================================================================
# Users
# =============================================================================

class UserAdminUpdate(BaseModel):
    """
    Body for PATCH /manager-api/users/{id}.

    is_active and role live on users; is_doctor_verified lives on user_info.
    """
    is_active: bool | None = None
    role: str | None = None
    is_doctor_verified: bool | None = None


# =============================================================================
# Advertisement Logs
# =============================================================================

class AdvertisementAction(str, Enum):
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    EXTEND = "extend"
    UPDATE = "update"


class AdvertisementLogCreate(BaseModel):
    """Body for POST /manager-api/advertisement-logs."""
    vendor_id: str | None = None
    action: str | None = None
    previous_expires_at: str | None = None
    new_expires_at: str | None = None
    previous_tier: str | None = None
    new_tier: str | None = None
    previous_priority_score: int | None = None
    new_priority_score: int | None = None
    duration_days: int | None = None
    reason: str | None = None
