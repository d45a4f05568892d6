# =============================================================================
# app/routers/societies.py - Medical Societies
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.responses import listed, ok
from core.services.society_service import SocietyService

router = APIRouter()


@router.get("")
async def list_societies(
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    category: str | None = None,
    search: Annotated[str | None, Query(description="Matches name, name_en and description")] = None,
):
    """List medical societies by name."""
    societies, total = SocietyService.list_societies(
        limit=limit,
        offset=offset,
        category=category,
        search=search,
    )
    return listed(societies, total)


@router.get("/{society_id}")
async def get_society(
    society_id: Annotated[UUID, Path(description="Society UUID")],
):
    return ok(SocietyService.get_society(society_id))
