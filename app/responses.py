# =============================================================================
# app/responses.py - Success Envelopes
# =============================================================================
# Every route answers with one of these shapes:
#   {"success": true, "data": ...}
#   {"success": true, "data": [...], "pagination": {page, limit, total, totalPages}}
#   {"success": true, "data": [...], "total": n}
#   {"count": n}
# Mutations may add a human-readable "message".
# =============================================================================

from typing import Any

from lib.query_builder import pagination_meta


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


def paginated(data: list[dict[str, Any]], page: int, limit: int, total: int) -> dict[str, Any]:
    """Page-based list envelope."""
    return {
        "success": True,
        "data": data,
        "pagination": pagination_meta(page, limit, total),
    }


def listed(data: list[Any], total: int | None = None) -> dict[str, Any]:
    """Offset-based (or unpaginated) list envelope."""
    return {
        "success": True,
        "data": data,
        "total": len(data) if total is None else total,
    }


def counted(count: int) -> dict[str, int]:
    return {"count": count}
