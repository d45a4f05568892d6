# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization
# - Slug generation (Korean-aware)
# - Required-field validation
# - Timestamps and small parsing helpers
# =============================================================================

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable
from uuid import UUID

# Keeps ASCII letters/digits and Hangul syllables
_SLUG_STRIP = re.compile(r"[^a-z0-9가-힣]+")
_SLUG_DASHES = re.compile(r"-+")

# Value the consumer site sends for "no filter"
ALL_KO = "전체"


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        vendor_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        vendor_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Text Utilities
# =============================================================================

def generate_slug(text: str) -> str:
    """
    Build a URL slug from a display name.

    Lower-cases the text, turns every run of characters other than
    a-z, 0-9 and Hangul into a single dash, then trims dashes.

    Example:
        generate_slug("Dr. Kim's 피부과 Clinic!")  # "dr-kim-s-피부과-clinic"
    """
    slug = _SLUG_STRIP.sub("-", (text or "").lower())
    slug = _SLUG_DASHES.sub("-", slug)
    return slug.strip("-")


def validate_required_fields(data: dict[str, Any], fields: Iterable[str]) -> list[str]:
    """
    Return the names of fields that are missing, None or blank strings.

    Lists count as present even when empty; callers that need a
    non-empty list check it themselves.
    """
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def parse_csv_param(value: str | None) -> list[str]:
    """Split a comma-separated query value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def is_all(value: str | None) -> bool:
    """True when a filter value means "no filter" ("", "all", "전체")."""
    return not value or value in ("all", ALL_KO)


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None (partial updates)."""
    return {key: value for key, value in data.items() if value is not None}


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601, the format PostgREST filters expect."""
    return utc_now().isoformat()


def days_from_now_iso(days: int) -> str:
    return (utc_now() + timedelta(days=days)).isoformat()


# =============================================================================
# Request Utilities
# =============================================================================

def client_ip(forwarded_for: str | None, fallback: str | None) -> str | None:
    """
    Resolve the caller's IP.

    Uses the first X-Forwarded-For hop when present (the original client
    behind our proxy), otherwise the socket peer address.
    """
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return fallback
