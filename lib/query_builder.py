# =============================================================================
# lib/query_builder.py - Chainable List Query Helper
# =============================================================================
# Every list endpoint does the same dance over a PostgREST select:
# optional filters, a free-text search across a few columns, a status
# filter, a sort, and a page range. QueryBuilder wraps that so routers and
# services read as a flat list of steps.
#
# Usage:
#   query = client.table("vendors").select("*", count="exact")
#   rows, total = (
#       QueryBuilder(query)
#       .search(search, ["name", "description_md"])
#       .status(status)
#       .sort("priority_score", "desc")
#       .paginate(page, limit)
#       .execute()
#   )
# =============================================================================

import logging
import math
import re
from typing import Any, Callable, Literal

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]

# Characters that would break out of a PostgREST or=(...) expression
_RESERVED = re.compile(r"[,()]")


# =============================================================================
# Pure Helpers
# =============================================================================

def sanitize_search_term(term: str | None) -> str:
    """Strip characters PostgREST treats as syntax inside or=(...)."""
    if not term:
        return ""
    return _RESERVED.sub(" ", term).strip()


def build_search_filter(term: str | None, fields: list[str]) -> str | None:
    """
    Build an `or` expression matching the term in any of the fields.

    Args:
        term: Free-text search input
        fields: Column names to match with ilike

    Returns:
        "name.ilike.%term%,phone.ilike.%term%" or None when there is nothing to search

    Example:
        build_search_filter("kim", ["name", "phone"])
        # "name.ilike.%kim%,phone.ilike.%kim%"
    """
    clean = sanitize_search_term(term)
    if not clean or not fields:
        return None
    return ",".join(f"{field}.ilike.%{clean}%" for field in fields)


def page_range(page: int, limit: int) -> tuple[int, int]:
    """Inclusive row range for a 1-indexed page."""
    start = (max(page, 1) - 1) * limit
    return start, start + limit - 1


def offset_range(offset: int, limit: int) -> tuple[int, int]:
    """Inclusive row range for offset/limit pagination."""
    start = max(offset, 0)
    return start, start + limit - 1


def parse_sort(
    field: str | None,
    direction: str | None,
    default_field: str,
    default_direction: SortDirection = "desc",
) -> tuple[str, bool]:
    """
    Resolve sort query params into (column, descending).

    Unknown directions fall back to the default.
    """
    column = field or default_field
    if direction not in ("asc", "desc"):
        direction = default_direction
    return column, direction == "desc"


def pagination_meta(page: int, limit: int, total: int) -> dict[str, int]:
    """
    Pagination block returned next to page-based lists.

    totalPages is ceil(total / limit), and 0 for an empty result.
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
    }


# =============================================================================
# QueryBuilder
# =============================================================================

class QueryBuilder:
    """
    Chainable wrapper over a PostgREST select builder.

    Each step is optional and returns self, so callers pass raw query
    params and let empty values fall through.
    """

    def __init__(self, query: Any):
        self.query = query

    def filter(self, condition: Any, fn: Callable[[Any], Any]) -> "QueryBuilder":
        """Apply fn(query) only when condition is truthy."""
        if condition:
            self.query = fn(self.query)
        return self

    def search(self, term: str | None, fields: list[str]) -> "QueryBuilder":
        expression = build_search_filter(term, fields)
        if expression:
            self.query = self.query.or_(expression)
        return self

    def status(self, value: str | None, column: str = "status") -> "QueryBuilder":
        """Exact status match; "all" and empty mean no filter."""
        if value and value != "all":
            self.query = self.query.eq(column, value)
        return self

    def sort(self, field: str, direction: str | None = "desc") -> "QueryBuilder":
        self.query = self.query.order(field, desc=(direction != "asc"))
        return self

    def paginate(self, page: int, limit: int) -> "QueryBuilder":
        start, end = page_range(page, limit)
        self.query = self.query.range(start, end)
        return self

    def slice(self, offset: int, limit: int) -> "QueryBuilder":
        start, end = offset_range(offset, limit)
        self.query = self.query.range(start, end)
        return self

    def execute(self) -> tuple[list[dict[str, Any]], int]:
        """
        Run the query.

        Returns:
            Tuple of (rows, total). total is the exact count when the select
            asked for one, otherwise the number of rows returned.
        """
        response = self.query.execute()
        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        logger.debug(f"Query returned {len(rows)} rows (total={total})")
        return rows, total
