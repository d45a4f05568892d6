# =============================================================================
# lib/relations.py - Many-to-Many Mapping Table Helpers
# =============================================================================
# Vendors, beauty products and contacts hang off categories through plain
# join tables (vendor_category_map, beauty_product_category_map_uuid, ...).
# These helpers keep those tables consistent:
# - update_relations: replace an item's mapping rows
# - fetch_mapped_ids: resolve one side of a mapping from the other
# - intersect_category_members: AND-filter across several categories
# =============================================================================

import logging
from typing import Any, Iterable

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def update_relations(
    table: str,
    item_key: str,
    item_id: Any,
    related_key: str,
    related_ids: Iterable[Any] | None,
) -> list[dict[str, Any]]:
    """
    Replace every mapping row for one item.

    Deletes all rows where item_key = item_id, then inserts one row per
    related id. Passing an empty list just clears the relation.

    Args:
        table: Mapping table name
        item_key: Column holding the owning item's id (e.g. "vendor_id")
        item_id: Owning item's id
        related_key: Column holding the related id (e.g. "category_id")
        related_ids: New related ids (duplicates are collapsed)

    Returns:
        Inserted mapping rows

    Example:
        update_relations("vendor_category_map", "vendor_id", vendor_id,
                         "category_id", ["c1", "c2"])
    """
    client = SupabaseClient.get_client()
    item_id = SupabaseClient._normalize_uuid(item_id)

    client.table(table).delete().eq(item_key, item_id).execute()

    unique_ids = list(dict.fromkeys(str(rid) for rid in (related_ids or [])))
    if not unique_ids:
        logger.debug(f"Cleared {table} for {item_key}={item_id}")
        return []

    rows = [{item_key: item_id, related_key: rid} for rid in unique_ids]
    response = client.table(table).insert(rows).execute()

    logger.info(f"Replaced {table} for {item_key}={item_id}: {len(rows)} rows")
    return response.data or []


def fetch_mapped_ids(
    table: str,
    filter_key: str,
    filter_value: Any,
    select_key: str,
) -> list[Any]:
    """
    Look up the other side of a mapping.

    Example:
        # vendor ids in a category
        fetch_mapped_ids("vendor_category_map", "category_id", cid, "vendor_id")
    """
    client = SupabaseClient.get_client()
    response = (
        client.table(table)
        .select(select_key)
        .eq(filter_key, SupabaseClient._normalize_uuid(filter_value))
        .execute()
    )
    return [row[select_key] for row in (response.data or []) if row.get(select_key) is not None]


def intersect_category_members(
    mappings: Iterable[dict[str, Any]],
    category_ids: Iterable[Any],
    item_key: str = "product_id",
    category_key: str = "category_id",
) -> list[Any]:
    """
    Items mapped to every one of the given categories.

    PostgREST can't express "has all of these" over a join table, so the
    mapping rows for all requested categories are grouped per item and only
    items whose category set covers the request survive. Order follows the
    first appearance of each item in mappings.

    Args:
        mappings: Rows like {"product_id": ..., "category_id": ...}
        category_ids: Requested categories (AND semantics)

    Returns:
        Matching item ids

    Example:
        intersect_category_members(
            [{"product_id": 1, "category_id": "a"},
             {"product_id": 1, "category_id": "b"},
             {"product_id": 2, "category_id": "a"}],
            ["a", "b"],
        )
        # [1]
    """
    wanted = {str(cid) for cid in category_ids}
    if not wanted:
        return []

    members: dict[Any, set[str]] = {}
    for row in mappings:
        category = str(row.get(category_key))
        if category not in wanted:
            continue
        members.setdefault(row.get(item_key), set()).add(category)

    return [item for item, categories in members.items() if categories == wanted]
