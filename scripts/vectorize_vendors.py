#!/usr/bin/env python3
# =============================================================================
# scripts/vectorize_vendors.py - Bulk Vendor Embedding Refresh
# =============================================================================
# Computes search embeddings for published vendors. By default only vendors
# without an embedding are processed; --all recomputes every one.
#
# Usage:
#   python scripts/vectorize_vendors.py
#   python scripts/vectorize_vendors.py --all --delay 0.5
# =============================================================================

import argparse
import logging
import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from lib import embeddings
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("vectorize_vendors")


def load_vendors(include_embedded: bool) -> list[dict]:
    client = SupabaseClient.get_client()
    query = (
        client.table("vendors")
        .select("id, name, description_md, address")
        .eq("status", "published")
    )
    if not include_embedded:
        query = query.is_("search_embedding", "null")
    return (query.order("created_at", desc=True).execute()).data or []


def load_category_names(vendor_ids: list[str]) -> dict[str, list[str]]:
    """vendor id -> category names."""
    if not vendor_ids:
        return {}

    client = SupabaseClient.get_client()
    mappings = (
        client.table("vendor_category_map")
        .select("vendor_id, category_id")
        .in_("vendor_id", vendor_ids)
        .execute()
    ).data or []

    category_ids = list({m["category_id"] for m in mappings})
    names = {}
    if category_ids:
        names = {
            row["id"]: row["name"]
            for row in (
                client.table("vendor_categories").select("id, name").in_("id", category_ids).execute()
            ).data or []
        }

    result: dict[str, list[str]] = {}
    for m in mappings:
        if m["category_id"] in names:
            result.setdefault(m["vendor_id"], []).append(names[m["category_id"]])
    return result


def main() -> int:
    parser = argparse.ArgumentParser(description="Refresh vendor search embeddings")
    parser.add_argument("--all", action="store_true", help="Recompute vendors that already have an embedding")
    parser.add_argument("--delay", type=float, default=0.15, help="Seconds to wait between API calls")
    args = parser.parse_args()

    if not settings.OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not set")
        return 1

    vendors = load_vendors(include_embedded=args.all)
    if not vendors:
        logger.info("Every published vendor already has an embedding")
        return 0

    categories = load_category_names([v["id"] for v in vendors])
    logger.info(f"Vectorizing {len(vendors)} vendors")

    succeeded = 0
    for index, vendor in enumerate(vendors, start=1):
        progress = f"[{index}/{len(vendors)}]"
        text = embeddings.vendor_embedding_text(vendor, categories.get(vendor["id"]))
        try:
            vector = embeddings.embed_text(text)
            SupabaseClient.update_rows(
                "vendors",
                {"search_embedding": embeddings.to_pgvector(vector), "updated_at": utc_now_iso()},
                vendor["id"],
            )
            succeeded += 1
            logger.info(f"{progress} {vendor.get('name')}")
        except Exception as e:
            logger.error(f"{progress} failed for {vendor.get('name')}: {e}")

        time.sleep(args.delay)

    failed = len(vendors) - succeeded
    logger.info(f"Done: {succeeded} succeeded, {failed} failed")
    return 0 if failed == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
