# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - query_builder.py: Search, filter, sort and pagination over PostgREST
# - relations.py: Many-to-many mapping table helpers
# - embeddings.py: OpenAI embeddings for vendor vector search
# - sms.py: Solapi SMS gateway client
# - utils.py: Shared helpers (slugs, required fields, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.query_builder import QueryBuilder, pagination_meta, parse_sort
from lib.utils import generate_slug, normalize_uuid, validate_required_fields

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Queries
    "QueryBuilder",
    "pagination_meta",
    "parse_sort",
    # Utils
    "generate_slug",
    "normalize_uuid",
    "validate_required_fields",
]
