# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the DocSupport API:
# - fakes.py: In-memory Supabase client (tables, RPC, storage buckets)
# - test_query_builder.py / test_utils.py: Library unit tests
# - test_auth.py: Token verification and manager role checks
# - test_vendors.py, test_vendor_images.py, test_categories.py: Directory
# - test_beauty_products.py, test_product_contacts.py: Product catalogue
# - test_listings.py, test_community.py: Job board, seminars, clinics, Q&A
# - test_users.py: Member moderation and audit logs
# - test_integrations.py: SMS gateway and embeddings helpers
#
# Run tests with: pytest
# =============================================================================
