# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind both APIs:
# - models/: Pydantic request bodies
# - services/: One service class per resource, talking to Supabase
#
# Services raise DocSupportException subclasses and never build HTTP
# responses; routers in app/ wrap their results in envelopes.
# =============================================================================
