# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the DocSupport API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.auth import require_manager
from app.auth import routes as auth_routes
from app.exceptions import (
    DocSupportException,
    docsupport_exception_handler,
    http_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    beauty_products,
    clinic_locations,
    health,
    job_posts,
    qna,
    seminars,
    societies,
    vendors,
    webinars,
)
from app.routers.manager import (
    beauty_products as manager_beauty_products,
    categories as manager_categories,
    listings as manager_listings,
    users as manager_users,
    vendors as manager_vendors,
)
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Nothing is opened eagerly: the Supabase client, the JWKS document and
    the OpenAI client are created on first use.
    """
    logger.info(f"Starting DocSupport API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if not settings.sms_configured:
        logger.warning("Solapi credentials not set; partner SMS sending is disabled")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set; vendor embedding refresh is disabled")

    yield

    logger.info("Shutting down DocSupport API")


# Create FastAPI application
app = FastAPI(
    title="DocSupport API",
    description="""
## Medical Vendor Directory API

Public endpoints (`/api`) serve the consumer site: vendors, beauty
products, job posts, Q&A, seminars, clinic locations, webinars and
medical societies.

Back-office endpoints (`/manager-api`) require a Supabase access token
(`Authorization: Bearer <jwt>`) and manage the same content plus
members, login logs and advertisement history.
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "API health and readiness checks"},
        {"name": "Directory", "description": "Public vendor directory"},
        {"name": "Beauty Products", "description": "Public beauty product catalogue"},
        {"name": "Community", "description": "Job posts, Q&A, seminars, clinic locations, webinars"},
        {"name": "Manager", "description": "Back-office administration (auth required)"},
        {"name": "Auth", "description": "Manager session checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(DocSupportException, docsupport_exception_handler)
app.add_exception_handler(SupabaseClientError, supabase_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Public Routers (/api)
# =============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(vendors.router, prefix="/api", tags=["Directory"])
app.include_router(societies.router, prefix="/api/societies", tags=["Directory"])
app.include_router(beauty_products.router, prefix="/api/beauty-products", tags=["Beauty Products"])
app.include_router(job_posts.router, prefix="/api/job-posts", tags=["Community"])
app.include_router(qna.router, prefix="/api/qna", tags=["Community"])
app.include_router(seminars.router, prefix="/api/seminars", tags=["Community"])
app.include_router(clinic_locations.router, prefix="/api/clinic-locations", tags=["Community"])
app.include_router(webinars.router, prefix="/api/webinar", tags=["Community"])


# =============================================================================
# Manager Routers (/manager-api)
# =============================================================================

app.include_router(auth_routes.router, prefix="/manager-api/auth", tags=["Auth"])

MANAGER_ROUTERS = [
    (manager_vendors.router, "/vendors"),
    (manager_categories.vendor_categories_router, "/vendor-categories"),
    (manager_categories.categories_router, "/categories"),
    (manager_categories.departments_router, "/departments"),
    (manager_beauty_products.products_router, "/beauty-products"),
    (manager_beauty_products.categories_router, "/beauty-product-categories"),
    (manager_beauty_products.contacts_router, "/beauty-product-contacts"),
    (manager_beauty_products.contact_products_router, "/contact-products"),
    (manager_listings.clinic_locations_router, "/clinic-locations"),
    (manager_listings.job_posts_router, "/job-posts"),
    (manager_listings.seminars_router, "/seminars"),
    (manager_users.users_router, "/users"),
    (manager_users.login_logs_router, "/login-logs"),
    (manager_users.advertisement_logs_router, "/advertisement-logs"),
]

for router, path in MANAGER_ROUTERS:
    app.include_router(
        router,
        prefix=f"/manager-api{path}",
        tags=["Manager"],
        dependencies=[Depends(require_manager)],
    )


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "DocSupport API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
