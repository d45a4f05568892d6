# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /api/health answers as long as the process is up. /api/health/ready checks
# the directory tables the public site cannot render without and reports
# which optional integrations (Solapi SMS, OpenAI embeddings) are configured.
# =============================================================================

import logging
import time

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"

# Tables every public page reads from
READINESS_TABLES = ["vendor_categories", "vendors", "beauty_products"]


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class TableCheck(BaseModel):
    """Result of checking one table."""
    status: str
    rows: int | None = None
    latency_ms: float | None = None
    error: str | None = None


class ChecksResponse(BaseModel):
    database: str
    tables: dict[str, TableCheck]
    sms_configured: bool
    embeddings_configured: bool


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


def _check_table(client, table: str) -> TableCheck:
    started = time.perf_counter()
    try:
        result = client.table(table).select("id", count="exact").limit(1).execute()
    except Exception as e:
        logger.warning(f"Readiness check on {table} failed: {e}")
        return TableCheck(status="unhealthy", error=str(e)[:80])

    return TableCheck(
        status="healthy",
        rows=result.count,
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check for load balancers."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Counts rows in each directory table. The service is "ready" only when
    every table answers; SMS and embedding configuration are reported but
    do not affect the status.
    """
    from lib.supabase_client import SupabaseClient

    try:
        client = SupabaseClient.get_client()
    except Exception as e:
        logger.error(f"Readiness check could not create a client: {e}")
        tables = {
            table: TableCheck(status="unhealthy", error=str(e)[:80])
            for table in READINESS_TABLES
        }
    else:
        tables = {table: _check_table(client, table) for table in READINESS_TABLES}

    database = "healthy" if all(t.status == "healthy" for t in tables.values()) else "unhealthy"

    return ReadinessResponse(
        status="ready" if database == "healthy" else "degraded",
        checks=ChecksResponse(
            database=database,
            tables=tables,
            sms_configured=settings.sms_configured,
            embeddings_configured=bool(settings.OPENAI_API_KEY),
        ),
        timestamp=utc_now_iso(),
    )
