# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the service as {"error", "code", "suggestion"?, "details"?}.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class DocSupportException(Exception):
    """
    Base exception for the DocSupport API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DOCSUPPORT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ResourceNotFoundError(DocSupportException):
    """Raised when a row doesn't exist."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            code="NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id is correct",
            details={"resource": resource, "id": str(resource_id)}
        )


class MissingFieldsError(DocSupportException):
    """Raised when required body fields are missing or blank."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message=f"Missing required fields: {', '.join(fields)}",
            code="MISSING_FIELDS",
            status_code=400,
            suggestion="Provide a non-empty value for every listed field",
            details={"missing_fields": fields}
        )


class BadRequestError(DocSupportException):
    """Raised for malformed input that passes schema validation."""

    def __init__(self, message: str, suggestion: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="BAD_REQUEST",
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class DuplicateRequestError(DocSupportException):
    """Raised when a user repeats a one-time action."""

    def __init__(self, action: str, target_id: Any):
        super().__init__(
            message=f"Already requested: {action}",
            code="DUPLICATE_REQUEST",
            status_code=400,
            suggestion="This action can only be performed once per user",
            details={"action": action, "id": str(target_id)}
        )


class ForbiddenError(DocSupportException):
    """Raised when the caller doesn't own the row they are changing."""

    def __init__(self, message: str = "You do not have permission to modify this resource"):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            suggestion="Sign in as the owner of this resource",
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(DocSupportException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(DocSupportException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb}
        )


class StorageUploadError(DocSupportException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class DatabaseError(DocSupportException):
    """Raised when a write returns nothing or the backend rejects it."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database operation failed: {operation}",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error}
        )


class ExternalServiceError(DocSupportException):
    """Raised when the SMS gateway or embeddings API fails."""

    def __init__(self, service: str, error: str):
        super().__init__(
            message=f"{service} request failed",
            code="EXTERNAL_SERVICE_ERROR",
            status_code=502,
            suggestion=f"Check the {service} credentials and try again",
            details={"service": service, "error": error}
        )


class ServiceNotConfiguredError(DocSupportException):
    """Raised when an optional integration has no credentials."""

    def __init__(self, service: str, settings_names: list[str]):
        super().__init__(
            message=f"{service} is not configured",
            code=f"{service.upper()}_NOT_CONFIGURED",
            status_code=503,
            suggestion=f"Set {', '.join(settings_names)} in the environment",
            details={"settings": settings_names}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def _public_content(content: dict[str, Any], status_code: int) -> dict[str, Any]:
    """Drop backend detail from 5xx bodies in production."""
    if settings.is_production and status_code >= 500:
        content.pop("details", None)
    return content


async def docsupport_exception_handler(
    request: Request,
    exc: DocSupportException
) -> JSONResponse:
    """
    Convert DocSupportException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_public_content(exc.to_dict(), exc.status_code)
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Map wrapper failures from lib.supabase_client to a 500 body."""
    logger.error(f"Supabase error on {request.method} {request.url.path}: {exc}")
    content = {
        "error": exc.message,
        "code": "DATABASE_ERROR",
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    content["details"] = {"code": exc.code, **exc.details}
    return JSONResponse(status_code=500, content=_public_content(content, 500))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Reshape framework HTTP errors (401 from auth, 404 on unknown routes).
    """
    if exc.status_code == 404 and exc.detail == "Not Found":
        content = {"error": "Not Found", "code": "NOT_FOUND"}
    else:
        codes = {401: "UNAUTHORIZED", 403: "FORBIDDEN", 405: "METHOD_NOT_ALLOWED"}
        content = {
            "error": exc.detail,
            "code": codes.get(exc.status_code, "HTTP_ERROR"),
        }
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg"),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        }
    )
