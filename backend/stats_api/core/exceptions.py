"""
Custom Exceptions for the STATS API
===================================

Raise these from services instead of generic Exception. The API layer
turns them into JSON error responses through `stats_error_handler`.

Usage:
    from stats_api.core.exceptions import ResourceNotFoundError

    if not record:
        raise ResourceNotFoundError("SleepRecord", record_id)
"""

from typing import Optional, Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse


class StatsError(Exception):
    """Base exception for all STATS errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(StatsError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(StatsError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(StatsError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    """User not found"""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class ProfileNotFoundError(ResourceNotFoundError):
    """Profile row missing for a user"""

    def __init__(self, user_id: str):
        super().__init__("Profile", user_id)


class AnalysisNotFoundError(ResourceNotFoundError):
    """No cached harmony analysis for the user"""

    def __init__(self, user_id: str):
        super().__init__("Analysis", user_id)


# ============================================
# Validation / Conflict Errors (400-type)
# ============================================

class ValidationError(StatsError):
    """Input validation failed"""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None,
                 field_errors: Optional[Dict[str, list]] = None):
        details: Dict[str, Any] = {"field": field} if field else {}
        if field_errors:
            details["field_errors"] = field_errors
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConflictError(StatsError):
    """Request conflicts with existing state (duplicates, already friends...)"""

    status_code = 400

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


# ============================================
# AI / Language model Errors
# ============================================

class AIServiceError(StatsError):
    """Language model service error"""

    def __init__(self, message: str):
        super().__init__(message, code="AI_SERVICE_ERROR")


class AINotConfiguredError(AIServiceError):
    """No API key configured for the language model"""

    def __init__(self):
        super().__init__("Language model API key is not configured")
        self.code = "AI_NOT_CONFIGURED"


class AIResponseParseError(AIServiceError):
    """Failed to parse or validate the model response"""

    def __init__(self, message: str = "Failed to parse AI response"):
        super().__init__(message)
        self.code = "AI_PARSE_ERROR"


# ============================================
# Helpers for API responses
# ============================================

def error_response(error: StatsError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }


async def stats_error_handler(request: Request, exc: StatsError) -> JSONResponse:
    """FastAPI exception handler for StatsError subclasses"""
    if isinstance(exc, ValidationError):
        # Same body shape as request validation failures
        content = {
            "error": exc.message,
            "field_errors": exc.details.get("field_errors", {}),
        }
    else:
        content = error_response(exc)
    return JSONResponse(status_code=exc.status_code, content=content)


def format_field_errors(errors: list) -> Dict[str, list]:
    """Group pydantic error entries by dotted field path ('_root' when empty)"""
    field_errors: Dict[str, list] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        path = ".".join(loc) or "_root"
        field_errors.setdefault(path, []).append(error.get("msg", "Invalid value"))
    return field_errors


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report request validation failures as {error, field_errors} with 422"""
    errors = exc.errors() if hasattr(exc, "errors") else []
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid data provided",
            "field_errors": format_field_errors(errors),
        }
    )
