"""
Rate Limiting for the STATS API
===============================
Implements rate limiting using slowapi, backed by Redis when REDIS_URL is set
and by in-process memory otherwise.

Special endpoints have their own limits:
- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- /harmony/analyze: RATE_LIMIT_AI_PER_MINUTE (language model calls)

Set RATE_LIMIT_ENABLED=false to turn every limit into a no-op (tests do).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from stats_api.core.config import settings
from stats_api.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key based on user authentication.

    Priority:
    1. Authenticated user ID (set on request.state by the auth dependency)
    2. API key (for scripts/integrations)
    3. IP address (for anonymous users)
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"

    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key[:16]}"  # Use first 16 chars for privacy

    return f"ip:{get_remote_address(request)}"


def get_storage_uri() -> str:
    """Redis when configured, memory otherwise"""
    return settings.REDIS_URL or "memory://"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=get_storage_uri(),
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON body with the error message and a Retry-After header.
    """
    retry_after = exc.detail.split(":")[-1].strip() if exc.detail else "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests. Please slow down.",
            "detail": str(exc.detail),
            "retry_after_seconds": int(retry_after) if retry_after.isdigit() else 60,
        },
        headers={
            "Retry-After": retry_after if retry_after.isdigit() else "60",
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )


def auth_rate_limit():
    """Rate limit for login (5/min)"""
    return limiter.limit("5/minute", key_func=get_user_identifier)


def register_rate_limit():
    """Rate limit for account creation (3/min)"""
    return limiter.limit("3/minute", key_func=get_user_identifier)


def ai_operation_rate_limit():
    """Rate limit for language model calls"""
    return limiter.limit(f"{settings.RATE_LIMIT_AI_PER_MINUTE}/minute", key_func=get_user_identifier)


def standard_rate_limit():
    """Standard rate limit"""
    return limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute", key_func=get_user_identifier)
