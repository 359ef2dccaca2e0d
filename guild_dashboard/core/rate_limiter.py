"""Rate limiting using slowapi."""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

# Create limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["100/minute"],
    storage_uri="memory://",
    strategy="fixed-window",
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors.

    Args:
        request: The request that exceeded the rate limit
        exc: The rate limit exceeded exception

    Returns:
        JSON response with rate limit error details
    """
    retry_after = getattr(exc, "retry_after", 60)
    return JSONResponse(
        status_code=429,
        content={
            "error": "RateLimitExceeded",
            "detail": str(exc.detail),
        },
        headers={"Retry-After": str(retry_after)},
    )


def limit_api(limit: str = "100/minute"):
    """Rate limit for dashboard-facing endpoints.

    Args:
        limit: Rate limit string (e.g., "100/minute")
    """
    return limiter.limit(limit)


def limit_bot(limit: str = "1000/minute"):
    """Rate limit for bot-facing endpoints (higher limit).

    Args:
        limit: Rate limit string
    """
    return limiter.limit(limit)
