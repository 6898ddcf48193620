"""Rate limiting configuration using slowapi."""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

logger = structlog.get_logger()

# Per-client limits keyed by remote address; routes declare their own rates.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return the standard error body with a 429 status."""
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    logger.warning("rate_limit_exceeded", path=request.url.path, limit=limit)
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {limit}",
            "details": {"limit": str(limit)},
        },
    )
