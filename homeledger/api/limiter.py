"""Request throttling per client address."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from homeledger.api.errors import RateLimitedError, error_response
from homeledger.config import settings

logger = logging.getLogger(__name__)

# Counters are kept in process memory; default_limits apply through SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.api_rate_limit],
    enabled=settings.rate_limit_enabled,
)


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer a throttled request with 429 in the standard error shape.

    Must stay synchronous: SlowAPIMiddleware calls it without awaiting.
    """
    logger.warning(
        "Rate limit %s exceeded by %s on %s",
        exc.detail,
        get_remote_address(request),
        request.url.path,
    )
    error = RateLimitedError()
    return JSONResponse(status_code=error.http_status, content=error_response(error))


__all__ = ["limiter", "rate_limit_handler"]
