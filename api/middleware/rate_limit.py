"""
Rate limiting middleware.

Applies a per-client fixed window quota to every route except the ones listed
in ``exempt_paths``. Clients are identified with SlowAPI's remote address
helper. Responses carry the standard ``RateLimit-*`` headers; refused
requests get a 429 JSON body and never reach the route handler.
"""

import logging
import math
from typing import Callable, Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from api.middleware.rate_limit_state import FixedWindowRateLimiter, RateLimitSnapshot


logger = logging.getLogger(__name__)

RATE_LIMIT_ERROR = "Too many requests, please try again later."
DEFAULT_EXEMPT_PATHS = frozenset({"/", "/health"})


def rate_limit_headers(snapshot: RateLimitSnapshot) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(snapshot.limit),
        "RateLimit-Remaining": str(snapshot.remaining),
        "RateLimit-Reset": str(math.ceil(snapshot.reset_after)),
    }


def rate_limit_exceeded_handler(request: Request, snapshot: RateLimitSnapshot) -> JSONResponse:
    """
    Build the 429 Too Many Requests response.

    Args:
        request: The request that went over quota
        snapshot: The counter state after counting that request

    Returns:
        JSONResponse with 429 status code, rate limit headers and Retry-After
    """
    headers = rate_limit_headers(snapshot)
    headers["Retry-After"] = headers["RateLimit-Reset"]
    return JSONResponse(
        status_code=429,
        content={"error": RATE_LIMIT_ERROR},
        headers=headers,
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        *,
        limiter: FixedWindowRateLimiter,
        key_func: Callable[[Request], str] = get_remote_address,
        exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS,
    ):
        super().__init__(app)
        self.limiter = limiter
        self.key_func = key_func
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if not self.limiter.enabled or request.url.path in self.exempt_paths:
            return await call_next(request)

        key = self.key_func(request)
        snapshot = self.limiter.hit(key)
        if not snapshot.allowed:
            logger.warning(
                f"Rate limit exceeded for {key} on {request.method} {request.url.path} "
                f"({len(self.limiter)} clients tracked)"
            )
            return rate_limit_exceeded_handler(request, snapshot)

        response = await call_next(request)
        response.headers.update(rate_limit_headers(snapshot))
        return response
