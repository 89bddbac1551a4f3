"""Request logging in the Apache combined log format."""

import logging
import time
from datetime import datetime, timezone

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


logger = logging.getLogger("relay.access")


def format_access_line(request: Request, status_code: int, content_length: str | None, duration_ms: float) -> str:
    client = request.client.host if request.client else "-"
    timestamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    referer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")

    return (
        f'{client} - - [{timestamp}] "{request.method} {target} HTTP/{http_version}" '
        f'{status_code} {content_length or "-"} "{referer}" "{user_agent}" {duration_ms:.1f}ms'
    )


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            format_access_line(request, response.status_code, response.headers.get("content-length"), duration_ms)
        )
        return response
