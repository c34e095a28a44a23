"""HTTP middleware binding a request id into the skill log context."""

from __future__ import annotations

import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response

from principles_skill.core.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag logs for one HTTP exchange and echo the request id to the caller."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    started = time.perf_counter()
    status_code = 500
    with log_context(request_id=request_id):
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                "%s %s -> %d",
                request.method,
                request.url.path,
                status_code,
                extra={
                    "event": "http_request",
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


__all__ = ["REQUEST_ID_HEADER", "request_context_middleware"]
