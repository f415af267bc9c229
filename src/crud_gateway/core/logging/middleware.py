# src/crud_gateway/core/logging/middleware.py
"""
Request ID + access log middleware.

For every request:
  1. take `X-Request-ID` from the incoming headers, or generate a UUID4;
  2. store it in the request-id context variable (see filters.py) so every
     record logged while serving the request carries it;
  3. echo it back on the response;
  4. log one `http.request` line with method, path, status and duration.

Incoming ids longer than 128 characters or containing control characters are
replaced with a fresh UUID so they cannot break log lines.
"""

import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

logger = logging.getLogger(__name__)

_MAX_REQUEST_ID_LENGTH = 128


def _usable_request_id(value: str | None) -> str | None:
    if not value or len(value) > _MAX_REQUEST_ID_LENGTH or not value.isprintable():
        return None
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = _usable_request_id(request.headers.get("X-Request-ID")) or str(uuid.uuid4())
        token = set_request_id(rid)
        start = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = rid

            logger.info(
                "%s %s %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={
                    "event": "http.request",
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return response

        finally:
            reset_request_id(token)
