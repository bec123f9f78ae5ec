"""
Request context middleware.

Every request gets a correlation id (the caller's X-Request-ID when present)
that is stamped onto log records for the duration of the request and echoed
back together with the handling time.
"""
import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from referencedata.config import settings
from referencedata.utils.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):

    REQUEST_ID_HEADER = "X-Request-ID"
    RESPONSE_TIME_HEADER = "X-Response-Time-Ms"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        request_id = request.headers.get(self.REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000

            if settings.ENABLE_REQUEST_ID:
                response.headers[self.REQUEST_ID_HEADER] = request_id
                response.headers[self.RESPONSE_TIME_HEADER] = f"{elapsed_ms:.2f}"
            if settings.ENABLE_REQUEST_LOGGING:
                logger.info(
                    "request_completed method=%s path=%s query=%s status=%s duration_ms=%.2f",
                    request.method,
                    request.url.path,
                    request.url.query or "-",
                    response.status_code,
                    elapsed_ms,
                )
            return response
        finally:
            request_id_var.reset(token)
