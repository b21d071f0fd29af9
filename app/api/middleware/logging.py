# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Gives every request a tracking number and writes a short diary line for it: what was
# asked, how it ended and how long it took.
# 🧪 Purpose (Technical Summary):
# Request context middleware. Reuses or creates the X-Request-ID, binds it to the
# logging ContextVar for the duration of the request, and logs method, path, status
# and latency. The id is echoed in the response headers.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, app.shared.utils.logging, uuid, time
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration), app.api.middleware.error_handling (request_id)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request correlation and access logging."""

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.request_id_header = "X-Request-ID"
        self.slow_request_threshold = slow_request_threshold

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(self.request_id_header.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        start_time = time.perf_counter()

        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                processing_time = time.perf_counter() - start_time
                logger.error(
                    f"{request.method} {request.url.path} failed after {processing_time * 1000:.1f}ms: "
                    f"{type(e).__name__}"
                )
                raise

            processing_time = time.perf_counter() - start_time
            log = logger.warning if processing_time > self.slow_request_threshold else logger.info
            log(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({processing_time * 1000:.1f}ms)",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "processing_time_ms": round(processing_time * 1000, 2),
                    "user_id": getattr(request.state, "user_id", None),
                },
            )

        response.headers[self.request_id_header] = request_id
        response.headers["X-Response-Time"] = f"{processing_time:.3f}s"
        return response
