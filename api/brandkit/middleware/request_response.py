"""Request/Response middleware for consistent API behavior.

Assigns a request id, times the request, logs both ends and turns any
exception that escaped the routers into a generic 500 body.
"""

from __future__ import annotations

import time
import logging
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.structured_logging import request_id_var
from ..models.exceptions import INTERNAL_ERROR_BODY

logger = logging.getLogger(__name__)


class RequestResponseMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent request/response handling."""

    def __init__(
        self,
        app: ASGIApp,
        log_requests: bool = True,
        log_responses: bool = True,
    ):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start_time = time.time()

        if self.log_requests:
            logger.info(
                f"Incoming request: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "remote_addr": request.client.host if request.client else "unknown",
                    "content_length": request.headers.get("content-length", 0),
                },
            )

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "Unhandled exception in request processing",
                    extra={"method": request.method, "path": request.url.path, "error_type": type(e).__name__},
                    exc_info=True,
                )
                response = JSONResponse(status_code=500, content=dict(INTERNAL_ERROR_BODY))

            processing_time_ms = int((time.time() - start_time) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Processing-Time-Ms"] = str(processing_time_ms)

            if self.log_responses:
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    f"Response: {response.status_code}",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "http_status": response.status_code,
                        "response_time_ms": processing_time_ms,
                    },
                )
            return response
        finally:
            request_id_var.reset(token)
