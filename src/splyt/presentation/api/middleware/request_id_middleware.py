"""
Request ID middleware for request tracking.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from splyt.infrastructure.monitoring.logger import (
    get_request_id,
    set_request_id,
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to generate and track request IDs.

    Adds X-Request-ID header to responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request with ID tracking.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response with X-Request-ID header
        """
        # Reuse caller's ID when present
        set_request_id(request.headers.get("X-Request-ID"))

        response = await call_next(request)

        response.headers["X-Request-ID"] = get_request_id() or ""
        return response
