"""
Request logging middleware.
"""

import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Log method, path, status and duration of every request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(
            f"[Request] {request.method} {request.get_full_path()} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response
