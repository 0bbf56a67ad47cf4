"""
Django Ninja API configuration.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from django.core.exceptions import RequestDataTooBig
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpRequest, HttpResponse
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError
from ninja.renderers import JSONRenderer
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class SuccessWrapperRenderer(JSONRenderer):
    """Wrap all responses in {success: true, data: ...} format for frontend compatibility."""

    def render(self, request: HttpRequest, data: Any, *, response_status: int) -> Any:
        # Responses that already carry the envelope pass through
        if isinstance(data, dict) and "success" in data:
            return super().render(request, data, response_status=response_status)

        if 200 <= response_status < 300:
            wrapped = {"success": True, "data": data}
        else:
            wrapped = {"success": False, "error": data}

        return super().render(request, wrapped, response_status=response_status)


api = NinjaAPI(
    title="SoSapient Content API",
    version="1.0.0",
    description="Blog, comments, careers, contact and newsletter API",
    renderer=SuccessWrapperRenderer(),
)


@api.exception_handler(ValidationError)
def validation_errors(request: HttpRequest, exc: ValidationError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "message": "Validation error", "error": exc.errors},
        status=422,
    )


@api.exception_handler(PydanticValidationError)
def pydantic_validation_errors(request: HttpRequest, exc: PydanticValidationError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "message": "Validation error", "error": exc.errors(include_url=False)},
        status=422,
    )


@api.exception_handler(DjangoValidationError)
def model_validation_errors(request: HttpRequest, exc: DjangoValidationError) -> HttpResponse:
    # Field-level messages from model validation are client errors
    if hasattr(exc, "message_dict"):
        error: Any = exc.message_dict
    else:
        error = exc.messages
    return api.create_response(
        request,
        {"success": False, "message": "Validation error", "error": error},
        status=400,
    )


@api.exception_handler(RequestDataTooBig)
def request_too_big(request: HttpRequest, exc: RequestDataTooBig) -> HttpResponse:
    logger.warning(f"[API] Rejected oversized body on {request.method} {request.path}")
    return api.create_response(
        request,
        {"success": False, "message": "Request body too large"},
        status=413,
    )


@api.exception_handler(HttpError)
def http_error_handler(request: HttpRequest, exc: HttpError) -> HttpResponse:
    return api.create_response(
        request,
        {"success": False, "message": str(exc)},
        status=exc.status_code,
    )


@api.exception_handler(Exception)
def generic_error_handler(request: HttpRequest, exc: Exception) -> HttpResponse:
    logger.exception(f"[API] Unhandled error on {request.method} {request.path}: {exc}")
    return api.create_response(
        request,
        {"success": False, "message": "Internal server error", "error": str(exc)},
        status=500,
    )


# Health check
@api.get("/health")
def health_check(request: HttpRequest) -> dict:
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Import and register routers
from apps.blog.api import router as blog_router
from apps.careers.api import router as careers_router
from apps.contact.api import router as contact_router
from apps.subscribers.api import router as subscribers_router

api.add_router("/blogs", blog_router, tags=["Blog"])
api.add_router("/career", careers_router, tags=["Career"])
api.add_router("/contact", contact_router, tags=["Contact"])
api.add_router("", subscribers_router, tags=["Subscribers"])
