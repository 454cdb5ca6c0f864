"""Standardised error payloads for DRF-level failures.

Domain exceptions are translated by each view; this handler covers what
DRF raises itself (authentication, throttling, malformed bodies and
serializer validation) so every error body shares one shape::

    {"type": "validation_error",
     "errors": [{"code": "min_value", "detail": "...", "attr": "quantity"}]}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def _error_type(exc: exceptions.APIException) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return "validation_error"
    if isinstance(
        exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)
    ):
        return "authentication_error"
    if isinstance(exc, exceptions.PermissionDenied):
        return "permission_error"
    if isinstance(exc, exceptions.Throttled):
        return "throttled_error"
    return "client_error"


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Turn DRF's nested ``ErrorDetail`` structure into a flat list."""
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            child = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                child = attr
            errors.extend(_flatten(value, child))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def standard_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response.data = {
        "type": _error_type(exc),
        "errors": _flatten(exc.detail),
    }
    logger.info(
        "api.error_response",
        status_code=response.status_code,
        error_type=response.data["type"],
    )
    return response
