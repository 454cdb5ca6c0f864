"""Unit tests for the standard API error format."""

from __future__ import annotations

import pytest
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions

from modules.core.exceptions import standard_exception_handler

pytestmark = pytest.mark.unit


class TestStandardExceptionHandler:
    def test_validation_error_lists_each_field(self):
        exc = exceptions.ValidationError(
            {"quantity": ["Ensure this value is greater than or equal to 1."]}
        )
        response = standard_exception_handler(exc, {})

        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"] == [
            {
                "code": "invalid",
                "detail": "Ensure this value is greater than or equal to 1.",
                "attr": "quantity",
            }
        ]

    def test_authentication_error(self):
        response = standard_exception_handler(exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response.data["type"] == "authentication_error"
        assert response.data["errors"][0]["attr"] is None

    def test_django_404_converted(self):
        response = standard_exception_handler(Http404("gone"), {})
        assert response.status_code == 404
        assert response.data["type"] == "client_error"

    def test_django_permission_denied_converted(self):
        response = standard_exception_handler(DjangoPermissionDenied(), {})
        assert response.status_code == 403
        assert response.data["type"] == "permission_error"

    def test_throttled(self):
        response = standard_exception_handler(exceptions.Throttled(wait=10), {})
        assert response.status_code == 429
        assert response.data["type"] == "throttled_error"

    def test_unhandled_exception_passes_through(self):
        assert standard_exception_handler(RuntimeError("boom"), {}) is None
