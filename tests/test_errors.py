"""Tests for techbadges.errors."""

import json

import pytest

from techbadges.errors import (
    AppError,
    ErrorKind,
    NotFoundError,
    RateLimitError,
    ValidationError,
    error_payload,
    error_response,
)


class TestErrorTypes:
    """Tests for the error classes."""

    def test_app_error_defaults(self):
        error = AppError("boom")
        assert error.status_code == 500
        assert error.code == "INTERNAL_ERROR"
        assert str(error) == "boom"

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_validation_error_per_kind(self, kind):
        error = ValidationError(kind)
        assert error.kind is kind
        assert error.message == kind.value
        assert error.status_code == 400
        assert error.code == "VALIDATION_ERROR"
        assert isinstance(error, AppError)

    def test_validation_error_custom_message(self):
        error = ValidationError(ErrorKind.EMPTY_INPUT, "nothing here")
        assert error.message == "nothing here"
        assert error.kind is ErrorKind.EMPTY_INPUT

    def test_messages(self):
        assert ErrorKind.EMPTY_INPUT.value == "You didn't specify any icons!"
        assert ErrorKind.TOO_MANY_ICONS.value == "Maximum 100 icons allowed per request"

    def test_not_found(self):
        error = NotFoundError()
        assert (error.status_code, error.code, error.message) == (404, "NOT_FOUND", "Not Found")

    def test_rate_limit(self):
        error = RateLimitError()
        assert (error.status_code, error.code) == (429, "RATE_LIMIT_EXCEEDED")


class TestErrorPayload:
    """Tests for error_payload."""

    def test_app_error(self):
        status, body = error_payload(ValidationError(ErrorKind.INVALID_THEME))
        assert status == 400
        assert body == {"error": "VALIDATION_ERROR", "message": 'Theme must be either "light" or "dark"'}

    def test_app_error_dev_includes_stack(self):
        try:
            raise NotFoundError("gone")
        except NotFoundError as e:
            status, body = error_payload(e, is_dev=True)
        assert status == 404
        assert "NotFoundError" in body["stack"]

    def test_unknown_error_hidden_in_production(self):
        status, body = error_payload(RuntimeError("secret detail"))
        assert status == 500
        assert body == {"error": "INTERNAL_ERROR", "message": "An unexpected error occurred"}

    def test_unknown_error_exposed_in_dev(self):
        status, body = error_payload(RuntimeError("secret detail"), is_dev=True)
        assert status == 500
        assert body["message"] == "secret detail"
        assert "stack" in body


class TestErrorResponse:
    """Tests for error_response."""

    def test_json_response(self):
        response = error_response(ValidationError(ErrorKind.NO_VALID_ICONS))

        assert response.status == 400
        assert response.content_type == "application/json"
        assert response.headers["Cache-Control"] == "no-store"
        assert json.loads(response.text)["message"] == "No valid icons found for the specified names"
