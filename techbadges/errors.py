"""Error types and their mapping to HTTP responses.

Every user-input failure is a ValidationError tagged with an ErrorKind.
error_payload() turns any exception into a (status, body) pair and never
raises, so the server has a single place where errors become responses.
"""

import json
import logging
import traceback
from enum import Enum
from typing import Optional

from aiohttp import web

from techbadges.config.constants import MAX_ICONS_PER_REQUEST

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """User-input validation failures, with their default messages."""

    EMPTY_INPUT = "You didn't specify any icons!"
    TOO_MANY_ICONS = f"Maximum {MAX_ICONS_PER_REQUEST} icons allowed per request"
    NO_VALID_ICONS = "No valid icons found for the specified names"
    INVALID_THEME = 'Theme must be either "light" or "dark"'
    INVALID_PER_LINE = "Icons per line must be a number between 1 and 50"


class AppError(Exception):
    """Base application error carrying an HTTP status and a machine code."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class ValidationError(AppError):
    """Invalid user input."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        super().__init__(message or kind.value, 400, "VALIDATION_ERROR")
        self.kind = kind


class NotFoundError(AppError):
    """Missing resource or endpoint."""

    def __init__(self, message: str = "Not Found"):
        super().__init__(message, 404, "NOT_FOUND")


class RateLimitError(AppError):
    """Too many requests."""

    def __init__(self, message: str = "Too Many Requests"):
        super().__init__(message, 429, "RATE_LIMIT_EXCEEDED")


def error_payload(error: BaseException, is_dev: bool = False) -> tuple[int, dict]:
    """Map an exception to (status, JSON body).

    Known application errors keep their status, code and message. Anything
    else becomes a 500 whose details are only exposed in development.
    """
    if isinstance(error, AppError):
        body = {"error": error.code, "message": error.message}
        if is_dev:
            body["stack"] = _format_stack(error)
        return error.status_code, body

    logger.error(
        "Unexpected error: %s", error, exc_info=(type(error), error, error.__traceback__)
    )

    body = {
        "error": "INTERNAL_ERROR",
        "message": str(error) if is_dev else "An unexpected error occurred",
    }
    if is_dev:
        body["stack"] = _format_stack(error)
    return 500, body


def error_response(error: BaseException, is_dev: bool = False) -> web.Response:
    """Build the JSON error response for an exception."""
    status, body = error_payload(error, is_dev)
    return web.Response(
        text=json.dumps(body),
        status=status,
        content_type="application/json",
        headers={"Cache-Control": "no-store"},
    )


def _format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
