"""Application errors and their conversion into HTTP error responses."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

_log = logging.getLogger(__name__)


class AppError(Exception):
    """Base class of every error the application reports to a client."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    _template: str = "app error:`{}`"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self._template.format(self.message)

    def _brief(self) -> str | None:
        return f"Unknown error happened: {self}"

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """Return the HTTP status and the JSON body describing this error."""
        status = HTTPStatus(self.status_code)
        brief = self._brief()
        body = {
            "code": status.value,
            "name": status.phrase,
            "brief": brief if brief is not None else status.description,
        }
        _log.error("%s %s: %s", status.value, status.phrase, body["brief"])
        return status.value, {"error": body}


class PublicError(AppError):
    """An error whose message is safe to show to the client."""

    _template = "public: `{}`"

    def _brief(self) -> str | None:
        return self.message


class InternalError(AppError):
    """An error whose message is logged but never shown to the client."""

    _template = "internal: `{}`"

    def _brief(self) -> str | None:
        _log.error("internal error: %s", self.message)
        return None


class NotFoundError(AppError):
    """A requested record does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    _template = "http status error: `{}`"

    def _brief(self) -> str | None:
        return self.message


class ValidationError(AppError):
    """Input data failed validation."""

    _template = "validation error:`{}`"