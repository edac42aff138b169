"""Persistence-specific exceptions."""

from __future__ import annotations

from typing import Any


class FireliteError(Exception):
    """Base exception for all firelite errors."""


class RemoteError(FireliteError):
    """Raised when the REST API answers with an ``{error: {code, message}}`` body.

    ``payload`` keeps the error object exactly as the server sent it.
    """

    def __init__(
        self,
        code: int | None,
        message: str,
        status: str | None = None,
        payload: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status = status
        self.payload = payload if payload is not None else {"code": code, "message": message}
        super().__init__(f"{code}: {message}")

    @classmethod
    def from_payload(
        cls, payload: dict[str, Any], default_code: int | None = None
    ) -> "RemoteError":
        """Build the most specific error for an API error object."""
        code = payload.get("code", default_code)
        error_cls = _ERRORS_BY_CODE.get(code, RemoteError)
        return error_cls(
            code=code,
            message=payload.get("message", ""),
            status=payload.get("status"),
            payload=payload,
        )


class NotFoundError(RemoteError):
    """HTTP 404: the document or collection does not exist."""


class RequestTooLargeError(RemoteError):
    """HTTP 413: the request body exceeds the API limits."""


class QueryValidationError(FireliteError, ValueError):
    """Raised when query clauses cannot be compiled."""


class BatchClosedError(FireliteError):
    """Raised when a batch is used after it was committed."""


_ERRORS_BY_CODE: dict[int, type[RemoteError]] = {
    404: NotFoundError,
    413: RequestTooLargeError,
}

NON_RETRYABLE_CODES = tuple(_ERRORS_BY_CODE)
