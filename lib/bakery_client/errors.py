from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    OFFLINE_ERROR = "OFFLINE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


RETRYABLE_CODES = frozenset(
    {
        ErrorCode.RATE_LIMIT_ERROR,
        ErrorCode.SERVER_ERROR,
        ErrorCode.TIMEOUT_ERROR,
        ErrorCode.NETWORK_ERROR,
        ErrorCode.OFFLINE_ERROR,
    }
)


class BakeryClientError(Exception):
    """Base client error."""


class ResponseParseError(BakeryClientError):
    """Response body or envelope could not be decoded."""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.body = body


class ApiError(BakeryClientError):
    """Classified request failure.

    `message` is user-facing. `retryable` tells the retry loop whether the
    failure may be attempted again; the status predicates only look at
    `status_code`.
    """

    __slots__ = ("_message", "_code", "_status_code", "_details", "_retryable")

    def __init__(
            self,
            message: str,
            code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
            *,
            status_code: int | None = None,
            details: Any = None,
            retryable: bool = False,
    ):
        super().__init__(message)
        self._message = message
        self._code = ErrorCode(code)
        self._status_code = status_code
        self._details = details
        self._retryable = bool(retryable)

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> ErrorCode:
        return self._code

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def details(self) -> Any:
        return self._details

    @property
    def retryable(self) -> bool:
        return self._retryable

    def is_unauthorized(self) -> bool:
        return self._status_code == 401

    def is_forbidden(self) -> bool:
        return self._status_code == 403

    def is_server_error(self) -> bool:
        return self._status_code is not None and self._status_code >= 500

    def is_client_error(self) -> bool:
        return self._status_code is not None and 400 <= self._status_code < 500

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self._message,
            "code": self._code.value,
            "status_code": self._status_code,
            "details": self._details,
            "retryable": self._retryable,
        }

    def __repr__(self) -> str:
        return f"ApiError(code={self._code.value}, status_code={self._status_code}, message={self._message!r})"
