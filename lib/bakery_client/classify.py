from __future__ import annotations

import asyncio
from typing import Any

import httpx

from .errors import ApiError, ErrorCode

MSG_VALIDATION = "Data yang dikirim tidak valid"
MSG_AUTHENTICATION = "Sesi Anda telah berakhir. Silakan login kembali"
MSG_AUTHORIZATION = "Anda tidak memiliki akses untuk melakukan tindakan ini"
MSG_RATE_LIMIT = "Terlalu banyak request. Silakan coba lagi nanti"
MSG_SERVER = "Server mengalami gangguan. Silakan coba lagi nanti"
MSG_SERVER_OTHER = "Terjadi kesalahan pada server"
MSG_UNKNOWN = "Terjadi kesalahan yang tidak diketahui"
MSG_TIMEOUT = "Request timeout. Silakan coba lagi"
MSG_NETWORK = "Gagal terhubung ke server. Periksa koneksi internet Anda"
MSG_OFFLINE = "Tidak ada koneksi internet. Periksa koneksi Anda dan coba lagi"

# status -> (code, default message, retryable)
_STATUS_TABLE: dict[int, tuple[ErrorCode, str, bool]] = {
    400: (ErrorCode.VALIDATION_ERROR, MSG_VALIDATION, False),
    401: (ErrorCode.AUTHENTICATION_ERROR, MSG_AUTHENTICATION, False),
    403: (ErrorCode.AUTHORIZATION_ERROR, MSG_AUTHORIZATION, False),
    429: (ErrorCode.RATE_LIMIT_ERROR, MSG_RATE_LIMIT, True),
    500: (ErrorCode.SERVER_ERROR, MSG_SERVER, True),
    502: (ErrorCode.SERVER_ERROR, MSG_SERVER, True),
    503: (ErrorCode.SERVER_ERROR, MSG_SERVER, True),
    504: (ErrorCode.SERVER_ERROR, MSG_SERVER, True),
}

# server-declared error codes that override the status-derived one
_SERVER_CODES: dict[str, ErrorCode] = {
    "INVALID_CREDENTIALS": ErrorCode.AUTHENTICATION_ERROR,
    "MISSING_REQUIRED_FIELDS": ErrorCode.VALIDATION_ERROR,
    "VALIDATION_ERROR": ErrorCode.VALIDATION_ERROR,
}


def _error_section(body: Any) -> dict[str, Any]:
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            return err
    return {}


def classify_response(status_code: int, body: Any = None) -> ApiError:
    """Map an HTTP status plus parsed body to an ApiError.

    A 2xx status only reaches this function when the body declared
    ``success: false``; it then classifies as UNKNOWN_ERROR unless the body
    names a recognized code.
    """
    if 200 <= status_code < 300:
        code, message, retryable = ErrorCode.UNKNOWN_ERROR, MSG_UNKNOWN, False
    else:
        code, message, retryable = _STATUS_TABLE.get(
            status_code, (ErrorCode.UNKNOWN_ERROR, MSG_SERVER_OTHER, False)
        )

    err = _error_section(body)
    server_message = err.get("message")
    if isinstance(server_message, str) and server_message:
        message = server_message
    server_code = err.get("code")
    if isinstance(server_code, str) and server_code in _SERVER_CODES:
        code = _SERVER_CODES[server_code]

    return ApiError(
        message,
        code,
        status_code=status_code,
        details=err.get("details"),
        retryable=retryable,
    )


def classify_transport_error(exc: BaseException) -> ApiError:
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ApiError(MSG_TIMEOUT, ErrorCode.TIMEOUT_ERROR, retryable=True)
    return ApiError(MSG_NETWORK, ErrorCode.NETWORK_ERROR, details=str(exc) or None, retryable=True)


def offline_error() -> ApiError:
    return ApiError(MSG_OFFLINE, ErrorCode.OFFLINE_ERROR, retryable=True)
