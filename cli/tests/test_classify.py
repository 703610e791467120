from __future__ import annotations

import asyncio

import httpx
import pytest

from bakery_client.classify import (
    MSG_AUTHENTICATION,
    MSG_SERVER_OTHER,
    MSG_UNKNOWN,
    classify_response,
    classify_transport_error,
    offline_error,
)
from bakery_client.errors import RETRYABLE_CODES, ApiError, ErrorCode

_BODIES = [None, "", "Internal Server Error", {"detail": "nope"}, {"success": False}, [1, 2]]


@pytest.mark.parametrize(
    ("status", "code", "retryable"),
    [
        (400, ErrorCode.VALIDATION_ERROR, False),
        (401, ErrorCode.AUTHENTICATION_ERROR, False),
        (403, ErrorCode.AUTHORIZATION_ERROR, False),
        (429, ErrorCode.RATE_LIMIT_ERROR, True),
        (500, ErrorCode.SERVER_ERROR, True),
        (502, ErrorCode.SERVER_ERROR, True),
        (503, ErrorCode.SERVER_ERROR, True),
        (504, ErrorCode.SERVER_ERROR, True),
        (404, ErrorCode.UNKNOWN_ERROR, False),
        (409, ErrorCode.UNKNOWN_ERROR, False),
        (501, ErrorCode.UNKNOWN_ERROR, False),
    ],
)
def test_status_mapping_ignores_body_shape(status, code, retryable) -> None:
    for body in _BODIES:
        err = classify_response(status, body)
        assert err.code == code
        assert err.retryable is retryable
        assert err.status_code == status


def test_other_status_uses_generic_server_message() -> None:
    assert classify_response(418).message == MSG_SERVER_OTHER


def test_server_message_overrides_default() -> None:
    err = classify_response(401, {"error": {"message": "token expired"}})
    assert err.message == "token expired"
    assert err.code == ErrorCode.AUTHENTICATION_ERROR


def test_default_message_kept_without_server_message() -> None:
    assert classify_response(401, {"error": {"message": ""}}).message == MSG_AUTHENTICATION


@pytest.mark.parametrize(
    ("server_code", "expected"),
    [
        ("INVALID_CREDENTIALS", ErrorCode.AUTHENTICATION_ERROR),
        ("MISSING_REQUIRED_FIELDS", ErrorCode.VALIDATION_ERROR),
        ("VALIDATION_ERROR", ErrorCode.VALIDATION_ERROR),
    ],
)
def test_server_code_overrides_status_code(server_code, expected) -> None:
    err = classify_response(422, {"error": {"code": server_code, "details": {"field": "email"}}})
    assert err.code == expected
    assert err.details == {"field": "email"}


def test_unrecognized_server_code_keeps_status_code() -> None:
    err = classify_response(403, {"error": {"code": "SOMETHING_ELSE"}})
    assert err.code == ErrorCode.AUTHORIZATION_ERROR


def test_server_code_override_keeps_status_retryability() -> None:
    err = classify_response(503, {"error": {"code": "VALIDATION_ERROR"}})
    assert err.code == ErrorCode.VALIDATION_ERROR
    assert err.retryable is True


def test_in_band_failure_on_success_status() -> None:
    err = classify_response(200, {"success": False, "error": {"message": "stok habis"}})
    assert err.code == ErrorCode.UNKNOWN_ERROR
    assert err.message == "stok habis"
    assert err.retryable is False

    assert classify_response(200, {"success": False}).message == MSG_UNKNOWN


def test_transport_errors() -> None:
    request = httpx.Request("GET", "http://api.test/x")
    timeout = classify_transport_error(httpx.ReadTimeout("slow", request=request))
    assert timeout.code == ErrorCode.TIMEOUT_ERROR and timeout.retryable

    deadline = classify_transport_error(asyncio.TimeoutError())
    assert deadline.code == ErrorCode.TIMEOUT_ERROR

    network = classify_transport_error(httpx.ConnectError("refused", request=request))
    assert network.code == ErrorCode.NETWORK_ERROR and network.retryable
    assert network.status_code is None


def test_offline_error() -> None:
    err = offline_error()
    assert err.code == ErrorCode.OFFLINE_ERROR
    assert err.retryable is True


def test_retryable_codes_match_classifier() -> None:
    seen = {classify_response(s).code for s in (429, 500)} | {offline_error().code}
    assert seen <= RETRYABLE_CODES
    assert ErrorCode.VALIDATION_ERROR not in RETRYABLE_CODES


def test_api_error_predicates_and_immutability() -> None:
    assert ApiError("x", status_code=401).is_unauthorized()
    assert ApiError("x", status_code=403).is_forbidden()
    assert ApiError("x", status_code=503).is_server_error()
    assert ApiError("x", status_code=404).is_client_error()
    assert not ApiError("x").is_client_error()
    assert not ApiError("x").is_server_error()

    err = ApiError("x", ErrorCode.SERVER_ERROR, status_code=500, retryable=True)
    with pytest.raises(AttributeError):
        err.code = ErrorCode.UNKNOWN_ERROR
    assert err.to_dict()["code"] == "SERVER_ERROR"
    assert str(err) == "x"
