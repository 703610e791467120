from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

import httpx

from .errors import ResponseParseError


@dataclass(frozen=True)
class Bare:
    """Body returned by the backend without the success envelope."""

    value: Any


@dataclass(frozen=True)
class Success:
    data: Any


@dataclass(frozen=True)
class Failure:
    body: dict[str, Any]


Decoded = Union[Bare, Success, Failure]


def parse_body(resp: httpx.Response, *, strict: bool = True) -> Any:
    """Parse JSON when the response declares it, text otherwise.

    With ``strict=False`` (used for error responses) an unparsable JSON body
    falls back to its text so the status can still be classified.
    """
    content_type = resp.headers.get("content-type", "")
    if "application/json" not in content_type.lower():
        return resp.text
    if not resp.content:
        return None
    try:
        return json.loads(resp.content)
    except ValueError as e:
        if not strict:
            return resp.text
        raise ResponseParseError(f"invalid JSON in response ({resp.status_code})", resp.text[:1000]) from e


def decode_envelope(body: Any) -> Decoded:
    if not isinstance(body, dict) or "success" not in body:
        return Bare(body)

    success = body["success"]
    if not isinstance(success, bool):
        raise ResponseParseError("envelope field 'success' must be a boolean", body)
    if success:
        return Success(body.get("data"))

    err = body.get("error")
    if err is not None and not isinstance(err, dict):
        raise ResponseParseError("envelope field 'error' must be an object", body)
    return Failure(body)
