from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import httpx

from .classify import classify_response, classify_transport_error
from .config_types import ClientConfig
from .envelope import Bare, Failure, Success, decode_envelope, parse_body
from .session import SessionStore

log = logging.getLogger(__name__)


def _is_binary_payload(kwargs: dict[str, Any]) -> bool:
    if kwargs.get("files"):
        return True
    return isinstance(kwargs.get("content"), (bytes, bytearray))


class Transport:
    """One HTTP attempt: headers, deadline, body parsing, envelope decoding."""

    def __init__(
            self,
            cfg: ClientConfig,
            session: SessionStore,
            *,
            on_unauthorized: Callable[[str], None] | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._cfg = cfg
        self._session = session
        self._on_unauthorized = on_unauthorized
        headers = {"User-Agent": f"bakery-client/{cfg.client_version or '0.1.0'}"}
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url.rstrip("/"),
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def build_headers(self, headers: Any, *, skip_auth: bool, binary: bool) -> httpx.Headers:
        out = httpx.Headers(headers or {})
        if not skip_auth and "authorization" not in out:
            token = self._session.get_token()
            if token:
                out["Authorization"] = f"Bearer {token}"
        if not binary and "content-type" not in out:
            out["Content-Type"] = "application/json"
        return out

    async def execute(
            self,
            method: str,
            endpoint: str,
            *,
            headers: Any = None,
            timeout_s: float,
            skip_auth: bool = False,
            **kwargs: Any,
    ) -> Any:
        final_headers = self.build_headers(headers, skip_auth=skip_auth, binary=_is_binary_payload(kwargs))
        try:
            r = await asyncio.wait_for(
                self._client.request(method, endpoint, headers=final_headers, timeout=timeout_s, **kwargs),
                timeout=timeout_s,
            )
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            log.debug("%s %s transport failure: %r", method, endpoint, e)
            raise classify_transport_error(e) from e

        log.debug("%s %s -> %s", method, endpoint, r.status_code)

        if not r.is_success:
            body = parse_body(r, strict=False)
            err = classify_response(r.status_code, body)
            if r.status_code == 401 and self._on_unauthorized is not None:
                self._on_unauthorized(err.message)
            raise err

        decoded = decode_envelope(parse_body(r))
        if isinstance(decoded, Bare):
            return decoded.value
        if isinstance(decoded, Success):
            return decoded.data
        assert isinstance(decoded, Failure)
        raise classify_response(r.status_code, decoded.body)
