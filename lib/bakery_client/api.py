"""Request orchestration for the bakery backend.

`ApiClient.request` runs one logical call:

- fail fast with OFFLINE_ERROR while the connectivity tracker says offline
- run an attempt through `Transport.execute`
- on a retryable ApiError, sleep `retry_delay_s * 2**attempt` and try again,
  up to `max_retries` extra attempts
- on a terminal failure, hand the error to the side-effect dispatcher and
  raise it

Calls are independent; nothing is shared between two in-flight requests
except the offline queue.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import httpx

from .auth_bridge import AuthNotifier
from .classify import offline_error
from .config_types import ClientConfig, RequestOptions
from .connectivity import ConnectivityTracker
from .errors import ApiError
from .session import MemorySessionStore, SessionStore
from .side_effects import Navigator, Notifier, SideEffectDispatcher
from .transport import Transport

log = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class ApiClient:
    def __init__(
            self,
            cfg: ClientConfig | None = None,
            *,
            session: SessionStore | None = None,
            connectivity: ConnectivityTracker | None = None,
            notifier: Notifier | None = None,
            navigator: Navigator | None = None,
            auth_notifier: AuthNotifier | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
            sleep: Sleep = asyncio.sleep,
    ):
        self.cfg = cfg or ClientConfig()
        self.session = session if session is not None else MemorySessionStore()
        self.connectivity = connectivity or ConnectivityTracker()
        self.auth_notifier = auth_notifier or AuthNotifier()
        self.dispatcher = SideEffectDispatcher(
            self.session,
            notifier=notifier,
            navigator=navigator,
            auth_notifier=self.auth_notifier,
        )
        self.sleep = sleep
        self._t = Transport(
            self.cfg,
            self.session,
            on_unauthorized=self.dispatcher.on_auth_failure,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _split_options(self, kwargs: dict[str, Any], base: RequestOptions | None) -> RequestOptions:
        names = RequestOptions.option_names()
        overrides = {k: kwargs.pop(k) for k in list(kwargs) if k in names}
        return (base or self.cfg.defaults).merge(**overrides)

    async def request(
            self,
            endpoint: str,
            *,
            method: str = "GET",
            headers: Any = None,
            profile: RequestOptions | None = None,
            **kwargs: Any,
    ) -> Any:
        """Perform a call and return the decoded payload.

        Keyword arguments named like `RequestOptions` fields override the
        profile (client defaults unless `profile` is given); everything else
        goes to httpx as-is.
        """
        opts = self._split_options(kwargs, profile)

        if not self.connectivity.is_online:
            err = offline_error()
            self.dispatcher.on_terminal_failure(err, show_toast=opts.show_toast)
            raise err

        attempt = 0
        while True:
            try:
                return await self._t.execute(
                    method,
                    endpoint,
                    headers=headers,
                    timeout_s=opts.timeout_s,
                    skip_auth=opts.skip_auth,
                    **kwargs,
                )
            except ApiError as e:
                if e.retryable and attempt < opts.max_retries:
                    if opts.on_retry is not None:
                        opts.on_retry(attempt + 1, e)
                    delay = opts.backoff_delay(attempt)
                    log.info(
                        "%s %s failed with %s, retry %d/%d in %.2fs",
                        method, endpoint, e.code.value, attempt + 1, opts.max_retries, delay,
                    )
                    await self.sleep(delay)
                    attempt += 1
                    continue
                self.dispatcher.on_terminal_failure(e, show_toast=opts.show_toast)
                raise

    async def fetch(self, endpoint: str, **kwargs: Any) -> Any:
        """Single attempt without toast; a 401 still clears the session."""
        return await self.request(endpoint, profile=RequestOptions.minimal(), **kwargs)

    async def request_when_online(self, endpoint: str, **kwargs: Any) -> Any:
        """Send now when online, otherwise queue until connectivity returns."""
        if self.connectivity.is_online:
            return await self.request(endpoint, **kwargs)

        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()

        async def _run() -> None:
            try:
                result = await self.request(endpoint, **kwargs)
            except Exception as e:
                if not fut.done():
                    fut.set_exception(e)
                raise
            if not fut.done():
                fut.set_result(result)

        self.connectivity.queue.enqueue(_run)
        log.info("offline: queued %s %s", kwargs.get("method", "GET"), endpoint)
        return await fut

    # --- convenience wrappers ---
    @staticmethod
    def _body_kwargs(body: Any, files: Any) -> dict[str, Any]:
        if files is not None:
            out: dict[str, Any] = {"files": files}
            if body is not None:
                out["data"] = body
            return out
        if body is None:
            return {}
        return {"content": json.dumps(body)}

    async def get(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="GET", **kwargs)

    async def post(self, endpoint: str, body: Any = None, *, files: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="POST", **self._body_kwargs(body, files), **kwargs)

    async def put(self, endpoint: str, body: Any = None, *, files: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="PUT", **self._body_kwargs(body, files), **kwargs)

    async def patch(self, endpoint: str, body: Any = None, *, files: Any = None, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="PATCH", **self._body_kwargs(body, files), **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return await self.request(endpoint, method="DELETE", **kwargs)
