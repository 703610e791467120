from __future__ import annotations

from functools import partial

import httpx
import pytest

from bakery_client import ApiClient, ClientConfig, MemorySessionStore, RequestOptions, Session
from bakery_client.side_effects import Toast
from bakery_cli import config


class RecordingNotifier:
    def __init__(self) -> None:
        self.toasts: list[Toast] = []

    def toast(self, toast: Toast) -> None:
        self.toasts.append(toast)


class RecordingNavigator:
    def __init__(self, at_login: bool = False) -> None:
        self._at_login = at_login
        self.redirects = 0

    def at_login(self) -> bool:
        return self._at_login

    def redirect_to_login(self) -> None:
        self.redirects += 1


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    monkeypatch.delenv(config.ENV_API_BASE_URL, raising=False)
    return tmp_path


@pytest.fixture
def make_api():
    """Factory for an ApiClient wired to an httpx.MockTransport handler."""

    def _make(handler, *, token: str = "tok-123", defaults: RequestOptions | None = None, **kwargs):
        kwargs.setdefault("session", MemorySessionStore(Session(token=token, role="admin", full_name="Admin")))
        kwargs.setdefault("notifier", RecordingNotifier())
        kwargs.setdefault("navigator", RecordingNavigator())
        kwargs.setdefault("sleep", RecordingSleep())
        cfg = ClientConfig(base_url="http://api.test", defaults=defaults or RequestOptions())
        return ApiClient(cfg, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def mock_backend(monkeypatch):
    """Route every CLI-built client to the given handler."""
    from bakery_cli import http
    from bakery_cli.commands import auth_cmd

    def _install(handler):
        fake = partial(http.make_client, transport=httpx.MockTransport(handler))
        monkeypatch.setattr(http, "make_client", fake)
        monkeypatch.setattr(auth_cmd, "make_client", fake)

    return _install
