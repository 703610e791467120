from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, TypeVar

import httpx
import typer

from bakery_client import ApiClient, ApiError, AuthNotifier, BakeryClient, ResponseParseError
from bakery_client.side_effects import Toast

from . import console
from .auth_state import ConfigSessionStore
from .config import AppConfig, client_config, load_config
from .version import cli_version

T = TypeVar("T")


@dataclass
class CliState:
    """Per-invocation objects shared by the callback and the commands."""

    auth_notifier: AuthNotifier = field(default_factory=AuthNotifier)
    base_url_override: str | None = None


class ConsoleNotifier:
    def toast(self, toast: Toast) -> None:
        console.toast(toast)


class CliNavigator:
    """`bakery auth login` is the login surface; anything else gets sent there."""

    def __init__(self, at_login: bool = False):
        self._at_login = at_login
        self.redirected = False

    def at_login(self) -> bool:
        return self._at_login

    def redirect_to_login(self) -> None:
        self.redirected = True
        console.warn("Session cleared. Run: bakery auth login")


def state_from(ctx: typer.Context) -> CliState:
    obj = ctx.find_object(CliState)
    return obj if obj is not None else CliState()


def make_client(
        cfg: AppConfig,
        *,
        base_url_override: str | None = None,
        auth_notifier: AuthNotifier | None = None,
        at_login: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
) -> BakeryClient:
    api = ApiClient(
        client_config(cfg, base_url_override=base_url_override, version=cli_version()),
        session=ConfigSessionStore(),
        notifier=ConsoleNotifier(),
        navigator=CliNavigator(at_login=at_login),
        auth_notifier=auth_notifier,
        transport=transport,
    )
    return BakeryClient(api)


def run_api(coro: Awaitable[T]) -> T:
    """Run a coroutine; API failures end the command with exit code 2.

    The client has already printed a toast for ApiError by the time it gets
    here.
    """
    try:
        return asyncio.run(coro)
    except ApiError:
        raise typer.Exit(code=2)
    except ResponseParseError as e:
        console.err(f"Unexpected response from server: {e}")
        raise typer.Exit(code=2)


def rows_or_empty(items: list[Any], what: str) -> bool:
    if items:
        return True
    console.info(f"No {what} found.")
    return False


def client_for(ctx: typer.Context, base_url: str | None = None) -> BakeryClient:
    state = state_from(ctx)
    return make_client(
        load_config(),
        base_url_override=base_url or state.base_url_override,
        auth_notifier=state.auth_notifier,
    )
