from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from .auth_bridge import AuthNotifier
from .errors import ApiError, ErrorCode
from .session import SessionStore

log = logging.getLogger(__name__)

SERVER_ERROR_DESCRIPTION = "Tim teknis kami sedang menangani masalah ini"
RETRY_LABEL = "Coba Lagi"


@dataclass(frozen=True)
class Toast:
    message: str
    description: str | None = None
    # set when the failure is retryable; the caller decides what retry does
    action_label: str | None = None


class Notifier(Protocol):
    def toast(self, toast: Toast) -> None: ...


class Navigator(Protocol):
    def at_login(self) -> bool: ...

    def redirect_to_login(self) -> None: ...


class LogNotifier:
    def toast(self, toast: Toast) -> None:
        log.error("%s", toast.message)


class NullNavigator:
    def at_login(self) -> bool:
        return True

    def redirect_to_login(self) -> None:
        return None


def toast_for(error: ApiError) -> Toast:
    return Toast(
        message=error.message,
        description=SERVER_ERROR_DESCRIPTION if error.code == ErrorCode.SERVER_ERROR else None,
        action_label=RETRY_LABEL if error.retryable else None,
    )


class SideEffectDispatcher:
    def __init__(
            self,
            session: SessionStore,
            *,
            notifier: Notifier | None = None,
            navigator: Navigator | None = None,
            auth_notifier: AuthNotifier | None = None,
    ):
        self.session = session
        self.notifier = notifier or LogNotifier()
        self.navigator = navigator or NullNavigator()
        self.auth_notifier = auth_notifier or AuthNotifier()

    def on_auth_failure(self, message: str | None = None) -> None:
        """Drop the stored session and send the user back to login.

        On the login surface itself a 401 is a rejected sign-in, so only the
        session is cleared.
        """
        self.session.clear()
        log.info("session cleared after authentication failure")
        if self.navigator.at_login():
            return
        self.navigator.redirect_to_login()
        self.auth_notifier.notify(message)

    def on_terminal_failure(self, error: ApiError, *, show_toast: bool) -> None:
        if show_toast:
            self.notifier.toast(toast_for(error))
