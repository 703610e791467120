from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

AuthHandler = Callable[[str | None], None]


class AuthNotifier:
    """Single-slot hook for showing an "unauthorized" prompt in the UI layer.

    The transport has no UI of its own; whatever owns the screen registers a
    handler here and the client calls `notify` on a 401. Registering again
    replaces the previous handler.
    """

    def __init__(self) -> None:
        self._handler: AuthHandler | None = None

    @property
    def handler(self) -> AuthHandler | None:
        return self._handler

    def register(self, handler: AuthHandler) -> None:
        self._handler = handler

    def unregister(self) -> None:
        self._handler = None

    def notify(self, message: str | None = None) -> None:
        handler = self._handler
        if handler is not None:
            handler(message)

    @contextmanager
    def registered(self, handler: AuthHandler) -> Iterator["AuthNotifier"]:
        self.register(handler)
        try:
            yield self
        finally:
            self.unregister()
