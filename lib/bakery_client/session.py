from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class Session:
    token: str = ""
    role: str | None = None
    full_name: str | None = None


class SessionStore(Protocol):
    def get_token(self) -> str | None: ...

    def save(self, session: Session) -> None: ...

    def clear(self) -> None: ...


class MemorySessionStore:
    """Session kept in process memory; lost on exit."""

    def __init__(self, session: Session | None = None):
        self.session = session or Session()

    def get_token(self) -> str | None:
        return self.session.token or None

    def save(self, session: Session) -> None:
        self.session = Session(token=session.token, role=session.role, full_name=session.full_name)

    def clear(self) -> None:
        self.session = Session()
