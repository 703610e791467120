from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

DEFAULT_BASE_URL = "http://localhost:5000"


@dataclass(frozen=True)
class RequestOptions:
    timeout_s: float = 30.0
    max_retries: int = 2
    retry_delay_s: float = 1.0
    show_toast: bool = True
    skip_auth: bool = False
    on_retry: Callable[[int, Any], None] | None = None
    # None keeps the backoff uncapped
    max_delay_s: float | None = None

    @classmethod
    def minimal(cls) -> "RequestOptions":
        """Single attempt, no toast: the profile of plain fetch call sites."""
        return cls(max_retries=0, show_toast=False)

    @classmethod
    def option_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    def merge(self, **overrides: Any) -> "RequestOptions":
        """Apply the given fields as-is; None clears a cap or callback."""
        if not overrides:
            return self
        return replace(self, **overrides)

    def backoff_delay(self, attempt: int) -> float:
        delay = self.retry_delay_s * (2 ** attempt)
        if self.max_delay_s is not None:
            delay = min(delay, self.max_delay_s)
        return delay


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    defaults: RequestOptions = RequestOptions()
    client_version: str | None = None
