from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable

log = logging.getLogger(__name__)

Thunk = Callable[[], Awaitable[Any]]


class RequestQueue:
    """Requests deferred while offline, replayed in enqueue order."""

    def __init__(self) -> None:
        self._items: deque[Thunk] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def enqueue(self, thunk: Thunk) -> None:
        self._items.append(thunk)

    def clear(self) -> None:
        self._items.clear()

    async def drain(self, is_online: Callable[[], bool] = lambda: True) -> int:
        """Run queued thunks until the queue is empty or connectivity drops.

        Failures are logged and do not stop the drain. Returns the number of
        thunks that were run.
        """
        ran = 0
        while self._items and is_online():
            thunk = self._items.popleft()
            ran += 1
            try:
                await thunk()
            except Exception:
                log.warning("queued request failed", exc_info=True)
        return ran


class ConnectivityTracker:
    def __init__(self, online: bool = True, queue: RequestQueue | None = None):
        self._online = bool(online)
        self.queue = queue if queue is not None else RequestQueue()
        self._drain_task: asyncio.Task | None = None

    @property
    def is_online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> asyncio.Task | None:
        """Record a connectivity change.

        Going online schedules a queue drain on the running loop and returns
        that task, or the drain already in flight. Without a running loop
        nothing is scheduled and the caller drains the queue itself.
        """
        online = bool(online)
        if online == self._online:
            return None
        self._online = online
        log.info("connectivity changed: %s", "online" if online else "offline")
        if not online:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None
        if self._drain_task is not None and not self._drain_task.done():
            return self._drain_task
        self._drain_task = loop.create_task(self.queue.drain(lambda: self._online))
        return self._drain_task
