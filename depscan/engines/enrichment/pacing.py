"""Cooperative pacing: minimum spacing between enrichment tasks."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable


class Pacer:
    """Keep at least *min_interval* seconds between consecutive tasks.

    The first call to :meth:`wait` returns immediately; every later call
    blocks until *min_interval* has passed since the last mark. A mark is
    set when a task starts and moved forward by :meth:`mark_finished`, so a
    caller that runs tasks one at a time gets the full delay after each
    task completes rather than after it starts.
    Not a rate limiter: there is no retry, burst budget or backoff.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_mark: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> None:
        """Block until the next task may start, then record its start."""
        async with self._lock:
            if self._last_mark is not None:
                remaining = self._last_mark + self.min_interval - self._clock()
                if remaining > 0:
                    await self._sleep(remaining)
            self._last_mark = self._clock()

    def mark_finished(self) -> None:
        """Record that the current task has finished; the next wait counts from now."""
        self._last_mark = self._clock()
