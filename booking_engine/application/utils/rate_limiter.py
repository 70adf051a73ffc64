from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class RateLimiter:
    """
    Spaces successive calls by at least ``min_interval_seconds``.

    The read of the last request time, the wait and the update happen under
    one lock, so concurrent callers are serialized instead of bursting.
    """

    def __init__(
        self,
        min_interval_seconds: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self._min_interval = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_request_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_request_at is not None:
                elapsed = self._clock() - self._last_request_at
                wait = self._min_interval - elapsed
                if wait > 0:
                    await self._sleep(wait)
            self._last_request_at = self._clock()

    def reset(self) -> None:
        self._last_request_at = None
