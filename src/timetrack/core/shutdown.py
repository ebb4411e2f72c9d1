"""In-flight request accounting used to drain the server on shutdown."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests in progress and signals when the count reaches zero
    after shutdown has begun."""

    def __init__(self) -> None:
        self._active = 0
        self._draining = False
        self._lock = asyncio.Lock()
        self._idle = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._active

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._lock:
            self._active += 1
        try:
            yield
        finally:
            async with self._lock:
                self._active -= 1
                if self._draining and self._active == 0:
                    self._idle.set()

    async def start_shutdown(self) -> None:
        """Stop accepting work and arm the drain signal."""
        async with self._lock:
            self._draining = True
            if self._active == 0:
                self._idle.set()
            else:
                logger.info("Draining in-flight requests", in_flight=self._active)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait until no request is in flight.

        Returns:
            True if every request finished within ``timeout`` seconds.
        """
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Drain timed out",
                timeout_seconds=timeout,
                in_flight=self._active,
            )
            return False
        return True

    def reset(self) -> None:
        """Return to the initial state. Used by tests."""
        self._active = 0
        self._draining = False
        self._idle = asyncio.Event()


request_tracker = RequestTracker()
