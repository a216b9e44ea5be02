"""In-flight request accounting for graceful shutdown."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.matchboard.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts API requests in flight so shutdown can let them finish.

    ``_idle`` is set exactly when nothing is in flight. Counter updates
    happen between awaits on the event loop, so no lock is needed.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()
                if self._shutting_down:
                    logger.info("requests_drained")

    async def start_shutdown(self) -> None:
        self._shutting_down = True
        logger.info("shutdown_started", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds; False if requests are still running."""
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("shutdown_drain_timeout", timeout=timeout, in_flight=self._in_flight)
            return False
        return True


request_tracker = RequestTracker()
