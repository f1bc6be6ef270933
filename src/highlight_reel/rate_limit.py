"""Sequential call throttle for the unauthenticated NBA endpoints."""

import asyncio
import time
from typing import AsyncIterator, Awaitable, Callable, Iterable, List, Optional, TypeVar

from .nba_logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CallSequencer:
    """Issue calls one at a time with a minimum pause between them.

    The pause is measured from the end of one call to the start of the next,
    so a slow call never shortens the gap. Use it as an async context manager
    around each call, or hand a batch of zero-argument coroutine factories to
    :meth:`run`.
    """

    def __init__(
        self,
        min_interval: float,
        name: str = "sequencer",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the sequencer.

        Args:
            min_interval: Seconds to wait between the end of one call and the
                start of the next
            name: Name for logging
            sleep: Awaitable sleep, injectable for tests
            clock: Monotonic clock, injectable for tests
        """
        self.min_interval = max(0.0, min_interval)
        self.name = name
        self._sleep = sleep
        self._clock = clock
        self._lock = asyncio.Lock()
        self._last_finished: Optional[float] = None
        self.calls_issued = 0

    async def __aenter__(self) -> "CallSequencer":
        """Wait for the slot and the interval, then hold the slot."""
        await self._lock.acquire()
        try:
            if self._last_finished is not None and self.min_interval > 0:
                wait_time = self.min_interval - (self._clock() - self._last_finished)
                if wait_time > 0:
                    logger.debug("Throttling upstream call", sequencer=self.name, wait_time=wait_time)
                    await self._sleep(wait_time)
        except BaseException:
            self._lock.release()
            raise
        self.calls_issued += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Record completion and release the slot."""
        self._last_finished = self._clock()
        self._lock.release()

    async def run(self, calls: Iterable[Callable[[], Awaitable[T]]]) -> List[T]:
        """Run each call in order, throttled, and return results in that order."""
        return [result async for result in self.iterate(calls)]

    async def iterate(self, calls: Iterable[Callable[[], Awaitable[T]]]) -> AsyncIterator[T]:
        """Like :meth:`run`, but yield each result as soon as its call returns."""
        for call in calls:
            async with self:
                result = await call()
            yield result
