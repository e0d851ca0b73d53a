"""Single-slot, time-expiring cache in front of the dictionary rebuild.

Rebuilding means downloading and compacting the whole vocabulary graph, so
the result is held for a fixed TTL. While the slot is stale, the first caller
starts a rebuild and every caller that arrives before it finishes awaits the
same task:

    ```python
    cache = RebuildCache(service.rebuild, ttl_seconds=4 * 60 * 60)
    dictionary = await cache.get()   # rebuilds on first use
    dictionary = await cache.get()   # served from memory until the TTL expires
    ```

The TTL is measured from the moment a rebuild finished, not from the request
that triggered it. A failed rebuild leaves the slot as it was (stale) and
re-raises in every waiting caller; the next ``get()`` tries again. The
``on_failure`` hook sees each failed rebuild once, not once per waiter.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

from metadict.builder import Dictionary
from metadict.logging import setup_logging

logger = setup_logging()


class RebuildCache:
    """Hold one built dictionary and deduplicate concurrent rebuilds.

    Args:
        rebuild: Coroutine function producing a fresh dictionary.
        ttl_seconds: How long a built dictionary stays fresh.
        clock: Monotonic time source in seconds (injectable for tests).
        on_failure: Called once with the exception of each failed rebuild,
            however many callers were waiting on it.
    """

    def __init__(
        self,
        rebuild: Callable[[], Awaitable[Dictionary]],
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        on_failure: Optional[Callable[[BaseException], None]] = None,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._rebuild = rebuild
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._on_failure = on_failure
        self._value: Optional[Dictionary] = None
        self._updated_at: Optional[float] = None
        self._in_flight: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0
        self._rebuilds = 0
        self._failures = 0

    def is_fresh(self) -> bool:
        """True if a dictionary is held and younger than the TTL."""
        if self._value is None or self._updated_at is None:
            return False
        return self._clock() - self._updated_at < self.ttl_seconds

    async def get(self) -> Dictionary:
        """Return the cached dictionary, rebuilding it if stale.

        Raises:
            Whatever the rebuild raised, in every caller awaiting that rebuild.
        """
        async with self._lock:
            if self.is_fresh():
                self._hits += 1
                logger.info("Using cached data")
                return self._value  # type: ignore[return-value]
            self._misses += 1
            task = self._in_flight
            if task is None:
                logger.info("Cache is empty or expired, rebuilding")
                task = asyncio.create_task(self._run_rebuild())
                task.add_done_callback(_retrieve_exception)
                self._in_flight = task
        # A caller going away must not cancel the rebuild other callers share.
        return await asyncio.shield(task)

    async def _run_rebuild(self) -> Dictionary:
        self._rebuilds += 1
        try:
            value = await self._rebuild()
        except Exception as e:
            self._failures += 1
            if self._on_failure is not None:
                self._on_failure(e)
            raise
        else:
            self._value = value
            self._updated_at = self._clock()
            logger.info(f"Rebuilt metadata dictionary with {len(value)} entries")
            return value
        finally:
            self._in_flight = None

    def invalidate(self) -> None:
        """Mark the held dictionary stale; the next get() rebuilds."""
        self._updated_at = None

    def get_stats(self) -> dict[str, int]:
        """Cache statistics: hits, misses, rebuilds, failures and held entry count."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "rebuilds": self._rebuilds,
            "failures": self._failures,
            "size": 0 if self._value is None else len(self._value),
        }


def _retrieve_exception(task: asyncio.Task) -> None:
    # Every waiter may have been cancelled before a rebuild fails.
    if not task.cancelled():
        task.exception()
