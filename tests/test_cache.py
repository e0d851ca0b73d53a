"""Tests for RebuildCache: TTL expiry, single-flight rebuilds and failure handling."""

import asyncio
import gc

import pytest

from metadict.builder import DictionaryBuilder, DictionaryEntry
from metadict.cache import RebuildCache
from metadict.errors import FetchFailed
from metadict.service import DictionaryService

from tests.conftest import InMemoryGraphSource, WarningCollector, make_tables


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_cache(source: InMemoryGraphSource, ttl_seconds: float = 60, clock=None, on_failure=None) -> RebuildCache:
    service = DictionaryService(source, DictionaryBuilder(make_tables(), WarningCollector()))
    if clock is None:
        return RebuildCache(service.rebuild, ttl_seconds=ttl_seconds, on_failure=on_failure)
    return RebuildCache(service.rebuild, ttl_seconds=ttl_seconds, clock=clock, on_failure=on_failure)


class TestFreshness:
    async def test_first_get_rebuilds(self, source):
        cache = make_cache(source)
        assert not cache.is_fresh()

        dictionary = await cache.get()

        assert source.fetch_count == 1
        assert len(dictionary) == 11
        assert cache.is_fresh()

    async def test_within_ttl_returns_same_instance(self, source):
        clock = FakeClock()
        cache = make_cache(source, ttl_seconds=60, clock=clock)

        first = await cache.get()
        clock.advance(59)
        second = await cache.get()

        assert second is first
        assert source.fetch_count == 1

    async def test_expired_cache_rebuilds(self, source):
        clock = FakeClock()
        cache = make_cache(source, ttl_seconds=60, clock=clock)

        first = await cache.get()
        clock.advance(60)
        assert not cache.is_fresh()
        second = await cache.get()

        assert source.fetch_count == 2
        assert second == first
        assert second is not first

    async def test_ttl_measured_from_rebuild_completion(self):
        """A rebuild that takes 30s stays fresh until 60s after it finished."""
        clock = FakeClock(now=0)
        entry = DictionaryEntry(variable_code="a", variable_label="a")
        calls = []

        async def slow_rebuild():
            calls.append(clock.now)
            clock.advance(30)
            return (entry,)

        cache = RebuildCache(slow_rebuild, ttl_seconds=60, clock=clock)

        await cache.get()
        clock.now = 89
        await cache.get()
        assert calls == [0]

        clock.now = 90
        await cache.get()
        assert calls == [0, 90]

    async def test_invalidate_forces_rebuild(self, source):
        cache = make_cache(source)

        await cache.get()
        cache.invalidate()
        await cache.get()

        assert source.fetch_count == 2

    def test_ttl_must_be_positive(self, source):
        with pytest.raises(ValueError):
            make_cache(source, ttl_seconds=0)


class TestSingleFlight:
    async def test_concurrent_callers_share_one_rebuild(self):
        gate = asyncio.Event()
        source = InMemoryGraphSource(gate=gate)
        cache = make_cache(source)

        callers = [asyncio.create_task(cache.get()) for _ in range(10)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*callers)

        assert source.fetch_count == 1
        assert all(r is results[0] for r in results)

    async def test_expiry_under_concurrency_triggers_one_fetch(self):
        clock = FakeClock()
        gate = asyncio.Event()
        gate.set()
        source = InMemoryGraphSource(gate=gate)
        cache = make_cache(source, ttl_seconds=60, clock=clock)
        await cache.get()

        clock.advance(120)
        gate.clear()
        callers = [asyncio.create_task(cache.get()) for _ in range(5)]
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(*callers)

        assert source.fetch_count == 2
        assert cache.get_stats()["rebuilds"] == 2

    async def test_cancelled_caller_does_not_cancel_rebuild(self):
        gate = asyncio.Event()
        source = InMemoryGraphSource(gate=gate)
        cache = make_cache(source)

        waiter = asyncio.create_task(cache.get())
        await asyncio.sleep(0)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        gate.set()
        dictionary = await cache.get()

        assert source.fetch_count == 1
        assert len(dictionary) == 11


class TestFailure:
    async def test_failure_reaches_every_waiter(self):
        gate = asyncio.Event()
        source = InMemoryGraphSource(gate=gate, fail=True)
        cache = make_cache(source)

        callers = [asyncio.create_task(cache.get()) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*callers, return_exceptions=True)

        assert source.fetch_count == 1
        assert all(isinstance(r, FetchFailed) for r in results)
        assert not cache.is_fresh()

    async def test_failure_is_reported_once_for_all_waiters(self):
        gate = asyncio.Event()
        source = InMemoryGraphSource(gate=gate, fail=True)
        failures = []
        cache = make_cache(source, on_failure=failures.append)

        callers = [asyncio.create_task(cache.get()) for _ in range(4)]
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(*callers, return_exceptions=True)

        assert len(failures) == 1
        assert isinstance(failures[0], FetchFailed)

    async def test_failure_after_every_waiter_cancelled_is_retrieved(self):
        loop = asyncio.get_running_loop()
        unhandled = []
        loop.set_exception_handler(lambda loop, context: unhandled.append(context))
        gate = asyncio.Event()
        source = InMemoryGraphSource(gate=gate, fail=True)
        failures = []
        cache = make_cache(source, on_failure=failures.append)

        try:
            waiter = asyncio.create_task(cache.get())
            await asyncio.sleep(0)
            waiter.cancel()
            with pytest.raises(asyncio.CancelledError):
                await waiter

            gate.set()
            for _ in range(5):
                await asyncio.sleep(0)
            gc.collect()
        finally:
            loop.set_exception_handler(None)

        assert unhandled == []
        assert len(failures) == 1
        assert cache.get_stats()["failures"] == 1

    async def test_failure_then_retry_succeeds(self):
        source = InMemoryGraphSource(fail=True)
        cache = make_cache(source)

        with pytest.raises(FetchFailed):
            await cache.get()

        source.fail = False
        dictionary = await cache.get()

        assert source.fetch_count == 2
        assert len(dictionary) == 11

    async def test_failed_rebuild_does_not_replace_expired_value(self, source):
        clock = FakeClock()
        cache = make_cache(source, ttl_seconds=60, clock=clock)
        first = await cache.get()

        clock.advance(60)
        source.fail = True
        with pytest.raises(FetchFailed):
            await cache.get()

        assert not cache.is_fresh()
        source.fail = False
        assert await cache.get() == first

    async def test_stats(self, source):
        cache = make_cache(source)

        await cache.get()
        await cache.get()
        source.fail = True
        cache.invalidate()
        with pytest.raises(FetchFailed):
            await cache.get()

        assert cache.get_stats() == {
            "hits": 1,
            "misses": 2,
            "rebuilds": 2,
            "failures": 1,
            "size": 11,
        }
