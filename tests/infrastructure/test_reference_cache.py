"""Reference Cache — read-through caching of boards and rulesets.

Invariants:
    - Same id twice → one fetch, equal results
    - Concurrent first access → one fetch shared by every caller
    - 7 and "7" share one entry
    - Failures are not cached and reach every waiter
    - Hits are delivered after an event-loop yield, like fetches
    - A cancelled waiter does not cancel the shared fetch
    - A failure nobody is left waiting for is not reported as unhandled
"""

import asyncio
import gc

import pytest

from feudclient.core.errors import DomainError
from feudclient.infrastructure.reference_cache import ReferenceCache


class _CountingFetcher:
    """Fetcher returning `value`, optionally gated on an Event."""

    def __init__(self, value, gate=None, error=None):
        self.value = value
        self.gate = gate
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.value


async def test_second_call_uses_cached_value():
    cache = ReferenceCache("board")
    fetcher = _CountingFetcher({"layout": [[0, 1], [1, 0]]})

    first = await cache.get_or_fetch(1, fetcher)
    second = await cache.get_or_fetch(1, fetcher)

    assert fetcher.calls == 1
    assert first == second == {"layout": [[0, 1], [1, 0]]}
    assert 1 in cache
    assert len(cache) == 1


async def test_distinct_ids_fetch_separately():
    cache = ReferenceCache("ruleset")
    a = _CountingFetcher("a")
    b = _CountingFetcher("b")

    assert await cache.get_or_fetch(1, a) == "a"
    assert await cache.get_or_fetch(2, b) == "b"
    assert (a.calls, b.calls) == (1, 1)


async def test_int_and_str_ids_share_entry():
    cache = ReferenceCache("board")
    fetcher = _CountingFetcher("layout")

    await cache.get_or_fetch(7, fetcher)
    assert await cache.get_or_fetch("7", fetcher) == "layout"
    assert fetcher.calls == 1


async def test_concurrent_first_access_fetches_once():
    cache = ReferenceCache("board")
    gate = asyncio.Event()
    fetcher = _CountingFetcher("layout", gate=gate)

    pending = asyncio.gather(*(cache.get_or_fetch(3, fetcher) for _ in range(5)))
    await asyncio.sleep(0)
    gate.set()
    results = await pending

    assert fetcher.calls == 1
    assert results == ["layout"] * 5


async def test_failure_is_not_cached():
    cache = ReferenceCache("ruleset")
    failing = _CountingFetcher(None, error=DomainError("access_denied"))
    working = _CountingFetcher({"A": 1})

    with pytest.raises(DomainError):
        await cache.get_or_fetch(4, failing)
    assert 4 not in cache

    assert await cache.get_or_fetch(4, working) == {"A": 1}
    assert working.calls == 1


async def test_concurrent_waiters_share_failure():
    cache = ReferenceCache("ruleset")
    gate = asyncio.Event()
    fetcher = _CountingFetcher(None, gate=gate, error=DomainError("access_denied"))

    pending = asyncio.gather(
        cache.get_or_fetch(4, fetcher),
        cache.get_or_fetch(4, fetcher),
        return_exceptions=True,
    )
    await asyncio.sleep(0)
    gate.set()
    results = await pending

    assert fetcher.calls == 1
    assert all(isinstance(r, DomainError) for r in results)


async def test_seeded_entries_never_fetch():
    cache = ReferenceCache("board", seed={1: "seeded"})
    fetcher = _CountingFetcher("fetched")

    assert await cache.get_or_fetch("1", fetcher) == "seeded"
    assert fetcher.calls == 0


async def test_hit_is_delivered_after_yield():
    cache = ReferenceCache("board", seed={1: "seeded"})
    order = []

    async def read():
        await cache.get_or_fetch(1, _CountingFetcher("fetched"))
        order.append("hit")

    async def other():
        order.append("other")

    await asyncio.gather(read(), other())
    assert order == ["other", "hit"]


async def test_cancelled_waiter_does_not_cancel_fetch():
    cache = ReferenceCache("board")
    gate = asyncio.Event()
    fetcher = _CountingFetcher("layout", gate=gate)

    first = asyncio.ensure_future(cache.get_or_fetch(9, fetcher))
    second = asyncio.ensure_future(cache.get_or_fetch(9, fetcher))
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    first.cancel()
    gate.set()

    assert await second == "layout"
    with pytest.raises(asyncio.CancelledError):
        await first
    assert fetcher.calls == 1
    assert 9 in cache


async def test_failure_after_sole_waiter_cancelled_is_retrieved():
    loop = asyncio.get_running_loop()
    reported = []
    previous = loop.get_exception_handler()
    loop.set_exception_handler(lambda _loop, context: reported.append(context))

    cache = ReferenceCache("board")
    gate = asyncio.Event()
    fetcher = _CountingFetcher(None, gate=gate, error=DomainError("not_found"))

    waiter = asyncio.ensure_future(cache.get_or_fetch(3, fetcher))
    await asyncio.sleep(0)
    fetch_task = cache._in_flight["3"]

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter
    gate.set()
    for _ in range(3):
        await asyncio.sleep(0)

    try:
        assert fetch_task.done()
        del fetch_task, waiter
        gc.collect()
        assert reported == []
        assert 3 not in cache
    finally:
        loop.set_exception_handler(previous)
