"""Reference Cache — read-through cache for immutable server resources (boards, rulesets).

Invariants:
    - Keys are str(entity_id): 7 and "7" address the same resource path, so one entry
    - At most one fetch per key per cache lifetime, even under concurrent first access
    - Check-and-register of the in-flight task happens before the first await
    - Hits are delivered after one event-loop yield, like a fetch
    - Failed fetches store nothing; every waiter gets the same exception, and a
      failure nobody waits for anymore is retrieved, never reported as unhandled
    - No eviction or invalidation; board layouts and rulesets never change server-side

Design Decisions:
    - In-flight dict of key → asyncio.Task: concurrent callers share one round trip
    - asyncio.shield around the shared task: a cancelled caller does not cancel the fetch
      the other callers are waiting on
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from feudclient.core.domain_types import EntityId

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


def _consume_exception(task: asyncio.Task) -> None:
    # Marks a failure as retrieved when every waiter was cancelled before it landed.
    if not task.cancelled():
        task.exception()


class ReferenceCache:
    """Process-lifetime cache keyed by opaque entity id."""

    def __init__(self, name: str, seed: Mapping[EntityId, Any] | None = None):
        self.name = name
        self._entries: dict[str, Any] = {
            str(k): v for k, v in (seed or {}).items()
        }
        self._in_flight: dict[str, asyncio.Task] = {}

    def __contains__(self, entity_id: EntityId) -> bool:
        return str(entity_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_fetch(self, entity_id: EntityId, fetcher: Fetcher) -> Any:
        key = str(entity_id)

        if key in self._entries:
            await asyncio.sleep(0)
            return self._entries[key]

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._populate(key, fetcher))
            task.add_done_callback(_consume_exception)
            self._in_flight[key] = task
        else:
            logger.debug(
                f"{self.name} {key}: joining in-flight fetch",
                extra={"cache": self.name, "entity_id": key},
            )
        return await asyncio.shield(task)

    async def _populate(self, key: str, fetcher: Fetcher) -> Any:
        try:
            value = await fetcher()
            self._entries[key] = value
            logger.debug(
                f"{self.name} {key}: cached",
                extra={"cache": self.name, "entity_id": key},
            )
            return value
        finally:
            self._in_flight.pop(key, None)
