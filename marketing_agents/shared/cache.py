"""
Workflow result cache.

Provides an injectable cache abstraction, a TTL implementation with lazy
eviction on read, and a single-flight helper that collapses concurrent
misses for the same key into one execution.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from marketing_agents.shared.contracts import WorkflowContext


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached workflow result and its creation time."""

    result: Any
    created_at_ms: float


@dataclass
class CacheLookup:
    """Outcome of a cache read."""

    hit: bool
    value: Any = None


MISS = CacheLookup(hit=False)


class WorkflowCache(ABC):
    """Cache interface used by the workflow orchestrator."""

    @abstractmethod
    def get(self, key: str) -> CacheLookup:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def evict(self, key: str) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class TTLWorkflowCache(WorkflowCache):
    """
    In-memory TTL cache.

    Entries expire when ``now - created_at_ms > ttl_seconds * 1000`` and are
    removed lazily on the read that notices. There is no background sweep
    and no size bound.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def _now_ms(self) -> float:
        return self._clock() * 1000

    def get(self, key: str) -> CacheLookup:
        entry = self._entries.get(key)
        if entry is None:
            return MISS

        age_ms = self._now_ms() - entry.created_at_ms
        if age_ms > self.ttl_seconds * 1000:
            del self._entries[key]
            logger.debug(f"[cache] Expired | key={key}, age_ms={age_ms:.0f}")
            return MISS

        return CacheLookup(hit=True, value=entry.result)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(result=value, created_at_ms=self._now_ms())

    def evict(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


def build_cache_key(
    workflow_type: str,
    context: "WorkflowContext",
    variant: Optional[str] = None,
) -> str:
    """
    Build the cache key for a workflow run.

    Only the stable identifying field participates; other context fields
    (audience, location, ...) are ignored. ``variant`` separates runs of one
    workflow type that do different work for the same business.
    """
    identifier = context.website or context.business_name or "unknown"
    if variant:
        return f"{workflow_type}/{variant}:{identifier}"
    return f"{workflow_type}:{identifier}"


class FlightCancelledError(Exception):
    """Raised to callers that joined a run whose owner was cancelled."""

    def __init__(self, key: str):
        super().__init__(f"In-flight execution for {key} was cancelled")
        self.key = key


class SingleFlight:
    """
    De-duplicates concurrent work keyed like the cache.

    The first caller for a key runs the coroutine; callers arriving while it
    is in flight await the same future and receive the same result (or
    exception). If the owner is cancelled, joined callers receive
    FlightCancelledError rather than the cancellation itself.
    """

    def __init__(self):
        self._in_flight: Dict[str, "asyncio.Future[Any]"] = {}

    def __len__(self) -> int:
        return len(self._in_flight)

    def is_in_flight(self, key: str) -> bool:
        return key in self._in_flight

    async def run(
        self,
        key: str,
        factory: Callable[[], Awaitable[Any]],
    ) -> Any:
        existing: Optional["asyncio.Future[Any]"] = self._in_flight.get(key)
        if existing is not None:
            logger.info(f"[single-flight] Joining in-flight execution | key={key}")
            return await asyncio.shield(existing)

        future: "asyncio.Future[Any]" = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            result = await factory()
        except asyncio.CancelledError:
            future.set_exception(FlightCancelledError(key))
            future.exception()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unjoined failure does not warn on GC
            future.exception()
            raise
        else:
            future.set_result(result)
            return result
        finally:
            del self._in_flight[key]
