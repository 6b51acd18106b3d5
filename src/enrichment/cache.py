"""
Keyed memoization for asynchronous enrichments.

Enrichments (path checks, link metadata, OCR, palettes) are independent
request/response lookups keyed by a stable identifier. The cache:
- shares one in-flight task per key between concurrent callers
- remembers results for the lifetime of the cache
- never retries; a failed lookup is remembered as None ("unavailable")
- has no cancellation protocol: a caller that loses interest simply stops
  awaiting, and the lookup still completes and populates the cache
"""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

from src.utils.logging import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Loader = Callable[[K], Awaitable[V]]


class EnrichmentCache(Generic[K, V]):
    """Memoizing async lookup cache keyed by a stable identifier."""

    def __init__(self, name: str, loader: Loader[K, V]):
        """Initialize the cache.

        Args:
            name: Enrichment name used in log events.
            loader: Coroutine function producing the value for a key.
        """
        self.name = name
        self._loader = loader
        self._results: dict[K, V | None] = {}
        self._inflight: dict[K, asyncio.Task[V | None]] = {}

    def __contains__(self, key: K) -> bool:
        return key in self._results

    def __len__(self) -> int:
        return len(self._results)

    def peek(self, key: K) -> V | None:
        """Cached value for key without triggering a lookup."""
        return self._results.get(key)

    def invalidate(self, key: K) -> None:
        """Forget a cached result so the next get() looks it up again."""
        self._results.pop(key, None)

    def clear(self) -> None:
        self._results.clear()

    async def _load(self, key: K) -> V | None:
        try:
            value = await self._loader(key)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Enrichment unavailable", enrichment=self.name, key=str(key), error=str(e))
            value = None
        self._results[key] = value
        return value

    async def get(self, key: K) -> V | None:
        """Return the value for key, looking it up at most once.

        Args:
            key: Stable identifier (path, URL, image reference).

        Returns:
            The loaded value, or None if the lookup failed.
        """
        if key in self._results:
            return self._results[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key))
            self._inflight[key] = task
            task.add_done_callback(lambda _t, k=key: self._inflight.pop(k, None))

        # shield: one caller giving up must not cancel the shared lookup
        return await asyncio.shield(task)
