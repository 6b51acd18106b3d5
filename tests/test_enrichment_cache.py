"""
Unit tests for EnrichmentCache.

## Test Perspectives Table
| Case ID | Input / Precondition | Perspective (Equivalence / Boundary) | Expected Result | Notes |
|---------|----------------------|---------------------------------------|-----------------|-------|
| TC-EC-01 | Sequential gets | Equivalence – memoization | loader called once | - |
| TC-EC-02 | Concurrent gets | Equivalence – in-flight sharing | loader called once | - |
| TC-EC-03 | Loader raises | Abnormal – failure | None, remembered | no retry |
| TC-EC-04 | Caller cancels | Boundary – no cancellation | lookup completes | - |
| TC-EC-05 | invalidate / clear | Equivalence | reload on next get | - |
"""

import asyncio

import pytest

# All tests in this module are unit tests (no external dependencies)
pytestmark = pytest.mark.unit

from src.enrichment.cache import EnrichmentCache


class CountingLoader:
    """Loader that records keys and can be held open."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.release = asyncio.Event()
        self.release.set()
        self.fail = fail

    async def __call__(self, key: str) -> str:
        self.calls.append(key)
        await self.release.wait()
        if self.fail:
            raise RuntimeError(f"lookup failed for {key}")
        return key.upper()


class TestEnrichmentCache:
    """Tests for EnrichmentCache.get() and friends."""

    @pytest.mark.asyncio
    async def test_memoizes(self) -> None:
        """TC-EC-01: A key is looked up once."""
        loader = CountingLoader()
        cache = EnrichmentCache("test", loader)

        assert await cache.get("a") == "A"
        assert await cache.get("a") == "A"

        assert loader.calls == ["a"]
        assert "a" in cache
        assert len(cache) == 1
        assert cache.peek("a") == "A"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_lookup(self) -> None:
        """TC-EC-02: In-flight lookups are shared."""
        # Given: A loader held open
        loader = CountingLoader()
        loader.release.clear()
        cache = EnrichmentCache("test", loader)

        # When: Three callers ask for the same key before it resolves
        tasks = [asyncio.create_task(cache.get("k")) for _ in range(3)]
        await asyncio.sleep(0)
        loader.release.set()
        results = await asyncio.gather(*tasks)

        # Then: One lookup, one shared result
        assert results == ["K", "K", "K"]
        assert loader.calls == ["k"]

    @pytest.mark.asyncio
    async def test_distinct_keys_load_separately(self) -> None:
        loader = CountingLoader()
        cache = EnrichmentCache("test", loader)

        assert await asyncio.gather(cache.get("a"), cache.get("b")) == ["A", "B"]
        assert sorted(loader.calls) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_failure_is_remembered_as_none(self) -> None:
        """TC-EC-03: Failed lookups resolve to None and are not retried."""
        loader = CountingLoader(fail=True)
        cache = EnrichmentCache("test", loader)

        assert await cache.get("a") is None
        assert await cache.get("a") is None

        assert loader.calls == ["a"]
        assert "a" in cache

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_lookup(self) -> None:
        """TC-EC-04: The lookup outlives a caller that stops waiting."""
        # Given: A caller waiting on a held lookup
        loader = CountingLoader()
        loader.release.clear()
        cache = EnrichmentCache("test", loader)
        waiter = asyncio.create_task(cache.get("a"))
        await asyncio.sleep(0)

        # When: The caller is cancelled, then the lookup finishes
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter
        loader.release.set()

        # Then: A later caller gets the same lookup's result
        assert await cache.get("a") == "A"
        assert loader.calls == ["a"]

    @pytest.mark.asyncio
    async def test_invalidate_and_clear(self) -> None:
        """TC-EC-05: Forgotten results are looked up again."""
        loader = CountingLoader()
        cache = EnrichmentCache("test", loader)
        await cache.get("a")

        cache.invalidate("a")
        assert "a" not in cache
        await cache.get("a")

        cache.clear()
        assert len(cache) == 0
        assert cache.peek("a") is None
        assert loader.calls == ["a", "a"]
