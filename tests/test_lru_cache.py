"""Tests for the generic LRUCache.

Covers construction guards, recency promotion on get and set, eviction order
and the size bound under arbitrary operation sequences.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langcore.runtime.lru_cache import LRUCache


class TestLRUCacheConstruction:
    """Construction and validation."""

    def test_default_max_size(self) -> None:
        """Default capacity is 1000."""
        cache: LRUCache[str, int] = LRUCache()
        assert cache.max_size == 1000
        assert len(cache) == 0

    @pytest.mark.parametrize("max_size", [0, -1, -100])
    def test_rejects_non_positive_max_size(self, max_size: int) -> None:
        """Zero or negative capacity raises ValueError."""
        with pytest.raises(ValueError, match="max_size must be positive"):
            LRUCache(max_size)


class TestLRUCacheBasics:
    """get/set/has/clear behavior."""

    def test_get_missing_returns_none(self) -> None:
        """Absent keys return None."""
        cache: LRUCache[str, int] = LRUCache(3)
        assert cache.get("missing") is None

    def test_set_then_get(self) -> None:
        """A stored value is returned."""
        cache: LRUCache[str, str] = LRUCache(3)
        cache.set("greeting", "Hello")
        assert cache.get("greeting") == "Hello"
        assert "greeting" in cache
        assert cache.size == 1

    def test_set_existing_key_updates_value(self) -> None:
        """Overwriting a key does not grow the cache."""
        cache: LRUCache[str, int] = LRUCache(3)
        cache.set("a", 1)
        cache.set("a", 2)
        assert cache.get("a") == 2
        assert len(cache) == 1

    def test_clear_removes_everything(self) -> None:
        """clear() empties the cache and it stays usable."""
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0
        assert cache.keys() == ()
        cache.set("c", 3)
        assert cache.get("c") == 3

    def test_get_stats(self) -> None:
        """Stats report size and capacity."""
        cache: LRUCache[str, int] = LRUCache(5)
        cache.set("a", 1)
        assert cache.get_stats() == {"size": 1, "max_size": 5}


class TestLRUCacheEviction:
    """Least-recently-used eviction order."""

    def test_evicts_oldest_when_full(self) -> None:
        """Inserting past capacity evicts the least recently used key."""
        cache: LRUCache[str, int] = LRUCache(3)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.set("d", 4)

        assert not cache.has("a")
        assert cache.keys() == ("b", "c", "d")

    def test_get_protects_key_from_eviction(self) -> None:
        """Reading a key makes it most recent."""
        cache: LRUCache[str, int] = LRUCache(3)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert cache.get("a") == 1

        cache.set("d", 4)

        assert cache.has("a")
        assert not cache.has("b")
        assert cache.keys() == ("c", "a", "d")

    def test_set_existing_promotes(self) -> None:
        """Updating a key makes it most recent."""
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        cache.set("c", 3)

        assert cache.keys() == ("a", "c")
        assert cache.get("a") == 10

    def test_has_does_not_promote(self) -> None:
        """Membership checks leave recency untouched."""
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.has("a")
        cache.set("c", 3)

        assert not cache.has("a")

    def test_capacity_one(self) -> None:
        """A single-slot cache keeps only the newest entry."""
        cache: LRUCache[str, int] = LRUCache(1)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.keys() == ("b",)


class TestLRUCacheProperties:
    """Property-based invariants."""

    @given(
        max_size=st.integers(min_value=1, max_value=10),
        ops=st.lists(
            st.tuples(st.booleans(), st.integers(min_value=0, max_value=20)),
            max_size=100,
        ),
    )
    def test_size_never_exceeds_max(
        self, max_size: int, ops: list[tuple[bool, int]]
    ) -> None:
        """No sequence of get/set grows the cache past its bound."""
        cache: LRUCache[int, int] = LRUCache(max_size)
        for is_set, key in ops:
            if is_set:
                cache.set(key, key * 2)
            else:
                value = cache.get(key)
                assert value is None or value == key * 2
            assert len(cache) <= max_size

    @given(keys=st.lists(st.integers(), min_size=1, max_size=30, unique=True))
    def test_most_recent_set_survives(self, keys: list[int]) -> None:
        """The last inserted key is always present."""
        cache: LRUCache[int, int] = LRUCache(3)
        for key in keys:
            cache.set(key, key)
        assert cache.keys()[-1] == keys[-1]
        assert cache.keys() == tuple(keys[-3:])
