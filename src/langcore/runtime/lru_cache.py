"""Thread-safe generic LRU cache.

True least-recently-used eviction: both reads (get) and writes (set) move a
key to the most-recent end. Recency order is total, so eviction never needs a
tie-break.

Architecture:
    - Doubly linked list of nodes, most-recent at the tail
    - Dict index from key to node for O(1) lookup, promote and evict
    - Sentinel head/tail nodes so splicing never special-cases the ends
    - Thread-safe using threading.RLock (reentrant lock)

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from threading import RLock
from typing import Generic, TypeVar

__all__ = ["LRUCache"]

K = TypeVar("K")
V = TypeVar("V")


class _Node(Generic[K, V]):
    """Linked-list entry owned exclusively by one LRUCache."""

    __slots__ = ("key", "next", "prev", "value")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.prev: _Node[K, V] | None = None
        self.next: _Node[K, V] | None = None


class LRUCache(Generic[K, V]):
    """Bounded cache with least-recently-used eviction.

    ``get`` and ``set`` promote the key to most-recently-used; ``has`` does
    not touch recency. When ``set`` pushes the size above ``max_size`` the
    single least-recently-used entry is evicted.

    Example:
        >>> cache: LRUCache[str, int] = LRUCache(max_size=2)
        >>> cache.set("a", 1)
        >>> cache.set("b", 2)
        >>> cache.get("a")  # "a" is now most recent
        1
        >>> cache.set("c", 3)  # evicts "b"
        >>> cache.has("b")
        False
    """

    __slots__ = ("_head", "_index", "_lock", "_max_size", "_tail")

    def __init__(self, max_size: int = 1000) -> None:
        """Initialize LRU cache.

        Args:
            max_size: Maximum number of entries (default: 1000)

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            msg = "max_size must be positive"
            raise ValueError(msg)

        self._max_size = max_size
        self._index: dict[K, _Node[K, V]] = {}
        self._lock = RLock()
        # Sentinels: head.next is least recent, tail.prev is most recent
        self._head: _Node[K, V] = _Node(None, None)  # type: ignore[arg-type]
        self._tail: _Node[K, V] = _Node(None, None)  # type: ignore[arg-type]
        self._head.next = self._tail
        self._tail.prev = self._head

    def get(self, key: K) -> V | None:
        """Return the cached value and mark the key most-recently-used.

        Returns None when the key is absent.
        """
        with self._lock:
            node = self._index.get(key)
            if node is None:
                return None
            self._unlink(node)
            self._append(node)
            return node.value

    def set(self, key: K, value: V) -> None:
        """Insert or update a value, mark it most-recently-used, then evict.

        At most one entry (the least recently used) is evicted per call.
        """
        with self._lock:
            node = self._index.get(key)
            if node is not None:
                node.value = value
                self._unlink(node)
                self._append(node)
                return

            node = _Node(key, value)
            self._index[key] = node
            self._append(node)

            if len(self._index) > self._max_size:
                oldest = self._head.next
                assert oldest is not None and oldest is not self._tail
                self._unlink(oldest)
                del self._index[oldest.key]

    def has(self, key: K) -> bool:
        """Check membership without affecting recency."""
        with self._lock:
            return key in self._index

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._index.clear()
            self._head.next = self._tail
            self._tail.prev = self._head

    def keys(self) -> tuple[K, ...]:
        """Snapshot of keys from least to most recently used."""
        with self._lock:
            result: list[K] = []
            node = self._head.next
            while node is not None and node is not self._tail:
                result.append(node.key)
                node = node.next
            return tuple(result)

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with keys ``size`` and ``max_size``
        """
        with self._lock:
            return {"size": len(self._index), "max_size": self._max_size}

    @property
    def size(self) -> int:
        """Current number of entries."""
        with self._lock:
            return len(self._index)

    @property
    def max_size(self) -> int:
        """Maximum number of entries."""
        return self._max_size

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._index

    def _unlink(self, node: _Node[K, V]) -> None:
        prev_node = node.prev
        next_node = node.next
        assert prev_node is not None and next_node is not None
        prev_node.next = next_node
        next_node.prev = prev_node
        node.prev = None
        node.next = None

    def _append(self, node: _Node[K, V]) -> None:
        last = self._tail.prev
        assert last is not None
        last.next = node
        node.prev = last
        node.next = self._tail
        self._tail.prev = node
