"""Bounded FIFO cache for compiled number formatters.

Unlike LRUCache, reads never reorder entries: when the cache is full the
entry inserted first is evicted, however often it has been read.

Architecture:
    - OrderedDict in insertion order
    - popitem(last=False) evicts the oldest entry
    - Thread-safe using threading.RLock (reentrant lock)

Python 3.11+. Zero external dependencies.
"""

from collections import OrderedDict
from collections.abc import Callable, Hashable
from threading import RLock
from typing import Generic, TypeVar

from langcore.constants import DEFAULT_FORMATTER_CACHE_SIZE

__all__ = ["FormatterCache"]

H = TypeVar("H")


class FormatterCache(Generic[H]):
    """First-in, first-out cache of formatter handles.

    Example:
        >>> cache: FormatterCache[str] = FormatterCache(max_size=2)
        >>> cache.get_or_create("a", lambda: "A")
        'A'
        >>> cache.get_or_create("b", lambda: "B")
        'B'
        >>> cache.get("a")  # read does not protect "a"
        'A'
        >>> cache.get_or_create("c", lambda: "C")
        'C'
        >>> "a" in cache
        False
    """

    __slots__ = ("_entries", "_lock", "_max_size")

    def __init__(self, max_size: int = DEFAULT_FORMATTER_CACHE_SIZE) -> None:
        """Initialize formatter cache.

        Args:
            max_size: Maximum number of handles (default: 100)

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            msg = "max_size must be positive"
            raise ValueError(msg)
        self._max_size = max_size
        self._entries: OrderedDict[Hashable, H] = OrderedDict()
        self._lock = RLock()

    def get(self, key: Hashable) -> H | None:
        """Return the cached handle without touching insertion order."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: Hashable, handle: H) -> None:
        """Store a handle, evicting the oldest entry when over capacity.

        Replacing an existing key keeps its original insertion position.
        """
        with self._lock:
            self._entries[key] = handle
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

    def get_or_create(self, key: Hashable, factory: Callable[[], H]) -> H:
        """Return the cached handle, building and storing it on a miss.

        Exceptions raised by ``factory`` propagate and nothing is stored.
        """
        with self._lock:
            handle = self._entries.get(key)
            if handle is None:
                handle = factory()
                self.put(key, handle)
            return handle

    def clear(self) -> None:
        """Remove all handles."""
        with self._lock:
            self._entries.clear()

    def keys(self) -> tuple[Hashable, ...]:
        """Snapshot of keys from oldest to newest insertion."""
        with self._lock:
            return tuple(self._entries)

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with keys ``size`` and ``max_size``
        """
        with self._lock:
            return {"size": len(self._entries), "max_size": self._max_size}

    @property
    def max_size(self) -> int:
        """Maximum number of handles."""
        return self._max_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
