"""Thread-safe cache for translated strings.

Memoizes TranslationManager results keyed by entry point, locale, namespace,
key, context and the JSON-serialized parameters. Backed by LRUCache, so reads
promote entries and the least recently used result is evicted first.

Cache Key Structure:
    '["<kind>", "<locale>", "<namespace>", "<key>", "<context>"]' + "<params-json>"
    The prefix is a JSON array so separators inside keys cannot collide.
    - kind: "t" (translate) or "p" (translate_plural)
    - namespace: namespace name or "main"
    - params-json: json.dumps(params, sort_keys=True) or "" for no params

Robustness:
    Parameters that cannot be serialized (sets, arbitrary objects, cyclic
    structures) bypass the cache entirely, as do mappings with non-str keys,
    which JSON would merge with their string forms. Such calls are counted
    in ``unserializable_skips`` and always recomputed.

Python 3.11+. Zero external dependencies.
"""

import json
from collections.abc import Mapping
from threading import RLock
from typing import Any

from .lru_cache import LRUCache

__all__ = ["TranslationCache"]


def _has_non_str_keys(value: Any) -> bool:
    """True if any mapping in value uses a key that JSON would coerce to str."""
    if isinstance(value, Mapping):
        return any(
            not isinstance(k, str) or _has_non_str_keys(v) for k, v in value.items()
        )
    if isinstance(value, (list, tuple)):
        return any(_has_non_str_keys(item) for item in value)
    return False


class TranslationCache:
    """LRU cache for translation results with hit/miss metrics.

    Transparent to caller - returns None on cache miss.

    Attributes:
        max_size: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_misses", "_unserializable_skips")

    def __init__(self, max_size: int = 1000) -> None:
        """Initialize translation cache.

        Args:
            max_size: Maximum number of entries (default: 1000)
        """
        self._cache: LRUCache[str, str] = LRUCache(max_size)
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._unserializable_skips = 0

    def get(self, key: str | None) -> str | None:
        """Get cached result if it exists.

        Args:
            key: Cache key from make_key(), or None for unserializable params

        Returns:
            Cached string or None
        """
        with self._lock:
            if key is None:
                self._unserializable_skips += 1
                self._misses += 1
                return None

            value = self._cache.get(key)
            if value is None:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def put(self, key: str | None, value: str) -> None:
        """Store result in cache. A None key is ignored."""
        if key is None:
            return
        with self._lock:
            self._cache.set(key, value)

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._unserializable_skips = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - max_size (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
            - unserializable_skips (int): Lookups that bypassed the cache
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "max_size": self._cache.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "unserializable_skips": self._unserializable_skips,
            }

    @staticmethod
    def make_key(
        kind: str,
        locale: str,
        key: str,
        params: Mapping[str, Any] | None,
        namespace: str | None = None,
        context: str | None = None,
    ) -> str | None:
        """Build the cache key, or None if params cannot be serialized.

        Keys are sorted during serialization so that ``{"a": 1, "b": 2}`` and
        ``{"b": 2, "a": 1}`` share one entry.
        """
        if params is None:
            params_json = ""
        else:
            try:
                params_json = json.dumps(
                    params, sort_keys=True, separators=(",", ":"), ensure_ascii=False
                )
            except (TypeError, ValueError, RecursionError):
                return None
            if _has_non_str_keys(params):
                return None

        prefix = json.dumps(
            [kind, locale, namespace or "main", key, context or ""], ensure_ascii=False
        )
        return prefix + params_json

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def max_size(self) -> int:
        """Maximum cache size."""
        return self._cache.max_size

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses

    @property
    def unserializable_skips(self) -> int:
        """Number of lookups that bypassed the cache."""
        with self._lock:
            return self._unserializable_skips
