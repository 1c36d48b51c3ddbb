"""Cache configuration for TranslationManager.

A single frozen dataclass encapsulating result-cache parameters. Pass an
instance to ``TranslationManager(cache=CacheConfig(...))``; pass
``cache=None`` to disable caching.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from langcore.constants import DEFAULT_CACHE_SIZE

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for translation result caching.

    Attributes:
        size: Maximum cache entries (default: 1000). Least-recently-used
            entries are evicted beyond this bound.

    Example:
        >>> from langcore import TranslationManager
        >>> from langcore.runtime.cache_config import CacheConfig
        >>> manager = TranslationManager({"en": {}}, cache=CacheConfig(size=500))
        >>> manager.get_cache_stats()["max_size"]
        500
    """

    size: int = DEFAULT_CACHE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive.
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
