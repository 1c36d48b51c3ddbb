"""Runtime: caching, plural rules, interpolation, key resolution and the
TranslationManager that composes them.

Python 3.11+.
"""

from .cache import TranslationCache
from .cache_config import CacheConfig
from .interpolation import get_nested_value, interpolate
from .lru_cache import LRUCache
from .plural_rules import select_ordinal_category, select_plural_category
from .resolver import KeyResolver, ResolvedValue, is_plural_leaf, resolve_key
from .value_types import ParamValue, classify_param

# Imported last: the manager pulls in the ICU formatter, which depends on the
# modules above.
from .manager import MissingTranslation, TranslationManager  # noqa: I001

__all__ = [
    "CacheConfig",
    "KeyResolver",
    "LRUCache",
    "MissingTranslation",
    "ParamValue",
    "ResolvedValue",
    "TranslationCache",
    "TranslationManager",
    "classify_param",
    "get_nested_value",
    "interpolate",
    "is_plural_leaf",
    "resolve_key",
    "select_ordinal_category",
    "select_plural_category",
]
