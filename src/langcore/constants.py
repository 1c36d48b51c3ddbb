"""Shared constants for langcore.

Centralized configuration constants used across the runtime, ICU and
formatting packages. Placing them here avoids circular imports and gives a
single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for ICU message parsing
- Cache limits: Memory bounds for caching subsystems
- Locale defaults: Fallback locale and currency

Python 3.11+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_FORMATTER_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Locale defaults
    "DEFAULT_FALLBACK_LOCALE",
    "DEFAULT_CURRENCY",
    # Plural data
    "PLURAL_CATEGORY_NAMES",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum clause nesting in an ICU message (plural inside select inside ...).
# Real messages rarely exceed 3 levels; deeper input is malformed.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default maximum entries for translated results (TranslationManager).
DEFAULT_CACHE_SIZE: int = 1000

# Default maximum compiled number formatters (NumberFormatter, FIFO eviction).
DEFAULT_FORMATTER_CACHE_SIZE: int = 100

# Maximum cached Babel Locale objects in locale_utils.get_babel_locale().
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_FALLBACK_LOCALE: str = "en"

# Currency used when neither region nor language maps to one.
DEFAULT_CURRENCY: str = "USD"

# ============================================================================
# PLURAL DATA
# ============================================================================

# CLDR plural category names, in canonical CLDR order.
PLURAL_CATEGORY_NAMES: frozenset[str] = frozenset(
    {"zero", "one", "two", "few", "many", "other"}
)
