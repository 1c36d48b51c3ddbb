"""Locale utilities: BCP-47 to POSIX conversion and language extraction.

Centralizes locale normalization used throughout the codebase so that cache
keys and rule lookups agree on one canonical form.

Python 3.11+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Literal

from babel.core import UnknownLocaleError

from langcore.constants import DEFAULT_FALLBACK_LOCALE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_language",
    "get_text_direction",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

# Used when Babel has no character-order data for a locale.
_RTL_LANGUAGES: frozenset[str] = frozenset({"ar", "he", "fa", "ur"})


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


def get_language(locale_code: str) -> str:
    """Extract the lower-cased language subtag of a locale code.

    Only the language subtag drives plural-rule and ordinal-suffix
    selection. Both separators are accepted.

    Example:
        >>> get_language("en-US")
        'en'
        >>> get_language("PT_br")
        'pt'
        >>> get_language("")
        'en'
    """
    language = normalize_locale(locale_code).split("_", 1)[0].strip().lower()
    return language or DEFAULT_FALLBACK_LOCALE


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. Thread-safe via
    lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> locale = get_babel_locale("en-US")
        >>> locale.language
        'en'
        >>> locale.territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_text_direction(locale_code: str) -> Literal["ltr", "rtl"]:
    """Return the writing direction for a locale.

    Uses Babel's CLDR character order. Unknown locales fall back to a small
    table of right-to-left languages.

    Example:
        >>> get_text_direction("ar-SA")
        'rtl'
        >>> get_text_direction("de")
        'ltr'
    """
    try:
        direction = get_babel_locale(locale_code).text_direction
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("No CLDR direction for '%s': %s", locale_code, e)
        return "rtl" if get_language(locale_code) in _RTL_LANGUAGES else "ltr"
    return "rtl" if direction == "rtl" else "ltr"
