"""Ordinal number formatting (1st, 2nd, 3rd, 4º).

The ordinal category comes from Babel's CLDR ordinal plural rules. Without
Babel (or for locales Babel rejects) the English last-digit rule is used,
where 11, 12 and 13 always take "th".

Suffixes by language:
    en              st / nd / rd / th
    es, fr, it, pt  º
    others          no suffix

Python 3.11+. Depends on Babel for CLDR data.
"""

import logging
import math
from collections.abc import Callable
from threading import RLock
from typing import Any

from babel.core import UnknownLocaleError

from langcore.enums import PluralCategory
from langcore.locale_utils import get_babel_locale, get_language, normalize_locale
from langcore.runtime.plural_rules import select_ordinal_category
from langcore.runtime.value_types import ParamValue, is_finite_number, render_param

__all__ = ["OrdinalFormatter", "ordinal_suffix"]

logger = logging.getLogger(__name__)

_ENGLISH_SUFFIXES: dict[str, str] = {
    PluralCategory.ONE: "st",
    PluralCategory.TWO: "nd",
    PluralCategory.FEW: "rd",
    PluralCategory.OTHER: "th",
}

_MASCULINE_ORDINAL_LANGUAGES: frozenset[str] = frozenset({"es", "fr", "it", "pt"})


def ordinal_suffix(language: str, category: str) -> str:
    """Suffix appended to a number for an ordinal category.

    Example:
        >>> ordinal_suffix("en", "two")
        'nd'
        >>> ordinal_suffix("es-MX", "other")
        'º'
    """
    lang = get_language(language)
    if lang == "en":
        return _ENGLISH_SUFFIXES.get(category, "th")
    if lang in _MASCULINE_ORDINAL_LANGUAGES:
        return "º"
    return ""


class OrdinalFormatter:
    """Formats integers as ordinals.

    Ordinal rules are cached per locale in the instance.

    Examples:
        >>> formatter = OrdinalFormatter()
        >>> formatter.format(1, "en")
        '1st'
        >>> formatter.format(112, "en-GB")
        '112th'
        >>> formatter.format(3, "it")
        '3º'
    """

    __slots__ = ("_lock", "_rules", "_use_babel")

    def __init__(self, *, use_babel: bool = True) -> None:
        """Initialize ordinal formatter.

        Args:
            use_babel: Use CLDR ordinal rules; False always uses the fallback
        """
        self._use_babel = use_babel
        self._rules: dict[str, Callable[[Any], str]] = {}
        self._lock = RLock()

    def _rule_for(self, locale: str) -> Callable[[Any], str]:
        key = normalize_locale(locale)
        with self._lock:
            rule = self._rules.get(key)
            if rule is None:
                rule = get_babel_locale(locale).ordinal_form
                self._rules[key] = rule
            return rule

    def select(self, value: int | float, locale: str) -> PluralCategory:
        """Select the ordinal category for ``floor(abs(value))``."""
        n = abs(math.floor(value))
        if self._use_babel:
            try:
                return PluralCategory(self._rule_for(locale)(n))
            except (UnknownLocaleError, ValueError, TypeError) as e:
                logger.warning(
                    "Ordinal rules unavailable for locale '%s': %s; using fallback",
                    locale,
                    e,
                )
        return select_ordinal_category(locale, n)

    def format(self, value: Any, locale: str) -> str:
        """Format a number with its ordinal suffix.

        Returns:
            The number followed by its suffix; ``str(value)`` for
            non-numeric or non-finite input
        """
        if not is_finite_number(value):
            return str(value)
        category = self.select(value, locale)
        return f"{render_param(ParamValue.of(value))}{ordinal_suffix(locale, category)}"

    def clear_cache(self) -> None:
        """Discard cached ordinal rules."""
        with self._lock:
            self._rules.clear()

    def get_cache_stats(self) -> dict[str, int]:
        """Get rule cache statistics.

        Returns:
            Dict with key ``size``
        """
        with self._lock:
            return {"size": len(self._rules)}
