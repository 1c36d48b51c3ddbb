"""CLDR-style plural category selection.

Maps (language, count) to a plural category with a fixed rule table covering
the languages the engine ships rules for. Only integer magnitudes are
considered: counts are reduced to ``abs(floor(count))`` before evaluation.
Unknown languages use the English rule.

Ordinal categories (1st, 2nd, 3rd) are provided for ``selectordinal``
clauses. OrdinalFormatter uses Babel's full CLDR ordinal data instead.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html

Python 3.11+. Zero external dependencies.
"""

import logging
import math
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from langcore.diagnostics import Diagnostic, DiagnosticCode
from langcore.enums import PluralCategory
from langcore.locale_utils import get_language

from .value_types import is_number

__all__ = [
    "ORDINAL_RULES",
    "PLURAL_RULES",
    "normalize_count",
    "select_ordinal_category",
    "select_plural_category",
]

logger = logging.getLogger(__name__)

PluralRule = Callable[[int], PluralCategory]

ONE = PluralCategory.ONE
OTHER = PluralCategory.OTHER


def _one_other(n: int) -> PluralCategory:
    return ONE if n == 1 else OTHER


def _zero_one_other(n: int) -> PluralCategory:
    return ONE if n in (0, 1) else OTHER


def _arabic(n: int) -> PluralCategory:
    mod100 = n % 100
    if n == 0:
        return PluralCategory.ZERO
    if n == 1:
        return ONE
    if n == 2:
        return PluralCategory.TWO
    if 3 <= mod100 <= 10:
        return PluralCategory.FEW
    if mod100 >= 11:
        return PluralCategory.MANY
    return OTHER


def _is_slavic_few(n: int) -> bool:
    return 2 <= n % 10 <= 4 and not 12 <= n % 100 <= 14


def _russian(n: int) -> PluralCategory:
    if n % 10 == 1 and n % 100 != 11:
        return ONE
    if _is_slavic_few(n):
        return PluralCategory.FEW
    return PluralCategory.MANY


def _polish(n: int) -> PluralCategory:
    if n == 1:
        return ONE
    if _is_slavic_few(n):
        return PluralCategory.FEW
    return PluralCategory.MANY


def _czech(n: int) -> PluralCategory:
    if n == 1:
        return ONE
    if 2 <= n <= 4:
        return PluralCategory.FEW
    return PluralCategory.MANY


def _always_other(_n: int) -> PluralCategory:
    return OTHER


PLURAL_RULES: Mapping[str, PluralRule] = {
    "en": _one_other,
    "es": _one_other,
    "de": _one_other,
    "it": _one_other,
    "fr": _zero_one_other,
    "pt": _zero_one_other,
    "ar": _arabic,
    "ru": _russian,
    "pl": _polish,
    "cs": _czech,
    "zh": _always_other,
    "ja": _always_other,
    "ko": _always_other,
}


def _english_ordinal(n: int) -> PluralCategory:
    mod10 = n % 10
    mod100 = n % 100
    if mod10 == 1 and mod100 != 11:
        return ONE
    if mod10 == 2 and mod100 != 12:
        return PluralCategory.TWO
    if mod10 == 3 and mod100 != 13:
        return PluralCategory.FEW
    return OTHER


ORDINAL_RULES: Mapping[str, PluralRule] = {
    "en": _english_ordinal,
}


def normalize_count(count: Any) -> int:
    """Reduce a count to the non-negative integer magnitude rules operate on.

    Non-numeric or non-finite counts are treated as 0 and a warning is
    logged. ``bool`` is not a count.

    Example:
        >>> normalize_count(-3.7)
        4
        >>> normalize_count(float("nan"))
        0
    """
    if not is_number(count) or (
        isinstance(count, float) and not math.isfinite(count)
    ) or (isinstance(count, Decimal) and not count.is_finite()):
        diagnostic = Diagnostic(
            DiagnosticCode.INVALID_COUNT,
            f"Count {count!r} is not a finite number; using 0",
        )
        logger.warning(diagnostic.format_error())
        return 0
    return abs(math.floor(count))


def select_plural_category(language: str, count: Any) -> PluralCategory:
    """Select the plural category for a count in a language.

    Args:
        language: Locale code; only the language subtag is used
        count: Number to categorize

    Returns:
        PluralCategory from the language's rule (English rule if unknown)

    Examples:
        >>> select_plural_category("ru", 21)
        <PluralCategory.ONE: 'one'>
        >>> select_plural_category("ru", 22)
        <PluralCategory.FEW: 'few'>
        >>> select_plural_category("ar-EG", 11)
        <PluralCategory.MANY: 'many'>
        >>> select_plural_category("xx", 1)
        <PluralCategory.ONE: 'one'>
    """
    rule = PLURAL_RULES.get(get_language(language), _one_other)
    return rule(normalize_count(count))


def select_ordinal_category(language: str, count: Any) -> PluralCategory:
    """Select the ordinal category for a count in a language.

    Languages without ordinal rules always yield ``other``.

    Example:
        >>> select_ordinal_category("en", 22)
        <PluralCategory.TWO: 'two'>
        >>> select_ordinal_category("en", 12)
        <PluralCategory.OTHER: 'other'>
    """
    rule = ORDINAL_RULES.get(get_language(language), _always_other)
    return rule(normalize_count(count))
