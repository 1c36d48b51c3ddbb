"""Default currency for a locale.

Resolution order:
    1. Region subtag of the locale ("de-CH" -> CHF)
    2. CLDR likely territory for the language ("ja" -> JP -> JPY)
    3. DEFAULT_CURRENCY (USD)

Python 3.11+.
"""

import functools
import logging

from babel.core import get_global
from babel.numbers import get_territory_currencies

from langcore.constants import DEFAULT_CURRENCY, MAX_LOCALE_CACHE_SIZE
from langcore.locale_utils import get_language, normalize_locale

__all__ = ["currency_for_locale"]

logger = logging.getLogger(__name__)


def _region_of(locale_code: str) -> str | None:
    for subtag in normalize_locale(locale_code).split("_")[1:]:
        if (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit()):
            return subtag.upper()
    return None


def _likely_region(language: str) -> str | None:
    likely = get_global("likely_subtags").get(language)
    if not likely:
        return None
    return _region_of(likely)


def _current_currency(territory: str) -> str | None:
    try:
        currencies = get_territory_currencies(territory)
    except (KeyError, ValueError) as e:
        logger.debug("No currency data for territory '%s': %s", territory, e)
        return None
    return currencies[0] if currencies else None


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def currency_for_locale(locale_code: str) -> str:
    """Return the ISO 4217 code of the currency in tender for a locale.

    Example:
        >>> currency_for_locale("de-CH")
        'CHF'
        >>> currency_for_locale("ja")
        'JPY'
        >>> currency_for_locale("xx")
        'USD'
    """
    for territory in (_region_of(locale_code), _likely_region(get_language(locale_code))):
        if territory is None:
            continue
        currency = _current_currency(territory)
        if currency is not None:
            return currency
    return DEFAULT_CURRENCY
