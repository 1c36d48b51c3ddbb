"""Locale-aware number, ordinal, currency and date formatting.

Python 3.11+. Depends on Babel for CLDR data.
"""

from .currency import currency_for_locale
from .dates import format_date_argument
from .formatter_cache import FormatterCache
from .numbers import (
    NumberFormatHandle,
    NumberFormatOptions,
    NumberFormatter,
    format_number_fallback,
    format_number_icu,
)
from .ordinals import OrdinalFormatter, ordinal_suffix

__all__ = [
    "FormatterCache",
    "NumberFormatHandle",
    "NumberFormatOptions",
    "NumberFormatter",
    "OrdinalFormatter",
    "currency_for_locale",
    "format_date_argument",
    "format_number_fallback",
    "format_number_icu",
    "ordinal_suffix",
]
