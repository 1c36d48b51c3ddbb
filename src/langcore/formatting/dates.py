"""Date formatting for ICU ``{name, date, style}`` arguments.

Accepted values:
    - datetime.date / datetime.datetime
    - ISO 8601 strings ("2025-10-27", "2025-10-27T14:30:00+00:00")
    - epoch milliseconds (int or float), interpreted as UTC

Styles are CLDR date lengths (short, medium, long, full); anything else is
passed to Babel as a date pattern ("yyyy-MM-dd"). Only the date part is
rendered, as ICU does for ``date`` arguments.

Python 3.11+. Depends on Babel for CLDR data.
"""

import logging
from datetime import UTC, date, datetime
from typing import Any

from babel import dates as babel_dates
from babel.core import UnknownLocaleError

from langcore.diagnostics import Diagnostic, DiagnosticCode
from langcore.locale_utils import get_babel_locale
from langcore.runtime.value_types import is_number

__all__ = ["DATE_STYLES", "format_date_argument", "to_date"]

logger = logging.getLogger(__name__)

DATE_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

_DEFAULT_STYLE = "medium"


def to_date(value: Any) -> date | None:
    """Convert a date-like value to a date or datetime.

    Returns None when the value cannot be interpreted.

    Example:
        >>> to_date("2025-10-27")
        datetime.date(2025, 10, 27)
        >>> to_date(0)
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    if is_number(value):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def format_date_argument(value: Any, style: str | None, locale: str) -> str:
    """Format a date-like value for a locale.

    Args:
        value: date, datetime, ISO 8601 string or epoch milliseconds
        style: short, medium, long, full or a CLDR date pattern
        locale: Locale code

    Returns:
        Formatted date; ``str(value)`` when the value cannot be interpreted
        or formatting fails

    Examples:
        >>> format_date_argument(date(2025, 10, 27), "short", "en-US")
        '10/27/25'
        >>> format_date_argument("2025-10-27", "yyyy-MM-dd", "de")
        '2025-10-27'
        >>> format_date_argument("soon", "short", "en")
        'soon'
    """
    parsed = to_date(value)
    if parsed is None:
        logger.warning(
            Diagnostic(
                DiagnosticCode.FORMATTING_FAILED,
                f"Cannot interpret {value!r} as a date",
            ).format_error()
        )
        return str(value)

    fmt = (style or _DEFAULT_STYLE).strip() or _DEFAULT_STYLE
    try:
        return str(babel_dates.format_date(parsed, format=fmt, locale=get_babel_locale(locale)))
    except (UnknownLocaleError, ValueError, OverflowError, AttributeError, KeyError) as e:
        logger.warning("Date formatting failed for '%s' in locale '%s': %s", value, locale, e)
        return str(value)
