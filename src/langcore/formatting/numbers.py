"""Locale-aware number formatting using Babel.

NumberFormatter compiles one Babel number pattern per distinct
(locale, options) pair and keeps the compiled handles in a FIFO
FormatterCache. When Babel is disabled or cannot handle a request (unknown
locale, unknown unit or currency), a warning is logged and a simple manual
format is produced instead.

Number Pattern Construction:
    The locale's CLDR pattern for the requested style is the starting point
    (decimal, currency, percent or scientific). Fraction and significant
    digit bounds replace the pattern's precision; everything else (grouping,
    prefixes, suffixes, symbols) stays as the locale defines it.

    '#,##0.###'   en decimal (0-3 fraction digits)
    '#,##0.00'    with minimum_fraction_digits=2, maximum_fraction_digits=2
    '@@#'         with minimum_significant_digits=2, maximum_significant_digits=3

Python 3.11+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from babel import numbers as babel_numbers
from babel import units as babel_units
from babel.core import UnknownLocaleError

from langcore.constants import DEFAULT_FORMATTER_CACHE_SIZE
from langcore.diagnostics import Diagnostic, DiagnosticCode, FormattingError
from langcore.enums import (
    CompactDisplay,
    CurrencyDisplay,
    Notation,
    NumberStyle,
    SignDisplay,
    UnitDisplay,
)
from langcore.locale_utils import get_babel_locale, normalize_locale
from langcore.runtime.value_types import (
    ParamValue,
    is_finite_number,
    render_param,
    to_number,
)

from .currency import currency_for_locale
from .formatter_cache import FormatterCache

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "NumberFormatHandle",
    "NumberFormatOptions",
    "NumberFormatter",
    "format_number_fallback",
    "format_number_icu",
]

logger = logging.getLogger(__name__)

# Fraction digit bounds accepted by ICU-style formatters.
_MAX_FRACTION_DIGITS = 20
_MAX_SIGNIFICANT_DIGITS = 21

# Manual fallback currency symbols; anything else renders as "$".
_FALLBACK_CURRENCY_SYMBOLS: dict[str, str] = {"EUR": "€", "GBP": "£", "JPY": "¥"}

_COMPACT_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)

_RANGE_SEPARATOR = " – "

# Exceptions Babel raises for unsupported locales, units, currencies or values
_BABEL_ERRORS = (
    UnknownLocaleError,
    babel_numbers.UnknownCurrencyError,
    ValueError,
    KeyError,
    TypeError,
    InvalidOperation,
)


@dataclass(frozen=True, slots=True)
class NumberFormatOptions:
    """Number formatting options.

    String values are accepted for every enum field ("percent",
    "exceptZero", ...) and converted on construction.

    Attributes:
        style: decimal, currency, percent or unit
        currency: ISO 4217 code for currency style (default: locale currency)
        currency_display: symbol, code or name
        unit: CLDR unit name for unit style (e.g., "kilometer")
        unit_display: short, narrow or long
        minimum_fraction_digits: Minimum digits after the decimal separator
        maximum_fraction_digits: Maximum digits after the decimal separator
        minimum_significant_digits: Minimum significant digits
        maximum_significant_digits: Maximum significant digits
        notation: standard, compact or scientific
        compact_display: short ("1.5M") or long ("1.5 million")
        sign_display: auto, never, always or exceptZero
        use_grouping: Use the locale's group separator

    Raises:
        ValueError: On unknown enum values, out-of-range digit bounds,
            minimum above maximum, or unit style without a unit
    """

    style: NumberStyle = NumberStyle.DECIMAL
    currency: str | None = None
    currency_display: CurrencyDisplay = CurrencyDisplay.SYMBOL
    unit: str | None = None
    unit_display: UnitDisplay = UnitDisplay.SHORT
    minimum_fraction_digits: int | None = None
    maximum_fraction_digits: int | None = None
    minimum_significant_digits: int | None = None
    maximum_significant_digits: int | None = None
    notation: Notation = Notation.STANDARD
    compact_display: CompactDisplay = CompactDisplay.SHORT
    sign_display: SignDisplay = SignDisplay.AUTO
    use_grouping: bool = True

    def __post_init__(self) -> None:
        """Coerce enum fields and validate digit bounds."""
        for name, enum_type in (
            ("style", NumberStyle),
            ("currency_display", CurrencyDisplay),
            ("unit_display", UnitDisplay),
            ("notation", Notation),
            ("compact_display", CompactDisplay),
            ("sign_display", SignDisplay),
        ):
            object.__setattr__(self, name, enum_type(getattr(self, name)))

        _check_bounds(
            "fraction",
            self.minimum_fraction_digits,
            self.maximum_fraction_digits,
            0,
            _MAX_FRACTION_DIGITS,
        )
        _check_bounds(
            "significant",
            self.minimum_significant_digits,
            self.maximum_significant_digits,
            1,
            _MAX_SIGNIFICANT_DIGITS,
        )

        if self.style == NumberStyle.UNIT and not self.unit:
            msg = "unit is required when style is 'unit'"
            raise ValueError(msg)

    @property
    def uses_significant_digits(self) -> bool:
        """True when significant digit bounds override fraction digits."""
        return (
            self.minimum_significant_digits is not None
            or self.maximum_significant_digits is not None
        )

    def cache_key(self) -> tuple[tuple[str, Any], ...]:
        """Sorted (name, value) pairs identifying these options."""
        return tuple(sorted((f.name, getattr(self, f.name)) for f in fields(self)))


def _check_bounds(
    kind: str, minimum: int | None, maximum: int | None, low: int, high: int
) -> None:
    for label, value in (("minimum", minimum), ("maximum", maximum)):
        if value is not None and not low <= value <= high:
            msg = f"{label}_{kind}_digits must be between {low} and {high}, got {value}"
            raise ValueError(msg)
    if minimum is not None and maximum is not None and minimum > maximum:
        msg = f"minimum_{kind}_digits ({minimum}) exceeds maximum_{kind}_digits ({maximum})"
        raise ValueError(msg)


_DEFAULT_OPTIONS = NumberFormatOptions()


def _resolve_precision(
    base: tuple[int, int], minimum: int | None, maximum: int | None
) -> tuple[int, int]:
    """Merge requested fraction bounds with a pattern's own bounds."""
    if minimum is None and maximum is None:
        return base
    if minimum is None:
        assert maximum is not None
        return (min(base[0], maximum), maximum)
    if maximum is None:
        return (minimum, max(minimum, base[1]))
    return (minimum, maximum)


def _currency_code_affix(affix: str, *, leading: bool) -> str:
    # "¤" renders the symbol and "¤¤" the ISO code
    if "¤" not in affix:
        return affix
    coded = affix.replace("¤", "¤¤")
    if leading and coded.endswith("¤¤"):
        coded += "\xa0"
    return coded


class NumberFormatHandle:
    """Compiled Babel formatter for one (locale, options) pair.

    Construction resolves the locale, the currency and the number pattern,
    and raises for anything Babel does not support. ``format`` raises
    FormattingError carrying a fallback value.
    """

    __slots__ = ("_currency", "_locale", "_options", "_pattern", "_plus_sign")

    def __init__(self, locale_code: str, options: NumberFormatOptions) -> None:
        """Compile a formatter.

        Raises:
            babel.core.UnknownLocaleError: If the locale is unknown
            ValueError: If the currency code is unknown
        """
        self._locale: Locale = get_babel_locale(locale_code)
        self._options = options
        self._currency: str | None = None
        if options.style == NumberStyle.CURRENCY:
            code = options.currency or currency_for_locale(locale_code)
            normalized = babel_numbers.normalize_currency(code)
            if normalized is None:
                msg = f"Unknown currency code '{code}'"
                raise ValueError(msg)
            self._currency = normalized
        self._plus_sign = babel_numbers.get_plus_sign_symbol(self._locale)
        self._pattern = self._build_pattern()

    @property
    def options(self) -> NumberFormatOptions:
        """Options this handle was compiled for."""
        return self._options

    def _base_pattern(self) -> babel_numbers.NumberPattern:
        options = self._options
        if options.notation == Notation.SCIENTIFIC:
            return self._locale.scientific_formats[None]
        if options.style == NumberStyle.PERCENT:
            return self._locale.percent_formats[None]
        if (
            options.style == NumberStyle.CURRENCY
            and options.currency_display != CurrencyDisplay.NAME
        ):
            return self._locale.currency_formats["standard"]
        return self._locale.decimal_formats[None]

    def _build_pattern(self) -> babel_numbers.NumberPattern:
        options = self._options
        base = self._base_pattern()

        if options.uses_significant_digits:
            minimum = options.minimum_significant_digits or 1
            maximum = max(
                minimum, options.maximum_significant_digits or _MAX_SIGNIFICANT_DIGITS
            )
            digits = "@" * minimum + "#" * (maximum - minimum)
            pattern = babel_numbers.NumberPattern(
                pattern=digits,
                prefix=base.prefix,
                suffix=base.suffix,
                grouping=base.grouping,
                int_prec=(minimum, maximum),
                frac_prec=(0, 0),
                exp_prec=None,
                exp_plus=None,
                number_pattern=digits,
            )
        else:
            pattern = copy.copy(base)
            pattern.frac_prec = _resolve_precision(
                base.frac_prec,
                options.minimum_fraction_digits,
                options.maximum_fraction_digits,
            )

        if (
            options.style == NumberStyle.CURRENCY
            and options.currency_display == CurrencyDisplay.CODE
        ):
            pattern.prefix = tuple(
                _currency_code_affix(p, leading=True) for p in pattern.prefix
            )
            pattern.suffix = tuple(
                _currency_code_affix(s, leading=False) for s in pattern.suffix
            )
        return pattern

    def _has_explicit_fraction(self) -> bool:
        return (
            self._options.minimum_fraction_digits is not None
            or self._options.maximum_fraction_digits is not None
        )

    def _format_unsigned(self, value: int | float | Decimal) -> str:
        options = self._options
        grouping = options.use_grouping

        if options.notation == Notation.COMPACT:
            digits = options.maximum_fraction_digits
            return babel_numbers.format_compact_decimal(
                value,
                format_type=options.compact_display.value,
                locale=self._locale,
                fraction_digits=1 if digits is None else digits,
            )

        if options.style == NumberStyle.UNIT:
            assert options.unit is not None
            return babel_units.format_unit(
                value,
                options.unit,
                length=options.unit_display.value,
                format=self._pattern,  # type: ignore[arg-type]
                locale=self._locale,
            )

        if options.style == NumberStyle.CURRENCY:
            assert self._currency is not None
            if options.currency_display == CurrencyDisplay.NAME:
                return babel_numbers.format_currency(
                    value,
                    self._currency,
                    format=self._pattern,
                    locale=self._locale,
                    currency_digits=not self._has_explicit_fraction(),
                    format_type="name",
                    group_separator=grouping,
                )
            return self._pattern.apply(
                value,
                self._locale,
                currency=self._currency,
                currency_digits=not self._has_explicit_fraction(),
                group_separator=grouping,
            )

        return self._pattern.apply(value, self._locale, group_separator=grouping)

    def format(self, value: int | float | Decimal) -> str:
        """Format a finite number.

        Raises:
            FormattingError: If Babel fails for this value
        """
        sign_display = self._options.sign_display
        is_zero = value == 0
        unsigned = sign_display == SignDisplay.NEVER or (
            sign_display == SignDisplay.EXCEPT_ZERO and is_zero
        )
        try:
            text = self._format_unsigned(abs(value) if unsigned else value)
        except _BABEL_ERRORS as e:
            diagnostic = Diagnostic(
                DiagnosticCode.FORMATTING_FAILED,
                f"Number formatting failed for '{value}': {e}",
            )
            raise FormattingError(
                diagnostic, fallback_value=format_number_fallback(value, self._options)
            ) from e

        if (sign_display == SignDisplay.ALWAYS and value >= 0) or (
            sign_display == SignDisplay.EXCEPT_ZERO and value > 0
        ):
            return f"{self._plus_sign}{text}"
        return text


def _grouped(value: int | float | Decimal) -> str:
    text = f"{value:,.3f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def _compact_fallback(value: int | float | Decimal) -> str:
    magnitude = abs(value)
    sign = "-" if value < 0 else ""
    for threshold, suffix in _COMPACT_THRESHOLDS:
        if magnitude >= threshold:
            return f"{sign}{magnitude / threshold:.1f}{suffix}"
    return render_param(ParamValue.of(value))


def format_number_fallback(
    value: int | float | Decimal, options: NumberFormatOptions | None = None
) -> str:
    """Format without CLDR data.

    Currency uses a small symbol table and fixed decimals, percent scales by
    100, compact notation uses K/M/B suffixes, everything else groups digits
    with commas.

    Examples:
        >>> format_number_fallback(9.5, NumberFormatOptions(style="currency", currency="EUR"))
        '€9.50'
        >>> format_number_fallback(0.256, NumberFormatOptions(style="percent"))
        '25.60%'
        >>> format_number_fallback(1500000, NumberFormatOptions(notation="compact"))
        '1.5M'
        >>> format_number_fallback(1234567.891)
        '1,234,567.891'
    """
    options = options or _DEFAULT_OPTIONS
    if options.style == NumberStyle.CURRENCY:
        symbol = _FALLBACK_CURRENCY_SYMBOLS.get((options.currency or "").upper(), "$")
        digits = options.minimum_fraction_digits or 2
        return f"{symbol}{value:.{digits}f}"
    if options.style == NumberStyle.PERCENT:
        digits = options.maximum_fraction_digits or 2
        return f"{value * 100:.{digits}f}%"
    if options.notation == Notation.COMPACT:
        return _compact_fallback(value)
    return _grouped(value)


class NumberFormatter:
    """Formats numbers per locale with a FIFO cache of compiled formatters.

    Examples:
        >>> formatter = NumberFormatter()
        >>> formatter.format(1234.56, "en-US")
        '1,234.56'
        >>> formatter.format(1234.56, "de-DE")
        '1.234,56'
        >>> formatter.format_compact(1500000, "en-US")
        '1.5M'
        >>> formatter.format_currency(9.5, "en-US", "USD")
        '$9.50'
    """

    __slots__ = ("_cache", "_use_babel")

    def __init__(
        self, cache_size: int = DEFAULT_FORMATTER_CACHE_SIZE, *, use_babel: bool = True
    ) -> None:
        """Initialize number formatter.

        Args:
            cache_size: Maximum compiled formatters kept (FIFO eviction)
            use_babel: Use CLDR formatting; False always uses the manual format

        Raises:
            ValueError: If cache_size is not positive
        """
        self._cache: FormatterCache[NumberFormatHandle] = FormatterCache(cache_size)
        self._use_babel = use_babel

    @property
    def use_babel(self) -> bool:
        """Whether CLDR formatting is enabled."""
        return self._use_babel

    def format(
        self,
        value: Any,
        locale: str,
        options: NumberFormatOptions | None = None,
    ) -> str:
        """Format a number.

        Args:
            value: Number to format
            locale: Locale code (BCP-47 or POSIX)
            options: Formatting options (default: locale decimal format)

        Returns:
            Formatted text; ``str(value)`` for non-numeric or non-finite input
        """
        if not is_finite_number(value):
            return str(value)
        options = options or _DEFAULT_OPTIONS
        if not self._use_babel:
            return format_number_fallback(value, options)

        key = (normalize_locale(locale), options.cache_key())
        try:
            handle = self._cache.get_or_create(
                key, lambda: NumberFormatHandle(locale, options)
            )
            return handle.format(value)
        except FormattingError as e:
            logger.warning("%s; using fallback format", e)
            return e.fallback_value
        except _BABEL_ERRORS as e:
            diagnostic = Diagnostic(
                DiagnosticCode.UNKNOWN_LOCALE
                if isinstance(e, UnknownLocaleError)
                else DiagnosticCode.FORMATTING_FAILED,
                f"Cannot build number format for locale '{locale}': {e}",
            )
            logger.warning("%s; using fallback format", diagnostic.format_error())
            return format_number_fallback(value, options)

    def format_currency(
        self,
        value: Any,
        locale: str,
        currency: str | None = None,
        options: NumberFormatOptions | None = None,
    ) -> str:
        """Format a currency amount.

        Args:
            currency: ISO 4217 code; defaults to the locale's currency
        """
        base = options or _DEFAULT_OPTIONS
        return self.format(
            value,
            locale,
            replace(base, style=NumberStyle.CURRENCY, currency=currency or base.currency),
        )

    def format_percent(
        self, value: Any, locale: str, options: NumberFormatOptions | None = None
    ) -> str:
        """Format a ratio as a percentage with up to two fraction digits.

        Example:
            >>> NumberFormatter().format_percent(0.256, "en")
            '25.6%'
        """
        base = options or _DEFAULT_OPTIONS
        minimum = base.minimum_fraction_digits
        maximum = base.maximum_fraction_digits
        if maximum is None:
            maximum = max(2, minimum or 0)
        return self.format(
            value,
            locale,
            replace(
                base,
                style=NumberStyle.PERCENT,
                minimum_fraction_digits=0 if minimum is None else minimum,
                maximum_fraction_digits=maximum,
            ),
        )

    def format_compact(
        self, value: Any, locale: str, options: NumberFormatOptions | None = None
    ) -> str:
        """Format in compact notation ("1.5M", "12K")."""
        base = options or _DEFAULT_OPTIONS
        return self.format(value, locale, replace(base, notation=Notation.COMPACT))

    def format_unit(
        self,
        value: Any,
        locale: str,
        unit: str,
        options: NumberFormatOptions | None = None,
    ) -> str:
        """Format a measurement ("5 km", "3 hr")."""
        base = options or _DEFAULT_OPTIONS
        return self.format(value, locale, replace(base, style=NumberStyle.UNIT, unit=unit))

    def format_signed(
        self, value: Any, locale: str, options: NumberFormatOptions | None = None
    ) -> str:
        """Format with an explicit sign for positive values and zero."""
        base = options or _DEFAULT_OPTIONS
        return self.format(
            value, locale, replace(base, sign_display=SignDisplay.ALWAYS)
        )

    def format_range(
        self,
        start: Any,
        end: Any,
        locale: str,
        options: NumberFormatOptions | None = None,
    ) -> str:
        """Format a numeric range as two values joined by an en dash.

        Example:
            >>> NumberFormatter().format_range(3, 5, "en")
            '3 – 5'
        """
        return (
            f"{self.format(start, locale, options)}"
            f"{_RANGE_SEPARATOR}"
            f"{self.format(end, locale, options)}"
        )

    def clear_cache(self) -> None:
        """Discard all compiled formatters."""
        self._cache.clear()

    def get_cache_stats(self) -> dict[str, int]:
        """Get formatter cache statistics.

        Returns:
            Dict with keys ``size`` and ``max_size``
        """
        return self._cache.get_stats()


def format_number_icu(
    value: Any, style: str | None, locale: str, formatter: NumberFormatter
) -> str:
    """Format an ICU ``{n, number, <style>}`` argument.

    Styles:
        (none)            locale decimal format
        currency [CODE]   currency, default code from the locale
        percent           percentage
        compact           compact notation
        unit [name]       measurement unit (default "kilometer")
        signed            explicit sign
        integer           no fraction digits
        <digits>          fixed number of fraction digits

    Unknown styles use the decimal format. Numeric strings are accepted;
    anything that is not a number is returned via ``str()``.

    Examples:
        >>> f = NumberFormatter()
        >>> format_number_icu(0.5, "percent", "en", f)
        '50%'
        >>> format_number_icu("3.14159", "2", "en", f)
        '3.14'
    """
    number = to_number(value)
    if number is None:
        return str(value)

    parts = (style or "").split()
    if not parts:
        return formatter.format(number, locale)

    kind, argument = parts[0], (parts[1] if len(parts) > 1 else None)
    try:
        match kind:
            case "currency":
                return formatter.format_currency(number, locale, argument)
            case "percent":
                return formatter.format_percent(number, locale)
            case "compact":
                return formatter.format_compact(number, locale)
            case "unit":
                return formatter.format_unit(number, locale, argument or "kilometer")
            case "signed":
                return formatter.format_signed(number, locale)
            case "integer":
                return formatter.format(
                    number, locale, NumberFormatOptions(maximum_fraction_digits=0)
                )
            case _ if kind.isdigit():
                digits = int(kind)
                return formatter.format(
                    number,
                    locale,
                    NumberFormatOptions(
                        minimum_fraction_digits=digits, maximum_fraction_digits=digits
                    ),
                )
            case _:
                return formatter.format(number, locale)
    except ValueError as e:
        logger.warning("ICU number style '%s' rejected: %s", style, e)
        return str(value)
