"""Enumerations shared across langcore.

All enums inherit from ``StrEnum`` so that values compare equal to the plain
strings used in translation dictionaries and option bags
(``PluralCategory.ONE == "one"``).

Python 3.11+. Zero external dependencies.
"""

from enum import StrEnum

__all__ = [
    "CompactDisplay",
    "CurrencyDisplay",
    "NumberStyle",
    "Notation",
    "ParamKind",
    "PlaceholderSyntax",
    "PluralCategory",
    "SignDisplay",
    "UnitDisplay",
]


class PluralCategory(StrEnum):
    """CLDR plural categories.

    Not every language uses every category; ``OTHER`` is always present.
    """

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class PlaceholderSyntax(StrEnum):
    """Placeholder delimiters understood by the interpolator.

    DOUBLE: ``{{name}}`` (translation dictionaries)
    SINGLE: ``{name}`` (ICU messages)
    """

    DOUBLE = "double"
    SINGLE = "single"


class ParamKind(StrEnum):
    """Tag for a parameter value passed to interpolation or ICU evaluation."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    NESTED = "nested"
    NONE = "none"
    UNSUPPORTED = "unsupported"


class NumberStyle(StrEnum):
    """Number formatting style."""

    DECIMAL = "decimal"
    CURRENCY = "currency"
    PERCENT = "percent"
    UNIT = "unit"


class Notation(StrEnum):
    """Number notation."""

    STANDARD = "standard"
    COMPACT = "compact"
    SCIENTIFIC = "scientific"


class SignDisplay(StrEnum):
    """When to render the sign of a formatted number."""

    AUTO = "auto"
    NEVER = "never"
    ALWAYS = "always"
    EXCEPT_ZERO = "exceptZero"


class CurrencyDisplay(StrEnum):
    """How the currency is shown in currency style."""

    SYMBOL = "symbol"
    CODE = "code"
    NAME = "name"


class CompactDisplay(StrEnum):
    """Length of compact notation suffixes."""

    SHORT = "short"
    LONG = "long"


class UnitDisplay(StrEnum):
    """Length of unit names in unit style."""

    SHORT = "short"
    NARROW = "narrow"
    LONG = "long"
