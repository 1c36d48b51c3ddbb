"""Parameter value tagging for interpolation and ICU evaluation.

Parameter bags are plain mappings of arbitrary Python values. Before a value
is rendered it is classified into a ParamKind; rendering dispatches on the
tag instead of on ad-hoc isinstance chains at every call site.

    STRING, NUMBER, BOOLEAN, DATE  -> rendered with locale-agnostic text
    NONE                           -> placeholder left as-is (value absent)
    NESTED, UNSUPPORTED            -> placeholder left as-is, warning logged

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from langcore.enums import ParamKind

__all__ = [
    "ParamValue",
    "classify_param",
    "is_finite_number",
    "is_number",
    "render_param",
    "to_number",
]

# Kinds whose text rendering is well defined.
_RENDERABLE: frozenset[ParamKind] = frozenset(
    {ParamKind.STRING, ParamKind.NUMBER, ParamKind.BOOLEAN, ParamKind.DATE}
)


@dataclass(frozen=True, slots=True)
class ParamValue:
    """A parameter value together with its tag.

    Attributes:
        kind: Classification of the raw value
        raw: The original value
    """

    kind: ParamKind
    raw: Any

    @classmethod
    def of(cls, value: Any) -> ParamValue:
        """Classify a raw value."""
        return cls(classify_param(value), value)

    @property
    def is_renderable(self) -> bool:
        """True when the value has a defined text form."""
        return self.kind in _RENDERABLE


def is_number(value: Any) -> bool:
    """Check for a real number; bool is deliberately excluded."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    """Check for a real number that is neither infinite nor NaN."""
    if not is_number(value):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def classify_param(value: Any) -> ParamKind:
    """Tag a raw parameter value.

    Example:
        >>> classify_param("Anna")
        <ParamKind.STRING: 'string'>
        >>> classify_param({"first": "Anna"})
        <ParamKind.NESTED: 'nested'>
    """
    match value:
        case None:
            return ParamKind.NONE
        case bool():
            return ParamKind.BOOLEAN
        case str():
            return ParamKind.STRING
        case int() | float() | Decimal():
            return ParamKind.NUMBER
        case datetime() | date() | time():
            return ParamKind.DATE
        case Mapping():
            return ParamKind.NESTED
        case _:
            # lists, tuples, bytes and arbitrary objects have no single text form
            return ParamKind.UNSUPPORTED


def _render_number(value: int | float | Decimal) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value.normalize(), "f") if value.is_finite() else str(value)
    return str(value)


def render_param(param: ParamValue) -> str:
    """Render a renderable parameter with locale-agnostic text.

    Numbers render like JavaScript's ``String(n)`` (``5.0`` -> ``"5"``),
    booleans lower-case, dates as ISO 8601. Locale-aware number output is the
    job of NumberFormatter, invoked explicitly.

    Raises:
        TypeError: If the value is not renderable (callers check first)

    Example:
        >>> render_param(ParamValue.of(5.0))
        '5'
        >>> render_param(ParamValue.of(True))
        'true'
    """
    match param.kind:
        case ParamKind.STRING:
            return str(param.raw)
        case ParamKind.BOOLEAN:
            return "true" if param.raw else "false"
        case ParamKind.NUMBER:
            return _render_number(param.raw)
        case ParamKind.DATE:
            return str(param.raw.isoformat())
        case _:
            msg = f"Cannot render parameter of kind '{param.kind}'"
            raise TypeError(msg)


def to_number(value: Any) -> int | float | Decimal | None:
    """Coerce a count-like value to a finite number.

    Accepts real numbers and numeric strings. Returns None for anything else,
    including NaN and infinities.

    Example:
        >>> to_number("3")
        3
        >>> to_number("2.5")
        2.5
        >>> to_number("lots") is None
        True
    """
    number: int | float | Decimal
    if is_number(value):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None

    if isinstance(number, Decimal):
        return number if number.is_finite() else None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number
