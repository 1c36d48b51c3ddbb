"""Evaluation of parsed ICU messages.

MessageFormatter parses the message on every call (no AST cache) and walks
the nodes with the caller's parameters:

    Text               emitted verbatim
    Variable           parameter text, or the placeholder when absent
    FormattedArgument  NumberFormatter / date formatting per style
    Plural             exact '=N' branch, else CLDR category, else other
    SelectOrdinal      same as Plural with ordinal rules
    Select             branch keyed by the parameter's text, else other
    Pound              the enclosing plural count, locale-formatted

Counts are coerced leniently: a missing count is 0, numeric strings are
parsed, anything else is 0 with a warning. A clause with no matching branch
and no ``other`` renders as the empty string.

Python 3.11+.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from langcore.diagnostics import Diagnostic, DiagnosticCode
from langcore.formatting.dates import format_date_argument
from langcore.formatting.numbers import NumberFormatter, format_number_icu
from langcore.runtime.interpolation import get_nested_value, render_placeholder
from langcore.runtime.plural_rules import select_ordinal_category, select_plural_category
from langcore.runtime.value_types import ParamValue, render_param, to_number

from .ast import (
    FormattedArgument,
    Nodes,
    Plural,
    Pound,
    Select,
    SelectOrdinal,
    Text,
    Variable,
)
from .parser import parse_message

__all__ = ["MessageFormatter", "format_message"]

logger = logging.getLogger(__name__)


def _coerce_count(name: str, raw: Any) -> int | float | Decimal:
    if raw is None:
        return 0
    number = to_number(raw)
    if number is None:
        diagnostic = Diagnostic(
            DiagnosticCode.INVALID_COUNT,
            f"Plural argument '{name}' has non-numeric value {raw!r}; using 0",
        )
        logger.warning(diagnostic.format_error())
        return 0
    return number


def _exact_match(exact: Mapping[Decimal, Nodes], count: int | float | Decimal) -> Nodes | None:
    if not exact:
        return None
    try:
        key = count if isinstance(count, Decimal) else Decimal(str(count))
    except InvalidOperation:
        return None
    for value, nodes in exact.items():
        if value == key:
            return nodes
    return None


def _selector_text(raw: Any) -> str | None:
    param = ParamValue.of(raw)
    if not param.is_renderable:
        return None
    return render_param(param)


class MessageFormatter:
    """Formats ICU messages against a parameter mapping.

    Examples:
        >>> formatter = MessageFormatter()
        >>> formatter.format("{count, plural, one {# item} other {# items}}", {"count": 1}, "en")
        '1 item'
        >>> formatter.format("{g, select, male {He} female {She} other {They}}", {"g": "x"}, "en")
        'They'
    """

    __slots__ = ("_numbers",)

    def __init__(self, number_formatter: NumberFormatter | None = None) -> None:
        """Initialize message formatter.

        Args:
            number_formatter: Formatter for number arguments and '#'.
                A private instance is created when omitted.
        """
        self._numbers = number_formatter if number_formatter is not None else NumberFormatter()

    @property
    def number_formatter(self) -> NumberFormatter:
        """NumberFormatter used for numeric output."""
        return self._numbers

    def format(self, message: str, params: Mapping[str, Any] | None, locale: str) -> str:
        """Format a message.

        Args:
            message: ICU message text
            params: Argument values (None means no arguments)
            locale: Locale for plural rules and number/date formatting

        Returns:
            Formatted text. Never raises for malformed messages or bad
            arguments; see module docstring for degradation rules.
        """
        nodes = parse_message(message)
        return self._render(nodes, params or {}, locale, None)

    def _render(
        self,
        nodes: Nodes,
        params: Mapping[str, Any],
        locale: str,
        pound: str | None,
    ) -> str:
        parts: list[str] = []
        for node in nodes:
            match node:
                case Text(value=value):
                    parts.append(value)
                case Variable(name=name, source=source):
                    placeholder = source or f"{{{name}}}"
                    parts.append(render_placeholder(params, name, placeholder))
                case Pound():
                    parts.append("#" if pound is None else pound)
                case FormattedArgument():
                    parts.append(self._render_formatted(node, params, locale))
                case Plural() | SelectOrdinal():
                    parts.append(self._render_plural(node, params, locale))
                case Select(name=name, cases=cases, other=other):
                    key = _selector_text(get_nested_value(params, name))
                    branch = cases.get(key, other) if key is not None else other
                    parts.append(self._render(branch, params, locale, pound))
        return "".join(parts)

    def _render_formatted(
        self, node: FormattedArgument, params: Mapping[str, Any], locale: str
    ) -> str:
        value = get_nested_value(params, node.name)
        if value is None:
            return node.source or f"{{{node.name}}}"
        if node.kind == "date":
            return format_date_argument(value, node.style, locale)
        return format_number_icu(value, node.style, locale, self._numbers)

    def _render_plural(
        self, node: Plural | SelectOrdinal, params: Mapping[str, Any], locale: str
    ) -> str:
        count = _coerce_count(node.name, get_nested_value(params, node.name))

        branch = _exact_match(node.exact, count)
        if branch is None:
            if isinstance(node, SelectOrdinal):
                category = select_ordinal_category(locale, count)
            else:
                category = select_plural_category(locale, count)
            branch = node.categories.get(category, node.other)

        return self._render(branch, params, locale, self._numbers.format(count, locale))


def format_message(
    message: str,
    params: Mapping[str, Any] | None,
    locale: str,
    number_formatter: NumberFormatter | None = None,
) -> str:
    """Format an ICU message with a one-off MessageFormatter.

    Example:
        >>> format_message("{n, plural, =0 {No items} =1 {One item} other {# items}}", {"n": 0}, "en")
        'No items'
    """
    return MessageFormatter(number_formatter).format(message, params, locale)
