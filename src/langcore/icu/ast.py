"""ICU message AST node definitions.

Nodes are immutable and built fresh for every formatted message.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from langcore.enums import PluralCategory

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Leaf nodes
    "Text",
    "Variable",
    "Pound",
    "FormattedArgument",
    # Selection nodes
    "Plural",
    "SelectOrdinal",
    "Select",
    # Type aliases
    "MessageNode",
    "Nodes",
]


# ============================================================================
# LEAF NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text.

    Attributes:
        value: Text content, emitted verbatim
    """

    value: str


@dataclass(frozen=True, slots=True)
class Variable:
    """Plain interpolation: ``{name}``.

    Attributes:
        name: Parameter name (dotted paths allowed)
        source: Clause text as written, kept when the value is absent
    """

    name: str
    source: str | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Pound:
    """``#`` inside a plural branch: the enclosing plural's formatted count."""


@dataclass(frozen=True, slots=True)
class FormattedArgument:
    """Typed argument: ``{amount, number, currency}`` or ``{d, date, short}``.

    Attributes:
        name: Parameter name
        kind: "number" or "date"
        style: Style text after the second comma, or None
        source: Clause text as written, kept when the value is absent
    """

    name: str
    kind: str
    style: str | None = None
    source: str | None = field(default=None, compare=False, repr=False)


# ============================================================================
# SELECTION NODES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Plural:
    """Cardinal plural clause: ``{n, plural, =0 {...} one {...} other {...}}``.

    Attributes:
        name: Parameter holding the count
        exact: ``=N`` branches keyed by exact value
        categories: Category branches (one, few, ...)
        other: ``other`` branch (empty when absent)
    """

    name: str
    exact: Mapping[Decimal, Nodes] = field(default_factory=dict)
    categories: Mapping[PluralCategory, Nodes] = field(default_factory=dict)
    other: Nodes = ()


@dataclass(frozen=True, slots=True)
class SelectOrdinal:
    """Ordinal plural clause: ``{n, selectordinal, one {#st} other {#th}}``.

    Same shape as Plural; categories come from ordinal rules.
    """

    name: str
    exact: Mapping[Decimal, Nodes] = field(default_factory=dict)
    categories: Mapping[PluralCategory, Nodes] = field(default_factory=dict)
    other: Nodes = ()


@dataclass(frozen=True, slots=True)
class Select:
    """Keyword selection: ``{gender, select, male {He} other {They}}``.

    Attributes:
        name: Parameter holding the selector value
        cases: Branches keyed by literal selector text
        other: ``other`` branch (empty when absent)
    """

    name: str
    cases: Mapping[str, Nodes] = field(default_factory=dict)
    other: Nodes = ()


# ============================================================================
# TYPE ALIASES
# ============================================================================

MessageNode = Text | Variable | Pound | FormattedArgument | Plural | SelectOrdinal | Select
"""Any node that can appear in a parsed message."""

Nodes = tuple[MessageNode, ...]
