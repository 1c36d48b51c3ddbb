"""Recursive-descent parser for the ICU message subset.

Grammar:
    message    := (text | '#' | clause)*        ('#' only inside plural branches)
    clause     := '{' name '}'
                | '{' name ',' ('plural' | 'selectordinal') ',' branch+ '}'
                | '{' name ',' 'select' ',' branch+ '}'
                | '{' name ',' ('number' | 'date') [',' style] '}'
    branch     := selector '{' message '}'
    selector   := '=' number | word
    name       := [A-Za-z0-9_.]+

Error Recovery:
    A malformed clause raises MessageSyntaxError inside the clause parser.
    The top-level loop catches it, emits the clause's opening '{' as literal
    text and resumes scanning right after it. Malformed input therefore
    degrades to (mostly) verbatim text and parse_message never raises.

Nesting is bounded by MAX_DEPTH clauses.

Python 3.11+. Zero external dependencies.
"""

import logging
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from langcore.constants import MAX_DEPTH
from langcore.diagnostics import Diagnostic, DiagnosticCode, MessageSyntaxError
from langcore.enums import PluralCategory

from .ast import (
    FormattedArgument,
    MessageNode,
    Nodes,
    Plural,
    Pound,
    Select,
    SelectOrdinal,
    Text,
    Variable,
)
from .cursor import Cursor, ParseResult

__all__ = ["CLAUSE_KEYWORDS", "parse_message"]

logger = logging.getLogger(__name__)

CLAUSE_KEYWORDS: frozenset[str] = frozenset(
    {"plural", "selectordinal", "select", "number", "date"}
)

_PLURAL_KEYWORDS = frozenset({"plural", "selectordinal"})
_CATEGORY_NAMES = frozenset(PluralCategory)


def _is_name_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_."


def _is_selector_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


def _is_number_char(ch: str) -> bool:
    return ch.isdigit() or ch in ".-+"


def _error(message: str, cursor: Cursor) -> MessageSyntaxError:
    return MessageSyntaxError(
        Diagnostic(DiagnosticCode.MALFORMED_MESSAGE, f"{message} at position {cursor.pos}"),
        cursor.pos,
    )


class _ClauseParser:
    """Parses one top-level clause and everything nested in it."""

    __slots__ = ("_max_depth",)

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    # Messages (branch bodies)
    # ------------------------------------------------------------------

    def parse_body(self, cursor: Cursor, depth: int, in_plural: bool) -> ParseResult[Nodes]:
        """Parse a branch body up to (not including) its closing brace."""
        nodes: list[MessageNode] = []
        start = cursor
        while not cursor.is_eof and cursor.current != "}":
            ch = cursor.current
            if ch == "{" or (ch == "#" and in_plural):
                if start.pos < cursor.pos:
                    nodes.append(Text(start.slice_to(cursor.pos)))
                if ch == "#":
                    nodes.append(Pound())
                    cursor = cursor.advance()
                else:
                    result = self.parse_clause(cursor, depth + 1, in_plural)
                    nodes.append(result.value)
                    cursor = result.cursor
                start = cursor
            else:
                cursor = cursor.advance()

        if cursor.is_eof:
            msg = "Unterminated branch"
            raise _error(msg, cursor)
        if start.pos < cursor.pos:
            nodes.append(Text(start.slice_to(cursor.pos)))
        return ParseResult(tuple(nodes), cursor)

    # ------------------------------------------------------------------
    # Clauses
    # ------------------------------------------------------------------

    def parse_clause(self, cursor: Cursor, depth: int, in_plural: bool) -> ParseResult[MessageNode]:
        """Parse a clause starting at '{'."""
        if depth > self._max_depth:
            raise MessageSyntaxError(
                Diagnostic(
                    DiagnosticCode.NESTING_DEPTH_EXCEEDED,
                    f"Clause nesting exceeds {self._max_depth} at position {cursor.pos}",
                ),
                cursor.pos,
            )

        opening = cursor
        cursor = cursor.advance().skip_whitespace()
        name_result = self._parse_word(cursor, _is_name_char, "argument name")
        name = name_result.value
        cursor = name_result.cursor.skip_whitespace()

        if (after := cursor.expect("}")) is not None:
            return ParseResult(Variable(name, opening.slice_to(after.pos)), after)
        if (after := cursor.expect(",")) is None:
            msg = f"Expected ',' or '}}' after argument '{name}'"
            raise _error(msg, cursor)

        cursor = after.skip_whitespace()
        keyword_result = self._parse_word(cursor, str.isalpha, "clause keyword")
        keyword = keyword_result.value
        cursor = keyword_result.cursor.skip_whitespace()

        match keyword:
            case "plural" | "selectordinal" | "select":
                if (after := cursor.expect(",")) is None:
                    msg = f"Expected ',' after '{keyword}'"
                    raise _error(msg, cursor)
                return self._parse_selection(
                    name,
                    keyword,
                    after,
                    depth,
                    in_plural or keyword in _PLURAL_KEYWORDS,
                )
            case "number" | "date":
                return self._parse_formatted(name, keyword, opening, cursor)
            case _:
                msg = f"Unknown clause keyword '{keyword}'"
                raise _error(msg, cursor)

    def _parse_formatted(
        self, name: str, kind: str, opening: Cursor, cursor: Cursor
    ) -> ParseResult[MessageNode]:
        if (after := cursor.expect("}")) is not None:
            source = opening.slice_to(after.pos)
            return ParseResult(FormattedArgument(name, kind, None, source), after)
        if (after := cursor.expect(",")) is None:
            msg = f"Expected ',' or '}}' after '{kind}'"
            raise _error(msg, cursor)

        start = after
        cursor = after
        while not cursor.is_eof and cursor.current not in "{}":
            cursor = cursor.advance()
        if cursor.is_eof or cursor.current == "{":
            msg = f"Invalid {kind} style"
            raise _error(msg, cursor)

        style = start.slice_to(cursor.pos).strip()
        after = cursor.advance()
        source = opening.slice_to(after.pos)
        return ParseResult(FormattedArgument(name, kind, style or None, source), after)

    def _parse_selection(
        self, name: str, keyword: str, cursor: Cursor, depth: int, in_plural: bool
    ) -> ParseResult[MessageNode]:
        exact: dict[Decimal, Nodes] = {}
        categories: dict[PluralCategory, Nodes] = {}
        cases: dict[str, Nodes] = {}
        other: Nodes | None = None

        while True:
            cursor = cursor.skip_whitespace()
            if cursor.is_eof:
                msg = f"Unterminated {keyword} clause"
                raise _error(msg, cursor)
            if cursor.current == "}":
                break

            selector_start = cursor
            is_exact = cursor.current == "="
            if is_exact:
                cursor = cursor.advance()
            selector_result = self._parse_word(
                cursor, _is_number_char if is_exact else _is_selector_char, "branch selector"
            )
            selector = selector_result.value
            cursor = selector_result.cursor.skip_whitespace()

            if (body_start := cursor.expect("{")) is None:
                msg = f"Expected '{{' after selector '{selector}'"
                raise _error(msg, cursor)
            body = self.parse_body(body_start, depth, in_plural)
            cursor = body.cursor.advance()

            if is_exact:
                if keyword == "select":
                    msg = "Exact '=N' selectors are only valid in plural clauses"
                    raise _error(msg, selector_start)
                try:
                    exact.setdefault(Decimal(selector), body.value)
                except InvalidOperation:
                    msg = f"Invalid exact selector '={selector}'"
                    raise _error(msg, selector_start) from None
            elif selector == "other":
                if other is None:
                    other = body.value
            elif keyword == "select":
                cases.setdefault(selector, body.value)
            elif selector in _CATEGORY_NAMES:
                categories.setdefault(PluralCategory(selector), body.value)
            else:
                msg = f"Unknown plural category '{selector}'"
                raise _error(msg, selector_start)

        if not (exact or categories or cases or other is not None):
            msg = f"{keyword} clause has no branches"
            raise _error(msg, cursor)

        end = cursor.advance()
        other_nodes: Nodes = other if other is not None else ()
        node: MessageNode
        match keyword:
            case "plural":
                node = Plural(name, exact, categories, other_nodes)
            case "selectordinal":
                node = SelectOrdinal(name, exact, categories, other_nodes)
            case _:
                node = Select(name, cases, other_nodes)
        return ParseResult(node, end)

    @staticmethod
    def _parse_word(cursor: Cursor, accept: Callable[[str], bool], what: str) -> ParseResult[str]:
        start = cursor
        while not cursor.is_eof and accept(cursor.current):
            cursor = cursor.advance()
        if start.pos == cursor.pos:
            msg = f"Expected {what}"
            raise _error(msg, cursor)
        return ParseResult(start.slice_to(cursor.pos), cursor)


def parse_message(message: str, *, max_depth: int = MAX_DEPTH) -> Nodes:
    """Parse a message into nodes.

    Never raises for malformed input: a clause that fails to parse
    contributes its opening brace as literal text and scanning resumes
    right after it.

    Args:
        message: ICU message text
        max_depth: Maximum clause nesting

    Returns:
        Tuple of message nodes; adjacent literal text is merged

    Examples:
        >>> parse_message("Hi {name}")
        (Text(value='Hi '), Variable(name='name'))
        >>> parse_message("{broken")
        (Text(value='{broken'),)
    """
    parser = _ClauseParser(max_depth)
    nodes: list[MessageNode] = []
    text: list[str] = []
    cursor = Cursor(message, 0)
    start = cursor

    while not cursor.is_eof:
        if cursor.current != "{":
            cursor = cursor.advance()
            continue
        text.append(start.slice_to(cursor.pos))
        try:
            result = parser.parse_clause(cursor, 1, in_plural=False)
        except MessageSyntaxError as e:
            logger.warning("%s; emitting clause as text", e)
            text.append("{")
            cursor = cursor.advance()
        else:
            if any(text):
                nodes.append(Text("".join(text)))
            text.clear()
            nodes.append(result.value)
            cursor = result.cursor
        start = cursor

    text.append(start.slice_to(cursor.pos))
    if any(text):
        nodes.append(Text("".join(text)))
    return tuple(nodes)
