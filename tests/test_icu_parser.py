"""Tests for the ICU message parser and its cursor."""

import logging
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from langcore.enums import PluralCategory
from langcore.icu.ast import (
    FormattedArgument,
    Plural,
    Pound,
    Select,
    SelectOrdinal,
    Text,
    Variable,
)
from langcore.icu.cursor import Cursor
from langcore.icu.parser import parse_message


class TestCursor:
    """Immutable cursor."""

    def test_advance_is_immutable(self) -> None:
        """advance() returns a new cursor."""
        cursor = Cursor("ab", 0)
        assert cursor.advance().current == "b"
        assert cursor.current == "a"

    def test_current_at_eof_raises(self) -> None:
        """Reading past the end raises EOFError."""
        with pytest.raises(EOFError):
            _ = Cursor("", 0).current

    def test_advance_clamps(self) -> None:
        """Advancing never passes the end."""
        assert Cursor("a", 0).advance(5).pos == 1

    def test_peek(self) -> None:
        """peek looks ahead without moving."""
        cursor = Cursor("ab", 0)
        assert cursor.peek(1) == "b"
        assert cursor.peek(2) is None

    def test_expect(self) -> None:
        """expect consumes only the requested character."""
        assert Cursor("{", 0).expect("{") == Cursor("{", 1)
        assert Cursor("x", 0).expect("{") is None
        assert Cursor("", 0).expect("{") is None


class TestParseSimple:
    """Text and variables."""

    def test_plain_text(self) -> None:
        """Text without braces is one node."""
        assert parse_message("Hello") == (Text("Hello"),)

    def test_empty(self) -> None:
        """Empty input has no nodes."""
        assert parse_message("") == ()

    def test_variable(self) -> None:
        """{name} is a variable."""
        assert parse_message("Hi {name}!") == (Text("Hi "), Variable("name"), Text("!"))

    def test_variable_whitespace_and_dots(self) -> None:
        """Whitespace around names is allowed and dots are part of names."""
        assert parse_message("{ user.name }") == (Variable("user.name"),)

    def test_clause_source_recorded(self) -> None:
        """Argument nodes keep their clause text as written."""
        (variable,) = parse_message("{ user.name }")
        assert variable.source == "{ user.name }"
        (argument,) = parse_message("{a, number,  currency EUR }")
        assert argument.source == "{a, number,  currency EUR }"

    def test_pound_outside_plural_is_text(self) -> None:
        """# is literal at the top level."""
        assert parse_message("Item #1") == (Text("Item #1"),)


class TestParseFormatted:
    """number and date arguments."""

    def test_number_without_style(self) -> None:
        """Style is optional."""
        assert parse_message("{n, number}") == (FormattedArgument("n", "number"),)

    def test_number_with_style(self) -> None:
        """Style text is trimmed."""
        assert parse_message("{a, number,  currency EUR }") == (
            FormattedArgument("a", "number", "currency EUR"),
        )

    def test_date_with_style(self) -> None:
        """Date arguments take a style."""
        assert parse_message("{d, date, short}") == (FormattedArgument("d", "date", "short"),)


class TestParseSelection:
    """plural, selectordinal and select clauses."""

    def test_plural(self) -> None:
        """Exact and category branches are separated."""
        (node,) = parse_message("{n, plural, =0 {none} one {# item} other {# items}}")

        assert isinstance(node, Plural)
        assert node.name == "n"
        assert node.exact == {Decimal(0): (Text("none"),)}
        assert node.categories == {PluralCategory.ONE: (Pound(), Text(" item"))}
        assert node.other == (Pound(), Text(" items"))

    def test_selectordinal(self) -> None:
        """selectordinal builds its own node type."""
        (node,) = parse_message("{n, selectordinal, one {#st} other {#th}}")
        assert isinstance(node, SelectOrdinal)

    def test_select(self) -> None:
        """Select cases keyed by literal text."""
        (node,) = parse_message("{g, select, male {He} female {She} other {They}}")

        assert isinstance(node, Select)
        assert node.cases == {"male": (Text("He"),), "female": (Text("She"),)}
        assert node.other == (Text("They"),)

    def test_missing_other_is_empty(self) -> None:
        """A clause without other has an empty other branch."""
        (node,) = parse_message("{n, plural, one {x}}")
        assert isinstance(node, Plural)
        assert node.other == ()

    def test_first_duplicate_wins(self) -> None:
        """Repeated selectors keep the first branch."""
        (node,) = parse_message("{g, select, a {first} a {second} other {o}}")
        assert isinstance(node, Select)
        assert node.cases["a"] == (Text("first"),)

    def test_nested_select_in_plural(self) -> None:
        """# inside a select nested in a plural is still a pound."""
        (node,) = parse_message("{n, plural, other {{g, select, other {# x}}}}")
        assert isinstance(node, Plural)
        (inner,) = node.other
        assert isinstance(inner, Select)
        assert inner.other == (Pound(), Text(" x"))

    def test_pound_in_select_is_text(self) -> None:
        """# in a select outside any plural is literal."""
        (node,) = parse_message("{g, select, other {#1}}")
        assert isinstance(node, Select)
        assert node.other == (Text("#1"),)

    def test_multiline_whitespace(self) -> None:
        """Whitespace and newlines between branches are skipped."""
        message = "{n, plural,\n  one {a}\n  other {b}\n}"
        (node,) = parse_message(message)
        assert isinstance(node, Plural)
        assert node.other == (Text("b"),)


class TestMalformed:
    """Malformed clauses degrade to literal text."""

    @pytest.mark.parametrize(
        "message",
        [
            "{broken",
            "Hi {name",
            "{}",
            "{n, plural}",
            "{n, plural, }",
            "{n, unknown, x}",
            "{n, plural, =abc {x} other {y}}",
            "{n, plural, lots {x} other {y}}",
            "{n, select, =1 {x} other {y}}",
            "{count, plural, one {# item}",
            "}{",
        ],
    )
    def test_malformed_is_verbatim(self, message: str) -> None:
        """Nothing is lost: the literal text equals the input."""
        nodes = parse_message(message)
        text = "".join(n.value if isinstance(n, Text) else f"{{{n.name}}}" for n in nodes)  # type: ignore[union-attr]
        assert text == message

    def test_malformed_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """A warning carries the syntax diagnostic."""
        with caplog.at_level(logging.WARNING, logger="langcore.icu.parser"):
            parse_message("{n, plural, one {x}")
        assert "LANGCORE-3001" in caplog.text

    def test_valid_clause_after_malformed(self) -> None:
        """Parsing resumes after a bad clause."""
        assert parse_message("{ oops {name}") == (Text("{ oops "), Variable("name"))


class TestNestingDepth:
    """Clause nesting limit."""

    @staticmethod
    def _nested(depth: int) -> str:
        return "{a, select, other {" * depth + "x" + "}}" * depth

    def test_within_limit(self) -> None:
        """Nesting up to max_depth parses."""
        (node,) = parse_message(self._nested(3), max_depth=3)
        assert isinstance(node, Select)

    def test_default_limit_accepts_100(self) -> None:
        """The default limit allows 100 nested clauses."""
        (node,) = parse_message(self._nested(100))
        assert isinstance(node, Select)

    def test_exceeding_limit_degrades(self, caplog: pytest.LogCaptureFixture) -> None:
        """Exceeding the limit emits the unparseable braces literally."""
        with caplog.at_level(logging.WARNING, logger="langcore.icu.parser"):
            nodes = parse_message(self._nested(4), max_depth=3)
        assert "LANGCORE-3002" in caplog.text
        assert nodes[0] == Text("{a, select, other {")
        assert isinstance(nodes[1], Select)
        assert nodes[-1] == Text("}}")


class TestParserProperties:
    """Robustness."""

    @given(message=st.text(alphabet="{}#,=01 abcnpluraselctoi\n", max_size=60))
    def test_never_raises(self, message: str) -> None:
        """Arbitrary brace soup parses without raising."""
        parse_message(message)

    @given(message=st.text(alphabet=st.characters(blacklist_characters="{}")))
    def test_brace_free_text_is_one_node(self, message: str) -> None:
        """Text without braces round-trips as a single node."""
        expected = (Text(message),) if message else ()
        assert parse_message(message) == expected
