"""Tests for parameter classification and rendering."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from langcore.enums import ParamKind
from langcore.runtime.value_types import (
    ParamValue,
    classify_param,
    is_number,
    render_param,
    to_number,
)


class TestClassifyParam:
    """Value tagging."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, ParamKind.NONE),
            (True, ParamKind.BOOLEAN),
            ("x", ParamKind.STRING),
            ("", ParamKind.STRING),
            (1, ParamKind.NUMBER),
            (1.5, ParamKind.NUMBER),
            (Decimal("1.5"), ParamKind.NUMBER),
            (date(2025, 1, 1), ParamKind.DATE),
            (datetime(2025, 1, 1, 12, 0), ParamKind.DATE),
            (time(12, 0), ParamKind.DATE),
            ({"a": 1}, ParamKind.NESTED),
            ([1, 2], ParamKind.UNSUPPORTED),
            (b"bytes", ParamKind.UNSUPPORTED),
            (object(), ParamKind.UNSUPPORTED),
        ],
    )
    def test_kinds(self, value: object, kind: ParamKind) -> None:
        """Each Python type maps to one kind."""
        assert classify_param(value) == kind

    def test_renderable(self) -> None:
        """Only scalar kinds are renderable."""
        assert ParamValue.of("x").is_renderable
        assert ParamValue.of(0).is_renderable
        assert not ParamValue.of(None).is_renderable
        assert not ParamValue.of({"a": 1}).is_renderable


class TestRenderParam:
    """Locale-agnostic text."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5.0, "5"),
            (0.1, "0.1"),
            (-2, "-2"),
            (Decimal("1.50"), "1.5"),
            (Decimal("100"), "100"),
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (True, "true"),
            ("text", "text"),
            (date(2025, 10, 27), "2025-10-27"),
        ],
    )
    def test_render(self, value: object, expected: str) -> None:
        """Values render like their JavaScript String() form."""
        assert render_param(ParamValue.of(value)) == expected

    def test_render_unrenderable_raises(self) -> None:
        """Callers must check is_renderable first."""
        with pytest.raises(TypeError):
            render_param(ParamValue.of([1]))


class TestNumbers:
    """is_number and to_number."""

    def test_bool_is_not_a_number(self) -> None:
        """bool subclasses int but is not a count."""
        assert not is_number(True)
        assert is_number(0)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3, 3),
            ("3", 3),
            (" 2.5 ", 2.5),
            (Decimal("4"), Decimal("4")),
        ],
    )
    def test_to_number(self, value: object, expected: object) -> None:
        """Numbers and numeric strings coerce."""
        assert to_number(value) == expected

    @pytest.mark.parametrize(
        "value", ["lots", "", None, [1], float("nan"), "inf", Decimal("NaN"), False]
    )
    def test_to_number_rejects(self, value: object) -> None:
        """Non-numeric and non-finite values give None."""
        assert to_number(value) is None
