"""Tests for translation dictionary validation and diagnostics."""

import logging

import pytest

from langcore.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    FormattingError,
    LangCoreError,
    MessageSyntaxError,
    ValidationResult,
    ValidationWarning,
)
from langcore.validation import validate_translations


class TestValidateTranslations:
    """Load-time checks."""

    def test_clean_tree_is_valid(self) -> None:
        """Well-formed trees produce no warnings."""
        result = validate_translations({
            "en": {
                "title": "Hi",
                "items": {"one": "1 item", "other": "# items"},
                "nested": {"deep": {"x": "y"}},
            },
        })
        assert result.is_valid
        assert result.warning_count == 0

    def test_plural_missing_other(self) -> None:
        """A plural object without other is reported with its path."""
        result = validate_translations({"en": {"cart": {"items": {"one": "1 item"}}}})

        assert result.warning_count == 1
        warning = result.warnings[0]
        assert warning.code == DiagnosticCode.PLURAL_MISSING_OTHER
        assert warning.path == "en.cart.items"

    def test_invalid_leaf(self) -> None:
        """Non-string leaves are reported."""
        result = validate_translations({"en": {"count": 5, "flag": None}})

        assert [w.code for w in result.warnings] == [
            DiagnosticCode.INVALID_LEAF,
            DiagnosticCode.INVALID_LEAF,
        ]
        assert [w.path for w in result.warnings] == ["en.count", "en.flag"]

    def test_invalid_locale_root(self) -> None:
        """A locale mapped to a non-object is reported."""
        result = validate_translations({"en": "not a tree"})
        assert result.warnings[0].path == "en"

    def test_warnings_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each warning is logged."""
        with caplog.at_level(logging.WARNING, logger="langcore.validation.translations"):
            validate_translations({"de": {"x": {"few": "f"}}})
        assert "[plural_missing_other] de.x" in caplog.text


class TestValidationResult:
    """Result container."""

    def test_merge_preserves_order(self) -> None:
        """merge() concatenates warnings."""
        first = ValidationResult((ValidationWarning(DiagnosticCode.INVALID_LEAF, "a", "en.a"),))
        second = ValidationResult((ValidationWarning(DiagnosticCode.INVALID_LEAF, "b", "en.b"),))
        merged = first.merge(second)
        assert [w.message for w in merged.warnings] == ["a", "b"]

    def test_valid(self) -> None:
        """valid() has no warnings."""
        assert ValidationResult.valid().is_valid

    def test_warning_format(self) -> None:
        """Warnings render with code name and path."""
        warning = ValidationWarning(DiagnosticCode.INVALID_LEAF, "bad", "en.x")
        assert warning.format() == "[invalid_leaf] en.x: bad"


class TestDiagnostics:
    """Diagnostic formatting and exceptions."""

    def test_format_error(self) -> None:
        """Codes are prefixed with LANGCORE-."""
        diagnostic = Diagnostic(DiagnosticCode.TRANSLATION_NOT_FOUND, "missing", hint="add it")
        assert diagnostic.format_error() == "LANGCORE-1001: missing (hint: add it)"

    def test_error_with_diagnostic(self) -> None:
        """Exceptions keep the diagnostic."""
        diagnostic = Diagnostic(DiagnosticCode.MALFORMED_MESSAGE, "bad")
        error = MessageSyntaxError(diagnostic, 4)
        assert isinstance(error, LangCoreError)
        assert error.diagnostic is diagnostic
        assert error.position == 4
        assert str(error) == "LANGCORE-3001: bad"

    def test_formatting_error_fallback(self) -> None:
        """FormattingError carries a fallback value."""
        error = FormattingError("failed", fallback_value="1,000")
        assert error.fallback_value == "1,000"
        assert error.diagnostic is None
