"""Tests for locale normalization helpers."""

import pytest
from babel.core import UnknownLocaleError

from langcore.locale_utils import (
    get_babel_locale,
    get_language,
    get_text_direction,
    normalize_locale,
)


class TestNormalizeLocale:
    """BCP-47 to POSIX."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en-US", "en_US"), ("en", "en"), ("zh-Hant-TW", "zh_Hant_TW"), ("de_DE", "de_DE")],
    )
    def test_normalize(self, code: str, expected: str) -> None:
        """Hyphens become underscores."""
        assert normalize_locale(code) == expected


class TestGetLanguage:
    """Language subtag extraction."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("en-US", "en"), ("PT_br", "pt"), ("ar", "ar"), ("", "en"), ("  ", "en")],
    )
    def test_language(self, code: str, expected: str) -> None:
        """Lower-cased language, English when empty."""
        assert get_language(code) == expected


class TestBabelLocale:
    """Cached Babel locale parsing."""

    def test_parses_bcp47(self) -> None:
        """BCP-47 codes are accepted."""
        locale = get_babel_locale("pt-BR")
        assert locale.language == "pt"
        assert locale.territory == "BR"

    def test_cached(self) -> None:
        """Repeated lookups return the same object."""
        assert get_babel_locale("de-DE") is get_babel_locale("de-DE")

    def test_unknown(self) -> None:
        """Unknown locales raise."""
        with pytest.raises((UnknownLocaleError, ValueError)):
            get_babel_locale("xx-YY")


class TestTextDirection:
    """Writing direction."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("ar-SA", "rtl"), ("he", "rtl"), ("fa", "rtl"), ("en-US", "ltr"), ("de", "ltr")],
    )
    def test_known(self, code: str, expected: str) -> None:
        """CLDR character order."""
        assert get_text_direction(code) == expected

    def test_unknown_locale_uses_table(self) -> None:
        """Unknown locales use the language table."""
        assert get_text_direction("xx") == "ltr"
