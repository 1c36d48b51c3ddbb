"""Tests for dotted-key resolution and the locale fallback chain."""

from langcore.runtime.resolver import (
    KeyResolver,
    ResolvedValue,
    is_plural_leaf,
    lookup_path,
    resolve_key,
)

TREE = {
    "en": {
        "home": {"title": "Home", "subtitle": "Welcome"},
        "items": {"one": "{{count}} item", "other": "{{count}} items"},
        "only_en": "English only",
    },
    "de": {
        "home": {"title": "Startseite"},
    },
}


class TestIsPluralLeaf:
    """Plural leaf detection."""

    def test_plural_leaf(self) -> None:
        """All keys are categories and all values strings."""
        assert is_plural_leaf({"one": "a", "other": "b"})

    def test_regular_node(self) -> None:
        """Non-category keys make a regular node."""
        assert not is_plural_leaf({"title": "Home"})
        assert not is_plural_leaf({"one": "a", "title": "b"})

    def test_empty_mapping(self) -> None:
        """An empty mapping is not a plural leaf."""
        assert not is_plural_leaf({})

    def test_non_string_values(self) -> None:
        """Values must be strings."""
        assert not is_plural_leaf({"one": {"x": "y"}})


class TestLookupPath:
    """Single-tree descent."""

    def test_leaf(self) -> None:
        """Returns the string at the end of the path."""
        assert lookup_path(TREE["en"], "home.title") == "Home"

    def test_plural_leaf(self) -> None:
        """Returns a plural leaf as-is."""
        assert lookup_path(TREE["en"], "items") == TREE["en"]["items"]

    def test_intermediate_node_is_absent(self) -> None:
        """Landing on a regular node counts as missing."""
        assert lookup_path(TREE["en"], "home") is None

    def test_descending_past_leaf(self) -> None:
        """A path longer than the tree is missing."""
        assert lookup_path(TREE["en"], "home.title.extra") is None


class TestKeyResolver:
    """Fallback chain."""

    def test_requested_locale_wins(self) -> None:
        """The requested locale is consulted first."""
        resolved = KeyResolver("en").resolve(TREE, "de", "home.title")
        assert resolved == ResolvedValue("Startseite", "de")

    def test_fallback_locale(self) -> None:
        """Missing keys come from the fallback locale."""
        resolved = KeyResolver("en").resolve(TREE, "de", "home.subtitle")
        assert resolved == ResolvedValue("Welcome", "en")

    def test_unknown_locale_falls_back(self) -> None:
        """A locale absent from the tree goes straight to the fallback."""
        resolved = KeyResolver("en").resolve(TREE, "fr", "only_en")
        assert resolved is not None
        assert resolved.locale == "en"

    def test_missing_everywhere(self) -> None:
        """None when no locale has the key."""
        assert KeyResolver("en").resolve(TREE, "de", "nope") is None

    def test_locale_chain(self) -> None:
        """The fallback is not repeated."""
        resolver = KeyResolver("en")
        assert resolver.locale_chain("de") == ("de", "en")
        assert resolver.locale_chain("en") == ("en",)

    def test_is_plural(self) -> None:
        """ResolvedValue reports plural leaves."""
        resolved = KeyResolver("en").resolve(TREE, "en", "items")
        assert resolved is not None
        assert resolved.is_plural


class TestResolveKey:
    """Functional form."""

    def test_value_only(self) -> None:
        """Returns just the value."""
        assert resolve_key(TREE, "de", "en", "home.subtitle") == "Welcome"

    def test_missing(self) -> None:
        """Missing keys resolve to None."""
        assert resolve_key(TREE, "de", "en", "home") is None
