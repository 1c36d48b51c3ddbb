"""Dotted-key lookup into nested translation trees.

A translation tree maps locale codes to nodes. A node maps key segments to
either a leaf string, a plural leaf (mapping of plural category to string),
or another node. Lookup walks ``"a.b.c"`` segment by segment and only
accepts a leaf as the final value: landing on an intermediate node counts as
absent.

Fallback chain:
    1. requested locale
    2. fallback locale (skipped when identical to the requested one)

Absence is a normal outcome. It is logged at debug level and reported to the
caller as None; TranslationManager decides how to surface it.

Python 3.11+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from langcore.constants import PLURAL_CATEGORY_NAMES

__all__ = [
    "KeyResolver",
    "PluralLeaf",
    "ResolvedValue",
    "TranslationTree",
    "is_plural_leaf",
    "resolve_key",
]

logger = logging.getLogger(__name__)

PluralLeaf = Mapping[str, str]
TranslationTree = Mapping[str, Mapping[str, Any]]


def is_plural_leaf(value: Any) -> bool:
    """Check whether a value is a plural leaf.

    A plural leaf is a non-empty mapping whose keys are all plural category
    names and whose values are all strings.

    Example:
        >>> is_plural_leaf({"one": "# item", "other": "# items"})
        True
        >>> is_plural_leaf({"title": "Hi"})
        False
    """
    return (
        isinstance(value, Mapping)
        and len(value) > 0
        and all(k in PLURAL_CATEGORY_NAMES for k in value)
        and all(isinstance(v, str) for v in value.values())
    )


def lookup_path(node: Any, key: str) -> str | PluralLeaf | None:
    """Descend one node along a dotted key.

    Returns the leaf or plural leaf at the end of the path, otherwise None.
    """
    current = node
    for segment in key.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return None
        current = current[segment]
    if isinstance(current, str) or is_plural_leaf(current):
        return current
    return None


@dataclass(frozen=True, slots=True)
class ResolvedValue:
    """A resolved translation value and the locale that supplied it.

    Attributes:
        value: Leaf string or plural leaf
        locale: Locale whose tree contained the value
    """

    value: str | PluralLeaf
    locale: str

    @property
    def is_plural(self) -> bool:
        """True when the value is a plural leaf."""
        return not isinstance(self.value, str)


class KeyResolver:
    """Resolves dotted keys through the locale fallback chain.

    Example:
        >>> tree = {"en": {"home": {"title": "Home"}}, "de": {}}
        >>> KeyResolver("en").resolve(tree, "de", "home.title")
        ResolvedValue(value='Home', locale='en')
    """

    __slots__ = ("_fallback_locale",)

    def __init__(self, fallback_locale: str) -> None:
        self._fallback_locale = fallback_locale

    @property
    def fallback_locale(self) -> str:
        """Locale consulted after the requested one."""
        return self._fallback_locale

    def locale_chain(self, locale: str) -> tuple[str, ...]:
        """Locales consulted for a request, in order."""
        if locale == self._fallback_locale:
            return (locale,)
        return (locale, self._fallback_locale)

    def resolve(
        self, tree: TranslationTree, locale: str, key: str
    ) -> ResolvedValue | None:
        """Resolve a key, trying the requested then the fallback locale.

        Args:
            tree: Mapping of locale code to translation node
            locale: Requested locale
            key: Dot-separated key

        Returns:
            ResolvedValue, or None when no locale in the chain has the key
        """
        for candidate in self.locale_chain(locale):
            node = tree.get(candidate)
            if node is None:
                continue
            value = lookup_path(node, key)
            if value is not None:
                return ResolvedValue(value, candidate)

        logger.debug(
            "Key '%s' not found for locale '%s' (fallback '%s')",
            key,
            locale,
            self._fallback_locale,
        )
        return None


def resolve_key(
    tree: TranslationTree, locale: str, fallback_locale: str, key: str
) -> str | PluralLeaf | None:
    """Resolve a key to its leaf or plural leaf.

    Functional form of KeyResolver.resolve that drops the answering locale.

    Example:
        >>> resolve_key({"en": {"a": {"b": "x"}}}, "fr", "en", "a.b")
        'x'
        >>> resolve_key({"en": {"a": {"b": "x"}}}, "en", "en", "a") is None
        True
    """
    resolved = KeyResolver(fallback_locale).resolve(tree, locale, key)
    return None if resolved is None else resolved.value
