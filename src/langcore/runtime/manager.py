"""TranslationManager: key lookup, plural selection and substitution.

Composes KeyResolver, the plural rules, the placeholder interpolator and the
ICU message formatter behind an optional LRU result cache.

Lookup order for one request:
    1. namespace tree (when a namespace is named and registered)
    2. main tree
    Each tree is searched through the locale fallback chain
    (requested locale, then fallback locale).

Missing data never raises. A missing key returns the key itself, logs a
warning (unless ``warn_missing`` is False) and fires ``on_missing_key`` once
per occurrence. Missing results are not cached, so the callback fires on
every lookup.

Thread Safety:
    The result cache is lock-protected. Registering namespaces while other
    threads translate is safe; the cache is cleared after registration.

Python 3.11+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from threading import RLock
from typing import TYPE_CHECKING, Any

from langcore.constants import DEFAULT_FALLBACK_LOCALE
from langcore.diagnostics import Diagnostic, DiagnosticCode, ValidationResult
from langcore.icu.formatter import MessageFormatter
from langcore.validation import validate_translations

from .cache import TranslationCache
from .cache_config import CacheConfig
from .interpolation import interpolate
from .plural_rules import select_plural_category
from .resolver import KeyResolver, PluralLeaf, ResolvedValue, TranslationTree

if TYPE_CHECKING:
    from langcore.formatting.numbers import NumberFormatter

__all__ = ["MissingTranslation", "TranslationManager"]

logger = logging.getLogger(__name__)

# `{name, plural, ...}`, `{n, number}`, `{d, date, short}` and friends.
_ICU_SYNTAX = re.compile(
    r"\{\s*[\w.]+\s*,\s*(?:plural|selectordinal|select|number|date)\s*[,}]"
)

_DEFAULT_CACHE = CacheConfig()


@dataclass(frozen=True, slots=True)
class MissingTranslation:
    """Information about a failed lookup.

    Passed to the ``on_missing_key`` callback.

    Attributes:
        locale: Requested locale
        key: Requested key
        namespace: Requested namespace, or None for the main tree
    """

    locale: str
    key: str
    namespace: str | None = None


class TranslationManager:
    """Resolves translated text for (locale, key, params) requests.

    Examples:
        >>> manager = TranslationManager({
        ...     "en": {
        ...         "greeting": "Hello {{name}}",
        ...         "items": {"one": "{{count}} item", "other": "{{count}} items"},
        ...     },
        ... })
        >>> manager.translate("en", "greeting", {"name": "Anna"})
        'Hello Anna'
        >>> manager.translate_plural("en", "items", 3)
        '3 items'
        >>> manager.translate("en", "missing.key")
        'missing.key'
    """

    __slots__ = (
        "_cache",
        "_fallback_locale",
        "_lock",
        "_message_formatter",
        "_namespaces",
        "_on_missing_key",
        "_resolver",
        "_translations",
        "_use_icu",
        "_validation",
        "_warn_missing",
    )

    def __init__(
        self,
        translations: TranslationTree,
        *,
        fallback_locale: str = DEFAULT_FALLBACK_LOCALE,
        warn_missing: bool = True,
        use_icu: bool = True,
        on_missing_key: Callable[[MissingTranslation], None] | None = None,
        cache: CacheConfig | None = _DEFAULT_CACHE,
        number_formatter: NumberFormatter | None = None,
    ) -> None:
        """Initialize the manager and validate the dictionaries.

        Args:
            translations: Mapping of locale code to translation tree. Read,
                never mutated.
            fallback_locale: Locale consulted when the requested one lacks a key
            warn_missing: Log a warning for every missing key
            use_icu: Route strings containing ICU clauses through the ICU
                message formatter instead of the ``{{name}}`` interpolator
            on_missing_key: Optional callback invoked for every missing key
            cache: Result cache configuration. ``None`` disables caching.
            number_formatter: NumberFormatter used by ICU ``number`` clauses
                and ``#``. A private instance is created when omitted.
        """
        self._translations = translations
        self._fallback_locale = fallback_locale
        self._warn_missing = warn_missing
        self._use_icu = use_icu
        self._on_missing_key = on_missing_key
        self._resolver = KeyResolver(fallback_locale)
        self._message_formatter = MessageFormatter(number_formatter)
        self._namespaces: dict[str, TranslationTree] = {}
        self._lock = RLock()
        self._cache: TranslationCache | None = (
            TranslationCache(cache.size) if cache is not None else None
        )
        self._validation = validate_translations(translations)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def fallback_locale(self) -> str:
        """Locale consulted after the requested one."""
        return self._fallback_locale

    @property
    def use_icu(self) -> bool:
        """Whether ICU clause syntax is evaluated."""
        return self._use_icu

    @property
    def namespaces(self) -> tuple[str, ...]:
        """Registered namespace names, in registration order."""
        with self._lock:
            return tuple(self._namespaces)

    @property
    def validation_result(self) -> ValidationResult:
        """Result of the load-time validation passes run so far."""
        with self._lock:
            return self._validation

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def translate(
        self,
        locale: str,
        key: str,
        params: Mapping[str, Any] | None = None,
        *,
        namespace: str | None = None,
        context: str | None = None,
        count: Any = None,
    ) -> str:
        """Translate a key.

        Args:
            locale: Requested locale (e.g., "en", "pt-BR")
            key: Dot-separated translation key
            params: Values for placeholders
            namespace: Namespace tree to search before the main tree
            context: Context suffix; ``f"{key}_{context}"`` is tried when the
                plain key is missing
            count: When given, a plural object is resolved through
                translate_plural and strings receive ``count`` as a parameter

        Returns:
            Translated text, or ``key`` when no translation exists.
            A plural object without ``count`` yields its ``other`` form.
        """
        if count is not None:
            params = {**(params or {}), "count": count}

        cache_key = self._make_cache_key("t", locale, key, params, namespace, context)
        cached = self._cache_get(cache_key)
        if cached is not None:
            return cached

        resolved = self._lookup(locale, key, namespace)
        if resolved is None and context:
            resolved = self._lookup(locale, f"{key}_{context}", namespace)
        if resolved is None:
            return self._handle_missing(locale, key, namespace)

        text: str | None
        if isinstance(resolved.value, str):
            text = resolved.value
        elif count is not None:
            text = self._select_plural_form(resolved, locale, count)
        else:
            text = resolved.value.get("other")
        if text is None:
            return self._handle_missing(locale, key, namespace)

        result = self._render(text, params, locale)
        self._cache_put(cache_key, result)
        return result

    def translate_plural(
        self,
        locale: str,
        key: str,
        count: Any,
        params: Mapping[str, Any] | None = None,
        *,
        namespace: str | None = None,
    ) -> str:
        """Translate a key, choosing the plural form for ``count``.

        Plain strings are plural-agnostic and are interpolated with ``count``
        merged into the parameters. For plural objects the category comes
        from the plural rules of the requested locale, even when the text
        came from the fallback locale. A category missing from the object falls back to ``other``.

        Args:
            locale: Requested locale
            key: Dot-separated translation key
            count: Number driving plural selection
            params: Values for placeholders (``count`` is added)
            namespace: Namespace tree to search before the main tree

        Returns:
            Translated text, or ``key`` when no translation exists
        """
        merged = {**(params or {}), "count": count}

        cache_key = self._make_cache_key("p", locale, key, merged, namespace)
        cached = self._cache_get(cache_key)
        if cached is not None:
            return cached

        resolved = self._lookup(locale, key, namespace)
        if resolved is None:
            return self._handle_missing(locale, key, namespace)

        text = (
            resolved.value
            if isinstance(resolved.value, str)
            else self._select_plural_form(resolved, locale, count)
        )
        if text is None:
            return self._handle_missing(locale, key, namespace)

        result = self._render(text, merged, locale)
        self._cache_put(cache_key, result)
        return result

    def add_namespace(self, name: str, translations: TranslationTree) -> None:
        """Register a namespace tree.

        The first registration of a name wins; later ones are ignored. The
        tree is validated and the result cache is cleared.

        Args:
            name: Namespace name
            translations: Mapping of locale code to translation tree
        """
        with self._lock:
            if name in self._namespaces:
                logger.debug("Namespace '%s' already registered; ignoring", name)
                return
            self._namespaces[name] = translations
            self._validation = self._validation.merge(
                validate_translations(translations)
            )
        self.clear_cache()

    def validate(self) -> ValidationResult:
        """Re-run validation over the main tree and every namespace."""
        with self._lock:
            trees = [self._translations, *self._namespaces.values()]
        result = ValidationResult.valid()
        for tree in trees:
            result = result.merge(validate_translations(tree))
        return result

    def clear_cache(self) -> None:
        """Discard all cached results and reset cache metrics."""
        if self._cache is not None:
            self._cache.clear()

    def get_cache_stats(self) -> dict[str, int | float] | None:
        """Get result cache statistics.

        Returns:
            Dict with size, max_size, hits, misses, hit_rate and
            unserializable_skips, or None if caching is disabled
        """
        if self._cache is None:
            return None
        return self._cache.get_stats()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lookup(
        self, locale: str, key: str, namespace: str | None
    ) -> ResolvedValue | None:
        if namespace is not None:
            with self._lock:
                tree = self._namespaces.get(namespace)
            if tree is not None:
                resolved = self._resolver.resolve(tree, locale, key)
                if resolved is not None:
                    return resolved
        return self._resolver.resolve(self._translations, locale, key)

    def _select_plural_form(
        self, resolved: ResolvedValue, locale: str, count: Any
    ) -> str | None:
        leaf: PluralLeaf = resolved.value  # type: ignore[assignment]
        category = select_plural_category(locale, count)
        text = leaf.get(category)
        if text is None:
            logger.debug(
                "Plural form '%s' absent for locale '%s'; using 'other'",
                category,
                locale,
            )
            text = leaf.get("other")
        return text

    def _render(self, text: str, params: Mapping[str, Any] | None, locale: str) -> str:
        if self._use_icu and _ICU_SYNTAX.search(text):
            return self._message_formatter.format(text, params, locale)
        return interpolate(text, params)

    def _handle_missing(self, locale: str, key: str, namespace: str | None) -> str:
        if self._warn_missing:
            where = f" (namespace '{namespace}')" if namespace else ""
            diagnostic = Diagnostic(
                DiagnosticCode.TRANSLATION_NOT_FOUND,
                f"Missing translation for '{key}' in locale '{locale}'{where}",
            )
            logger.warning(diagnostic.format_error())
        if self._on_missing_key is not None:
            self._on_missing_key(MissingTranslation(locale, key, namespace))
        return key

    def _make_cache_key(
        self,
        kind: str,
        locale: str,
        key: str,
        params: Mapping[str, Any] | None,
        namespace: str | None,
        context: str | None = None,
    ) -> str | None:
        if self._cache is None:
            return None
        return TranslationCache.make_key(kind, locale, key, params, namespace, context)

    def _cache_get(self, cache_key: str | None) -> str | None:
        if self._cache is None:
            return None
        return self._cache.get(cache_key)

    def _cache_put(self, cache_key: str | None, result: str) -> None:
        if self._cache is not None:
            self._cache.put(cache_key, result)
