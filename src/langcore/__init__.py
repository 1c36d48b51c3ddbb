"""langcore - locale-aware text resolution engine.

Looks up translations by dotted key, selects CLDR plural forms, substitutes
placeholders, evaluates a compact ICU message subset, and formats numbers,
currencies, percentages and ordinals per locale, with bounded caches.

Public API:
    TranslationManager - Key lookup, plural selection and interpolation
    CacheConfig - Result cache configuration
    MessageFormatter / format_message - ICU message evaluation
    NumberFormatter / NumberFormatOptions - Locale-aware number formatting
    OrdinalFormatter - 1st, 2nd, 3rd
    select_plural_category - CLDR plural category for a count
    interpolate - Placeholder substitution

Submodules:
    langcore.runtime - Caches, plural rules, interpolation, key resolution
    langcore.icu - ICU message parser, AST and formatter
    langcore.formatting - Number, ordinal, currency and date formatting
    langcore.validation - Load-time dictionary validation
    langcore.diagnostics - Diagnostic codes, errors and validation results
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Runtime first: the manager pulls in the ICU and formatting packages.
from .runtime import (
    CacheConfig,
    LRUCache,
    MissingTranslation,
    TranslationManager,
    interpolate,
    select_plural_category,
)
from .diagnostics import LangCoreError, ValidationResult  # noqa: I001
from .enums import PlaceholderSyntax, PluralCategory
from .formatting import NumberFormatOptions, NumberFormatter, OrdinalFormatter
from .icu import MessageFormatter, format_message, parse_message
from .locale_utils import get_text_direction
from .validation import validate_translations

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("langcore")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CacheConfig",
    "LRUCache",
    "LangCoreError",
    "MessageFormatter",
    "MissingTranslation",
    "NumberFormatOptions",
    "NumberFormatter",
    "OrdinalFormatter",
    "PlaceholderSyntax",
    "PluralCategory",
    "TranslationManager",
    "ValidationResult",
    "__version__",
    "format_message",
    "get_text_direction",
    "interpolate",
    "parse_message",
    "select_plural_category",
    "validate_translations",
]
