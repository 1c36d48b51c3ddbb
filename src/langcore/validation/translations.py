"""Load-time validation of translation dictionaries.

Walks each locale's tree once and reports data-integrity problems as
warnings. Validation never blocks lookups and never repairs data.

Architecture:
    - validate_translations(): Entry point, one pass per locale
    - _walk(): Recursive descent collecting warnings with dotted paths

Checks:
    - PLURAL_MISSING_OTHER: a mapping with at least one plural category key
      but no ``other`` key
    - INVALID_LEAF: a value that is neither a string nor a mapping

Python 3.11+.
"""

import logging
from collections.abc import Mapping
from typing import Any

from langcore.constants import PLURAL_CATEGORY_NAMES
from langcore.diagnostics import (
    DiagnosticCode,
    ValidationResult,
    ValidationWarning,
)

__all__ = ["validate_translations"]

logger = logging.getLogger(__name__)


def _walk(node: Mapping[Any, Any], path: str, warnings: list[ValidationWarning]) -> None:
    plural_keys = [k for k in node if k in PLURAL_CATEGORY_NAMES]
    if plural_keys and "other" not in node:
        warnings.append(
            ValidationWarning(
                code=DiagnosticCode.PLURAL_MISSING_OTHER,
                message=(
                    f"Plural object defines {', '.join(sorted(plural_keys))} "
                    "but no 'other' form"
                ),
                path=path,
            )
        )

    for key, value in node.items():
        child_path = f"{path}.{key}"
        if isinstance(value, Mapping):
            _walk(value, child_path, warnings)
        elif not isinstance(value, str):
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.INVALID_LEAF,
                    message=f"Expected string or object, got {type(value).__name__}",
                    path=child_path,
                )
            )


def validate_translations(translations: Mapping[str, Any]) -> ValidationResult:
    """Validate a locale-to-tree translation mapping.

    Args:
        translations: Mapping of locale code to translation node

    Returns:
        ValidationResult with one warning per problem, in traversal order.
        Each warning is also logged.

    Example:
        >>> result = validate_translations({"en": {"items": {"one": "1 item"}}})
        >>> result.warnings[0].path
        'en.items'
    """
    warnings: list[ValidationWarning] = []
    for locale, tree in translations.items():
        if isinstance(tree, Mapping):
            _walk(tree, str(locale), warnings)
        else:
            warnings.append(
                ValidationWarning(
                    code=DiagnosticCode.INVALID_LEAF,
                    message=f"Locale root must be an object, got {type(tree).__name__}",
                    path=str(locale),
                )
            )

    for warning in warnings:
        logger.warning("Translation validation: %s", warning.format())

    return ValidationResult(tuple(warnings))
