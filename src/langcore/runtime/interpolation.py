"""Placeholder substitution for plain translation strings.

Two placeholder syntaxes are supported:

    {{user.name}}   PlaceholderSyntax.DOUBLE (TranslationManager templates)
    {user.name}     PlaceholderSyntax.SINGLE (ICU-style templates)

Paths are dot-separated and resolved against the parameter mapping. A
placeholder whose value is absent stays in the output verbatim. Mapping,
sequence and other values without a single text form also stay verbatim and
are reported with a warning.

Python 3.11+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from langcore.diagnostics import Diagnostic, DiagnosticCode
from langcore.enums import ParamKind, PlaceholderSyntax

from .value_types import ParamValue, render_param

__all__ = ["get_nested_value", "interpolate", "render_placeholder"]

logger = logging.getLogger(__name__)

_PATTERNS: dict[PlaceholderSyntax, re.Pattern[str]] = {
    PlaceholderSyntax.DOUBLE: re.compile(r"\{\{([^{}]+)\}\}"),
    PlaceholderSyntax.SINGLE: re.compile(r"\{([^{}]+)\}"),
}


def get_nested_value(params: Mapping[str, Any] | None, path: str) -> Any:
    """Resolve a dot-separated path against nested mappings.

    Surrounding whitespace of the path is ignored. Returns None when any
    segment is missing or an intermediate value is not a mapping.

    Example:
        >>> get_nested_value({"user": {"name": "Anna"}}, " user.name ")
        'Anna'
        >>> get_nested_value({"user": "Anna"}, "user.name") is None
        True
    """
    current: Any = params
    for segment in path.strip().split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
        if current is None:
            return None
    return current


def render_placeholder(
    params: Mapping[str, Any] | None, path: str, placeholder: str
) -> str:
    """Render one placeholder, or return it unchanged when it has no text form.

    Args:
        params: Parameter mapping
        path: Dot-separated parameter path
        placeholder: The literal placeholder text to keep on failure

    Returns:
        Rendered value, or ``placeholder`` unchanged
    """
    param = ParamValue.of(get_nested_value(params, path))
    if param.is_renderable:
        return render_param(param)
    if param.kind in (ParamKind.NESTED, ParamKind.UNSUPPORTED):
        diagnostic = Diagnostic(
            DiagnosticCode.UNSUPPORTED_PARAMETER,
            f"Cannot interpolate {param.kind} value for key '{path.strip()}'",
            hint="Pass a string, number, boolean or date",
        )
        logger.warning(diagnostic.format_error())
    return placeholder


def interpolate(
    template: str,
    params: Mapping[str, Any] | None,
    *,
    syntax: PlaceholderSyntax = PlaceholderSyntax.DOUBLE,
) -> str:
    """Substitute placeholders in a template.

    Args:
        template: Text containing placeholders
        params: Parameter mapping (None substitutes nothing)
        syntax: Placeholder delimiter style

    Returns:
        Template with every resolvable placeholder replaced

    Examples:
        >>> interpolate("Hi {{ user.name }}", {"user": {"name": "Anna"}})
        'Hi Anna'
        >>> interpolate("{{missing}} stays", {})
        '{{missing}} stays'
        >>> interpolate("{n} items", {"n": 5.0}, syntax=PlaceholderSyntax.SINGLE)
        '5 items'
    """
    if not params:
        return template

    def _replace(match: re.Match[str]) -> str:
        return render_placeholder(params, match.group(1), match.group(0))

    return _PATTERNS[syntax].sub(_replace, template)
