"""Diagnostic system for langcore.

Provides diagnostic codes, structured diagnostics, the exception hierarchy
and validation result types.

Python 3.11+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import FormattingError, LangCoreError, MessageSyntaxError
from .validation import ValidationResult, ValidationWarning

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FormattingError",
    "LangCoreError",
    "MessageSyntaxError",
    "ValidationResult",
    "ValidationWarning",
]
