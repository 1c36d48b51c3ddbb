"""Diagnostic codes and data structures.

Defines diagnostic codes and the structured Diagnostic carried by errors and
emitted through logging when text resolution degrades.

Python 3.11+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = ["Diagnostic", "DiagnosticCode"]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup diagnostics (missing translations)
        2000-2999: Resolution diagnostics (counts, parameters)
        3000-3999: Message syntax diagnostics (ICU parser)
        4000-4999: Formatting diagnostics (numbers, dates, locales)
        5000-5999: Validation diagnostics (load-time dictionary checks)
    """

    # Lookup (1000-1999)
    TRANSLATION_NOT_FOUND = 1001
    PLURAL_BRANCH_NOT_FOUND = 1002

    # Resolution (2000-2999)
    INVALID_COUNT = 2001
    UNSUPPORTED_PARAMETER = 2002

    # Message syntax (3000-3999)
    MALFORMED_MESSAGE = 3001
    NESTING_DEPTH_EXCEEDED = 3002

    # Formatting (4000-4999)
    FORMATTING_FAILED = 4001
    UNKNOWN_LOCALE = 4002

    # Validation (5000-5999)
    PLURAL_MISSING_OTHER = 5001
    INVALID_LEAF = 5002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Diagnostic code
        message: Human-readable description
        hint: Optional suggestion for fixing the problem
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None

    def format_error(self) -> str:
        """Format as a single line suitable for logs and exception messages.

        Example:
            >>> Diagnostic(DiagnosticCode.INVALID_COUNT, "Count 'x' is not numeric").format_error()
            "LANGCORE-2001: Count 'x' is not numeric"
        """
        text = f"LANGCORE-{self.code.value}: {self.message}"
        if self.hint:
            text += f" (hint: {self.hint})"
        return text
