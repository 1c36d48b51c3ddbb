"""langcore exception hierarchy with structured diagnostics.

Text resolution never raises for missing data. These exceptions travel
between internal layers (parser to formatter, compiled number handle to
NumberFormatter) where they are caught and turned into graceful fallbacks.

Python 3.11+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = ["FormattingError", "LangCoreError", "MessageSyntaxError"]


class LangCoreError(Exception):
    """Base exception for all langcore errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LangCoreError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MessageSyntaxError(LangCoreError):
    """ICU message syntax error.

    Raised by the ICU parser for a malformed clause. The message formatter
    catches it and emits the offending clause as literal text.

    Attributes:
        position: Offset in the message where parsing failed
    """

    def __init__(self, message: str | Diagnostic, position: int) -> None:
        super().__init__(message)
        self.position = position


class FormattingError(LangCoreError):
    """Raised when locale-aware formatting fails.

    Carries a fallback_value so the caller can still produce output.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
