"""Validation result types for translation dictionary validation.

Python 3.11+. Zero external dependencies.
"""

from dataclasses import dataclass

from .codes import DiagnosticCode

__all__ = ["ValidationResult", "ValidationWarning"]


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Structured warning from dictionary validation.

    Attributes:
        code: Diagnostic code (e.g., PLURAL_MISSING_OTHER)
        message: Human-readable warning message
        path: Dotted path of the offending node, prefixed by its locale
    """

    code: DiagnosticCode
    message: str
    path: str

    def format(self) -> str:
        """Format warning as human-readable string."""
        return f"[{self.code.name.lower()}] {self.path}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable result of validating one or more translation dictionaries.

    Attributes:
        warnings: Warnings found, in traversal order

    Example:
        >>> result = ValidationResult.valid()
        >>> result.is_valid
        True
        >>> result.warning_count
        0
    """

    warnings: tuple[ValidationWarning, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True when no warnings were found."""
        return not self.warnings

    @property
    def warning_count(self) -> int:
        """Number of warnings."""
        return len(self.warnings)

    @staticmethod
    def valid() -> "ValidationResult":
        """Create a result with no warnings."""
        return ValidationResult()

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results, preserving order."""
        return ValidationResult(self.warnings + other.warnings)
