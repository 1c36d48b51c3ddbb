"""Immutable cursor for the ICU message parser.

Python 3.11+. Zero external dependencies.

Design:
    - Cursor is a frozen dataclass; every advance() returns a NEW cursor
    - EOF is a state (is_eof), not a return value
    - ``current`` raises at EOF, so call sites never juggle ``str | None``
    - ``peek`` is for lookahead only and returns None beyond EOF
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Cursor", "ParseResult"]

T = TypeVar("T")

# ICU Pattern_White_Space subset that appears in real messages
_WHITESPACE = frozenset(" \t\n\r")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable position in a message string.

    Example:
        >>> cursor = Cursor("{n}", 0)
        >>> cursor.current
        '{'
        >>> cursor.advance().current
        'n'
        >>> cursor.pos  # original unchanged
        0
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """True when the position is at or past the end of the source."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character at the current position.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character at position + offset, or None beyond EOF."""
        target = self.pos + offset
        if target >= len(self.source):
            return None
        return self.source[target]

    def advance(self, count: int = 1) -> "Cursor":
        """Return a new cursor advanced by count positions (clamped at EOF)."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        """Source text from the current position up to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces, tabs and line breaks.

        Example:
            >>> Cursor("  \\t x", 0).skip_whitespace().pos
            4
        """
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def expect(self, char: str) -> "Cursor | None":
        """Consume ``char`` if it is next, otherwise return None.

        Example:
            >>> Cursor("{", 0).expect("{").pos
            1
            >>> Cursor("x", 0).expect("{") is None
            True
        """
        if not self.is_eof and self.current == char:
            return self.advance()
        return None


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Parsed value together with the cursor after it.

    Example:
        >>> result = ParseResult("n", Cursor("{n}", 2))
        >>> result.value, result.cursor.current
        ('n', '}')
    """

    value: T
    cursor: Cursor
