"""ICU message subset: parser, AST and formatter.

Python 3.11+.
"""

from .ast import (
    FormattedArgument,
    MessageNode,
    Plural,
    Pound,
    Select,
    SelectOrdinal,
    Text,
    Variable,
)
from .formatter import MessageFormatter, format_message
from .parser import parse_message

__all__ = [
    "FormattedArgument",
    "MessageFormatter",
    "MessageNode",
    "Plural",
    "Pound",
    "Select",
    "SelectOrdinal",
    "Text",
    "Variable",
    "format_message",
    "parse_message",
]
