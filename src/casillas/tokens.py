"""Token and TokenType definitions for the casillas lexer.

The lexer produces one Token per source line (plus EOF); the parser
consumes them to build block nodes.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto

from casillas.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()

    # Headings and breaks
    ATX_HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, ***, ___

    # Code
    FENCED_CODE_START = auto()  # ``` or ~~~
    FENCED_CODE_CONTENT = auto()
    FENCED_CODE_END = auto()

    # Lists
    LIST_ITEM_MARKER = auto()  # -, *, +, 1., 1)

    # Text
    PARAGRAPH_LINE = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: The token type
        value: Line payload: heading text, item text, fence info string,
            raw code line or paragraph text
        location: Where the line starts in the source
        indent: Leading indentation in columns (tabs count as 4)
        marker: The structural marker: ``##``, ``-``, ``3.``, a fence run
        content_indent: For list items, the column where item text begins

    """

    type: TokenType
    value: str
    location: SourceLocation
    indent: int = 0
    marker: str = ""
    content_indent: int = 0

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Token({self.type.name}, {self.value!r}, {self.location.lineno}:{self.indent})"
