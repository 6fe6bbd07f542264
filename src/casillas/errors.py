"""Exception classes for casillas.

The list-item transforms never raise; these cover the layers around them
(parsing input, glyph tables, rendering).
"""

from __future__ import annotations


class CasillasError(Exception):
    """Base exception for all casillas errors."""

    pass


class ParseError(CasillasError):
    """Error during Markdown parsing.

    Raised when the parser is handed input it cannot work with at all.
    Malformed Markdown is never an error; it degrades to plain text.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class RenderError(CasillasError):
    """Error during rendering.

    Raised when a renderer meets a node type it has no output for.
    """

    pass


class GlyphError(CasillasError, KeyError):
    """A glyph name could not be resolved to a symbol."""

    def __init__(self, name: str, message: str | None = None) -> None:
        """Initialize glyph error.

        Args:
            name: The glyph name that failed to resolve
            message: Optional override for the default message
        """
        self.name = name
        super().__init__(message or f"No glyph registered for {name!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
