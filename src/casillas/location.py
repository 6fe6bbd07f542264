"""Source location tracking for AST nodes and error messages.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the Markdown source.

    Line and column are 1-indexed. Nodes built by transforms rather than by
    the parser use ``SourceLocation.unknown()`` or inherit the location of the
    node they replace.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in the source buffer
        end_offset: Absolute end offset in the source buffer
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(3, 1, source_file="todo.md")
        >>> str(loc)
        'todo.md:3:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def shifted(self, columns: int, chars: int | None = None) -> SourceLocation:
        """Return a location moved right along the same line.

        Args:
            columns: Columns to move
            chars: Characters to move in the absolute offset (defaults to columns)
        """
        delta = columns if chars is None else chars
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset + columns,
            offset=self.offset + delta,
            end_offset=self.end_offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder location for synthesized nodes."""
        return cls(lineno=0, col_offset=0)
