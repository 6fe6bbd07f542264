"""Line-oriented block lexer.

Scans the source one line at a time, classifies each line and yields a
Token for it. Fenced code switches the lexer into a code mode until the
closing fence, so code lines are never classified as Markdown.

No regex in the line classifiers; every method advances through the
source exactly once.

Thread Safety:
Lexer instances are single-use. Create one per source string.

"""

from __future__ import annotations

from collections.abc import Iterator

from casillas.location import SourceLocation
from casillas.tokens import Token, TokenType
from casillas.utils.logger import get_logger

logger = get_logger(__name__)

UNORDERED_LIST_MARKERS = frozenset("-*+")
THEMATIC_BREAK_CHARS = frozenset("-*_")
FENCE_CHARS = frozenset("`~")
TAB_WIDTH = 4


def calc_indent(line: str) -> tuple[int, int]:
    """Measure leading whitespace.

    Returns:
        (columns, characters); tabs advance to the next multiple of 4

    >>> calc_indent("\\t- a")
    (4, 1)
    """
    columns = 0
    chars = 0
    for ch in line:
        if ch == " ":
            columns += 1
        elif ch == "\t":
            columns += TAB_WIDTH - (columns % TAB_WIDTH)
        else:
            break
        chars += 1
    return columns, chars


class Lexer:
    """Block lexer producing one token per line.

    Usage:
        >>> for token in Lexer("# Todo\\n\\n- [x] Buy milk").tokenize():
        ...     print(token)
        Token(ATX_HEADING, 'Todo', 1:0)
        Token(BLANK_LINE, '', 2:0)
        Token(LIST_ITEM_MARKER, '[x] Buy milk', 3:0)
        Token(EOF, '', 4:0)

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_fence_char",
        "_fence_count",
        "_fence_indent",
        "_fence_location",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        self._source = source
        self._source_file = source_file
        self._fence_char = ""
        self._fence_count = 0
        self._fence_indent = 0
        self._fence_location: SourceLocation | None = None

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens for every line, then EOF."""
        offset = 0
        lineno = 0
        for lineno, raw in enumerate(self._source.splitlines(keepends=True), start=1):
            line = raw.rstrip("\r\n")
            loc = SourceLocation(
                lineno=lineno,
                col_offset=1,
                offset=offset,
                end_offset=offset + len(line),
                source_file=self._source_file,
            )
            offset += len(raw)

            if self._fence_char:
                yield self._scan_fence_line(line, loc)
            else:
                yield self._classify_line(line, loc)

        if self._fence_char:
            logger.debug("Unterminated code fence opened at %s", self._fence_location)
            self._fence_char = ""

        yield Token(
            TokenType.EOF,
            "",
            SourceLocation(
                lineno=lineno + 1,
                col_offset=1,
                offset=len(self._source),
                end_offset=len(self._source),
                source_file=self._source_file,
            ),
        )

    # =========================================================================
    # Block mode
    # =========================================================================

    def _classify_line(self, line: str, loc: SourceLocation) -> Token:
        """Classify one line outside fenced code."""
        indent, indent_chars = calc_indent(line)
        content = line[indent_chars:]
        loc = loc.shifted(indent, indent_chars)

        if not content.strip():
            return Token(TokenType.BLANK_LINE, "", loc)

        # Fences may sit at any depth so they can nest inside list items
        token = self._try_classify_fence_start(content, loc, indent)
        if token is not None:
            return token

        if indent < 4:
            token = self._try_classify_heading(content, loc, indent)
            if token is not None:
                return token
            if self._is_thematic_break(content):
                return Token(TokenType.THEMATIC_BREAK, "", loc, indent=indent, marker=content[0])

        token = self._try_classify_list_marker(content, loc, indent)
        if token is not None:
            return token

        return Token(TokenType.PARAGRAPH_LINE, content.strip(), loc, indent=indent)

    def _try_classify_heading(
        self, content: str, loc: SourceLocation, indent: int
    ) -> Token | None:
        """ATX heading: 1-6 ``#`` followed by space or end of line."""
        level = 0
        while level < len(content) and content[level] == "#":
            level += 1
        if level == 0 or level > 6:
            return None
        if level < len(content) and content[level] not in " \t":
            return None

        text = content[level:].strip()
        # Optional closing sequence: "## Title ##"
        stripped = text.rstrip("#")
        if stripped != text and (not stripped or stripped[-1] in " \t"):
            text = stripped.rstrip()
        return Token(TokenType.ATX_HEADING, text, loc, indent=indent, marker="#" * level)

    def _is_thematic_break(self, content: str) -> bool:
        """Three or more of the same ``-``, ``*`` or ``_``, optionally spaced."""
        char = content[0]
        if char not in THEMATIC_BREAK_CHARS:
            return False
        count = 0
        for ch in content:
            if ch == char:
                count += 1
            elif ch not in " \t":
                return False
        return count >= 3

    def _try_classify_list_marker(
        self, content: str, loc: SourceLocation, indent: int
    ) -> Token | None:
        """Bullet (``-``, ``*``, ``+``) or ordered (``1.``, ``1)``) item marker."""
        if content[0] in UNORDERED_LIST_MARKERS:
            marker = content[0]
        elif content[0].isdigit():
            digits = 0
            while digits < len(content) and content[digits].isdigit():
                digits += 1
            if digits > 9 or digits >= len(content) or content[digits] not in ".)":
                return None
            marker = content[: digits + 1]
        else:
            return None

        rest = content[len(marker) :]
        if rest and rest[0] not in " \t":
            return None

        gap, gap_chars = calc_indent(rest)
        text = rest[gap_chars:]
        if not text:
            # Empty item: content column is one past the marker
            gap = 1
        elif gap > 4:
            # Indented code after marker is not supported; treat as one space
            gap = 1
        return Token(
            TokenType.LIST_ITEM_MARKER,
            text.rstrip(),
            loc,
            indent=indent,
            marker=marker,
            content_indent=indent + len(marker) + gap,
        )

    def _try_classify_fence_start(
        self, content: str, loc: SourceLocation, indent: int
    ) -> Token | None:
        """Opening code fence: three or more backticks or tildes."""
        char = content[0]
        if char not in FENCE_CHARS:
            return None
        count = 0
        while count < len(content) and content[count] == char:
            count += 1
        if count < 3:
            return None
        info = content[count:].strip()
        if char == "`" and "`" in info:
            return None

        self._fence_char = char
        self._fence_count = count
        self._fence_indent = indent
        self._fence_location = loc
        return Token(
            TokenType.FENCED_CODE_START, info, loc, indent=indent, marker=char * count
        )

    # =========================================================================
    # Fenced code mode
    # =========================================================================

    def _scan_fence_line(self, line: str, loc: SourceLocation) -> Token:
        """Classify a line inside fenced code: closing fence or content."""
        indent, indent_chars = calc_indent(line)
        content = line[indent_chars:]
        if indent < self._fence_indent + 4 and content.startswith(self._fence_char):
            count = 0
            while count < len(content) and content[count] == self._fence_char:
                count += 1
            if count >= self._fence_count and not content[count:].strip():
                self._fence_char = ""
                return Token(
                    TokenType.FENCED_CODE_END,
                    "",
                    loc.shifted(indent, indent_chars),
                    indent=indent,
                    marker=content[:count],
                )

        return Token(
            TokenType.FENCED_CODE_CONTENT,
            _strip_columns(line, self._fence_indent),
            loc,
            indent=indent,
        )


def _strip_columns(line: str, columns: int) -> str:
    """Remove up to ``columns`` columns of leading whitespace."""
    if columns <= 0:
        return line
    width = 0
    i = 0
    while i < len(line) and width < columns:
        ch = line[i]
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += TAB_WIDTH - (width % TAB_WIDTH)
        else:
            break
        i += 1
    return line[i:]
