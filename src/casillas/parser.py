"""Recursive descent parser producing the typed AST.

Consumes the Lexer's token stream and builds immutable block nodes.
Inline content is handed to the inline parser as it is reached.

Supported blocks: ATX headings, paragraphs, fenced code, thematic breaks and
ordered/unordered lists nested by indentation. Anything else reads as
paragraph text, so parsing never fails on Markdown input.

Thread Safety:
Parser instances are single-use. The resulting AST is immutable.

"""

from __future__ import annotations

from casillas.errors import ParseError
from casillas.inline import parse_inline
from casillas.lexer import Lexer
from casillas.location import SourceLocation
from casillas.nodes import (
    Block,
    Document,
    FencedCode,
    Heading,
    List,
    ListItem,
    Paragraph,
    ThematicBreak,
    make_body,
)
from casillas.tokens import Token, TokenType

# Tokens that end a paragraph
_PARAGRAPH_INTERRUPTS = frozenset(
    {
        TokenType.BLANK_LINE,
        TokenType.ATX_HEADING,
        TokenType.THEMATIC_BREAK,
        TokenType.FENCED_CODE_START,
        TokenType.LIST_ITEM_MARKER,
        TokenType.EOF,
    }
)


class Parser:
    """Recursive descent parser for Markdown.

    Usage:
        >>> blocks = Parser("# Groceries\\n\\n- [x] Buy milk").parse()
        >>> [type(b).__name__ for b in blocks]
        ['Heading', 'List']

    """

    __slots__ = ("_source", "_source_file", "_tokens", "_pos")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        if not isinstance(source, str):
            raise ParseError(
                f"Markdown source must be str, not {type(source).__name__}",
                source_file=source_file,
            )
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self) -> list[Block]:
        """Parse the whole source into top-level blocks."""
        self._tokens = list(Lexer(self._source, self._source_file).tokenize())
        self._pos = 0
        blocks: list[Block] = []
        while self._current.type is not TokenType.EOF:
            block = self._parse_block()
            if block is not None:
                blocks.append(block)
        return blocks

    def parse_document(self) -> Document:
        """Parse and wrap the blocks in a Document."""
        blocks = self.parse()
        loc = SourceLocation(
            lineno=1,
            col_offset=1,
            offset=0,
            end_offset=len(self._source),
            source_file=self._source_file,
        )
        return Document(location=loc, children=tuple(blocks))

    # =========================================================================
    # Token navigation
    # =========================================================================

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _peek_past_blanks(self) -> Token:
        """Return the next non-blank token without consuming anything."""
        pos = self._pos
        while self._tokens[pos].type is TokenType.BLANK_LINE:
            pos += 1
        return self._tokens[pos]

    # =========================================================================
    # Blocks
    # =========================================================================

    def _parse_block(self) -> Block | None:
        """Parse one block at the current position (None for blank lines)."""
        token = self._current
        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()
                return None
            case TokenType.ATX_HEADING:
                self._advance()
                level = len(token.marker)
                return Heading(
                    location=token.location,
                    level=level,  # type: ignore[arg-type]
                    children=parse_inline(token.value, _text_location(token)),
                )
            case TokenType.THEMATIC_BREAK:
                self._advance()
                return ThematicBreak(location=token.location)
            case TokenType.FENCED_CODE_START:
                return self._parse_fenced_code()
            case TokenType.LIST_ITEM_MARKER:
                return self._parse_list()
            case _:
                return self._parse_paragraph()

    def _parse_paragraph(self) -> Paragraph:
        """Consecutive text lines form one paragraph."""
        first = self._advance()
        lines = [first.value]
        while self._current.type not in _PARAGRAPH_INTERRUPTS:
            lines.append(self._advance().value)
        return Paragraph(
            location=first.location,
            children=parse_inline("\n".join(lines), first.location),
        )

    def _parse_fenced_code(self) -> FencedCode:
        """Fenced code up to the closing fence (or end of input).

        The lexer has already removed the opening fence's indentation from
        each content line.
        """
        start = self._advance()
        lines: list[str] = []
        while self._current.type is TokenType.FENCED_CODE_CONTENT:
            lines.append(self._advance().value)
        if self._current.type is TokenType.FENCED_CODE_END:
            self._advance()
        return FencedCode(
            location=start.location,
            code="\n".join(lines) + "\n" if lines else "",
            info=start.value or None,
            marker=start.marker[0],  # type: ignore[arg-type]
        )

    # =========================================================================
    # Lists
    # =========================================================================

    def _parse_list(self) -> List:
        """Parse sibling items sharing the first item's indent and marker kind."""
        first = self._current
        ordered = first.marker[-1] in ".)"
        items: list[ListItem] = []
        tight = True

        while True:
            item, had_blank = self._parse_list_item()
            items.append(item)
            if had_blank:
                tight = False

            nxt = self._peek_past_blanks()
            if not (
                nxt.type is TokenType.LIST_ITEM_MARKER
                and nxt.indent == first.indent
                and _same_list_kind(first.marker, nxt.marker)
            ):
                break
            if self._current.type is TokenType.BLANK_LINE:
                tight = False
                while self._current.type is TokenType.BLANK_LINE:
                    self._advance()

        return List(
            location=first.location,
            items=tuple(items),
            ordered=ordered,
            start=int(first.marker[:-1]) if ordered else 1,
            tight=tight,
        )

    def _parse_list_item(self) -> tuple[ListItem, bool]:
        """Parse one item: its text lines, then any nested blocks.

        Returns:
            (item, whether blank lines separated the item's own blocks)
        """
        marker = self._advance()
        lines = [marker.value] if marker.value else []
        children: list[Block] = []
        had_blank = False
        saw_blank = False

        while True:
            token = self._current
            match token.type:
                case TokenType.PARAGRAPH_LINE if not saw_blank and not children:
                    # Continuation (indented or lazy) of the item text
                    lines.append(self._advance().value)
                case TokenType.PARAGRAPH_LINE if token.indent >= marker.content_indent:
                    children.append(self._parse_paragraph())
                    had_blank = had_blank or saw_blank
                    saw_blank = False
                case TokenType.LIST_ITEM_MARKER if token.indent > marker.indent:
                    children.append(self._parse_list())
                    had_blank = had_blank or saw_blank
                    saw_blank = False
                case TokenType.FENCED_CODE_START if token.indent >= marker.content_indent:
                    children.append(self._parse_fenced_code())
                    had_blank = had_blank or saw_blank
                    saw_blank = False
                case TokenType.BLANK_LINE:
                    nxt = self._peek_past_blanks()
                    if not _continues_item(nxt, marker):
                        break
                    while self._current.type is TokenType.BLANK_LINE:
                        self._advance()
                    saw_blank = True
                case _:
                    break

        fragments = parse_inline("\n".join(lines), _text_location(marker))
        item = ListItem(
            location=marker.location,
            body=make_body(fragments, marker.location),
            children=tuple(children),
        )
        return item, had_blank


def _same_list_kind(a: str, b: str) -> bool:
    """Bullets match on the bullet char, ordered markers on the delimiter."""
    if a[-1] in ".)" and b[-1] in ".)":
        return a[-1] == b[-1]
    return a == b


def _continues_item(token: Token, marker: Token) -> bool:
    """Whether a block after a blank line still belongs to the item."""
    match token.type:
        case TokenType.PARAGRAPH_LINE | TokenType.FENCED_CODE_START:
            return token.indent >= marker.content_indent
        case TokenType.LIST_ITEM_MARKER:
            return token.indent > marker.indent
        case _:
            return False


def _text_location(token: Token) -> SourceLocation:
    """Location of the first character after a heading or item marker."""
    if token.type is TokenType.LIST_ITEM_MARKER:
        return token.location.shifted(token.content_indent - token.indent)
    return token.location.shifted(len(token.marker) + 1)
