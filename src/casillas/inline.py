"""Inline fragment parser.

Turns the text of a heading, paragraph or list item into a tuple of
inline fragments. Two choices shape the output and matter to the list-item
transforms downstream:

- ``[`` and ``]`` always become fragments of their own, so ``[x] Buy milk``
  reads as ``[``, ``x``, ``]``, space, ``Buy``, space, ``milk``.
- whitespace runs become a single ``Space`` fragment.

A backslash escape merges the escaped character into the surrounding text
run, which is how ``\\[x] label`` opts out of checkbox rendering.

Unclosed delimiters are literal text. Parsing never fails.

Thread Safety:
InlineParser instances are single-use; parse_inline() is pure.

"""

from __future__ import annotations

import string

from casillas.location import SourceLocation
from casillas.nodes import (
    CodeSpan,
    Emphasis,
    Inline,
    SoftBreak,
    Space,
    Strikethrough,
    Strong,
    Text,
)

ASCII_PUNCTUATION = frozenset(string.punctuation)
BRACKETS = frozenset("[]")
INLINE_WHITESPACE = frozenset(" \t")
EMPHASIS_CHARS = frozenset("*_")


def parse_inline(text: str, location: SourceLocation | None = None) -> tuple[Inline, ...]:
    """Parse inline Markdown into fragments.

    Args:
        text: Inline source; may contain newlines (become SoftBreak)
        location: Location of ``text[0]`` in the document

    Example:
        >>> [type(f).__name__ for f in parse_inline("[ ] a")]
        ['Text', 'Space', 'Text', 'Space', 'Text']

    """
    return InlineParser(text, location or SourceLocation.unknown()).parse()


class InlineParser:
    """Single-pass scanner over one block's inline text."""

    __slots__ = ("_text", "_location")

    def __init__(self, text: str, location: SourceLocation) -> None:
        self._text = text
        self._location = location

    def parse(self) -> tuple[Inline, ...]:
        return tuple(self._parse_range(0, len(self._text)))

    def _parse_range(self, start: int, end: int) -> list[Inline]:
        """Parse ``text[start:end]`` into fragments."""
        text = self._text
        out: list[Inline] = []
        buf: list[str] = []
        buf_start = start
        i = start

        def flush() -> None:
            if buf:
                out.append(Text(location=self._loc(buf_start), content="".join(buf)))
                buf.clear()

        while i < end:
            ch = text[i]
            if not buf:
                buf_start = i

            if ch == "\\" and i + 1 < end and text[i + 1] in ASCII_PUNCTUATION:
                buf.append(text[i + 1])
                i += 2
                continue

            if ch in BRACKETS:
                flush()
                out.append(Text(location=self._loc(i), content=ch))
                i += 1
                continue

            if ch == "\n":
                flush()
                out.append(SoftBreak(location=self._loc(i)))
                i += 1
                while i < end and text[i] in INLINE_WHITESPACE:
                    i += 1
                continue

            if ch in INLINE_WHITESPACE:
                flush()
                j = i
                while j < end and text[j] in INLINE_WHITESPACE:
                    j += 1
                # Trailing whitespace before a newline or the end is dropped
                if j < end and text[j] != "\n":
                    out.append(Space(location=self._loc(i)))
                i = j
                continue

            if ch == "`":
                node, next_i = self._try_code_span(i, end)
            elif ch == "~":
                node, next_i = self._try_delimited(i, end, "~~", Strikethrough)
            elif ch in EMPHASIS_CHARS:
                node, next_i = self._try_emphasis(i, end)
            else:
                node, next_i = None, i

            if node is not None:
                flush()
                out.append(node)
                i = next_i
                continue

            # Literal run of the same character (unmatched delimiters, backticks)
            j = i + 1
            if ch in "`~*_":
                while j < end and text[j] == ch:
                    j += 1
            buf.append(text[i:j])
            i = j

        flush()
        return out

    # =========================================================================
    # Constructs
    # =========================================================================

    def _try_code_span(self, i: int, end: int) -> tuple[Inline | None, int]:
        """Backtick run opens a code span closed by a run of the same length."""
        text = self._text
        run = _run_length(text, i, end, "`")
        j = i + run
        while j < end:
            k = text.find("`", j, end)
            if k == -1:
                break
            close = _run_length(text, k, end, "`")
            if close == run:
                code = text[i + run : k].replace("\n", " ")
                if len(code) > 2 and code[0] == " " and code[-1] == " " and code.strip():
                    code = code[1:-1]
                return CodeSpan(location=self._loc(i), code=code), k + close
            j = k + close
        return None, i

    def _try_emphasis(self, i: int, end: int) -> tuple[Inline | None, int]:
        """``**strong**``/``__strong__`` first, then ``*em*``/``_em_``."""
        ch = self._text[i]
        run = _run_length(self._text, i, end, ch)
        if run >= 2:
            node, next_i = self._try_delimited(i, end, ch * 2, Strong)
            if node is not None:
                return node, next_i
        return self._try_delimited(i, end, ch, Emphasis)

    def _try_delimited(
        self,
        i: int,
        end: int,
        delim: str,
        node_type: type[Strong] | type[Emphasis] | type[Strikethrough],
    ) -> tuple[Inline | None, int]:
        """Match ``delim`` content ``delim`` with non-space content edges.

        The closing delimiter must be a run of exactly ``len(delim)``
        characters so ``*a **b** c*`` nests instead of closing early.
        """
        text = self._text
        width = len(delim)
        char = delim[0]
        if _run_length(text, i, end, char) < width:
            return None, i
        inner_start = i + width
        if inner_start >= end or text[inner_start] in INLINE_WHITESPACE or text[inner_start] == "\n":
            return None, i
        if char == "_" and i > 0 and text[i - 1].isalnum():
            return None, i

        j = inner_start
        while j < end:
            k = text.find(char, j, end)
            if k == -1:
                return None, i
            close = _run_length(text, k, end, char)
            if (
                close == width
                and k > inner_start
                and text[k - 1] not in INLINE_WHITESPACE
                and text[k - 1] != "\\"
                and not (char == "_" and k + close < end and text[k + close].isalnum())
            ):
                children = tuple(self._parse_range(inner_start, k))
                return node_type(location=self._loc(i), children=children), k + close
            j = k + close
        return None, i

    # =========================================================================
    # Helpers
    # =========================================================================

    def _loc(self, index: int) -> SourceLocation:
        """Location of ``text[index]``."""
        base = self._location
        line_start = self._text.rfind("\n", 0, index) + 1
        if line_start == 0:
            return base.shifted(index)
        return SourceLocation(
            lineno=base.lineno + self._text.count("\n", 0, index),
            col_offset=index - line_start + 1,
            offset=base.offset + index,
            source_file=base.source_file,
        )


def _run_length(text: str, i: int, end: int, char: str) -> int:
    """Count consecutive ``char`` starting at ``i``."""
    j = i
    while j < end and text[j] == char:
        j += 1
    return j - i
