"""Tests for line classification in the block lexer."""

from __future__ import annotations

import pytest

from casillas.lexer import Lexer, calc_indent
from casillas.tokens import TokenType


def _tokens(source: str):  # type: ignore[no-untyped-def]
    return [t for t in Lexer(source).tokenize() if t.type is not TokenType.EOF]


def _types(source: str) -> list[TokenType]:
    return [t.type for t in _tokens(source)]


class TestIndent:
    def test_spaces(self) -> None:
        assert calc_indent("   x") == (3, 3)

    def test_tab_expands_to_four(self) -> None:
        assert calc_indent("\tx") == (4, 1)

    def test_space_then_tab(self) -> None:
        assert calc_indent("  \tx") == (4, 3)


class TestHeadings:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_levels(self, level: int) -> None:
        (token,) = _tokens("#" * level + " Title")
        assert token.type is TokenType.ATX_HEADING
        assert token.marker == "#" * level
        assert token.value == "Title"

    def test_seven_hashes_is_text(self) -> None:
        assert _types("####### nope") == [TokenType.PARAGRAPH_LINE]

    def test_hash_without_space_is_text(self) -> None:
        assert _types("#tag") == [TokenType.PARAGRAPH_LINE]

    def test_closing_sequence_stripped(self) -> None:
        (token,) = _tokens("## Project Alpha ##")
        assert token.value == "Project Alpha"

    def test_empty_heading(self) -> None:
        (token,) = _tokens("#")
        assert token.type is TokenType.ATX_HEADING
        assert token.value == ""


class TestListMarkers:
    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_bullets(self, marker: str) -> None:
        (token,) = _tokens(f"{marker} [x] Buy milk")
        assert token.type is TokenType.LIST_ITEM_MARKER
        assert token.marker == marker
        assert token.value == "[x] Buy milk"
        assert token.content_indent == 2

    def test_ordered(self) -> None:
        (token,) = _tokens("12. [ ] Twelfth")
        assert token.marker == "12."
        assert token.value == "[ ] Twelfth"
        assert token.content_indent == 4

    def test_paren_ordered(self) -> None:
        (token,) = _tokens("3) item")
        assert token.marker == "3)"

    def test_marker_needs_space(self) -> None:
        assert _types("-dash") == [TokenType.PARAGRAPH_LINE]
        assert _types("1.5 litres") == [TokenType.PARAGRAPH_LINE]

    def test_nested_indent(self) -> None:
        outer, inner, tabbed = _tokens("- a\n  - b\n\t- c")
        assert (outer.indent, inner.indent, tabbed.indent) == (0, 2, 4)

    def test_empty_item(self) -> None:
        (token,) = _tokens("-")
        assert token.type is TokenType.LIST_ITEM_MARKER
        assert token.value == ""
        assert token.content_indent == 2


class TestBreaks:
    @pytest.mark.parametrize("line", ["---", "***", "___", "- - -", " * * *"])
    def test_thematic_breaks(self, line: str) -> None:
        assert _types(line) == [TokenType.THEMATIC_BREAK]

    def test_blank_lines(self) -> None:
        assert _types("a\n   \nb") == [
            TokenType.PARAGRAPH_LINE,
            TokenType.BLANK_LINE,
            TokenType.PARAGRAPH_LINE,
        ]


class TestFences:
    def test_fence_content_is_not_classified(self) -> None:
        source = "```typ\n# not a heading\n- [x] not an item\n```"
        assert _types(source) == [
            TokenType.FENCED_CODE_START,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_END,
        ]
        assert _tokens(source)[0].value == "typ"

    def test_shorter_fence_does_not_close(self) -> None:
        source = "````\n```\n````"
        assert _types(source)[1] is TokenType.FENCED_CODE_CONTENT
        assert _types(source)[2] is TokenType.FENCED_CODE_END

    def test_tilde_fence(self) -> None:
        assert _types("~~~\nx\n~~~")[-1] is TokenType.FENCED_CODE_END

    def test_backtick_info_with_backtick_is_not_a_fence(self) -> None:
        assert _types("``` a`b") == [TokenType.PARAGRAPH_LINE]

    def test_indented_fence_strips_its_indent_from_content(self) -> None:
        tokens = _tokens("  ```\n    x\n  ```")
        assert tokens[1].value == "  x"

    def test_unterminated_fence_runs_to_eof(self) -> None:
        tokens = list(Lexer("```\ncode\n\nmore").tokenize())
        assert [t.type for t in tokens] == [
            TokenType.FENCED_CODE_START,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.FENCED_CODE_CONTENT,
            TokenType.EOF,
        ]

    def test_unterminated_fence_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="casillas.lexer"):
            list(Lexer("```\ncode").tokenize())
        assert "Unterminated code fence" in caplog.text


class TestLocations:
    def test_line_numbers_and_offsets(self) -> None:
        tokens = list(Lexer("# A\n\n  - b", source_file="todo.md").tokenize())
        item = tokens[2]
        assert item.location.lineno == 3
        assert item.location.col_offset == 3
        assert item.location.offset == 7
        assert str(item.location) == "todo.md:3:3"

    def test_eof_after_last_line(self) -> None:
        tokens = list(Lexer("a\nb").tokenize())
        assert tokens[-1].type is TokenType.EOF
        assert tokens[-1].location.lineno == 3

    def test_empty_source(self) -> None:
        assert [t.type for t in Lexer("").tokenize()] == [TokenType.EOF]
