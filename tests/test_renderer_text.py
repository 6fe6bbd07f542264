"""Tests for TextRenderer."""

from __future__ import annotations

import pytest

from casillas import Markdown, parse, render_text
from casillas.errors import RenderError
from casillas.location import SourceLocation
from casillas.nodes import Document, Node
from casillas.renderers.text import EN_SPACE, TextRenderer, _fixed_space, strike


def _plain(source: str) -> str:
    return TextRenderer().render(parse(source))


class TestBlocks:
    def test_heading_and_paragraph(self) -> None:
        assert _plain("# Errands\n\nSome *words*.") == "# Errands\n\nSome words.\n"

    def test_ordered_list_numbers_from_start(self) -> None:
        assert _plain("4. a\n5. b") == "4. a\n5. b\n"

    def test_nested_lists_indent(self) -> None:
        assert _plain("- a\n  - b\n    - c") == "- a\n  - b\n    - c\n"

    def test_code_block(self) -> None:
        assert _plain("```sh\nmake\n```") == "```sh\nmake\n```\n"

    def test_thematic_break(self) -> None:
        assert _plain("a\n\n***\n\nb") == "a\n\n---\n\nb\n"

    def test_empty_document(self) -> None:
        assert _plain("") == ""

    def test_unknown_node_raises(self) -> None:
        loc = SourceLocation(1, 1)
        doc = Document(location=loc, children=(Node(location=loc),))  # type: ignore[arg-type]
        with pytest.raises(RenderError):
            TextRenderer().render(doc)


class TestCheckboxItems:
    def test_markers(self) -> None:
        md = Markdown()
        source = "- [ ] a\n- [x] b\n- [/] c\n- [-] d"
        assert md.render_text(md.parse(source)) == (
            f"- ⬜{EN_SPACE}a\n"
            f"- ☑️{EN_SPACE}b\n"
            f"- ⏳{EN_SPACE}c\n"
            f"- ☑️{EN_SPACE}{strike('d')}\n"
        )

    def test_module_level_render_text(self) -> None:
        assert render_text(parse("- [x] Buy milk")) == f"- ☑️{EN_SPACE}Buy milk\n"

    def test_without_transform(self) -> None:
        assert render_text(parse("- [x] a"), list_item_transform=None) == "- [x] a\n"


class TestHelpers:
    def test_strike(self) -> None:
        assert strike("") == ""
        assert strike("ab") == "a\u0336b\u0336"

    @pytest.mark.parametrize(
        ("width", "expected"),
        [
            (0.5, "\u2002"),
            (1.0, "\u2003"),
            (1.5, "\u2003\u2002"),
            (0.0, "\u2002"),
        ],
    )
    def test_fixed_space(self, width: float, expected: str) -> None:
        assert _fixed_space(width) == expected
