"""Tests for HtmlRenderer."""

from __future__ import annotations

import pytest

from casillas import Markdown, parse
from casillas.config import RenderConfig, render_config_context
from casillas.errors import RenderError
from casillas.location import SourceLocation
from casillas.nodes import Document, Glyph, HSpace, Node, Paragraph, Text
from casillas.renderers import ASTRenderer, TextRenderer
from casillas.renderers.html import HtmlRenderer, extract_text, html_escape
from casillas.utils import slugify

LOC = SourceLocation(1, 1)

GAP = '<span class="hspace" style="display: inline-block; width: 0.5em"></span>'


def _html(source: str) -> str:
    return HtmlRenderer().render(parse(source))


class TestBlocks:
    def test_heading_with_id(self) -> None:
        assert _html("# Hello World") == '<h1 id="hello-world">Hello World</h1>\n'

    def test_duplicate_headings_get_unique_ids(self) -> None:
        html = _html("## Todo\n\n## Todo\n\n## Todo")
        assert 'id="todo"' in html
        assert 'id="todo-1"' in html
        assert 'id="todo-2"' in html

    def test_heading_without_slug_text(self) -> None:
        assert _html("# !!!") == '<h1 id="section">!!!</h1>\n'

    def test_get_headings(self) -> None:
        renderer = HtmlRenderer()
        assert renderer.get_headings() == []
        renderer.render(parse("# One\n\n## Two"))
        assert [(h.level, h.text, h.slug) for h in renderer.get_headings()] == [
            (1, "One", "one"),
            (2, "Two", "two"),
        ]

    def test_paragraph_and_inline_markup(self) -> None:
        html = _html("Some *soft*, **bold**, ~~gone~~ and `code`.")
        assert html == (
            "<p>Some <em>soft</em>, <strong>bold</strong>, <del>gone</del> "
            "and <code>code</code>.</p>\n"
        )

    def test_escaping(self) -> None:
        assert _html('a < b & "c"') == "<p>a &lt; b &amp; &quot;c&quot;</p>\n"

    def test_thematic_break(self) -> None:
        assert _html("---") == "<hr />\n"

    def test_fenced_code_with_language(self) -> None:
        assert _html("```python\nif a < b:\n```") == (
            '<pre><code class="language-python">if a &lt; b:\n</code></pre>\n'
        )

    def test_fenced_code_default_language(self) -> None:
        renderer = HtmlRenderer(RenderConfig(default_code_language="typ"))
        html = renderer.render(parse("```\n#set page\n```\n\nuse `x`"))
        assert '<pre><code class="language-typ">' in html
        assert '<code class="language-typ">x</code>' in html

    def test_fenced_code_own_language_beats_default(self) -> None:
        with render_config_context(RenderConfig(default_code_language="typ")):
            html = _html("```rust\nfn main() {}\n```")
        assert 'class="language-rust"' in html

    def test_plain_lists(self) -> None:
        assert _html("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"
        assert _html("2. a") == '<ol start="2">\n<li>a</li>\n</ol>\n'
        assert _html("1. a") == "<ol>\n<li>a</li>\n</ol>\n"

    def test_loose_list_wraps_in_paragraphs(self) -> None:
        assert _html("- a\n\n- b") == (
            "<ul>\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ul>\n"
        )


class TestCheckboxOutput:
    """Glyph markup for checkbox items (default transform)."""

    def test_done_item(self) -> None:
        assert Markdown()("- [x] Buy milk") == (
            '<ul>\n<li data-label="checkbox">'
            '<span class="glyph glyph-done">☑️</span>' + GAP + "Buy milk</li>\n</ul>\n"
        )

    def test_unchecked_item(self) -> None:
        html = Markdown()("- [ ] Call plumber")
        assert '<span class="glyph glyph-unchecked">⬜</span>' + GAP + "Call plumber" in html

    def test_in_progress_item(self) -> None:
        html = Markdown()("- [/] In progress task")
        assert '<span class="glyph glyph-in-progress">⏳</span>' in html

    def test_cancelled_item(self) -> None:
        html = Markdown()("- [-] Cancelled task")
        assert (
            '<span class="glyph glyph-done">☑️</span>' + GAP + "<del>Cancelled task</del>"
        ) in html

    def test_unknown_marker_renders_as_text(self) -> None:
        assert Markdown()("- [?] Weird marker") == (
            "<ul>\n<li>[?] Weird marker</li>\n</ul>\n"
        )

    def test_nested_checkbox_items(self) -> None:
        html = Markdown()("- [/] Move house\n  - [x] Pack books")
        assert html == (
            '<ul>\n<li data-label="checkbox">'
            '<span class="glyph glyph-in-progress">⏳</span>' + GAP + "Move house\n"
            '<ul>\n<li data-label="checkbox">'
            '<span class="glyph glyph-done">☑️</span>' + GAP + "Pack books</li>\n"
            "</ul>\n</li>\n</ul>\n"
        )

    def test_spacing_width_formatting(self) -> None:
        html = Markdown(config=RenderConfig(hspace_em=1.0))("- [x] a")
        assert "width: 1em" in html


class TestDirectNodes:
    def test_glyph_and_hspace_nodes(self) -> None:
        doc = Document(
            location=LOC,
            children=(
                Paragraph(
                    location=LOC,
                    children=(
                        Glyph(location=LOC, name="star", symbol="<*>"),
                        HSpace(location=LOC, width=0.25),
                        Text(location=LOC, content="x"),
                    ),
                ),
            ),
        )
        html = HtmlRenderer().render(doc)
        assert '<span class="glyph glyph-star">&lt;*&gt;</span>' in html
        assert "width: 0.25em" in html

    def test_unknown_node_raises(self) -> None:
        doc = Document(location=LOC, children=(Node(location=LOC),))  # type: ignore[arg-type]
        with pytest.raises(RenderError, match="Cannot render block node Node"):
            HtmlRenderer().render(doc)


class TestHelpers:
    def test_html_escape_leaves_single_quotes(self) -> None:
        assert html_escape("it's <b>") == "it's &lt;b&gt;"

    def test_extract_text_skips_glyphs(self) -> None:
        inlines = (
            Glyph(location=LOC, name="done", symbol="☑️"),
            HSpace(location=LOC, width=0.5),
            Text(location=LOC, content="Buy"),
        )
        assert extract_text(inlines) == "Buy"

    def test_slugify_keeps_unicode_words(self) -> None:
        assert slugify("Café &amp; Co.") == "café-co"
        assert slugify("") == ""

    def test_both_renderers_satisfy_protocol(self) -> None:
        renderers: list[ASTRenderer] = [HtmlRenderer(), TextRenderer()]
        doc = parse("- [x] a")
        assert [r.render(doc) for r in renderers] == [
            "<ul>\n<li>[x] a</li>\n</ul>\n",
            "- [x] a\n",
        ]
