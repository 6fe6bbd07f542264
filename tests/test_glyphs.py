"""Tests for glyph tables and the fallback resolver."""

import pytest

from casillas import parse
from casillas.checkbox import CheckboxListRenderer
from casillas.errors import GlyphError
from casillas.glyphs import (
    DEFAULT_GLYPHS,
    DONE,
    IN_PROGRESS,
    UNCHECKED,
    GlyphTable,
    has_glyph_resolver,
    resolve_glyph,
    set_glyph_resolver,
)


@pytest.fixture
def clear_resolver():  # type: ignore[no-untyped-def]
    set_glyph_resolver(None)
    yield
    set_glyph_resolver(None)


class TestGlyphTable:
    def test_default_symbols(self) -> None:
        table = GlyphTable()
        assert table.get(UNCHECKED) == "⬜"
        assert table.get(DONE) == "☑️"
        assert table.get(IN_PROGRESS) == "⏳"

    def test_default_mapping_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_GLYPHS["done"] = "x"  # type: ignore[index]

    def test_missing_name_raises(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(GlyphError) as exc_info:
            GlyphTable().get("starred")
        assert exc_info.value.name == "starred"
        assert str(exc_info.value) == "No glyph registered for 'starred'"

    def test_glyph_error_is_a_key_error(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(KeyError):
            GlyphTable({}).get(DONE)

    def test_require(self) -> None:
        assert GlyphTable().require([DONE, UNCHECKED]) == {DONE: "☑️", UNCHECKED: "⬜"}

    def test_with_overrides(self) -> None:
        table = GlyphTable().with_overrides(in_progress="…", done="✔")
        assert table.get(IN_PROGRESS) == "…"
        assert table.get(DONE) == "✔"
        assert table.get(UNCHECKED) == "⬜"

    def test_overrides_leave_original_alone(self) -> None:
        table = GlyphTable()
        table.with_overrides(done="✔")
        assert table.get(DONE) == "☑️"

    def test_contains_and_repr(self) -> None:
        table = GlyphTable({"done": "+"})
        assert "done" in table
        assert "unchecked" not in table
        assert repr(table) == "GlyphTable({'done': '+'})"

    def test_table_is_a_snapshot(self) -> None:
        symbols = {"done": "+"}
        table = GlyphTable(symbols)
        symbols["done"] = "-"
        assert table.get("done") == "+"


class TestResolver:
    def test_no_resolver_by_default(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        assert not has_glyph_resolver()
        assert resolve_glyph("done") is None

    def test_resolver_fills_gaps(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        set_glyph_resolver(lambda name: "★" if name == "starred" else None)
        assert has_glyph_resolver()
        assert GlyphTable().get("starred") == "★"
        # Table entries win over the resolver
        set_glyph_resolver(lambda name: "?")
        assert GlyphTable().get(DONE) == "☑️"

    def test_resolver_completes_partial_table(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        set_glyph_resolver({"in-progress": "~", "unchecked": "o"}.get)
        renderer = CheckboxListRenderer(GlyphTable({"done": "x"}))
        item = parse("- [/] Draft").children[0].items[0]
        assert renderer(item).body.children[0].symbol == "~"  # type: ignore[union-attr]

    def test_incomplete_table_fails_at_construction(self, clear_resolver) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(GlyphError, match="in-progress|unchecked"):
            CheckboxListRenderer(GlyphTable({"done": "x"}))
