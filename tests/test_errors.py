"""Tests for the exception hierarchy."""

import pytest

from casillas.errors import CasillasError, GlyphError, ParseError, RenderError


class TestHierarchy:
    @pytest.mark.parametrize("exc_type", [ParseError, RenderError, GlyphError])
    def test_all_derive_from_base(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, CasillasError)

    def test_catch_everything_with_base(self) -> None:
        with pytest.raises(CasillasError):
            raise RenderError("nope")


class TestParseError:
    def test_message_only(self) -> None:
        err = ParseError("bad input")
        assert str(err) == "bad input"
        assert err.lineno is None

    def test_full_location(self) -> None:
        err = ParseError("bad input", lineno=3, col_offset=7, source_file="todo.md")
        assert str(err) == "todo.md:3:7 bad input"
        assert (err.lineno, err.col_offset) == (3, 7)

    def test_line_without_column(self) -> None:
        assert str(ParseError("bad input", lineno=3)) == "3 bad input"


class TestGlyphError:
    def test_default_message(self) -> None:
        err = GlyphError("done")
        assert str(err) == "No glyph registered for 'done'"
        assert err.name == "done"

    def test_custom_message(self) -> None:
        assert str(GlyphError("done", "table is empty")) == "table is empty"
