"""Glyph tables for list-item markers.

A glyph table maps marker names (``"unchecked"``, ``"done"``,
``"in-progress"``) to the symbols written into the output. The default
table uses emoji; pass a different ``GlyphTable`` to a transform, or install
a resolver process-wide with ``set_glyph_resolver()``.

Usage:
    from casillas.glyphs import GlyphTable, set_glyph_resolver

    ascii_table = GlyphTable({"unchecked": "[ ]", "done": "[x]", "in-progress": "[~]"})

    set_glyph_resolver(lambda name: {"done": "✔"}.get(name))

Thread Safety:
    GlyphTable is immutable. set_glyph_resolver() should be called once at
    application startup; updates are lock-protected.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType

from casillas.errors import GlyphError

UNCHECKED = "unchecked"
DONE = "done"
IN_PROGRESS = "in-progress"

DEFAULT_GLYPHS: Mapping[str, str] = MappingProxyType(
    {
        UNCHECKED: "⬜",
        DONE: "☑️",
        IN_PROGRESS: "⏳",
    }
)


class GlyphTable:
    """Read-only name → symbol mapping.

    Lookups consult the table first, then the process-wide resolver (if one
    is installed). Missing names raise ``GlyphError``.

    Example:
        >>> GlyphTable().get("done")
        '☑️'

    """

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Mapping[str, str] | None = None) -> None:
        self._symbols: Mapping[str, str] = MappingProxyType(
            dict(DEFAULT_GLYPHS if symbols is None else symbols)
        )

    def get(self, name: str) -> str:
        """Resolve a glyph name to its symbol.

        Raises:
            GlyphError: If neither the table nor the resolver knows the name
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            symbol = resolve_glyph(name)
        if symbol is None:
            raise GlyphError(name)
        return symbol

    def require(self, names: Iterable[str]) -> dict[str, str]:
        """Resolve several names at once, failing on the first missing one."""
        return {name: self.get(name) for name in names}

    def with_overrides(self, **symbols: str) -> GlyphTable:
        """Return a new table with some symbols replaced.

        Keyword names use underscores for dashes: ``in_progress="…"``.
        """
        merged = dict(self._symbols)
        merged.update({name.replace("_", "-"): sym for name, sym in symbols.items()})
        return GlyphTable(merged)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __repr__(self) -> str:
        return f"GlyphTable({dict(self._symbols)!r})"


# Process-wide fallback resolver
_glyph_resolver: Callable[[str], str | None] | None = None
_resolver_lock = threading.Lock()


def set_glyph_resolver(resolver: Callable[[str], str | None] | None) -> None:
    """Install (or clear, with None) the fallback glyph resolver.

    Example:
        >>> set_glyph_resolver(lambda name: "★" if name == "starred" else None)
        >>> GlyphTable().get("starred")
        '★'
        >>> set_glyph_resolver(None)
    """
    global _glyph_resolver
    with _resolver_lock:
        _glyph_resolver = resolver


def resolve_glyph(name: str) -> str | None:
    """Ask the fallback resolver for a glyph; None if unset or unknown."""
    # Simple read is atomic under GIL; no lock needed for reads
    resolver = _glyph_resolver
    if resolver is not None:
        return resolver(name)
    return None


def has_glyph_resolver() -> bool:
    """Check if a fallback resolver is installed."""
    return _glyph_resolver is not None
