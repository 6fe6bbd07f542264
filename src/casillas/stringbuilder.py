"""StringBuilder for renderer output.

Renderers append fragments to a list and join once at the end instead of
concatenating strings as they go.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> _ = sb.append("<li>").append("☑️").append("</li>")
        >>> sb.build()
        '<li>☑️</li>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string; empty strings are skipped."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        return "".join(self._parts)

    def __len__(self) -> int:
        """Number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
