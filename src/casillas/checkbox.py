"""Checkbox list items.

Rewrites list items that open with a checkbox marker into a glyph, a
half-em gap and the remaining label:

    - [ ] Call the plumber        ⬜ Call the plumber
    - [x] Buy milk                ☑️ Buy milk
    - [/] Draft the report        ⏳ Draft the report
    - [-] Book the venue          ☑️ ~~Book the venue~~

The check runs on the item body's fragments: ``[``, one marker character,
``]``, then a separator (dropped) and the label. Any other shape, including
an unknown marker like ``[?]``, leaves the item untouched.

Example:
    >>> from casillas import Markdown
    >>> md = Markdown(list_item_transform=CheckboxListRenderer())
    >>> md("- [x] Buy milk")  # doctest: +ELLIPSIS
    '<ul>\\n<li data-label="checkbox"><span class="glyph glyph-done">☑️</span>...'

Thread Safety:
    CheckboxListRenderer is immutable after construction; render() is pure.

"""

from __future__ import annotations

import dataclasses
from enum import Enum

from casillas.config import get_render_config
from casillas.glyphs import DONE, IN_PROGRESS, UNCHECKED, GlyphTable
from casillas.nodes import (
    Document,
    Glyph,
    HSpace,
    Inline,
    ItemBody,
    ListItem,
    Node,
    Sequence,
    Space,
    Strikethrough,
    Text,
)
from casillas.visitor import BaseVisitor


class CheckboxMarker(Enum):
    """Checkbox state selected by the character between the brackets."""

    UNCHECKED = " "
    DONE = "x"
    IN_PROGRESS = "/"
    CANCELLED = "-"

    @property
    def glyph_name(self) -> str:
        """Glyph table key for this state (cancelled reuses the done glyph)."""
        return _GLYPH_NAMES[self]

    @property
    def struck(self) -> bool:
        return self is CheckboxMarker.CANCELLED


_GLYPH_NAMES = {
    CheckboxMarker.UNCHECKED: UNCHECKED,
    CheckboxMarker.DONE: DONE,
    CheckboxMarker.IN_PROGRESS: IN_PROGRESS,
    CheckboxMarker.CANCELLED: DONE,
}

_MARKERS_BY_CHAR = {marker.value: marker for marker in CheckboxMarker}


def literal(fragment: Inline) -> str | None:
    """The literal string a text-like fragment stands for.

    ``Text`` is its content and ``Space`` is a single space. Structured
    fragments have no literal value.
    """
    match fragment:
        case Text(content=content):
            return content
        case Space():
            return " "
        case _:
            return None


def _bracket_shape(body: ItemBody) -> tuple[Inline, ...] | None:
    """Fragments of a ``[`` ? ``]`` body, or None if the shape is wrong."""
    match body:
        case Sequence(children=fragments) if len(fragments) >= 3:
            if literal(fragments[0]) == "[" and literal(fragments[2]) == "]":
                return fragments
            return None
        case _:
            return None


def classify(body: ItemBody) -> CheckboxMarker | None:
    """Classify a list-item body; None means not a checkbox.

    Example:
        >>> from casillas.inline import parse_inline
        >>> from casillas.nodes import make_body
        >>> from casillas.location import SourceLocation
        >>> loc = SourceLocation.unknown()
        >>> classify(make_body(parse_inline("[/] Draft"), loc))
        <CheckboxMarker.IN_PROGRESS: '/'>
        >>> classify(make_body(parse_inline("[?] Draft"), loc)) is None
        True

    """
    fragments = _bracket_shape(body)
    if fragments is None:
        return None
    return _MARKERS_BY_CHAR.get(literal(fragments[1]) or "")


class CheckboxListRenderer:
    """List-item transform that renders checkbox markers as glyphs.

    Instances are callable, so one can be passed anywhere a
    ``ListItem -> ListItem`` transform is expected.

    Args:
        glyphs: Glyph table to draw symbols from (default emoji table)
        label: Label attached to rewritten items; defaults to the active
            RenderConfig's ``checkbox_label``
        spacing: Gap between glyph and label in em; defaults to the active
            RenderConfig's ``hspace_em``

    Raises:
        GlyphError: If the table cannot resolve every marker glyph

    """

    __slots__ = ("_symbols", "_label", "_spacing")

    def __init__(
        self,
        glyphs: GlyphTable | None = None,
        *,
        label: str | None = None,
        spacing: float | None = None,
    ) -> None:
        table = glyphs or GlyphTable()
        # Resolve up front so render() itself cannot fail
        self._symbols = table.require({m.glyph_name for m in CheckboxMarker})
        self._label = label
        self._spacing = spacing

    def render(self, item: ListItem) -> ListItem:
        """Rewrite a checkbox item; return any other item unchanged."""
        fragments = _bracket_shape(item.body)
        if fragments is None:
            return item
        marker = _MARKERS_BY_CHAR.get(literal(fragments[1]) or "")
        if marker is None:
            return item

        # fragments[3] separates marker and label; it is always dropped
        remaining = fragments[4:]
        if marker.struck and remaining:
            text: tuple[Inline, ...] = (
                Strikethrough(location=remaining[0].location, children=remaining),
            )
        else:
            text = remaining

        config = get_render_config()
        name = marker.glyph_name
        width = config.hspace_em if self._spacing is None else self._spacing
        body = Sequence(
            location=fragments[0].location,
            children=(
                Glyph(location=fragments[0].location, name=name, symbol=self._symbols[name]),
                HSpace(location=fragments[2].location, width=width),
                *text,
            ),
        )
        label = config.checkbox_label if self._label is None else self._label
        return dataclasses.replace(item, body=body, label=label)

    __call__ = render


_default_renderer: CheckboxListRenderer | None = None


def render_checkbox(item: ListItem) -> ListItem:
    """Render one item with the default glyph table."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = CheckboxListRenderer()
    return _default_renderer.render(item)


# =============================================================================
# Reporting
# =============================================================================


class _UnrecognizedMarkerCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.items: list[ListItem] = []

    def visit_list_item(self, node: ListItem) -> None:
        if _bracket_shape(node.body) is not None and classify(node.body) is None:
            self.items.append(node)


def find_unrecognized_markers(doc: Document | Node) -> list[ListItem]:
    """List items shaped like a checkbox whose marker is not recognised.

    ``- [?] Weird marker`` renders as plain text; use this to report such
    items (for example as lint warnings) since the transform stays silent.
    """
    collector = _UnrecognizedMarkerCollector()
    collector.visit(doc)
    return collector.items


__all__ = [
    "CheckboxListRenderer",
    "CheckboxMarker",
    "classify",
    "find_unrecognized_markers",
    "literal",
    "render_checkbox",
]
