"""Typed AST nodes for casillas.

All AST nodes are frozen dataclasses with slots, so transforms build new
trees instead of mutating the parsed one, and ``match`` statements work
naturally on every node type.

Node Hierarchy:
Node (base)
├── Block
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── FencedCode
│   ├── List
│   ├── ListItem
│   └── ThematicBreak
├── Sequence (list-item body of two or more fragments)
└── Inline (fragments)
    ├── Text
    ├── Space
    ├── SoftBreak
    ├── CodeSpan
    ├── Emphasis
    ├── Strong
    ├── Strikethrough
    ├── Glyph
    └── HSpace

List items keep their leading inline content in ``body``, typed as the
``ItemBody`` union: ``None`` for an empty item, a bare ``Inline`` when the
item holds exactly one fragment, and ``Sequence`` otherwise.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from casillas.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    location: SourceLocation


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text run.

    Brackets are always split into their own ``Text`` fragment by the
    inline parser, so ``[x] Buy`` yields ``[``, ``x``, ``]``, space, ``Buy``.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Space(Node):
    """A run of inline whitespace, collapsed to a single space."""



@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline inside a paragraph)."""



@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Struck-through text.

    Markdown: ~~deleted~~
    HTML: <del>deleted</del>

    Also produced by the checkbox transform for cancelled items.

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Glyph(Node):
    """A named symbol from a glyph table.

    ``name`` is the lookup key (``"done"``), ``symbol`` the resolved
    character(s) that end up in the output.

    """

    name: str
    symbol: str


@dataclass(frozen=True, slots=True)
class HSpace(Node):
    """Fixed horizontal space, measured in em."""

    width: float


# PEP 695 type alias for inline elements
type Inline = (
    Text
    | Space
    | SoftBreak
    | CodeSpan
    | Emphasis
    | Strong
    | Strikethrough
    | Glyph
    | HSpace
)


@dataclass(frozen=True, slots=True)
class Sequence(Node):
    """Ordered run of two or more inline fragments.

    Only used as a list-item body; paragraphs and headings hold their
    fragments directly.

    """

    children: tuple[Inline, ...]


type ItemBody = Sequence | Inline | None


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: # Heading
    HTML: <h1>Heading</h1>

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    Markdown: Text separated by blank lines
    HTML: <p>text</p>

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    ``info`` is the raw info string after the opening fence; its first word
    is the language label.

    """

    code: str
    info: str | None = None
    marker: Literal["`", "~"] = "`"

    @property
    def language(self) -> str | None:
        if not self.info:
            return None
        return self.info.split()[0]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item.

    Markdown: - item or 1. item
    HTML: <li>item</li>

    ``body`` holds the item's own inline content; nested lists and any other
    blocks belonging to the item live in ``children``. ``label`` tags items
    produced by list-item transforms (``None`` for parsed items).

    """

    body: ItemBody
    children: tuple[Block, ...] = ()
    label: str | None = None


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    Markdown: - item or 1. item
    HTML: <ul>/<ol> with <li> children

    """

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int = 1
    tight: bool = True


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule).

    Markdown: --- or *** or ___
    HTML: <hr />

    """



@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node."""

    children: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = (
    Document
    | Heading
    | Paragraph
    | FencedCode
    | List
    | ListItem
    | ThematicBreak
)


def body_fragments(body: ItemBody) -> tuple[Inline, ...]:
    """Flatten an ItemBody into its fragments.

    >>> body_fragments(None)
    ()
    """
    match body:
        case None:
            return ()
        case Sequence(children=children):
            return children
        case _:
            return (body,)


def make_body(fragments: tuple[Inline, ...], location: SourceLocation) -> ItemBody:
    """Wrap fragments in the narrowest ItemBody variant."""
    if not fragments:
        return None
    if len(fragments) == 1:
        return fragments[0]
    return Sequence(location=location, children=fragments)
