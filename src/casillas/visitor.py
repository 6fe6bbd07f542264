"""AST visitor and transforms for casillas.

Provides a base visitor class with match-based dispatch and immutable
transform functions for rewriting frozen ASTs.

Example, collecting all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

Example, rewriting every list item:

    new_doc = transform_list_items(doc, CheckboxListRenderer())

Thread Safety:
    Visitors may accumulate state; create one per thread. The transform
    functions are pure.

"""

import dataclasses
from collections.abc import Callable

from casillas.nodes import (
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Glyph,
    Heading,
    HSpace,
    List,
    ListItem,
    Node,
    Paragraph,
    Sequence,
    SoftBreak,
    Space,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from casillas.utils.logger import get_logger

logger = get_logger(__name__)

type ListItemTransform = Callable[[ListItem], ListItem]


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call; for list items that
    means the body first, then nested blocks.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_fenced_code(self, node: FencedCode) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_thematic_break(self, node: ThematicBreak) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_sequence(self, node: Sequence) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_space(self, node: Space) -> T:
        return self.visit_default(node)

    def visit_soft_break(self, node: SoftBreak) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: Strikethrough) -> T:
        return self.visit_default(node)

    def visit_glyph(self, node: Glyph) -> T:
        return self.visit_default(node)

    def visit_hspace(self, node: HSpace) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case FencedCode():
                return self.visit_fenced_code(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case ThematicBreak():
                return self.visit_thematic_break(node)
            case Sequence():
                return self.visit_sequence(node)
            case Text():
                return self.visit_text(node)
            case Space():
                return self.visit_space(node)
            case SoftBreak():
                return self.visit_soft_break(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case Strikethrough():
                return self.visit_strikethrough(node)
            case Glyph():
                return self.visit_glyph(node)
            case HSpace():
                return self.visit_hspace(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        match node:
            case ListItem(body=body, children=children):
                if body is not None:
                    self.visit(body)
                for child in children:
                    self.visit(child)
            case List(items=items):
                for item in items:
                    self.visit(item)
            case (
                Document(children=children)
                | Heading(children=children)
                | Paragraph(children=children)
                | Sequence(children=children)
                | Emphasis(children=children)
                | Strong(children=children)
                | Strikethrough(children=children)
            ):
                for child in children:
                    self.visit(child)
            case _:
                pass  # Leaf nodes: no children


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, returning a new tree.

    ``fn`` is called bottom-up: children are transformed first, then the
    parent with its new children. Return ``None`` from ``fn`` to remove a
    node. The root Document cannot be removed; returning None for it raises
    TypeError. The original tree is untouched.

    A list item's body is transformed as a unit: removing it leaves the item
    with an empty (``None``) body.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def transform_list_items(doc: Document, fn: ListItemTransform) -> Document:
    """Apply a ``ListItem -> ListItem`` function to every list item.

    Nested items are rewritten before the item that contains them. Each
    call sees exactly one item; items never influence each other.

    Example:
        >>> from casillas import parse
        >>> from casillas.checkbox import render_checkbox
        >>> doc = transform_list_items(parse("- [x] Buy milk"), render_checkbox)
        >>> doc.children[0].items[0].label
        'checkbox'

    """
    rewritten = 0

    def _apply(node: Node) -> Node:
        nonlocal rewritten
        if isinstance(node, ListItem):
            result = fn(node)
            if result is not node:
                rewritten += 1
            return result
        return node

    new_doc = transform(doc, _apply)
    logger.debug("List-item transform %r rewrote %d item(s)", fn, rewritten)
    return new_doc


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed; filter out removed nodes."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case ListItem(body=body, children=children):
            new_body = _transform_node(body, fn) if body is not None else None
            new_children = _filtered(children)
            if new_body is not body or new_children != children:
                return dataclasses.replace(node, body=new_body, children=new_children)
        case List(items=items):
            new_items = _filtered(items)
            if new_items != items:
                return dataclasses.replace(node, items=new_items)
        case (
            Document(children=children)
            | Heading(children=children)
            | Paragraph(children=children)
            | Sequence(children=children)
            | Emphasis(children=children)
            | Strong(children=children)
            | Strikethrough(children=children)
        ):
            new_children = _filtered(children)
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case _:
            pass  # Leaf nodes: return as-is

    return node
