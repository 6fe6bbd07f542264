"""
casillas: Markdown with checkbox list items rendered as glyphs

Parses Markdown into a typed, immutable AST, runs an injectable transform
over every list item, and renders HTML or plain text. The default transform
turns checkbox items into glyph markers:

    - [ ] unchecked      ⬜
    - [x] done           ☑️
    - [/] in progress    ⏳
    - [-] cancelled      ☑️ with the label struck through

Quick Start:
    >>> from casillas import Markdown
    >>> md = Markdown()
    >>> html = md("## Errands\\n\\n- [x] Buy milk\\n- [ ] Call the plumber")

    >>> # Plain Markdown lists, no item rewriting
    >>> plain = Markdown(list_item_transform=None)

    >>> # Custom glyphs
    >>> from casillas import CheckboxListRenderer, GlyphTable
    >>> ascii_boxes = GlyphTable({"unchecked": "[ ]", "done": "[x]", "in-progress": "[~]"})
    >>> md = Markdown(list_item_transform=CheckboxListRenderer(ascii_boxes))
"""

from casillas.checkbox import (
    CheckboxListRenderer,
    CheckboxMarker,
    classify,
    find_unrecognized_markers,
    render_checkbox,
)
from casillas.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from casillas.errors import CasillasError, GlyphError, ParseError, RenderError
from casillas.glyphs import GlyphTable, set_glyph_resolver
from casillas.location import SourceLocation
from casillas.nodes import (
    Block,
    CodeSpan,
    Document,
    Emphasis,
    FencedCode,
    Glyph,
    Heading,
    HSpace,
    Inline,
    ItemBody,
    List,
    ListItem,
    Paragraph,
    Sequence,
    SoftBreak,
    Space,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
)
from casillas.parser import Parser
from casillas.renderers.html import HtmlRenderer
from casillas.renderers.protocol import ASTRenderer
from casillas.renderers.text import TextRenderer
from casillas.visitor import BaseVisitor, ListItemTransform, transform, transform_list_items

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse Markdown source into a typed AST (no list-item transform applied).

    Args:
        source: Markdown source text
        source_file: Optional source file path for locations and errors

    Example:
        >>> doc = parse("# Todo")
        >>> doc.children[0].level
        1
    """
    return Parser(source, source_file=source_file).parse_document()


def render(
    doc: Document,
    *,
    list_item_transform: ListItemTransform | None = render_checkbox,
    config: RenderConfig | None = None,
) -> str:
    """Apply the list-item transform and render the document to HTML."""
    return Markdown(list_item_transform=list_item_transform, config=config).render(doc)


def render_text(
    doc: Document,
    *,
    list_item_transform: ListItemTransform | None = render_checkbox,
    config: RenderConfig | None = None,
) -> str:
    """Apply the list-item transform and render the document to plain text."""
    return Markdown(list_item_transform=list_item_transform, config=config).render_text(doc)


class Markdown:
    """Parse → list-item transform → render pipeline.

    The list-item transform is injected per instance; nothing is registered
    globally. It receives every list item of the document, nested ones
    included, and returns the item to render in its place.

    Usage:
        >>> md = Markdown()
        >>> md("- [/] Draft the report")  # doctest: +ELLIPSIS
        '<ul>\\n<li data-label="checkbox"><span class="glyph glyph-in-progress">⏳</span>...'

        >>> md = Markdown(config=RenderConfig(default_code_language="python"))
        >>> md("```\\nprint(1)\\n```")
        '<pre><code class="language-python">print(1)\\n</code></pre>\\n'

    Thread Safety:
        Instances hold only immutable state. The config is set via ContextVar
        for the duration of each call.

    """

    __slots__ = ("_config", "_list_item_transform")

    def __init__(
        self,
        *,
        list_item_transform: ListItemTransform | None = render_checkbox,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            list_item_transform: Function applied to every list item, or None
                to render lists as parsed
            config: Render configuration (defaults to RenderConfig())
        """
        self._list_item_transform = list_item_transform
        self._config = config or RenderConfig()

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, source: str, *, source_file: str | None = None) -> str:
        """Parse and render Markdown to HTML in one call."""
        return self.render(self.parse(source, source_file=source_file))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Markdown source into an AST (transform not yet applied)."""
        return parse(source, source_file=source_file)

    def apply(self, doc: Document) -> Document:
        """Run the list-item transform over a document."""
        if self._list_item_transform is None:
            return doc
        with render_config_context(self._config):
            return transform_list_items(doc, self._list_item_transform)

    def render(self, doc: Document) -> str:
        """Transform and render a document to HTML."""
        transformed = self.apply(doc)
        with render_config_context(self._config):
            return HtmlRenderer().render(transformed)

    def render_text(self, doc: Document) -> str:
        """Transform and render a document to plain text."""
        transformed = self.apply(doc)
        with render_config_context(self._config):
            return TextRenderer().render(transformed)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "render_text",
    "Markdown",
    # Checkbox items
    "CheckboxListRenderer",
    "CheckboxMarker",
    "classify",
    "find_unrecognized_markers",
    "render_checkbox",
    # Glyphs
    "GlyphTable",
    "set_glyph_resolver",
    # Block nodes
    "Block",
    "Document",
    "FencedCode",
    "Heading",
    "List",
    "ListItem",
    "Paragraph",
    "ThematicBreak",
    # Inline nodes
    "Inline",
    "ItemBody",
    "CodeSpan",
    "Emphasis",
    "Glyph",
    "HSpace",
    "Sequence",
    "SoftBreak",
    "Space",
    "Strikethrough",
    "Strong",
    "Text",
    # Parser
    "Parser",
    # Renderers
    "ASTRenderer",
    "HtmlRenderer",
    "TextRenderer",
    # Visitor + transforms
    "BaseVisitor",
    "ListItemTransform",
    "transform",
    "transform_list_items",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "CasillasError",
    "GlyphError",
    "ParseError",
    "RenderError",
    # Location
    "SourceLocation",
]
