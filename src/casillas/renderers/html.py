"""HTML renderer using StringBuilder pattern.

Renders the typed AST to HTML in a single walk.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance.

Heading ids are generated during the walk and collected for a table of
contents; see ``get_headings()``.
"""

import html
from dataclasses import dataclass, field

from casillas.config import RenderConfig, get_render_config
from casillas.errors import RenderError
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
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Space,
    Strikethrough,
    Strong,
    Text,
    ThematicBreak,
    body_fragments,
)
from casillas.stringbuilder import StringBuilder
from casillas.utils.logger import get_logger
from casillas.utils.text import slugify

logger = get_logger(__name__)


def html_escape(s: str) -> str:
    """Escape <, >, & and double quotes (single quotes are left alone)."""
    return html.escape(s, quote=False).replace('"', "&quot;")


def _format_em(width: float) -> str:
    """``0.5`` → ``0.5em``, ``1.0`` → ``1em``."""
    return f"{width:g}em"


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    """Heading metadata collected during rendering."""

    level: int
    text: str
    slug: str


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state, created fresh for each render() call."""

    headings: list[HeadingInfo] = field(default_factory=list)
    seen_slugs: set[str] = field(default_factory=set)


class HtmlRenderer:
    """Render AST to HTML.

    Usage:
        >>> from casillas import parse
        >>> HtmlRenderer().render(parse("# Todo"))
        '<h1 id="todo">Todo</h1>\\n'

    Args:
        config: Render configuration; defaults to the active context's config
            at render time

    """

    __slots__ = ("_config", "_last_context")

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config
        self._last_context: RenderContext | None = None

    def render(self, node: Document) -> str:
        """Render document AST to an HTML string.

        Raises:
            RenderError: If the tree contains a node type with no HTML form
        """
        ctx = RenderContext()
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb, ctx)
        self._last_context = ctx
        return sb.build()

    def get_headings(self) -> list[HeadingInfo]:
        """Heading info collected during the last render() call."""
        if self._last_context is None:
            return []
        return self._last_context.headings.copy()

    @property
    def config(self) -> RenderConfig:
        return self._config or get_render_config()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Block, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render a block node."""
        match block:
            case Heading():
                self._render_heading(block, sb, ctx)
            case Paragraph():
                sb.append("<p>")
                self._render_inlines(block.children, sb)
                sb.append("</p>\n")
            case FencedCode():
                self._render_fenced_code(block, sb)
            case List():
                self._render_list(block, sb, ctx)
            case ListItem():
                # Normally rendered by its list; handle standalone items too
                self._render_list_item(block, sb, ctx, tight=True)
            case ThematicBreak():
                sb.append("<hr />\n")
            case Document():
                for child in block.children:
                    self._render_block(child, sb, ctx)
            case _:
                raise RenderError(f"Cannot render block node {type(block).__name__}")

    def _render_heading(self, heading: Heading, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render heading with a unique id for anchoring."""
        text = extract_text(heading.children)
        slug = slugify(text)
        if not slug:
            logger.debug("Heading at %s has no slug text; using 'section'", heading.location)
            slug = "section"

        original_slug = slug
        counter = 1
        while slug in ctx.seen_slugs:
            slug = f"{original_slug}-{counter}"
            counter += 1
        ctx.seen_slugs.add(slug)
        ctx.headings.append(HeadingInfo(level=heading.level, text=text, slug=slug))

        sb.append(f'<h{heading.level} id="{html_escape(slug)}">')
        self._render_inlines(heading.children, sb)
        sb.append(f"</h{heading.level}>\n")

    def _render_fenced_code(self, code: FencedCode, sb: StringBuilder) -> None:
        """Render fenced code, labelled with its language or the default one."""
        lang = code.language or self.config.default_code_language
        lang_class = f' class="language-{html_escape(lang)}"' if lang else ""
        sb.append(f"<pre><code{lang_class}>")
        sb.append(html_escape(code.code))
        sb.append("</code></pre>\n")

    def _render_list(self, lst: List, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render ordered or unordered list."""
        if lst.ordered:
            start_attr = f' start="{lst.start}"' if lst.start != 1 else ""
            sb.append(f"<ol{start_attr}>\n")
        else:
            sb.append("<ul>\n")

        for item in lst.items:
            self._render_list_item(item, sb, ctx, lst.tight)

        sb.append("</ol>\n" if lst.ordered else "</ul>\n")

    def _render_list_item(
        self, item: ListItem, sb: StringBuilder, ctx: RenderContext, tight: bool
    ) -> None:
        """Render list item.

        Tight lists render the body inline; loose lists wrap it in <p>.
        Nested blocks follow on their own lines.
        """
        if item.label:
            sb.append(f'<li data-label="{html_escape(item.label)}">')
        else:
            sb.append("<li>")

        fragments = body_fragments(item.body)
        if fragments:
            if not tight:
                sb.append("\n<p>")
            self._render_inlines(fragments, sb)
            if not tight:
                sb.append("</p>")

        if item.children:
            sb.append("\n")
            for child in item.children:
                self._render_block(child, sb, ctx)
        elif not tight and fragments:
            sb.append("\n")

        sb.append("</li>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(self, inlines: tuple[Inline, ...], sb: StringBuilder) -> None:
        for inline in inlines:
            self._render_inline(inline, sb)

    def _render_inline(self, inline: Inline, sb: StringBuilder) -> None:
        """Render an inline node."""
        match inline:
            case Text():
                sb.append(html_escape(inline.content))
            case Space():
                sb.append(" ")
            case SoftBreak():
                sb.append("\n")
            case Emphasis():
                sb.append("<em>")
                self._render_inlines(inline.children, sb)
                sb.append("</em>")
            case Strong():
                sb.append("<strong>")
                self._render_inlines(inline.children, sb)
                sb.append("</strong>")
            case Strikethrough():
                sb.append("<del>")
                self._render_inlines(inline.children, sb)
                sb.append("</del>")
            case CodeSpan():
                lang = inline.language or self.config.default_code_language
                lang_class = f' class="language-{html_escape(lang)}"' if lang else ""
                sb.append(f"<code{lang_class}>")
                sb.append(html_escape(inline.code))
                sb.append("</code>")
            case Glyph():
                sb.append(f'<span class="glyph glyph-{html_escape(inline.name)}">')
                sb.append(html_escape(inline.symbol))
                sb.append("</span>")
            case HSpace():
                sb.append(
                    '<span class="hspace" style="display: inline-block; '
                    f'width: {_format_em(inline.width)}"></span>'
                )
            case _:
                raise RenderError(f"Cannot render inline node {type(inline).__name__}")


def extract_text(inlines: tuple[Inline, ...]) -> str:
    """Plain text of inline nodes (glyphs and fixed spaces are skipped)."""
    parts: list[str] = []
    for inline in inlines:
        match inline:
            case Text():
                parts.append(inline.content)
            case Space() | SoftBreak():
                parts.append(" ")
            case Emphasis() | Strong() | Strikethrough():
                parts.append(extract_text(inline.children))
            case CodeSpan():
                parts.append(inline.code)
            case _:
                pass
    return "".join(parts)
