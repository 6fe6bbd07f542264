"""Plain-text renderer for terminals and plain-text mail.

Keeps the document's shape with Markdown-like markers but no markup:
headings keep their ``#`` prefix, lists use ``-``/``N.`` with two spaces of
indent per level, glyphs are printed as-is, fixed spaces become an EN SPACE
(U+2002, half an em) and struck text gets a combining long stroke overlay
(U+0336) on every character.

Example:
    >>> from casillas import Markdown
    >>> md = Markdown()
    >>> md.render_text(md.parse("- [x] Buy milk")) == "- ☑️\u2002Buy milk\n"
    True
"""

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

EN_SPACE = "\u2002"
EM_SPACE = "\u2003"
LONG_STROKE = "\u0336"
INDENT = "  "


def strike(text: str) -> str:
    """Overlay a long stroke on every character.

    >>> strike("ab")
    'a̶b̶'
    """
    return "".join(ch + LONG_STROKE for ch in text)


def _fixed_space(width: float) -> str:
    """Approximate ``width`` em with em and en spaces (at least one en space)."""
    ems = int(width)
    halves = round((width - ems) * 2)
    return (EM_SPACE * ems + EN_SPACE * halves) or EN_SPACE


class TextRenderer:
    """Render AST to plain text."""

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config

    def render(self, node: Document) -> str:
        """Render document to plain text, ending in a single newline."""
        sb = StringBuilder()
        for child in node.children:
            self._render_block(child, sb, depth=0)
        if not sb:
            return ""
        return sb.build().rstrip("\n") + "\n"

    def _render_block(self, block: Block, sb: StringBuilder, depth: int) -> None:
        match block:
            case Document():
                for child in block.children:
                    self._render_block(child, sb, depth)
            case Heading():
                sb.append("#" * block.level + " ")
                sb.append(self._inline_text(block.children))
                sb.append("\n\n")
            case Paragraph():
                sb.append(INDENT * depth)
                sb.append(self._inline_text(block.children))
                sb.append("\n\n" if depth == 0 else "\n")
            case FencedCode():
                config = self._config or get_render_config()
                lang = block.language or config.default_code_language or ""
                pad = INDENT * depth
                sb.append(f"{pad}```{lang}\n")
                for line in block.code.splitlines():
                    sb.append(pad).append(line).append("\n")
                sb.append(f"{pad}```\n")
                if depth == 0:
                    sb.append("\n")
            case List():
                for i, item in enumerate(block.items):
                    prefix = f"{block.start + i}. " if block.ordered else "- "
                    self._render_list_item(item, prefix, sb, depth)
                if depth == 0:
                    sb.append("\n")
            case ListItem():
                self._render_list_item(block, "- ", sb, depth)
            case ThematicBreak():
                sb.append("---\n\n")
            case _:
                raise RenderError(f"Cannot render block node {type(block).__name__}")

    def _render_list_item(
        self, item: ListItem, prefix: str, sb: StringBuilder, depth: int
    ) -> None:
        sb.append(INDENT * depth).append(prefix)
        sb.append(self._inline_text(body_fragments(item.body)))
        sb.append("\n")
        for child in item.children:
            self._render_block(child, sb, depth + 1)

    def _inline_text(self, inlines: tuple[Inline, ...]) -> str:
        parts: list[str] = []
        for inline in inlines:
            match inline:
                case Text():
                    parts.append(inline.content)
                case Space():
                    parts.append(" ")
                case SoftBreak():
                    parts.append(" ")
                case Emphasis() | Strong():
                    parts.append(self._inline_text(inline.children))
                case Strikethrough():
                    parts.append(strike(self._inline_text(inline.children)))
                case CodeSpan():
                    parts.append(f"`{inline.code}`")
                case Glyph():
                    parts.append(inline.symbol)
                case HSpace():
                    parts.append(_fixed_space(inline.width))
                case _:
                    raise RenderError(f"Cannot render inline node {type(inline).__name__}")
        return "".join(parts)
