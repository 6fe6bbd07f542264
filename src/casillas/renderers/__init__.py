"""casillas renderers.

- HtmlRenderer: AST to HTML
- TextRenderer: AST to plain text

Thread Safety:
All renderers keep per-render state local to each render() call.

"""

from casillas.renderers.html import HtmlRenderer
from casillas.renderers.protocol import ASTRenderer
from casillas.renderers.text import TextRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "TextRenderer"]
