"""ASTRenderer protocol: the interface both built-in renderers implement.

Example:
    from casillas.renderers.protocol import ASTRenderer

    def publish(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from casillas.nodes import Document


class ASTRenderer(Protocol):
    """Anything with ``render(Document) -> str``."""

    def render(self, node: Document) -> str:
        """Render a Document AST to a string."""
        ...
