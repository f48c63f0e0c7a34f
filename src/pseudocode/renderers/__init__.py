"""Pseudocode renderers.

Renderers convert typed parse-tree nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders the tree to HTML using the HtmlBuilder pattern

Thread Safety:
All renderers use a builder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from pseudocode.renderers.html import HtmlRenderer, RenderContext
from pseudocode.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "RenderContext"]
