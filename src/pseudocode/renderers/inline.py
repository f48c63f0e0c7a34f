"""Inline rendering mixin: text runs, font scopes, math and calls.

Font state follows LaTeX scoping:

- a brace group gets a fresh TextStyle seeded with the enclosing size,
  so font changes inside it never leak out
- a declaration (``\\bfseries``, ``\\small``) updates the current style and
  wraps every *following* sibling of the run in one styled span
- a command (``\\textbf``) styles only the brace group right after it

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from pseudocode.errors import RenderError
from pseudocode.nodes import (
    Call,
    CloseText,
    CondSymbol,
    FontCommand,
    FontDeclaration,
    Math,
    Ordinary,
    QuoteSymbol,
    SizeDeclaration,
    Special,
    TextSymbol,
)
from pseudocode.style import TextStyle

if TYPE_CHECKING:
    from pseudocode.nodes import Inline
    from pseudocode.renderers.html import RenderContext
    from pseudocode.stringbuilder import HtmlBuilder

LINE_BREAK = "\\\\"

QUOTES = {
    "`": "‘",
    "``": "“",
    "'": "’",
    "''": "”",
}

TEXT_SYMBOLS = {
    "textbackslash": "\\",
}


class InlineRenderingMixin:
    """Mixin rendering the children of open-text and close-text nodes.

    Required Host Methods:
        - _type_keyword(keyword, sb) -> None
        - _type_funcname(name, sb) -> None

    """

    _type_keyword: Callable[[str, HtmlBuilder], None]
    _type_funcname: Callable[[str, HtmlBuilder], None]

    def _render_text_run(
        self,
        nodes: Sequence[Inline],
        style: TextStyle,
        sb: HtmlBuilder,
        ctx: RenderContext,
    ) -> None:
        """Render a run of inline nodes under style.

        style is mutated by declarations; callers pass a fresh style unless
        changes are meant to persist (statement text and the global style).
        """
        i = 0
        count = len(nodes)
        while i < count:
            node = nodes[i]
            i += 1

            if getattr(node, "whitespace", False):
                sb.put_text(" ")

            match node:
                case Ordinary():
                    sb.put_text(node.value)
                case Math():
                    self._render_math(node.value, sb, ctx)
                case CondSymbol():
                    self._type_keyword(node.value, sb)
                case Special():
                    if node.value == LINE_BREAK:
                        sb.put_html("<br/>")
                    else:
                        sb.put_text(node.value[1:])
                case TextSymbol():
                    sb.put_text(TEXT_SYMBOLS[node.value])
                case QuoteSymbol():
                    sb.put_text(QUOTES[node.value])
                case Call():
                    self._type_funcname(node.name, sb)
                    sb.put_text("(")
                    self._render_group(node.args, style, sb, ctx)
                    sb.put_text(")")
                case CloseText():
                    self._render_group(node, style, sb, ctx)
                case FontDeclaration() | SizeDeclaration():
                    style.update_by_command(node.value)
                    sb.begin_span(None, style.to_css())
                    self._render_text_run(nodes[i:], style, sb, ctx)
                    sb.end_span()
                    return
                case FontCommand():
                    # Without a brace argument the command has nothing to style
                    if i < count and isinstance(nodes[i], CloseText):
                        argument = nodes[i]
                        i += 1
                        inner = TextStyle(style.font_size)
                        inner.update_by_command(node.value)
                        sb.begin_span(None, inner.to_css())
                        self._render_text_run(argument.children, inner, sb, ctx)
                        sb.end_span()
                case _:
                    kind = getattr(node, "kind", type(node).__name__)
                    raise RenderError(f"Unexpected parse-tree node of kind {kind!r} in text")

    def _render_group(
        self,
        text: CloseText,
        outer: TextStyle,
        sb: HtmlBuilder,
        ctx: RenderContext,
    ) -> None:
        """Render a brace group in its own style scope."""
        self._render_text_run(text.children, TextStyle(outer.font_size), sb, ctx)

    def _render_math(self, source: str, sb: HtmlBuilder, ctx: RenderContext) -> None:
        render_inline = ctx.inline_math
        if render_inline is None:
            sb.begin_span("ps-math").put_text(f"\\({source}\\)").end_span()
            return

        try:
            markup = render_inline(source)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Math rendering failed for {source!r}: {e}") from e
        sb.put_html(markup)
