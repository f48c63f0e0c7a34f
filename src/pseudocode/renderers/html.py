"""HTML renderer using the HtmlBuilder pattern.

Renders a typed parse tree to nested markup with three levels:

- groups (``<div class="ps-...">``): root, algorithm, algorithmic, block
- lines (``<p class="ps-line">``): one per statement or control header
- inline segments (``<span>``): keywords, function names, comments, math

At most one line is open at a time; opening a line or a group closes the
open line first. Leading comments of a construct's block are rendered on
the construct's header line rather than inside the block.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for
each render() call. Multiple threads can safely share a single HtmlRenderer
instance. The caption counter is the one shared collaborator and is
itself thread-safe.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pseudocode.config import CaptionCounter, RendererOptions
from pseudocode.errors import RenderError
from pseudocode.math import SimpleMathRenderer, inline_renderer, resolve_math_backend
from pseudocode.nodes import (
    Algorithm,
    Algorithmic,
    Block,
    Caption,
    CloseText,
    Command,
    Comment,
    Document,
    Function,
    If,
    Loop,
    OpenText,
    Repeat,
    Statement,
    Upon,
)
from pseudocode.renderers.inline import InlineRenderingMixin
from pseudocode.stringbuilder import HtmlBuilder
from pseudocode.style import TextStyle, format_em
from pseudocode.utils.logger import get_logger

if TYPE_CHECKING:
    from pseudocode.nodes import Node

logger = get_logger(__name__)

# Keyword shown before a statement's text
STATEMENT_LABELS = {
    "state": "",
    "require": "Require: ",
    "ensure": "Ensure: ",
    "input": "Input: ",
    "output": "Output: ",
    "print": "print ",
    "return": "return ",
}

LOOP_LABELS = {
    "for": "for",
    "forall": "for all",
    "while": "while",
}

# Extra indent of the outermost block, leaving room for line numbers
LINE_NUMBER_GUTTER = 0.6


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call.

    Attributes:
        counter: Caption counter for this render
        inline_math: Synchronous math renderer, or None to emit placeholders
        block_level: Current block nesting depth (0 = environment level)
        open_line: Whether a line is open
        line_count: Lines numbered so far in the current algorithmic
        global_style: Style shared by statement text across lines
    """

    counter: CaptionCounter
    inline_math: SimpleMathRenderer | None = None
    block_level: int = 0
    open_line: bool = False
    line_count: int = 0
    global_style: TextStyle = field(default_factory=TextStyle)


class HtmlRenderer(InlineRenderingMixin):
    """Render a parse tree to HTML.

    Usage:
        >>> from pseudocode.parser import Parser
        >>> doc = Parser("\\begin{algorithmic}\\STATE $x$\\end{algorithmic}").parse()
        >>> html = HtmlRenderer(RendererOptions(line_number=True)).render(doc)

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_options",)

    def __init__(self, options: RendererOptions | None = None) -> None:
        """Initialize renderer.

        Args:
            options: Presentation options; defaults to RendererOptions()
        """
        self._options = options if options is not None else RendererOptions()

    @property
    def options(self) -> RendererOptions:
        return self._options

    def render(self, node: Document) -> str:
        """Render a document to an HTML string.

        Args:
            node: Document root

        Returns:
            HTML string, leading and trailing whitespace trimmed

        Raises:
            RenderError: On a node the renderer does not know, an unknown
                style command, or a failing math backend.
        """
        options = self._options
        counter = options.counter
        saved = counter.value
        if options.caption_count is not None:
            counter.reset(options.caption_count)

        backend = resolve_math_backend(options.math_backend)
        ctx = RenderContext(counter=counter, inline_math=inline_renderer(backend))

        sb = HtmlBuilder()
        try:
            self._render_node(node, sb, ctx)
        except RenderError:
            # A failed render numbers nothing
            counter.reset(saved)
            raise
        html = sb.build()

        logger.debug(
            "Rendered %d environment(s) to %d characters",
            len(node.children),
            len(html),
        )
        return html

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render_node(self, node: Node, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Render any line-level or structural node."""
        match node:
            case Document():
                self._render_document(node, sb, ctx)
            case Algorithm():
                self._render_algorithm(node, sb, ctx)
            case Algorithmic():
                self._render_algorithmic(node, sb, ctx)
            case Caption():
                # Captions are rendered by their algorithm, numbered there
                raise RenderError("Caption outside of an algorithm environment")
            case Block():
                self._render_block(node, sb, ctx)
            case If():
                self._render_if(node, sb, ctx)
            case Loop():
                self._render_loop(node, sb, ctx)
            case Repeat():
                self._render_repeat(node, sb, ctx)
            case Upon():
                self._render_upon(node, sb, ctx)
            case Function():
                self._render_function(node, sb, ctx)
            case Statement():
                self._render_statement(node, sb, ctx)
            case Command():
                self._new_line(sb, ctx)
                self._type_keyword(node.name, sb)
            case Comment():
                self._render_comment(node, sb, ctx)
            case OpenText():
                self._render_text_run(node.children, ctx.global_style, sb, ctx)
            case CloseText():
                self._render_group(node, ctx.global_style, sb, ctx)
            case _:
                kind = getattr(node, "kind", type(node).__name__)
                raise RenderError(f"Unexpected parse-tree node of kind {kind!r}")

    # =========================================================================
    # Environments
    # =========================================================================

    def _render_document(self, doc: Document, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._begin_group("root", sb, ctx)
        for env in doc.children:
            ctx.global_style = TextStyle()
            self._render_node(env, sb, ctx)
        self._end_group(sb, ctx)

    def _render_algorithm(self, alg: Algorithm, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Render an algorithm; its last caption, if any, heads it."""
        caption = None
        for child in alg.children:
            if isinstance(child, Caption):
                caption = child

        if caption is not None:
            number = ctx.counter.next()
            self._begin_group("algorithm", sb, ctx, extra_class="with-caption")
            self._new_line(sb, ctx)
            self._type_keyword(f"{self._options.title_prefix} {number} ", sb)
            self._render_node(caption.text, sb, ctx)
        else:
            self._begin_group("algorithm", sb, ctx)

        for child in alg.children:
            if not isinstance(child, Caption):
                self._render_node(child, sb, ctx)
        self._end_group(sb, ctx)

    def _render_algorithmic(self, env: Algorithmic, sb: HtmlBuilder, ctx: RenderContext) -> None:
        ctx.line_count = 0
        extra = "with-linenum" if self._options.line_number else None
        self._begin_group("algorithmic", sb, ctx, extra_class=extra)
        for child in env.children:
            self._render_node(child, sb, ctx)
        self._end_group(sb, ctx)

    # =========================================================================
    # Blocks and control structures
    # =========================================================================

    def _render_block(
        self, block: Block, sb: HtmlBuilder, ctx: RenderContext, start: int = 0
    ) -> None:
        """Render block items from index start one level deeper."""
        options = self._options
        indent = options.indent_size
        if options.line_number and ctx.block_level == 0:
            indent += LINE_NUMBER_GUTTER

        self._begin_group("block", sb, ctx, style=f"margin-left:{format_em(indent)}em;")
        ctx.block_level += 1
        for item in block.children[start:]:
            self._render_node(item, sb, ctx)
        self._end_group(sb, ctx)
        ctx.block_level -= 1

    def _render_body(self, block: Block, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Render a construct's block, hoisting its leading comments.

        Leading comments go on the header line, which is still open.
        """
        start = 0
        for item in block.children:
            if not isinstance(item, Comment):
                break
            self._render_comment(item, sb, ctx)
            start += 1
        self._render_block(block, sb, ctx, start)

    def _render_if(self, node: If, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        self._type_keyword("if ", sb)
        self._render_node(node.condition, sb, ctx)
        self._type_keyword(" then", sb)
        self._render_body(node.then_block, sb, ctx)

        for condition, block in node.elif_branches:
            self._new_line(sb, ctx)
            self._type_keyword("else if ", sb)
            self._render_node(condition, sb, ctx)
            self._type_keyword(" then", sb)
            self._render_body(block, sb, ctx)

        else_block = node.else_block
        if else_block is not None:
            self._new_line(sb, ctx)
            self._type_keyword("else", sb)
            self._render_body(else_block, sb, ctx)

        self._end_line("end if", sb, ctx)

    def _render_loop(self, node: Loop, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        self._type_keyword(f"{LOOP_LABELS[node.keyword]} ", sb)
        self._render_node(node.condition, sb, ctx)
        self._type_keyword(" do", sb)
        self._render_body(node.body, sb, ctx)
        self._end_line("end while" if node.keyword == "while" else "end for", sb, ctx)

    def _render_repeat(self, node: Repeat, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        self._type_keyword("repeat", sb)
        self._render_body(node.body, sb, ctx)
        # until closes the loop, so it is shown even with no_end
        self._new_line(sb, ctx)
        self._type_keyword("until ", sb)
        self._render_node(node.condition, sb, ctx)

    def _render_upon(self, node: Upon, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        self._type_keyword("upon ", sb)
        self._render_node(node.condition, sb, ctx)
        self._render_body(node.body, sb, ctx)
        self._end_line("end upon", sb, ctx)

    def _render_function(self, node: Function, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        self._type_keyword(f"{node.keyword} ", sb)
        self._type_funcname(node.name, sb)
        sb.put_text("(")
        self._render_node(node.params, sb, ctx)
        sb.put_text(")")
        self._render_body(node.body, sb, ctx)
        self._end_line(f"end {node.keyword}", sb, ctx)

    # =========================================================================
    # Lines
    # =========================================================================

    def _render_statement(self, node: Statement, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._new_line(sb, ctx)
        label = STATEMENT_LABELS.get(node.name, "")
        if label:
            self._type_keyword(label, sb)
        self._render_node(node.text, sb, ctx)

    def _render_comment(self, node: Comment, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Append a comment to the open line, or to a new line if none is open."""
        if not ctx.open_line:
            self._new_line(sb, ctx)
        sb.begin_span("ps-comment")
        sb.put_text(self._options.comment_delimiter)
        self._render_node(node.text, sb, ctx)
        sb.end_span()

    def _end_line(self, keyword: str, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Emit an "end ..." line unless end lines are suppressed."""
        if not self._options.no_end:
            self._new_line(sb, ctx)
            self._type_keyword(keyword, sb)

    def _new_line(self, sb: HtmlBuilder, ctx: RenderContext) -> None:
        """Close any open line and open a new one.

        Lines inside blocks are code lines and get numbered; lines at
        environment level hang-indent instead.
        """
        self._close_line(sb, ctx)
        ctx.open_line = True

        style = ctx.global_style
        style.outer_font_size = 1.0
        options = self._options
        indent = options.indent_size

        if ctx.block_level > 0:
            ctx.line_count += 1
            sb.begin_p("ps-line ps-code", style.to_css())
            if options.line_number:
                left = format_em(-((ctx.block_level - 1) * indent * 1.25))
                sb.begin_span("ps-linenum", f"left:{left}em;")
                sb.put_text(f"{ctx.line_count}{options.line_number_punc}")
                sb.end_span()
        else:
            hanging = (
                f"text-indent:{format_em(-indent)}em;"
                f"padding-left:{format_em(indent)}em;"
            )
            sb.begin_p("ps-line", hanging + style.to_css())

    def _close_line(self, sb: HtmlBuilder, ctx: RenderContext) -> None:
        if ctx.open_line:
            sb.end_p()
            ctx.open_line = False

    # =========================================================================
    # Groups and segments
    # =========================================================================

    def _begin_group(
        self,
        name: str,
        sb: HtmlBuilder,
        ctx: RenderContext,
        extra_class: str | None = None,
        style: str | None = None,
    ) -> None:
        self._close_line(sb, ctx)
        class_name = f"ps-{name} {extra_class}" if extra_class else f"ps-{name}"
        sb.begin_div(class_name, style)

    def _end_group(self, sb: HtmlBuilder, ctx: RenderContext) -> None:
        self._close_line(sb, ctx)
        sb.end_div()

    def _type_keyword(self, keyword: str, sb: HtmlBuilder) -> None:
        sb.begin_span("ps-keyword").put_text(keyword).end_span()

    def _type_funcname(self, name: str, sb: HtmlBuilder) -> None:
        sb.begin_span("ps-funcname").put_text(name).end_span()
