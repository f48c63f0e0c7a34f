"""
pseudocode: typeset LaTeX algorithmic pseudocode as HTML.

Parses the ``algorithm``/``algorithmic`` environments of LaTeX's
algorithmicx style into a typed parse tree and renders it to HTML that
looks like the typeset original.

Quick Start:
    >>> from pseudocode import render_to_string
    >>> html = render_to_string(r'''
    ... \\begin{algorithmic}
    ... \\IF{$p < r$}
    ...     \\STATE $q = $ \\CALL{Partition}{$A, p, r$}
    ... \\ENDIF
    ... \\end{algorithmic}
    ... ''')

    >>> # Or use the high-level Pseudocode class
    >>> from pseudocode import Pseudocode
    >>> pc = Pseudocode(line_number=True, no_end=True)
    >>> html = pc(source)

Math:
    Math spans render to MathML with latex2mathml by default. See
    pseudocode.math to plug in another backend (including deferred,
    client-side typesetters such as MathJax).

"""

from typing import Any
from xml.etree.ElementTree import Element, fromstring

from pseudocode.config import (
    GLOBAL_CAPTION_COUNTER,
    CaptionCounter,
    RendererOptions,
    coerce_options,
)
from pseudocode.errors import ConfigError, ParseError, PseudocodeError, RenderError
from pseudocode.lexer import Lexer
from pseudocode.location import SourceLocation
from pseudocode.math import (
    InlineMathRenderer,
    MathJaxBackend,
    MathMLBackend,
    MathTypesetter,
    get_math_backend,
    inline_renderer,
    resolve_math_backend,
    set_math_backend,
    typesetter,
    warn_if_deferred,
)
from pseudocode.nodes import (
    Algorithm,
    Algorithmic,
    Block,
    Call,
    Caption,
    CloseText,
    Command,
    Comment,
    Document,
    Function,
    If,
    Inline,
    Leaf,
    Loop,
    Node,
    OpenText,
    Repeat,
    Statement,
    Upon,
)
from pseudocode.parser import Parser
from pseudocode.renderers.html import HtmlRenderer
from pseudocode.renderers.protocol import ASTRenderer
from pseudocode.serialization import dump, from_dict, from_json, to_dict, to_json
from pseudocode.tokens import Token, TokenType
from pseudocode.visitor import BaseVisitor, transform

__version__ = "0.1.0"

type Options = RendererOptions | dict[str, Any] | None


def _require_source(source: str | None) -> str:
    if source is None:
        raise ValueError("input cannot be empty")
    return source


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse pseudocode source into a typed parse tree.

    Args:
        source: LaTeX source with algorithm/algorithmic environments
        source_file: Optional source file path for error messages

    Returns:
        Document root node

    Raises:
        ValueError: If source is None.
        ParseError: On a lexical or syntax error.

    Example:
        >>> doc = parse("\\\\begin{algorithmic}\\\\STATE x\\\\end{algorithmic}")
        >>> doc.children[0].kind
        'algorithmic'
    """
    return Parser(_require_source(source), source_file).parse()


def render_to_string(source: str, options: Options = None, **overrides: Any) -> str:
    """Parse and render pseudocode to an HTML string.

    Args:
        source: LaTeX source with algorithm/algorithmic environments
        options: RendererOptions, a dict of options (snake_case or
            camelCase keys), or None for defaults
        **overrides: Individual options applied on top of options

    Returns:
        HTML markup, leading and trailing whitespace trimmed

    Raises:
        ValueError: If source is None.
        ConfigError: On a malformed option, before parsing.
        ParseError: On a lexical or syntax error.
        RenderError: On a failing math backend.

    Example:
        >>> render_to_string(src, line_number=True, caption_count=0)
    """
    source = _require_source(source)
    resolved = coerce_options(options, overrides)

    doc = Parser(source).parse()
    warn_if_deferred(resolve_math_backend(resolved.math_backend))
    return HtmlRenderer(resolved).render(doc)


def render(
    source: str,
    options: Options = None,
    *,
    container: Element | None = None,
    **overrides: Any,
) -> Element:
    """Parse and render pseudocode to an ElementTree element.

    Same pipeline as render_to_string; the markup is then materialized as
    an Element. With a deferred math backend, its schedule_typeset() is
    called once on the finished (and attached) element.

    Args:
        source: LaTeX source with algorithm/algorithmic environments
        options: RendererOptions, a dict of options, or None for defaults
        container: Optional element to append the result to
        **overrides: Individual options applied on top of options

    Returns:
        The ``div.ps-root`` element

    Raises:
        ValueError: If source is None.
        ConfigError: On a malformed option, before parsing.
        ParseError: On a lexical or syntax error.
        RenderError: On a failing math backend.
    """
    source = _require_source(source)
    resolved = coerce_options(options, overrides)

    doc = Parser(source).parse()
    element = fromstring(HtmlRenderer(resolved).render(doc))
    if container is not None:
        container.append(element)

    backend = resolve_math_backend(resolved.math_backend)
    deferred = typesetter(backend)
    if deferred is not None and inline_renderer(backend) is None:
        deferred.schedule_typeset(element)
    return element


class Pseudocode:
    """High-level pseudocode processor combining parser and renderer.

    Usage:
        >>> pc = Pseudocode(line_number=True)
        >>> html = pc(source)

        >>> # Access the parse tree
        >>> doc = pc.parse(source)

        >>> # Isolated caption numbering
        >>> pc = Pseudocode(caption_counter=CaptionCounter())

    Thread Safety:
        Options are immutable and renders keep their state in a fresh
        RenderContext. Safe to share one instance across threads.
    """

    __slots__ = ("_options",)

    def __init__(self, options: Options = None, **overrides: Any) -> None:
        """Initialize processor.

        Args:
            options: RendererOptions, a dict of options, or None for defaults
            **overrides: Individual options applied on top of options

        Raises:
            ConfigError: On a malformed option.
        """
        self._options = coerce_options(options, overrides)

    @property
    def options(self) -> RendererOptions:
        return self._options

    def __call__(self, source: str) -> str:
        """Parse and render pseudocode in one call."""
        return render_to_string(source, self._options)

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse pseudocode to a parse tree."""
        return parse(source, source_file=source_file)

    def render(self, doc: Document) -> str:
        """Render a parse tree to HTML."""
        return HtmlRenderer(self._options).render(doc)

    def render_element(self, source: str, *, container: Element | None = None) -> Element:
        """Parse and render pseudocode to an ElementTree element."""
        return render(source, self._options, container=container)


__all__ = [
    # Main API
    "parse",
    "render",
    "render_to_string",
    "Pseudocode",
    # Configuration
    "RendererOptions",
    "CaptionCounter",
    "GLOBAL_CAPTION_COUNTER",
    # Errors
    "PseudocodeError",
    "ParseError",
    "ConfigError",
    "RenderError",
    # Math backends
    "InlineMathRenderer",
    "MathTypesetter",
    "MathMLBackend",
    "MathJaxBackend",
    "get_math_backend",
    "set_math_backend",
    # Low-level
    "Lexer",
    "Parser",
    "HtmlRenderer",
    "ASTRenderer",
    "Token",
    "TokenType",
    "SourceLocation",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    "dump",
    # Visitor
    "BaseVisitor",
    "transform",
    # Nodes
    "Node",
    "Leaf",
    "Inline",
    "Document",
    "Algorithm",
    "Caption",
    "Algorithmic",
    "Block",
    "If",
    "Loop",
    "Repeat",
    "Upon",
    "Function",
    "Statement",
    "Command",
    "Comment",
    "Call",
    "OpenText",
    "CloseText",
]
