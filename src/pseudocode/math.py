"""Math backend protocols and injection for pseudocode.

Math spans are handed to a backend. Backends come in two capabilities:

- inline renderers turn LaTeX source into markup synchronously
  (``render_inline(source) -> str``, or any plain callable)
- typesetters work on the materialized element after the fact
  (``schedule_typeset(element) -> None``), e.g. a client-side MathJax

The renderer decides which capability to use once per render. For
typesetter-only backends it emits ``<span class="ps-math">\\(...\\)</span>``
placeholders for the typesetter to pick up.

Usage:
    # Default: MathML via latex2mathml
    from pseudocode import render_to_string
    html = render_to_string(source)

    # Manual injection
    from pseudocode.math import set_math_backend

    def my_math(source: str) -> str:
        return f"<code>{source}</code>"

    set_math_backend(my_math)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import latex2mathml.converter

from pseudocode.errors import RenderError
from pseudocode.utils.logger import get_logger

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

logger = get_logger(__name__)


@runtime_checkable
class InlineMathRenderer(Protocol):
    """Protocol for backends that render math to markup synchronously.

    Thread Safety:
        Implementations must be thread-safe. render_inline() may be
        called concurrently from multiple render threads.
    """

    def render_inline(self, source: str) -> str:
        """Render LaTeX math source to markup.

        Args:
            source: Math source with delimiters stripped

        Returns:
            Well-formed XML markup for the math

        Contract:
            - MUST return well-formed markup (it is embedded verbatim)
            - MAY raise; the renderer wraps failures in RenderError
        """
        ...


@runtime_checkable
class MathTypesetter(Protocol):
    """Protocol for backends that typeset an element after rendering."""

    def schedule_typeset(self, element: Element) -> None:
        """Queue typesetting of the math placeholders inside element.

        Contract:
            - Fire-and-forget: the return value is ignored
            - The renderer never waits on or retries the call
        """
        ...


# Support for simple callable-based renderers
SimpleMathRenderer = Callable[[str], str]

type MathBackend = InlineMathRenderer | MathTypesetter | SimpleMathRenderer


class MathMLBackend:
    """Inline renderer producing MathML with latex2mathml."""

    def __init__(self, display: str = "inline") -> None:
        self.display = display

    def render_inline(self, source: str) -> str:
        try:
            return latex2mathml.converter.convert(source, display=self.display)
        except Exception as e:
            raise RenderError(f"Math rendering failed for {source!r}: {e}") from e

    def __repr__(self) -> str:
        return f"MathMLBackend(display={self.display!r})"


class MathJaxBackend:
    """Deferred typesetter for pages that load MathJax.

    Leaves math as ``\\(...\\)`` placeholders and appends a script that asks
    MathJax to typeset them once the markup is in the page.
    """

    SCRIPT = "if (window.MathJax) { MathJax.typesetPromise(); }"

    def schedule_typeset(self, element: Element) -> None:
        from xml.etree.ElementTree import SubElement

        script = SubElement(element, "script")
        script.text = self.SCRIPT
        logger.debug("Scheduled MathJax typesetting")

    def __repr__(self) -> str:
        return "MathJaxBackend()"


# Global backend
_math_backend: MathBackend = MathMLBackend()


def set_math_backend(backend: MathBackend | None) -> None:
    """Set the global math backend.

    Args:
        backend: An InlineMathRenderer or MathTypesetter implementation,
            or a simple function that takes math source and returns markup.
            Pass None to restore the default MathML backend.
    """
    global _math_backend
    _math_backend = backend if backend is not None else MathMLBackend()


def get_math_backend() -> MathBackend:
    """Get the global math backend."""
    return _math_backend


def inline_renderer(backend: Any) -> SimpleMathRenderer | None:
    """Return a ``source -> markup`` function for backend, if it has one.

    Returns None for typesetter-only backends.
    """
    render_inline = getattr(backend, "render_inline", None)
    if callable(render_inline):
        return render_inline
    if callable(backend) and not isinstance(backend, MathTypesetter):
        return backend
    return None


def typesetter(backend: Any) -> MathTypesetter | None:
    """Return backend if it can typeset an element after rendering."""
    schedule = getattr(backend, "schedule_typeset", None)
    return backend if callable(schedule) else None


def resolve_math_backend(override: MathBackend | None = None) -> MathBackend:
    """Return override, or the global backend when override is None."""
    return override if override is not None else _math_backend


def warn_if_deferred(backend: MathBackend) -> None:
    """Warn that a typesetter-only backend leaves string output unrendered."""
    if inline_renderer(backend) is None:
        logger.warning(
            "Math backend %r cannot render to a string; math is left as source",
            backend,
        )
