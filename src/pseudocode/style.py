"""Text style state for font and size commands.

A TextStyle accumulates CSS font attributes and a relative size scale.
Sizes are emitted in ``em``, so each style also remembers the size of the
scope it was created against (its "outer" size) and expresses its own size
as a ratio of the two.

Declarations (``\\bfseries``) style the rest of the current group; commands
(``\\textbf{...}``) style only their argument. Both update a TextStyle the
same way; the renderer decides which nodes the resulting span wraps.
"""

from __future__ import annotations

from pseudocode.errors import RenderError

_FAMILY_MAIN = {"font-family": "KaTeX_Main"}
_FAMILY_SANS = {"font-family": "KaTeX_SansSerif_Replace"}
_FAMILY_MONO = {"font-family": "KaTeX_Typewriter_Replace"}
_WEIGHT_BOLD = {"font-weight": "bold"}
_WEIGHT_MEDIUM = {"font-weight": "medium"}
_WEIGHT_LIGHT = {"font-weight": "lighter"}
_SHAPE_UPRIGHT = {"font-style": "normal", "font-variant": "normal"}
_SHAPE_ITALIC = {"font-style": "italic", "font-variant": "normal"}
_SHAPE_SMALL_CAPS = {"font-style": "normal", "font-variant": "small-caps"}
_SHAPE_SLANTED = {"font-style": "oblique", "font-variant": "normal"}

# Declarations: apply to the remainder of the enclosing group
FONT_DECLARATION_STYLES: dict[str, dict[str, str]] = {
    "normalfont": _FAMILY_MAIN,
    "rmfamily": _FAMILY_MAIN,
    "sffamily": _FAMILY_SANS,
    "ttfamily": _FAMILY_MONO,
    "bfseries": _WEIGHT_BOLD,
    "mdseries": _WEIGHT_MEDIUM,
    "lfseries": _WEIGHT_LIGHT,
    "upshape": _SHAPE_UPRIGHT,
    "itshape": _SHAPE_ITALIC,
    "scshape": _SHAPE_SMALL_CAPS,
    "slshape": _SHAPE_SLANTED,
}

# Commands: apply to their brace argument only
FONT_COMMAND_STYLES: dict[str, dict[str, str]] = {
    "textnormal": _FAMILY_MAIN,
    "textrm": _FAMILY_MAIN,
    "textsf": _FAMILY_SANS,
    "texttt": _FAMILY_MONO,
    "textbf": _WEIGHT_BOLD,
    "textmd": _WEIGHT_MEDIUM,
    "textlf": _WEIGHT_LIGHT,
    "textup": _SHAPE_UPRIGHT,
    "textit": _SHAPE_ITALIC,
    "textsc": _SHAPE_SMALL_CAPS,
    "textsl": _SHAPE_SLANTED,
    "uppercase": {"text-transform": "uppercase"},
    "lowercase": {"text-transform": "lowercase"},
}

# Sizing declarations and their scale relative to normalsize
SIZING_SCALES: dict[str, float] = {
    "tiny": 0.68,
    "scriptsize": 0.80,
    "footnotesize": 0.85,
    "small": 0.92,
    "normalsize": 1.00,
    "large": 1.17,
    "Large": 1.41,
    "LARGE": 1.58,
    "huge": 1.90,
    "Huge": 2.28,
}


def format_em(value: float) -> str:
    """Format a number for CSS: 4 decimals at most, no trailing zeros, no -0."""
    return f"{round(value, 4) + 0.0:.4f}".rstrip("0").rstrip(".")


def sizing_scale(name: str) -> float | None:
    """Look up a sizing command, exact case first, then lower-case."""
    scale = SIZING_SCALES.get(name)
    if scale is None:
        scale = SIZING_SCALES.get(name.lower())
    return scale


class TextStyle:
    """Mutable font state for one text scope.

    Usage:
        >>> style = TextStyle()
        >>> style.update_by_command("bfseries")
        >>> style.update_by_command("small")
        >>> style.to_css()
        'font-weight:bold;font-size:0.92em;'

    """

    __slots__ = ("_css", "_font_size", "_outer_font_size")

    def __init__(self, outer_font_size: float = 1.0) -> None:
        """Create a style whose size equals the size of its enclosing scope.

        Args:
            outer_font_size: Font size scale of the enclosing scope
        """
        self._css: dict[str, str] = {}
        self._font_size = outer_font_size
        self._outer_font_size = outer_font_size

    @property
    def font_size(self) -> float:
        return self._font_size

    @property
    def outer_font_size(self) -> float:
        return self._outer_font_size

    @outer_font_size.setter
    def outer_font_size(self, size: float) -> None:
        self._outer_font_size = size

    def update_by_command(self, name: str) -> None:
        """Apply a font or sizing command.

        Font commands merge their attributes, later keys overriding earlier
        ones. Sizing commands replace the current scale and remember the
        previous one as the outer scale.

        Raises:
            RenderError: If name is not a known style command.
        """
        attrs = FONT_DECLARATION_STYLES.get(name) or FONT_COMMAND_STYLES.get(name)
        if attrs is not None:
            self._css.update(attrs)
            return

        scale = sizing_scale(name)
        if scale is not None:
            self._outer_font_size = self._font_size
            self._font_size = scale
            return

        raise RenderError(f"Unrecognized text-style command: {name!r}")

    def to_css(self) -> str:
        """Serialize as inline CSS; empty string when there is nothing to say."""
        parts = [f"{attr}:{value};" for attr, value in self._css.items()]
        if self._font_size != self._outer_font_size:
            ratio = self._font_size / self._outer_font_size
            parts.append(f"font-size:{format_em(ratio)}em;")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"TextStyle({self.to_css()!r}, size={self._font_size})"
