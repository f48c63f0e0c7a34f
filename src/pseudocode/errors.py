"""Exception classes for pseudocode.

Provides standardized exceptions for error handling throughout the package.
"""

from __future__ import annotations

from pseudocode.location import SourceLocation

# Characters of context shown on each side of the failure position
EXCERPT_RADIUS = 15

# Marker inserted into the excerpt at the failure position
CARET = "↱"


class PseudocodeError(Exception):
    """Base exception for all pseudocode errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(PseudocodeError):
    """Lexical or syntax error in pseudocode source.

    Raised when the lexer meets an unrecognizable atom or an unterminated
    math span, or when the parser's expected continuation does not match
    the next atom.
    """

    def __init__(
        self,
        message: str,
        position: int | None = None,
        source: str | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            position: Character offset where the error occurred (0-indexed)
            source: Full source text, used to build the excerpt
            source_file: Path to source file (optional)
        """
        self.message = message
        self.position = position
        self.source_file = source_file
        self.excerpt: str | None = None
        self.lineno: int | None = None
        self.col_offset: int | None = None

        text = message
        if position is not None and source is not None:
            loc = SourceLocation.from_offset(source, position, source_file)
            self.lineno = loc.lineno
            self.col_offset = loc.col_offset
            self.excerpt = excerpt(source, position)
            where = f"{source_file}:" if source_file else ""
            text = (
                f"{message} at position {position} "
                f"({where}line {loc.lineno}, column {loc.col_offset}): `{self.excerpt}`"
            )
        elif position is not None:
            text = f"{message} at position {position}"

        super().__init__(text)


class ConfigError(PseudocodeError):
    """Malformed renderer option value.

    Raised while building RendererOptions, before any parsing begins.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "indent_size")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Option '{option}': {message}")


class RenderError(PseudocodeError):
    """Error during HTML rendering.

    Raised when the renderer meets a parse-tree node it does not know,
    an unknown text-style command, or a failing math backend. These
    signal a bug or a broken collaborator, not bad user input.
    """

    pass


def excerpt(source: str, position: int) -> str:
    """Return the source around position with a caret marker inserted."""
    begin = max(0, position - EXCERPT_RADIUS)
    return source[begin:position] + CARET + source[position : position + EXCERPT_RADIUS]
