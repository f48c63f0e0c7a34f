"""Recursive descent parser producing a typed parse tree.

Pulls atoms from the Lexer on demand and builds immutable (frozen)
dataclass nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `BlockParsingMixin`: Environments, control structures, statements
- `TextParsingMixin`: Inline text (atoms, calls, brace groups)

Thread Safety:
- Parser instances are single-use; create one per parse
- Parser produces an immutable tree (frozen dataclasses)
- Safe to share the tree across threads

"""

from __future__ import annotations

from bisect import bisect_right

from pseudocode.lexer import Lexer
from pseudocode.location import SourceLocation
from pseudocode.nodes import Algorithm, Algorithmic, Document
from pseudocode.parsing import BlockParsingMixin, TextParsingMixin
from pseudocode.tokens import TokenType
from pseudocode.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(BlockParsingMixin, TextParsingMixin):
    """Recursive descent parser for pseudocode.

    Grammar (top level):
        <document>  := ( \\begin{algorithm} ... \\end{algorithm}
                       | \\begin{algorithmic} ... \\end{algorithmic} )* EOF

    Usage:
            >>> doc = Parser("\\begin{algorithmic}\\STATE x\\end{algorithmic}").parse()
            >>> doc.children[0].kind
        'algorithmic'

    Thread Safety:
        Parser instances are single-use and not thread-safe. The resulting
        tree is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_lexer",
        "_line_starts",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Pseudocode source text
            source_file: Optional source file path for error messages

        Raises:
            ParseError: If the first atom of source is unrecognizable.
        """
        self._source = source
        self._source_file = source_file
        self._lexer = Lexer(source, source_file)
        self._line_starts = [0]
        self._line_starts.extend(i + 1 for i, char in enumerate(source) if char == "\n")

    def parse(self) -> Document:
        """Parse source into a Document.

        Returns:
            Document whose children are the top-level environments

        Raises:
            ParseError: On any lexical or syntax error.
        """
        lexer = self._lexer
        environments: list[Algorithm | Algorithmic] = []
        while True:
            start = lexer.peek().position
            name = self._accept_environment()
            if name is None:
                break
            environments.append(self._parse_environment(name, start))

        lexer.expect(TokenType.EOF)
        logger.debug(
            "Parsed %d environment(s) from %d characters",
            len(environments),
            len(self._source),
        )
        return Document(
            location=self._location(0, len(self._source)),
            children=tuple(environments),
        )

    def _location(self, start: int, end: int) -> SourceLocation:
        """Location of source[start:end] with 1-indexed line and column."""
        line_index = bisect_right(self._line_starts, start) - 1
        return SourceLocation(
            lineno=line_index + 1,
            col_offset=start - self._line_starts[line_index] + 1,
            offset=start,
            end_offset=end,
            source_file=self._source_file,
        )
