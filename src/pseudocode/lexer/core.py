"""On-demand lexer with one atom of lookahead.

Scans the source character by character, skipping whitespace and
``%`` line comments, and classifies the next atom. The parser pulls atoms
with ``accept``/``expect``; no token list is ever materialized.

No regex in the hot path.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pseudocode.errors import ParseError
from pseudocode.lexer.math import MathScannerMixin
from pseudocode.tokens import Token, TokenType

# Characters that may follow a backslash in an escaped special
SPECIAL_CHARS = frozenset("\\{}$&#%_")

# Characters that end an ordinary run (whitespace ends it too)
ORDINARY_STOP_CHARS = frozenset("\\{}$&#%_`'")

# Characters that can never start an atom on their own
UNRECOGNIZABLE_CHARS = frozenset("&#_")


class Lexer(MathScannerMixin):
    """Lexer producing one atom at a time with one atom of lookahead.

    Atom priority (most specific first): escaped specials, math spans,
    backslash commands, braces, quote marks, ordinary runs.

    Usage:
            >>> lexer = Lexer("\\STATE $x$")
            >>> lexer.accept(TokenType.FUNC, "state")
            'STATE'
            >>> lexer.peek()
        Token(MATH, 'x', @7)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_current",
        "_next",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer and scan the first atom.

        Args:
            source: Pseudocode source text
            source_file: Optional source file path for error messages

        Raises:
            ParseError: If the first atom is unrecognizable.
        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file
        self._pos = 0
        self._current: Token | None = None
        self._next: Token = self._scan()

    # =========================================================================
    # Parser-facing API
    # =========================================================================

    def peek(self) -> Token:
        """Return the lookahead atom without consuming it."""
        return self._next

    def current(self) -> Token | None:
        """Return the most recently consumed atom."""
        return self._current

    def accept(
        self, token_type: TokenType, text: str | Sequence[str] | None = None
    ) -> str | None:
        """Consume the lookahead atom if it matches.

        Args:
            token_type: Required atom kind
            text: Optional text (or alternatives), compared case-insensitively

        Returns:
            The matched atom's text, or None without consuming anything.
        """
        nxt = self._next
        if nxt.type is token_type and nxt.matches(text):
            self._advance()
            return nxt.text
        return None

    def expect(
        self, token_type: TokenType, text: str | Sequence[str] | None = None
    ) -> str | None:
        """Consume the lookahead atom, which must match.

        Args:
            token_type: Required atom kind
            text: Optional text (or alternatives), compared case-insensitively

        Returns:
            The matched atom's text.

        Raises:
            ParseError: If the atom kind or text does not match.
        """
        nxt = self._next
        if nxt.type is not token_type:
            raise self.error(
                f"Expect an atom of {token_type.value} but received {nxt.type.value}",
                nxt.position,
            )
        if not nxt.matches(text):
            wanted = text if isinstance(text, str) else "` or `".join(text or ())
            raise self.error(f"Expect `{wanted}` but received `{nxt.text}`", nxt.position)
        self._advance()
        return nxt.text

    def tokenize(self) -> Iterator[Token]:
        """Consume and yield all remaining atoms, ending with EOF.

        Yields:
            Token objects one at a time

        Complexity: O(n) where n = len(source)
        """
        while True:
            token = self._next
            self._advance()
            yield token
            if token.type is TokenType.EOF:
                return

    def error(self, message: str, position: int | None = None) -> ParseError:
        """Build a ParseError with source context at position."""
        if position is None:
            position = self._next.position
        return ParseError(message, position, self._source, self._source_file)

    # =========================================================================
    # Scanning
    # =========================================================================

    def _advance(self) -> None:
        """Shift the lookahead atom into current and scan the next one."""
        self._current = self._next
        self._next = self._scan()

    def _skip_ignorable(self) -> bool:
        """Skip whitespace and comments in any interleaving.

        Returns:
            True if any whitespace was skipped.
        """
        source = self._source
        source_len = self._source_len
        pos = self._pos
        any_whitespace = False
        while pos < source_len:
            char = source[pos]
            if char.isspace():
                any_whitespace = True
                pos += 1
            elif char == "%":
                # Comment runs to the end of the line; the newline is whitespace
                newline = source.find("\n", pos)
                pos = newline if newline != -1 else source_len
            else:
                break
        self._pos = pos
        return any_whitespace

    def _scan(self) -> Token:
        """Classify the next atom and move past it."""
        whitespace = self._skip_ignorable()
        source = self._source
        pos = self._pos

        if pos >= self._source_len:
            return Token(TokenType.EOF, None, whitespace, pos, pos)

        char = source[pos]
        token: Token | None = None

        if char == "\\":
            nxt = source[pos + 1] if pos + 1 < self._source_len else ""
            if nxt and nxt in SPECIAL_CHARS:
                token = self._make(TokenType.SPECIAL, pos, pos + 2, whitespace)
            elif nxt == "(":
                token = self._scan_math(pos, whitespace)
            elif nxt.isascii() and nxt.isalpha():
                end = pos + 1
                while end < self._source_len and source[end].isascii() and source[end].isalpha():
                    end += 1
                token = Token(TokenType.FUNC, source[pos + 1 : end], whitespace, pos, end)
        elif char == "$":
            token = self._scan_math(pos, whitespace)
        elif char == "{":
            token = self._make(TokenType.OPEN, pos, pos + 1, whitespace)
        elif char == "}":
            token = self._make(TokenType.CLOSE, pos, pos + 1, whitespace)
        elif char in "`'":
            # Longest match: a doubled quote mark is a single atom
            end = pos + 2 if source.startswith(char * 2, pos) else pos + 1
            token = self._make(TokenType.QUOTE, pos, end, whitespace)
        elif char not in UNRECOGNIZABLE_CHARS:
            end = pos + 1
            while end < self._source_len:
                c = source[end]
                if c in ORDINARY_STOP_CHARS or c.isspace():
                    break
                end += 1
            token = self._make(TokenType.ORDINARY, pos, end, whitespace)

        if token is None:
            raise self.error("Unrecognizable atom", pos)

        self._pos = token.end_position
        return token

    def _make(self, token_type: TokenType, start: int, end: int, whitespace: bool) -> Token:
        """Create a token covering source[start:end]."""
        return Token(token_type, self._source[start:end], whitespace, start, end)
