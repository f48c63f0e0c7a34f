"""Token and TokenType definitions for the pseudocode lexer.

The lexer produces a stream of Token objects (atoms) that the parser
consumes one at a time. Each Token has a type, a text value, a flag telling
whether whitespace preceded it, and its character offset.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Atom kinds produced by the lexer.

    Values are the lower-case names used in error messages.

    """

    SPECIAL = "special"  # \\ \{ \} \$ \& \# \% \_
    MATH = "math"  # $...$ or \(...\)
    FUNC = "func"  # \command
    OPEN = "open"  # {
    CLOSE = "close"  # }
    QUOTE = "quote"  # ` `` ' ''
    ORDINARY = "ordinary"  # run of plain characters
    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    """An atom produced by the lexer.

    Attributes:
        type: The token type (from TokenType enum)
        text: The useful text of the atom: the command name without its
            backslash, the inner source of a math span, the raw characters
            otherwise. None for EOF.
        whitespace: True if one or more whitespace characters preceded it
        position: Absolute start offset in source
        end_position: Absolute end offset in source

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: TokenType
    text: str | None
    whitespace: bool = False
    position: int = 0
    end_position: int = 0

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.text or ""
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, @{self.position})"

    def matches(self, text: str | list[str] | tuple[str, ...] | None) -> bool:
        """Case-insensitively match the token text against one or more alternatives.

        Args:
            text: None (always matches), a string, or a sequence of strings

        Returns:
            True if the token text equals any alternative, ignoring case
        """
        if text is None:
            return True
        if self.text is None:
            return False
        mine = self.text.lower()
        if isinstance(text, str):
            return mine == text.lower()
        return any(mine == alt.lower() for alt in text)
