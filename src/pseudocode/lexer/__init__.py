"""Lexer for pseudocode source.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer
├── core.py              # Lexer class (lookahead, accept/expect, atom scanning)
└── math.py              # Math span scanner ($...$ and \\(...\\))

Usage:
    >>> from pseudocode.lexer import Lexer
    >>> for token in Lexer("\\STATE $x$").tokenize():
    ...     print(token)
Token(FUNC, 'STATE', @0)
Token(MATH, 'x', @7)
Token(EOF, '', @10)

"""

from pseudocode.lexer.core import Lexer
from pseudocode.lexer.math import MATH_DELIMITERS

__all__ = ["Lexer", "MATH_DELIMITERS"]
