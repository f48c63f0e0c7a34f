"""Parsing subsystem for the pseudocode parser.

Provides mixin classes for modular parsing functionality:
- `TextParsingMixin`: Inline text (atoms, calls, brace groups)
- `BlockParsingMixin`: Environments, control structures, statements

Architecture:
The parser uses a mixin-based design for separation of concerns. Each
mixin handles one layer of the grammar; both pull atoms from a shared
Lexer owned by the host.

Example:
    >>> from pseudocode.parsing import BlockParsingMixin, TextParsingMixin
    >>> class Parser(BlockParsingMixin, TextParsingMixin):
    ...     pass

"""

from pseudocode.parsing.blocks import BlockParsingMixin
from pseudocode.parsing.text import TextParsingMixin

__all__ = [
    "BlockParsingMixin",
    "TextParsingMixin",
]
