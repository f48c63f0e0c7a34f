"""Command vocabulary of the pseudocode grammar.

All keyword matching is case-insensitive; the tables hold lower-case
names except the sizing commands, whose case distinguishes sizes.
"""

from __future__ import annotations

from pseudocode.style import FONT_COMMAND_STYLES, FONT_DECLARATION_STYLES, SIZING_SCALES

IO_STATEMENTS = ("ensure", "require", "input", "output")
STATEMENTS = ("state", "print", "return")
COMMANDS = ("break", "continue")

LOOPS = ("for", "forall", "while")
FUNCTIONS = ("function", "procedure")
ELIF_SYNONYMS = ("elif", "elsif", "elseif")

COND_SYMBOLS = ("and", "or", "not", "true", "false", "to", "downto")
TEXT_SYMBOLS = ("textbackslash",)
SIZE_DECLARATIONS = tuple(SIZING_SCALES)
FONT_DECLARATIONS = tuple(FONT_DECLARATION_STYLES)
FONT_COMMANDS = tuple(FONT_COMMAND_STYLES)

# Openers whose closing keyword is not "end" + opener
IRREGULAR_CLOSERS = {"forall": "endfor"}


def closing_keyword(opener: str) -> str:
    """Closing command name for a block opener (``for`` -> ``endfor``)."""
    opener = opener.lower()
    return IRREGULAR_CLOSERS.get(opener, f"end{opener}")


_STRUCTURAL = (
    "begin",
    "end",
    "caption",
    "if",
    "else",
    "repeat",
    "until",
    "upon",
    "comment",
    "call",
)

KNOWN_COMMANDS: frozenset[str] = frozenset(
    name.lower()
    for name in (
        *_STRUCTURAL,
        *ELIF_SYNONYMS,
        *IO_STATEMENTS,
        *STATEMENTS,
        *COMMANDS,
        *LOOPS,
        *FUNCTIONS,
        *COND_SYMBOLS,
        *TEXT_SYMBOLS,
        *SIZE_DECLARATIONS,
        *FONT_DECLARATIONS,
        *FONT_COMMANDS,
        *(closing_keyword(opener) for opener in (*LOOPS, *FUNCTIONS, "if", "upon")),
    )
)
