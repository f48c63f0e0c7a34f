"""Text parsing mixin.

Parses runs of inline content: atoms, ``\\CALL`` and nested brace groups.

Text is either *open* (statement text, ends at the first atom that cannot
continue it) or *close* (inside braces, ended by the closing brace the
caller expects).
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from pseudocode.nodes import (
    Call,
    CloseText,
    CondSymbol,
    FontCommand,
    FontDeclaration,
    Leaf,
    Math,
    OpenText,
    Ordinary,
    QuoteSymbol,
    SizeDeclaration,
    Special,
    Text,
    TextSymbol,
)
from pseudocode.parsing.vocabulary import (
    COND_SYMBOLS,
    FONT_COMMANDS,
    FONT_DECLARATIONS,
    KNOWN_COMMANDS,
    SIZE_DECLARATIONS,
    TEXT_SYMBOLS,
)
from pseudocode.tokens import TokenType

if TYPE_CHECKING:
    from collections.abc import Callable

    from pseudocode.lexer import Lexer
    from pseudocode.location import SourceLocation

# Atom kinds in priority order: (node class, token type, accepted command names)
ATOM_TABLE: tuple[tuple[type[Leaf], TokenType, tuple[str, ...] | None], ...] = (
    (Ordinary, TokenType.ORDINARY, None),
    (Math, TokenType.MATH, None),
    (Special, TokenType.SPECIAL, None),
    (CondSymbol, TokenType.FUNC, COND_SYMBOLS),
    (QuoteSymbol, TokenType.QUOTE, None),
    (SizeDeclaration, TokenType.FUNC, SIZE_DECLARATIONS),
    (FontDeclaration, TokenType.FUNC, FONT_DECLARATIONS),
    (FontCommand, TokenType.FUNC, FONT_COMMANDS),
    (TextSymbol, TokenType.FUNC, TEXT_SYMBOLS),
)

# Atom values kept verbatim; everything else is lower-cased
_CASE_SENSITIVE = (Ordinary, Math, SizeDeclaration)


class TextParsingMixin:
    """Mixin for parsing inline text.

    Required Host Attributes:
        - _lexer: Lexer

    Required Host Methods:
        - _location(start, end) -> SourceLocation

    """

    _lexer: Lexer
    _location: Callable[[int, int], SourceLocation]

    def _parse_open_text(self) -> OpenText:
        return self._parse_text(OpenText)

    def _parse_close_text(self) -> CloseText:
        return self._parse_text(CloseText)

    def _parse_braced_text(self) -> CloseText:
        """Parse ``{ close-text }``."""
        self._lexer.expect(TokenType.OPEN)
        text = self._parse_close_text()
        self._lexer.expect(TokenType.CLOSE)
        return text

    def _parse_text[T: Text](self, text_type: type[T], whitespace: bool = False) -> T:
        """Parse atoms, calls and brace groups until none applies.

        Whitespace before a group's closing brace belongs to whatever
        follows the group, so it is carried to the next sibling.

        Args:
            text_type: OpenText or CloseText
            whitespace: Whether whitespace preceded the text (groups only)

        Raises:
            ParseError: If the text stops at an unknown command.
        """
        lexer = self._lexer
        start = lexer.peek().position
        children: list = []
        carry = False

        while True:
            node = self._parse_atom()
            if node is None:
                node = self._parse_call()
            if node is not None:
                if carry and not node.whitespace:
                    node = replace(node, whitespace=True)
                carry = False
                children.append(node)
                continue

            if lexer.accept(TokenType.OPEN) is not None:
                opening = lexer.current()
                group = self._parse_text(CloseText, whitespace=opening.whitespace or carry)
                lexer.expect(TokenType.CLOSE)
                carry = lexer.current().whitespace
                children.append(group)
                continue

            break

        self._check_text_boundary()
        current = lexer.current()
        end = max(start, current.end_position) if current is not None else start
        return text_type(
            location=self._location(start, end),
            children=tuple(children),
            whitespace=whitespace,
        )

    def _parse_atom(self) -> Leaf | None:
        """Parse one atom, trying atom kinds in priority order."""
        lexer = self._lexer
        for node_type, token_type, names in ATOM_TABLE:
            text = lexer.accept(token_type, names)
            if text is None:
                continue
            token = lexer.current()
            if node_type not in _CASE_SENSITIVE:
                text = text.lower()
            return node_type(
                location=self._location(token.position, token.end_position),
                value=text,
                whitespace=token.whitespace,
            )
        return None

    def _parse_call(self) -> Call | None:
        """Parse ``\\CALL{name}{args}``."""
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "call") is None:
            return None

        command = lexer.current()
        lexer.expect(TokenType.OPEN)
        name = lexer.expect(TokenType.ORDINARY)
        lexer.expect(TokenType.CLOSE)
        args = self._parse_braced_text()

        return Call(
            location=self._location(command.position, lexer.current().end_position),
            name=name,
            args=args,
            whitespace=command.whitespace,
        )

    def _check_text_boundary(self) -> None:
        """Reject an unknown command where text stopped.

        Without this, ``\\STAET x`` would surface as a confusing
        expectation failure in whichever construct encloses the text.
        """
        nxt = self._lexer.peek()
        if nxt.type is TokenType.FUNC and nxt.text.lower() not in KNOWN_COMMANDS:
            raise self._lexer.error(f"Unrecognized command `\\{nxt.text}`", nxt.position)
