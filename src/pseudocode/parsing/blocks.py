"""Block parsing mixin.

Parses environments and the line-level grammar inside them:

- ``algorithm``: captions and nested ``algorithmic`` environments
- ``algorithmic``: io statements and blocks
- blocks: control structures, functions, statements, commands, comments

Every construct is tried with ``accept``; the first whose opening atom
matches commits, and from then on its shape is enforced with ``expect``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pseudocode.nodes import (
    Algorithm,
    Algorithmic,
    Block,
    Caption,
    CloseText,
    Command,
    Comment,
    Function,
    If,
    Loop,
    Repeat,
    Statement,
    Upon,
)
from pseudocode.parsing.vocabulary import (
    COMMANDS,
    ELIF_SYNONYMS,
    FUNCTIONS,
    IO_STATEMENTS,
    LOOPS,
    STATEMENTS,
    closing_keyword,
)
from pseudocode.tokens import TokenType

if TYPE_CHECKING:
    from collections.abc import Callable

    from pseudocode.lexer import Lexer
    from pseudocode.location import SourceLocation
    from pseudocode.nodes import BlockItem, OpenText


class BlockParsingMixin:
    """Mixin for parsing environments and blocks.

    Required Host Attributes:
        - _lexer: Lexer

    Required Host Methods:
        - _location(start, end) -> SourceLocation
        - _parse_open_text() -> OpenText
        - _parse_braced_text() -> CloseText

    """

    _lexer: Lexer
    _location: Callable[[int, int], SourceLocation]
    _parse_open_text: Callable[[], OpenText]
    _parse_braced_text: Callable[[], CloseText]

    # =========================================================================
    # Environments
    # =========================================================================

    def _accept_environment(self) -> str | None:
        """Accept ``\\begin{name}`` and return the lower-cased name."""
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "begin") is None:
            return None
        lexer.expect(TokenType.OPEN)
        name = lexer.expect(TokenType.ORDINARY)
        lexer.expect(TokenType.CLOSE)
        return name.lower()

    def _close_environment(self, name: str) -> None:
        """Expect ``\\end{name}``."""
        lexer = self._lexer
        lexer.expect(TokenType.FUNC, "end")
        lexer.expect(TokenType.OPEN)
        lexer.expect(TokenType.ORDINARY, name)
        lexer.expect(TokenType.CLOSE)

    def _parse_environment(self, name: str, start: int) -> Algorithm | Algorithmic:
        """Parse the body of a top-level environment and its closing."""
        match name:
            case "algorithm":
                node = self._parse_algorithm_inner(start)
            case "algorithmic":
                node = self._parse_algorithmic_inner(start)
            case _:
                raise self._lexer.error(f"Unexpected environment {name}", start)
        self._close_environment(name)
        return node

    def _parse_algorithm_inner(self, start: int) -> Algorithm:
        """Parse captions and nested algorithmic environments, any order."""
        lexer = self._lexer
        children: list[Caption | Algorithmic] = []
        while True:
            env_start = lexer.peek().position
            name = self._accept_environment()
            if name is not None:
                if name != "algorithmic":
                    raise lexer.error(f"Unexpected environment {name}", env_start)
                children.append(self._parse_algorithmic_inner(env_start))
                self._close_environment("algorithmic")
                continue

            caption = self._parse_caption()
            if caption is not None:
                children.append(caption)
                continue

            break
        return Algorithm(location=self._span_from(start), children=tuple(children))

    def _parse_algorithmic_inner(self, start: int) -> Algorithmic:
        """Parse io statements and non-empty blocks until neither applies."""
        children: list[Statement | Block] = []
        while True:
            statement = self._parse_statement(IO_STATEMENTS)
            if statement is not None:
                children.append(statement)
                continue

            block = self._parse_block()
            if block.children:
                children.append(block)
                continue

            break
        return Algorithmic(location=self._span_from(start), children=tuple(children))

    def _parse_caption(self) -> Caption | None:
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "caption") is None:
            return None
        start = lexer.current().position
        text = self._parse_braced_text()
        return Caption(location=self._span_from(start), text=text)

    # =========================================================================
    # Blocks
    # =========================================================================

    def _parse_block(self) -> Block:
        """Parse block items until none applies; the result may be empty."""
        start = self._lexer.peek().position
        items: list[BlockItem] = []
        while True:
            item = (
                self._parse_control()
                or self._parse_function()
                or self._parse_statement(STATEMENTS)
                or self._parse_command()
                or self._parse_comment()
            )
            if item is None:
                break
            items.append(item)

        if not items:
            return Block(location=self._location(start, start))
        return Block(location=self._span_from(start), children=tuple(items))

    def _parse_control(self) -> If | Loop | Repeat | Upon | None:
        return self._parse_if() or self._parse_loop() or self._parse_repeat() or self._parse_upon()

    def _parse_if(self) -> If | None:
        """Parse ``\\IF{c} b (\\ELSIF{c} b)* (\\ELSE b)? \\ENDIF``."""
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "if") is None:
            return None
        start = lexer.current().position

        children: list[CloseText | Block] = [self._parse_braced_text(), self._parse_block()]

        num_elif = 0
        while lexer.accept(TokenType.FUNC, ELIF_SYNONYMS) is not None:
            children.append(self._parse_braced_text())
            children.append(self._parse_block())
            num_elif += 1

        has_else = lexer.accept(TokenType.FUNC, "else") is not None
        if has_else:
            children.append(self._parse_block())

        lexer.expect(TokenType.FUNC, closing_keyword("if"))
        return If(
            location=self._span_from(start),
            children=tuple(children),
            num_elif=num_elif,
            has_else=has_else,
        )

    def _parse_loop(self) -> Loop | None:
        """Parse ``\\FOR``, ``\\FORALL`` or ``\\WHILE`` with its closing."""
        lexer = self._lexer
        keyword = lexer.accept(TokenType.FUNC, LOOPS)
        if keyword is None:
            return None
        start = lexer.current().position
        keyword = keyword.lower()

        condition = self._parse_braced_text()
        body = self._parse_block()
        lexer.expect(TokenType.FUNC, closing_keyword(keyword))
        return Loop(
            location=self._span_from(start),
            keyword=keyword,
            condition=condition,
            body=body,
        )

    def _parse_repeat(self) -> Repeat | None:
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "repeat") is None:
            return None
        start = lexer.current().position

        body = self._parse_block()
        lexer.expect(TokenType.FUNC, "until")
        condition = self._parse_braced_text()
        return Repeat(location=self._span_from(start), body=body, condition=condition)

    def _parse_upon(self) -> Upon | None:
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "upon") is None:
            return None
        start = lexer.current().position

        condition = self._parse_braced_text()
        body = self._parse_block()
        lexer.expect(TokenType.FUNC, closing_keyword("upon"))
        return Upon(location=self._span_from(start), condition=condition, body=body)

    def _parse_function(self) -> Function | None:
        """Parse ``\\FUNCTION{name}{params} block \\ENDFUNCTION`` (or PROCEDURE)."""
        lexer = self._lexer
        keyword = lexer.accept(TokenType.FUNC, FUNCTIONS)
        if keyword is None:
            return None
        start = lexer.current().position
        keyword = keyword.lower()

        lexer.expect(TokenType.OPEN)
        name = lexer.expect(TokenType.ORDINARY)
        lexer.expect(TokenType.CLOSE)
        params = self._parse_braced_text()
        body = self._parse_block()
        lexer.expect(TokenType.FUNC, closing_keyword(keyword))
        return Function(
            location=self._span_from(start),
            keyword=keyword,
            name=name,
            params=params,
            body=body,
        )

    # =========================================================================
    # Lines
    # =========================================================================

    def _parse_statement(self, names: tuple[str, ...]) -> Statement | None:
        lexer = self._lexer
        name = lexer.accept(TokenType.FUNC, names)
        if name is None:
            return None
        start = lexer.current().position
        text = self._parse_open_text()
        return Statement(location=self._span_from(start), name=name.lower(), text=text)

    def _parse_command(self) -> Command | None:
        lexer = self._lexer
        name = lexer.accept(TokenType.FUNC, COMMANDS)
        if name is None:
            return None
        token = lexer.current()
        return Command(
            location=self._location(token.position, token.end_position),
            name=name.lower(),
        )

    def _parse_comment(self) -> Comment | None:
        lexer = self._lexer
        if lexer.accept(TokenType.FUNC, "comment") is None:
            return None
        start = lexer.current().position
        text = self._parse_braced_text()
        return Comment(location=self._span_from(start), text=text)

    def _span_from(self, start: int) -> SourceLocation:
        """Location from start to the end of the last consumed atom."""
        return self._location(start, self._lexer.current().end_position)
