"""Tests for atom classification in the lexer."""

import pytest

from pseudocode.errors import ParseError
from pseudocode.lexer import Lexer
from pseudocode.tokens import Token, TokenType


def _atoms(source: str) -> list[tuple[TokenType, str | None]]:
    return [(t.type, t.text) for t in Lexer(source).tokenize()]


class TestAtomKinds:
    """Each atom kind is recognized with the right text."""

    def test_command_text_drops_backslash(self) -> None:
        assert _atoms("\\STATE") == [(TokenType.FUNC, "STATE"), (TokenType.EOF, None)]

    def test_command_name_is_ascii_letters_only(self) -> None:
        assert _atoms("\\foo1") == [
            (TokenType.FUNC, "foo"),
            (TokenType.ORDINARY, "1"),
            (TokenType.EOF, None),
        ]

    def test_braces(self) -> None:
        assert _atoms("{x}") == [
            (TokenType.OPEN, "{"),
            (TokenType.ORDINARY, "x"),
            (TokenType.CLOSE, "}"),
            (TokenType.EOF, None),
        ]

    @pytest.mark.parametrize("special", ["\\\\", "\\{", "\\}", "\\$", "\\&", "\\#", "\\%", "\\_"])
    def test_escaped_specials(self, special: str) -> None:
        assert _atoms(special) == [(TokenType.SPECIAL, special), (TokenType.EOF, None)]

    @pytest.mark.parametrize("quote", ["`", "``", "'", "''"])
    def test_quote_marks(self, quote: str) -> None:
        assert _atoms(quote) == [(TokenType.QUOTE, quote), (TokenType.EOF, None)]

    def test_tripled_quote_is_longest_match_first(self) -> None:
        assert _atoms("'''") == [
            (TokenType.QUOTE, "''"),
            (TokenType.QUOTE, "'"),
            (TokenType.EOF, None),
        ]

    def test_ordinary_run_stops_at_specials(self) -> None:
        assert _atoms("a<b{") == [
            (TokenType.ORDINARY, "a<b"),
            (TokenType.OPEN, "{"),
            (TokenType.EOF, None),
        ]

    def test_ordinary_run_stops_at_quote(self) -> None:
        assert _atoms("don't") == [
            (TokenType.ORDINARY, "don"),
            (TokenType.QUOTE, "'"),
            (TokenType.ORDINARY, "t"),
            (TokenType.EOF, None),
        ]

    def test_punctuation_is_ordinary(self) -> None:
        assert _atoms("x:=y+1;") == [(TokenType.ORDINARY, "x:=y+1;"), (TokenType.EOF, None)]

    def test_empty_source_is_just_eof(self) -> None:
        assert _atoms("") == [(TokenType.EOF, None)]


class TestWhitespaceAndComments:
    """Whitespace and ``%`` comments are skipped and flagged."""

    def test_whitespace_flag(self) -> None:
        tokens = list(Lexer("a  b").tokenize())
        assert [t.whitespace for t in tokens] == [False, True, False]

    def test_leading_whitespace_flags_first_atom(self) -> None:
        tokens = list(Lexer("\n\t x").tokenize())
        assert tokens[0].whitespace is True

    def test_comment_is_skipped(self) -> None:
        assert _atoms("a % the rest\nb") == [
            (TokenType.ORDINARY, "a"),
            (TokenType.ORDINARY, "b"),
            (TokenType.EOF, None),
        ]

    def test_comment_newline_counts_as_whitespace(self) -> None:
        tokens = list(Lexer("a%comment\nb").tokenize())
        assert tokens[1].text == "b"
        assert tokens[1].whitespace is True

    def test_comment_at_end_of_input(self) -> None:
        assert _atoms("a %trailing") == [(TokenType.ORDINARY, "a"), (TokenType.EOF, None)]

    def test_escaped_percent_is_not_a_comment(self) -> None:
        assert _atoms("50\\%") == [
            (TokenType.ORDINARY, "50"),
            (TokenType.SPECIAL, "\\%"),
            (TokenType.EOF, None),
        ]


class TestUnrecognizable:
    """Characters that cannot start an atom raise ParseError."""

    @pytest.mark.parametrize("char", ["&", "#", "_"])
    def test_bare_special_characters(self, char: str) -> None:
        with pytest.raises(ParseError, match="Unrecognizable atom"):
            list(Lexer(f"a {char}").tokenize())

    def test_lone_backslash(self) -> None:
        with pytest.raises(ParseError, match="Unrecognizable atom"):
            list(Lexer("a \\").tokenize())

    def test_backslash_before_digit(self) -> None:
        with pytest.raises(ParseError, match="Unrecognizable atom at position 0"):
            Lexer("\\1")


class TestLookahead:
    """Parser-facing accept/expect API."""

    def test_accept_is_case_insensitive(self) -> None:
        lexer = Lexer("\\State x")
        assert lexer.accept(TokenType.FUNC, "state") == "State"
        assert lexer.current().text == "State"
        assert lexer.peek().text == "x"

    def test_accept_alternatives(self) -> None:
        lexer = Lexer("\\ELSIF")
        assert lexer.accept(TokenType.FUNC, ("elif", "elsif")) == "ELSIF"

    def test_accept_mismatch_consumes_nothing(self) -> None:
        lexer = Lexer("\\STATE")
        assert lexer.accept(TokenType.FUNC, "print") is None
        assert lexer.accept(TokenType.OPEN) is None
        assert lexer.peek().text == "STATE"

    def test_expect_wrong_kind(self) -> None:
        lexer = Lexer("x")
        with pytest.raises(ParseError, match="Expect an atom of open but received ordinary"):
            lexer.expect(TokenType.OPEN)

    def test_expect_wrong_text(self) -> None:
        lexer = Lexer("\\ENDFOR")
        with pytest.raises(ParseError, match="Expect `endwhile` but received `ENDFOR`"):
            lexer.expect(TokenType.FUNC, "endwhile")

    def test_token_matches_none(self) -> None:
        token = Token(TokenType.EOF, None)
        assert token.matches(None)
        assert not token.matches("x")
