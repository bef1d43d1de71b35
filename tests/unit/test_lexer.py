"""
Unit tests for the Monkey Lexer.
"""

import pytest

from monkey.compiler.lexer import END_OF_INPUT, CursorState, Lexer
from monkey.compiler.tokens import TokenType


def _pairs(tokens):
    return [(t.type, t.literal) for t in tokens]


class TestLexerBasics:
    """Basic lexer functionality tests."""

    def test_empty_source(self, tokenize):
        """Empty source should produce only the EOF token."""
        tokens = tokenize("")
        assert _pairs(tokens) == [(TokenType.EOF, "\x00")]

    def test_whitespace_only(self, tokenize):
        """Whitespace-only source should produce only EOF."""
        tokens = tokenize("  \t\r\n  \n")
        assert _pairs(tokens) == [(TokenType.EOF, END_OF_INPUT)]

    def test_eof_literal_is_nul(self, tokenize):
        """The EOF token carries the terminator character as its literal."""
        tokens = tokenize("x")
        assert tokens[-1].type == TokenType.EOF
        assert tokens[-1].literal == "\x00"

    def test_none_after_eof(self, lexer_factory):
        """Once EOF has been produced, the lexer yields nothing more."""
        lexer = lexer_factory("x")
        assert lexer.next_token().type == TokenType.IDENT
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token() is None
        assert lexer.next_token() is None

    def test_cursor_states(self, lexer_factory):
        """The cursor moves from input to terminator to exhausted."""
        lexer = lexer_factory("x")
        assert lexer.state is CursorState.MORE_INPUT
        lexer.next_token()
        assert lexer.state is CursorState.PENDING_TERMINATOR
        lexer.next_token()
        assert lexer.state is CursorState.EXHAUSTED

    def test_empty_source_starts_pending(self, lexer_factory):
        assert lexer_factory("").state is CursorState.PENDING_TERMINATOR


class TestLexerOperators:
    """Tests for operators and delimiters."""

    def test_single_char_tokens(self, tokenize):
        """Test every single character operator and delimiter."""
        tokens = tokenize("=+(){},;")
        assert _pairs(tokens) == [
            (TokenType.ASSIGN, "="),
            (TokenType.PLUS, "+"),
            (TokenType.LPAREN, "("),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.RBRACE, "}"),
            (TokenType.COMMA, ","),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, "\x00"),
        ]

    def test_arithmetic_and_comparison(self, tokenize):
        tokens = tokenize("!-/*5;\n5 < 10 > 5;")
        assert _pairs(tokens) == [
            (TokenType.BANG, "!"),
            (TokenType.MINUS, "-"),
            (TokenType.SLASH, "/"),
            (TokenType.ASTERISK, "*"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "5"),
            (TokenType.LT, "<"),
            (TokenType.INT, "10"),
            (TokenType.GT, ">"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, "\x00"),
        ]

    def test_double_char_operators(self, tokenize):
        """== and != are single tokens."""
        tokens = tokenize("10 == 10; 10 != 9;")
        assert _pairs(tokens)[:8] == [
            (TokenType.INT, "10"),
            (TokenType.EQ, "=="),
            (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "10"),
            (TokenType.NOT_EQ, "!="),
            (TokenType.INT, "9"),
            (TokenType.SEMICOLON, ";"),
        ]

    def test_assign_then_bang(self, tokenize):
        """'=!' is two tokens, not a comparison."""
        tokens = tokenize("=!")
        assert [t.type for t in tokens] == [TokenType.ASSIGN, TokenType.BANG, TokenType.EOF]

    def test_brackets_and_colon(self, tokenize):
        tokens = tokenize('[1, 2]; {"a": 1}')
        types = [t.type for t in tokens]
        assert types == [
            TokenType.LBRACKET,
            TokenType.INT,
            TokenType.COMMA,
            TokenType.INT,
            TokenType.RBRACKET,
            TokenType.SEMICOLON,
            TokenType.LBRACE,
            TokenType.STRING,
            TokenType.COLON,
            TokenType.INT,
            TokenType.RBRACE,
            TokenType.EOF,
        ]


class TestLexerKeywordsAndIdentifiers:
    """Tests for keywords and identifiers."""

    def test_program(self, tokenize):
        """Test a small program with bindings, a function and a call."""
        source = """
        let five = 5;
        let ten = 10;

        let add = fn(x, y) {
            x + y;
        };

        let result = add(five, ten);
        """
        tokens = tokenize(source)
        assert _pairs(tokens) == [
            (TokenType.LET, "let"),
            (TokenType.IDENT, "five"),
            (TokenType.ASSIGN, "="),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "ten"),
            (TokenType.ASSIGN, "="),
            (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "add"),
            (TokenType.ASSIGN, "="),
            (TokenType.FUNCTION, "fn"),
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "x"),
            (TokenType.COMMA, ","),
            (TokenType.IDENT, "y"),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.IDENT, "x"),
            (TokenType.PLUS, "+"),
            (TokenType.IDENT, "y"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "result"),
            (TokenType.ASSIGN, "="),
            (TokenType.IDENT, "add"),
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "five"),
            (TokenType.COMMA, ","),
            (TokenType.IDENT, "ten"),
            (TokenType.RPAREN, ")"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, "\x00"),
        ]

    @pytest.mark.parametrize(
        "keyword,expected",
        [
            ("fn", TokenType.FUNCTION),
            ("let", TokenType.LET),
            ("true", TokenType.TRUE),
            ("false", TokenType.FALSE),
            ("if", TokenType.IF),
            ("else", TokenType.ELSE),
            ("return", TokenType.RETURN),
        ],
    )
    def test_keywords(self, tokenize, keyword, expected):
        tokens = tokenize(keyword)
        assert tokens[0].type == expected
        assert tokens[0].literal == keyword

    def test_identifier_with_digits_and_underscores(self, tokenize):
        """Identifiers may contain digits and underscores after the first letter."""
        tokens = tokenize("_private foo_1bar")
        assert _pairs(tokens)[:2] == [
            (TokenType.IDENT, "_private"),
            (TokenType.IDENT, "foo_1bar"),
        ]

    def test_keyword_prefix_is_identifier(self, tokenize):
        tokens = tokenize("letter iffy")
        assert [t.type for t in tokens[:2]] == [TokenType.IDENT, TokenType.IDENT]

    def test_number_then_identifier(self, tokenize):
        """A digit run stops at the first letter."""
        tokens = tokenize("5five")
        assert _pairs(tokens)[:2] == [(TokenType.INT, "5"), (TokenType.IDENT, "five")]


class TestLexerLiterals:
    """Tests for string and number literals."""

    def test_double_quoted_string_keeps_quotes(self, tokenize):
        tokens = tokenize('"hello world"')
        assert _pairs(tokens)[0] == (TokenType.STRING, '"hello world"')

    def test_single_quoted_string(self, tokenize):
        tokens = tokenize("'hi'")
        assert _pairs(tokens)[0] == (TokenType.STRING, "'hi'")

    def test_other_quote_inside_string(self, tokenize):
        tokens = tokenize("\"it's\"")
        assert _pairs(tokens)[0] == (TokenType.STRING, "\"it's\"")

    def test_empty_string(self, tokenize):
        tokens = tokenize('""')
        assert _pairs(tokens)[0] == (TokenType.STRING, '""')

    def test_unterminated_string(self, tokenize):
        """An unterminated string becomes ILLEGAL and EOF still follows."""
        tokens = tokenize('let s = "hello')
        assert _pairs(tokens) == [
            (TokenType.LET, "let"),
            (TokenType.IDENT, "s"),
            (TokenType.ASSIGN, "="),
            (TokenType.ILLEGAL, '"hello'),
            (TokenType.EOF, "\x00"),
        ]

    def test_float(self, tokenize):
        tokens = tokenize("3.14")
        assert _pairs(tokens)[0] == (TokenType.FLOAT, "3.14")

    def test_trailing_dot_is_float(self, tokenize):
        tokens = tokenize("1.")
        assert _pairs(tokens)[0] == (TokenType.FLOAT, "1.")

    def test_second_dot_is_illegal(self, tokenize):
        """A second '.' ends the number as ILLEGAL, dot included."""
        tokens = tokenize("1..2")
        assert _pairs(tokens) == [
            (TokenType.ILLEGAL, "1.."),
            (TokenType.INT, "2"),
            (TokenType.EOF, "\x00"),
        ]

    def test_illegal_character(self, tokenize):
        tokens = tokenize("a @ b")
        assert _pairs(tokens)[:3] == [
            (TokenType.IDENT, "a"),
            (TokenType.ILLEGAL, "@"),
            (TokenType.IDENT, "b"),
        ]

    def test_non_ascii_letter_is_illegal(self, tokenize):
        tokens = tokenize("é")
        assert tokens[0].type == TokenType.ILLEGAL


class TestLexerLocations:
    """Tests for source location tracking."""

    def test_columns_on_one_line(self, tokenize):
        tokens = tokenize("let x = 5;")
        positions = [(t.location.line, t.location.column) for t in tokens]
        assert positions == [(1, 1), (1, 5), (1, 7), (1, 9), (1, 10), (1, 11)]

    def test_lines(self, tokenize):
        tokens = tokenize("a\n  b")
        assert (tokens[0].location.line, tokens[0].location.column) == (1, 1)
        assert (tokens[1].location.line, tokens[1].location.column) == (2, 3)

    def test_filename_recorded(self, tokenize):
        tokens = tokenize("x")
        assert tokens[0].location.filename == "test.monkey"
        assert str(tokens[0].location) == "test.monkey:1:1"

    def test_location_does_not_affect_equality(self, tokenize):
        first = tokenize("x")[0]
        second = tokenize("  x")[0]
        assert first == second


class TestLexerTerminator:
    """Tests for custom terminator characters."""

    def test_custom_terminator_is_lexed(self):
        """A custom terminator is dispatched like any other character."""
        lexer = Lexer("x").with_end_char(";")
        assert _pairs(lexer.tokenize()) == [
            (TokenType.IDENT, "x"),
            (TokenType.SEMICOLON, ";"),
        ]
        assert lexer.next_token() is None

    def test_with_end_char_chains(self):
        lexer = Lexer("")
        assert lexer.with_end_char(")") is lexer

    @pytest.mark.parametrize("bad", ["", "ab"])
    def test_terminator_must_be_one_character(self, bad):
        with pytest.raises(ValueError):
            Lexer("x").with_end_char(bad)


class TestLexerIteration:
    """Tests for the draining helpers."""

    def test_iteration_matches_tokenize(self, lexer_factory):
        source = "let a = [1, 2];"
        assert list(lexer_factory(source)) == lexer_factory(source).tokenize()

    def test_tokenize_after_partial_read(self, lexer_factory):
        """tokenize() returns only the tokens not yet read."""
        lexer = lexer_factory("a b")
        lexer.next_token()
        assert _pairs(lexer.tokenize()) == [(TokenType.IDENT, "b"), (TokenType.EOF, "\x00")]
