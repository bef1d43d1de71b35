"""
Pytest configuration and shared fixtures for Monkey tests.
"""

import pytest

from monkey.compiler.ast_nodes import Program
from monkey.compiler.lexer import Lexer
from monkey.compiler.parser import Parser
from monkey.compiler.tokens import Token


@pytest.fixture
def lexer_factory():
    """Factory fixture for creating lexers."""

    def _create_lexer(source: str, filename: str = "test.monkey") -> Lexer:
        return Lexer(source, filename)

    return _create_lexer


@pytest.fixture
def parser_factory(lexer_factory):
    """Factory fixture for creating parsers from source."""

    def _create_parser(source: str) -> Parser:
        return Parser(lexer_factory(source))

    return _create_parser


@pytest.fixture
def tokenize(lexer_factory):
    """Fixture to tokenize source code."""

    def _tokenize(source: str) -> list[Token]:
        return lexer_factory(source).tokenize()

    return _tokenize


@pytest.fixture
def parse(parser_factory):
    """Fixture to parse source code that must be free of syntax errors."""

    def _parse(source: str) -> Program:
        parser = parser_factory(source)
        program = parser.parse_program()
        assert parser.errors == [], f"parser had {len(parser.errors)} errors: {parser.errors}"
        return program

    return _parse


@pytest.fixture
def parse_errors(parser_factory):
    """Fixture to parse source code and return the error messages."""

    def _parse_errors(source: str) -> list[str]:
        parser = parser_factory(source)
        parser.parse_program()
        return parser.errors

    return _parse_errors


@pytest.fixture
def single_expression(parse):
    """Fixture to parse a one-statement program and return its expression."""

    def _single_expression(source: str):
        program = parse(source)
        assert len(program.statements) == 1
        return program.statements[0].expression

    return _single_expression
