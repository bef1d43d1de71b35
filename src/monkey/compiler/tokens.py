"""
Token definitions for the Monkey lexer.

This module defines every token type the lexer can produce, the keyword
table used to classify identifier text, and the lookup tables for
operators and delimiters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from monkey.utils.errors import SourceLocation


class TokenType(Enum):
    """
    Enumeration of all token types in Monkey.

    Each member's value is the name shown in error messages, so operators
    and delimiters read as their own text (``expected next token to be )``).
    """

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers and literals
    IDENT = "IDENT"      # add, foobar, x, y
    INT = "INT"          # 123456
    FLOAT = "FLOAT"      # 0.12, 1.232
    STRING = "STRING"    # "hello", 'world'

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    LT = "<"
    GT = ">"

    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


# Mapping of keywords to token types
KEYWORDS: dict[str, TokenType] = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

# Single character operators and delimiters
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "!": TokenType.BANG,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# Two character operators (checked before single char)
DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
}


def lookup_ident(ident: str) -> TokenType:
    """Classify identifier text as a keyword or a plain IDENT."""
    return KEYWORDS.get(ident, TokenType.IDENT)


@dataclass(frozen=True, slots=True)
class Token:
    """
    Represents a single token from the source code.

    Attributes:
        type: The type of this token
        literal: The exact source text of the token
        location: Source location of this token
    """

    type: TokenType
    literal: str
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __repr__(self) -> str:
        if self.location is not None:
            return f"Token({self.type.name}, {self.literal!r}, {self.location})"
        return f"Token({self.type.name}, {self.literal!r})"

    def __str__(self) -> str:
        return f"type {self.type.value}, value {self.literal}"

    def is_type(self, token_type: TokenType) -> bool:
        """Check if this token is of the given type."""
        return self.type == token_type

    @property
    def is_eof(self) -> bool:
        """Check if this is the end-of-file token."""
        return self.type == TokenType.EOF

    @property
    def is_literal(self) -> bool:
        """Check if this token represents a literal value."""
        return self.type in {
            TokenType.INT,
            TokenType.FLOAT,
            TokenType.STRING,
            TokenType.TRUE,
            TokenType.FALSE,
        }

    @property
    def is_operator(self) -> bool:
        """Check if this token represents an operator."""
        return self.type in {
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.BANG,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.LT,
            TokenType.GT,
            TokenType.EQ,
            TokenType.NOT_EQ,
        }
