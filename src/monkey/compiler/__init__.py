"""
Monkey Compiler Front-End Package.

This package contains the front-end components:
- Tokens: Token types and the keyword table
- Chars: Character classification helpers
- Lexer: Pull-based tokenizer for Monkey source code
- AST: Node definitions for the syntax tree
- Parser: Pratt parser producing a Program and an error list
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from monkey.compiler.ast_nodes import Program
from monkey.compiler.lexer import Lexer
from monkey.compiler.parser import Parser, Precedence
from monkey.compiler.tokens import KEYWORDS, Token, TokenType
from monkey.utils.diagnostics import Diagnostic
from monkey.utils.errors import LexerError, ParserError, SourceLocation


@dataclass
class ParseResult:
    """
    Outcome of parsing one source text.

    Attributes:
        program: The (possibly partial) AST
        errors: Parser error messages in the order they were found
        diagnostics: Located diagnostics matching ``errors``
        source: The text that was parsed
    """

    program: Program
    errors: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    source: str = ""

    @property
    def ok(self) -> bool:
        """True when the parser reported no errors."""
        return not self.errors


def tokenize(source: str, filename: Optional[str] = None) -> list[Token]:
    """
    Tokenize Monkey source code.

    Args:
        source: Monkey source code
        filename: Optional filename recorded in token locations

    Returns:
        Every token, ending with EOF
    """
    return Lexer(source, filename).tokenize()


def parse_source(source: str, filename: Optional[str] = None) -> ParseResult:
    """
    Parse Monkey source code without raising.

    Args:
        source: Monkey source code
        filename: Optional filename for diagnostics

    Returns:
        The program together with any errors found
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse_program()
    return ParseResult(
        program=program,
        errors=list(parser.errors),
        diagnostics=list(parser.diagnostics),
        source=source,
    )


def parse_or_raise(source: str, filename: Optional[str] = None) -> Program:
    """
    Parse Monkey source code, raising on any syntax error.

    Raises:
        ParserError: If the parser reported errors; ``errors`` lists them all
    """
    result = parse_source(source, filename)
    if result.ok:
        return result.program

    location = None
    first = result.diagnostics[0].primary_span if result.diagnostics else None
    source_line = None
    if first is not None:
        location = SourceLocation(first.start_line, first.start_col, filename=filename)
        lines = source.splitlines()
        if 1 <= first.start_line <= len(lines):
            source_line = lines[first.start_line - 1]

    raise ParserError(
        result.errors[0],
        location,
        source_line,
        errors=result.errors,
    )


def parse_file(path: Path) -> ParseResult:
    """
    Read and parse a Monkey source file.

    Raises:
        LexerError: If the file cannot be read
    """
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LexerError(f"cannot read {path}: {e}") from e
    return parse_source(source, str(path))


__all__ = [
    "KEYWORDS",
    "Lexer",
    "ParseResult",
    "Parser",
    "Precedence",
    "Program",
    "Token",
    "TokenType",
    "parse_file",
    "parse_or_raise",
    "parse_source",
    "tokenize",
]
