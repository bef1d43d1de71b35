"""
Monkey - lexer and Pratt parser for the Monkey scripting language.

Source text is turned into tokens on demand by the lexer and into an
abstract syntax tree by the parser. Syntax errors are collected, not
raised, so callers always get a (possibly partial) tree plus an error list.
"""

from monkey.compiler import parse_or_raise, parse_source, tokenize
from monkey.compiler.lexer import Lexer
from monkey.compiler.parser import Parser

__version__ = "0.1.0"
__all__ = [
    "parse_source",
    "parse_or_raise",
    "tokenize",
    "Lexer",
    "Parser",
]
