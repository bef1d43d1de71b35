"""
Character classification helpers used by the lexer.

Only ASCII letters count as letters; the underscore is treated as a letter
so identifiers may start with it.
"""


def is_letter(ch: str) -> bool:
    """Return True for ASCII letters and underscore."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    """Return True for ASCII decimal digits."""
    return "0" <= ch <= "9"


def is_literal(ch: str) -> bool:
    """Return True for characters that may appear inside identifiers and numbers."""
    return is_letter(ch) or is_digit(ch)


def is_whitespace(ch: str) -> bool:
    return ch in (" ", "\t", "\n", "\r")
