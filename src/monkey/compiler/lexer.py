"""
Monkey Lexer (Tokenizer).

Transforms Monkey source code into tokens, one at a time, on demand. The
lexer never raises on bad input: anything it cannot classify becomes an
ILLEGAL token that the parser later reports.
"""

import logging
from enum import Enum, auto
from typing import Iterator, Optional

from monkey.compiler.chars import is_digit, is_letter, is_literal, is_whitespace
from monkey.compiler.tokens import (
    DOUBLE_CHAR_TOKENS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
    lookup_ident,
)
from monkey.utils.errors import SourceLocation

logger = logging.getLogger("monkey.lexer")

# Character injected once after the last input character
END_OF_INPUT = "\x00"

QUOTES = ('"', "'")


class CursorState(Enum):
    """Where the read cursor stands relative to the end of input."""

    MORE_INPUT = auto()
    PENDING_TERMINATOR = auto()
    EXHAUSTED = auto()


class Lexer:
    """
    Pull-based tokenizer for Monkey source code.

    After the last input character the lexer reads one extra terminator
    character (``"\\x00"`` by default), which lexes to the EOF token. Once
    the terminator has been read, :meth:`next_token` returns ``None``.

    Usage:
        lexer = Lexer(source_code)
        token = lexer.next_token()
        # or drain it: tokens = lexer.tokenize()
        # or iterate: for token in lexer: ...
    """

    def __init__(
        self,
        source: str,
        filename: Optional[str] = None,
        end_char: str = END_OF_INPUT,
    ) -> None:
        """
        Initialize the lexer with source code.

        Args:
            source: The Monkey source code to tokenize
            filename: Optional filename recorded in token locations
            end_char: The terminator read once after the input
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self._end_char = end_char
        self._state = CursorState.MORE_INPUT if source else CursorState.PENDING_TERMINATOR

    def with_end_char(self, ch: str) -> "Lexer":
        """Replace the terminator character; returns the lexer for chaining."""
        if len(ch) != 1:
            raise ValueError(f"terminator must be a single character, got {ch!r}")
        self._end_char = ch
        return self

    @property
    def state(self) -> CursorState:
        """The current cursor state."""
        return self._state

    def _has_next(self) -> bool:
        return self._state is not CursorState.EXHAUSTED

    def _peek_char(self) -> Optional[str]:
        """Return the next character without consuming it, or None if exhausted."""
        if self._state is CursorState.MORE_INPUT:
            return self.source[self.pos]
        if self._state is CursorState.PENDING_TERMINATOR:
            return self._end_char
        return None

    def _advance(self) -> str:
        """Consume and return the next character (input or terminator)."""
        if self._state is CursorState.PENDING_TERMINATOR:
            self._state = CursorState.EXHAUSTED
            return self._end_char
        if self._state is CursorState.EXHAUSTED:
            raise IndexError("lexer advanced past end of input")

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        if self.pos >= len(self.source):
            self._state = CursorState.PENDING_TERMINATOR

        return char

    def _location(self) -> SourceLocation:
        """Create a SourceLocation for the current position."""
        return SourceLocation(
            line=self.line,
            column=self.column,
            offset=self.pos,
            filename=self.filename,
        )

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs, newlines and carriage returns."""
        while self._has_next():
            ch = self._peek_char()
            if ch is None or not is_whitespace(ch):
                break
            self._advance()

    # -------------------------------------------------------------------------
    # Token production
    # -------------------------------------------------------------------------

    def next_token(self) -> Optional[Token]:
        """
        Produce the next token.

        Returns:
            The next token, or None once the terminator has been consumed.
        """
        if not self._has_next():
            return None

        self._skip_whitespace()
        if not self._has_next():
            return None

        start = self._location()
        ch = self._advance()

        if ch in ("=", "!") and self._peek_char() == "=":
            text = ch + self._advance()
            return Token(DOUBLE_CHAR_TOKENS[text], text, start)

        if ch in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[ch], ch, start)

        if ch == END_OF_INPUT:
            return Token(TokenType.EOF, ch, start)

        if ch in QUOTES:
            return self._read_string(ch, start)

        if is_letter(ch):
            return self._read_identifier(ch, start)

        if is_digit(ch):
            return self._read_number(ch, start)

        logger.debug("illegal character %r at %s", ch, start)
        return Token(TokenType.ILLEGAL, ch, start)

    def _read_string(self, quote_char: str, start: SourceLocation) -> Token:
        """
        Read a string literal up to the matching quote.

        The token literal keeps both quotes. Running out of input before the
        closing quote produces an ILLEGAL token holding the partial text; the
        terminator is left unread so EOF still follows.
        """
        chars = [quote_char]

        while self._state is CursorState.MORE_INPUT:
            ch = self._advance()
            chars.append(ch)
            if ch == quote_char:
                return Token(TokenType.STRING, "".join(chars), start)

        text = "".join(chars)
        logger.debug("unterminated string literal %r at %s", text, start)
        return Token(TokenType.ILLEGAL, text, start)

    def _read_identifier(self, first: str, start: SourceLocation) -> Token:
        """Read a maximal run of letters, digits and underscores."""
        chars = [first]
        while self._has_next():
            ch = self._peek_char()
            if ch is None or not is_literal(ch):
                break
            chars.append(self._advance())

        text = "".join(chars)
        return Token(lookup_ident(text), text, start)

    def _read_number(self, first: str, start: SourceLocation) -> Token:
        """
        Read an integer or float literal.

        A run of digits with one ``.`` is a FLOAT. A second ``.`` ends the
        literal as ILLEGAL, the offending ``.`` included.
        """
        chars = [first]
        seen_dot = False

        while self._has_next():
            ch = self._peek_char()
            if ch is None or not (is_digit(ch) or ch == "."):
                break
            chars.append(self._advance())
            if ch == ".":
                if seen_dot:
                    text = "".join(chars)
                    logger.debug("malformed number %r at %s", text, start)
                    return Token(TokenType.ILLEGAL, text, start)
                seen_dot = True

        text = "".join(chars)
        return Token(TokenType.FLOAT if seen_dot else TokenType.INT, text, start)

    # -------------------------------------------------------------------------
    # Draining helpers
    # -------------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """
        Drain the lexer into a list.

        Returns:
            All remaining tokens; for a fresh lexer the list ends with EOF.
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token
