"""
Error types and source location tracking for the Monkey front end.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Attributes:
        line: 1-indexed line number
        column: 1-indexed column number
        offset: 0-indexed character offset from start of source
        filename: Optional filename for error reporting
    """

    line: int
    column: int
    offset: int = 0
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class MonkeyError(Exception):
    """Base exception for all Monkey front-end errors."""

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        self.message = message
        self.location = location
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []

        if self.location:
            parts.append(f"[{self.location}]")

        parts.append(self.message)

        if self.source_line and self.location:
            parts.append(f"\n    {self.source_line}")
            # Caret under the offending column
            padding = " " * (4 + self.location.column - 1)
            parts.append(f"\n{padding}^")

        return " ".join(parts) if not self.source_line else parts[0] + " " + "".join(parts[1:])


class LexerError(MonkeyError):
    """Raised when lexing cannot proceed (e.g. the source file is unreadable)."""

    pass


class ParserError(MonkeyError):
    """
    Raised by strict entry points when the parser reported errors.

    The parser itself never raises; it accumulates messages. This exception
    bundles them for callers that want a hard failure.

    Attributes:
        errors: Every message the parser recorded, in order
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        errors: Optional[list[str]] = None,
    ) -> None:
        self.errors = list(errors or [])
        super().__init__(message, location, source_line)

    def _format_message(self) -> str:
        base = super()._format_message()
        if len(self.errors) <= 1:
            return base
        extra = "".join(f"\n  - {error}" for error in self.errors[1:])
        return f"{base}{extra}"
