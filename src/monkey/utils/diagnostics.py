"""
Rust-like rich error diagnostics for Monkey.

The parser records every syntax error twice: as a plain message string (the
public error list) and as a :class:`Diagnostic` that knows where in the
source the problem is. Diagnostics render with source context:

    error[E0201]: expected next token to be ), got EOF instead
      --> example.monkey:1:7
       |
     1 | add(1, 2
       |        ^
       |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Catalog of error codes for Monkey diagnostics.

    Only syntax errors (E02xx) exist; there is no semantic analysis.
    """

    E0201 = "E0201"  # unexpected token
    E0202 = "E0202"  # unclosed delimiter
    E0204 = "E0204"  # invalid expression
    E0206 = "E0206"  # unterminated string
    E0207 = "E0207"  # invalid number
    E0208 = "E0208"  # illegal character
    E0209 = "E0209"  # nesting too deep


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0201: "unexpected token",
    ErrorCode.E0202: "unclosed delimiter",
    ErrorCode.E0204: "invalid expression",
    ErrorCode.E0206: "unterminated string",
    ErrorCode.E0207: "invalid number",
    ErrorCode.E0208: "illegal character",
    ErrorCode.E0209: "expression nested too deeply",
}


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
        }
        return colors.get(self, "")


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """
    A span of source code on one or more lines.

    Attributes:
        start_line: 1-indexed starting line number
        start_col: 1-indexed starting column number
        end_line: 1-indexed ending line number
        end_col: 1-indexed ending column number (exclusive)
        filename: Optional filename for display
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    filename: str = "<input>"

    @classmethod
    def from_location(
        cls, line: int, col: int, length: int = 1, filename: str = "<input>"
    ) -> "SourceSpan":
        """Create a span from a single location with a given length."""
        return cls(
            start_line=line,
            start_col=col,
            end_line=line,
            end_col=col + length,
            filename=filename,
        )

    def __str__(self) -> str:
        return f"{self.filename}:{self.start_line}:{self.start_col}"

    @property
    def is_multiline(self) -> bool:
        """Check if this span covers multiple lines."""
        return self.start_line != self.end_line

    @property
    def length(self) -> int:
        """Get the length of the span on a single line."""
        if self.is_multiline:
            return 1
        return max(1, self.end_col - self.start_col)


@dataclass(slots=True)
class DiagnosticLabel:
    """
    A label pointing to a specific span of source code.

    Attributes:
        span: The source span this label points to
        message: Optional message to display with the label
        is_primary: Whether this is the primary label (shown with ^^^)
    """

    span: SourceSpan
    message: str = ""
    is_primary: bool = True


@dataclass
class Diagnostic:
    """
    A diagnostic message with source context.

    Attributes:
        code: Error code (e.g., "E0201")
        level: Severity level
        message: The main diagnostic message
        labels: Source code labels
        helps: Help messages
    """

    code: str
    level: DiagnosticLevel
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    @property
    def primary_span(self) -> Optional[SourceSpan]:
        """The span of the primary label, if any."""
        if not self.labels:
            return None
        return next((l for l in self.labels if l.is_primary), self.labels[0]).span

    def render(self, source_code: str, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            source_code: The original source code for context
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []
        source_lines = source_code.splitlines()

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""

        # error[E0201]: expected next token to be ), got EOF instead
        level_str = self.level.value
        if self.code in ERROR_DESCRIPTIONS:
            header = (
                f"{level_color}{bold}{level_str}[{self.code}]{reset}: {bold}{self.message}{reset}"
            )
        else:
            header = f"{level_color}{bold}{level_str}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        span = self.primary_span
        if span is not None:
            lines.append(f"  {blue}-->{reset} {span}")

        if self.labels and source_lines:
            lines.append(f"   {blue}|{reset}")

            labels_by_line: dict[int, list[DiagnosticLabel]] = {}
            for label in self.labels:
                labels_by_line.setdefault(label.span.start_line, []).append(label)

            for line_num in sorted(labels_by_line):
                if 1 <= line_num <= len(source_lines):
                    source_line = source_lines[line_num - 1]
                    lines.append(f"{blue}{line_num:3} |{reset} {source_line}")

                    for label in labels_by_line[line_num]:
                        underline_char = "^" if label.is_primary else "-"
                        underline_color = level_color if label.is_primary else blue

                        padding = " " * (label.span.start_col - 1)
                        underline = underline_char * label.span.length

                        underline_line = (
                            f"   {blue}|{reset} {padding}{underline_color}{underline}{reset}"
                        )
                        if label.message:
                            underline_line += f" {underline_color}{label.message}{reset}"
                        lines.append(underline_line)

            lines.append(f"   {blue}|{reset}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)


# =============================================================================
# Diagnostic Emitter
# =============================================================================


class DiagnosticEmitter:
    """
    Collects and renders diagnostics for a source file.

    Usage:
        emitter = DiagnosticEmitter(source, "example.monkey")
        emitter.error(ErrorCode.E0201, "unexpected token", span)
        print(emitter.render_all())
    """

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.diagnostics: list[Diagnostic] = []

    def error(
        self,
        code: str,
        message: str,
        span: Optional[SourceSpan] = None,
        helps: Optional[list[str]] = None,
    ) -> Diagnostic:
        """Create, record and return an error diagnostic."""
        labels = [DiagnosticLabel(span)] if span is not None else []
        diagnostic = Diagnostic(
            code=code,
            level=DiagnosticLevel.ERROR,
            message=message,
            labels=labels,
            helps=list(helps or []),
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def render_all(self, use_color: bool = True) -> str:
        """Render all diagnostics as a single string."""
        return "\n\n".join(d.render(self.source, use_color) for d in self.diagnostics)


def matching_delimiter(opening: str) -> str:
    """Get the closing delimiter for an opening one."""
    matches = {"(": ")", "[": "]", "{": "}"}
    return matches.get(opening, opening)


__all__ = [
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "DiagnosticLabel",
    "Diagnostic",
    "DiagnosticEmitter",
    "matching_delimiter",
]
