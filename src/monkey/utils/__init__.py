"""
Monkey Utilities Package.

Common utilities for error handling, source locations, and diagnostics.
"""

from monkey.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticEmitter,
    DiagnosticLabel,
    DiagnosticLevel,
    ErrorCode,
    SourceSpan,
    matching_delimiter,
)
from monkey.utils.errors import (
    LexerError,
    MonkeyError,
    ParserError,
    SourceLocation,
)

__all__ = [
    # Errors
    "MonkeyError",
    "LexerError",
    "ParserError",
    "SourceLocation",
    # Diagnostics
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    "DiagnosticLevel",
    "SourceSpan",
    "DiagnosticLabel",
    "Diagnostic",
    "DiagnosticEmitter",
    "matching_delimiter",
]
