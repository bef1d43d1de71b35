"""
Diagnostic generation for the Monkey LSP.

Converts parser diagnostics into LSP diagnostics for display in editors.
"""

from lsprotocol import types

from monkey.compiler import parse_source
from monkey.utils.diagnostics import Diagnostic as CompilerDiagnostic

DIAGNOSTIC_SOURCE = "monkey"


class DiagnosticProvider:
    """
    Generates LSP diagnostics from Monkey source code.

    The parser never raises on bad input, so every syntax error it
    collects becomes one diagnostic.
    """

    def __init__(self, source: str, uri: str) -> None:
        """
        Initialize the diagnostic provider.

        Args:
            source: The Monkey source code to analyze
            uri: The document URI for location information
        """
        self.source = source
        self.uri = uri
        self._diagnostics: list[types.Diagnostic] = []

    def get_diagnostics(self) -> list[types.Diagnostic]:
        """
        Get all diagnostics for the document.

        Returns:
            List of LSP diagnostic objects, in source order of discovery
        """
        self._diagnostics = []
        result = parse_source(self.source, filename=self.uri)
        for diag in result.diagnostics:
            self._add_compiler_diagnostic(diag)
        return self._diagnostics

    def _add_compiler_diagnostic(self, diag: CompilerDiagnostic) -> None:
        line = 0
        character = 0
        end_line = 0
        end_character = 1

        span = diag.primary_span
        if span is not None:
            # LSP positions are 0-indexed
            line = max(0, span.start_line - 1)
            character = max(0, span.start_col - 1)
            end_line = max(0, span.end_line - 1)
            end_character = max(character + 1, span.end_col - 1)

        message_parts = [diag.message]
        for help_msg in diag.helps:
            message_parts.append(f"help: {help_msg}")

        related = self._related_information(diag)

        self._diagnostics.append(
            types.Diagnostic(
                range=types.Range(
                    start=types.Position(line=line, character=character),
                    end=types.Position(line=end_line, character=end_character),
                ),
                message="\n".join(message_parts),
                severity=types.DiagnosticSeverity.Error,
                source=DIAGNOSTIC_SOURCE,
                code=diag.code,
                related_information=related or None,
            )
        )

    def _related_information(
        self, diag: CompilerDiagnostic
    ) -> list[types.DiagnosticRelatedInformation]:
        """Secondary labels, such as where an unclosed delimiter was opened."""
        related = []
        for label in diag.labels:
            if label.is_primary or not label.message:
                continue
            span = label.span
            related.append(
                types.DiagnosticRelatedInformation(
                    location=types.Location(
                        uri=self.uri,
                        range=types.Range(
                            start=types.Position(
                                line=max(0, span.start_line - 1),
                                character=max(0, span.start_col - 1),
                            ),
                            end=types.Position(
                                line=max(0, span.end_line - 1),
                                character=max(0, span.end_col - 1),
                            ),
                        ),
                    ),
                    message=label.message,
                )
            )
        return related


def get_diagnostics_for_document(source: str, uri: str) -> list[types.Diagnostic]:
    """
    Convenience function to get diagnostics for a document.

    Args:
        source: The Monkey source code
        uri: The document URI

    Returns:
        List of LSP diagnostics
    """
    provider = DiagnosticProvider(source, uri)
    return provider.get_diagnostics()
