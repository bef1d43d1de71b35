"""
Monkey Language Server.

Publishes syntax diagnostics and a document outline to editors over LSP.
"""

from monkey.lsp.diagnostics import DiagnosticProvider, get_diagnostics_for_document
from monkey.lsp.symbols import get_document_symbols

__all__ = [
    "DiagnosticProvider",
    "get_diagnostics_for_document",
    "get_document_symbols",
]
