"""
Monkey Language Server Protocol (LSP) Server.

This module implements an LSP server for Monkey using pygls. It provides:

- Document synchronization (open, change, save, close)
- Diagnostics for syntax errors
- Document symbols (outline of ``let`` bindings)

Usage:
    # Start the server in stdio mode (for IDE integration)
    monkey-lsp

    # Start in TCP mode (for debugging)
    monkey-lsp --tcp --port 2087
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.lsp.diagnostics import get_diagnostics_for_document
from monkey.lsp.symbols import get_document_symbols

logger = logging.getLogger("monkey-lsp")


class MonkeyLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for Monkey.

    Keeps the latest diagnostics per open document and re-parses the full
    text on every change.
    """

    def __init__(self) -> None:
        super().__init__(
            name="monkey-lsp",
            version=f"v{__version__}",
        )

        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register all LSP request and notification handlers."""
        # Document synchronization
        self.feature(types.TEXT_DOCUMENT_DID_OPEN)(self._on_did_open)
        self.feature(types.TEXT_DOCUMENT_DID_CHANGE)(self._on_did_change)
        self.feature(types.TEXT_DOCUMENT_DID_SAVE)(self._on_did_save)
        self.feature(types.TEXT_DOCUMENT_DID_CLOSE)(self._on_did_close)

        # Document symbols (outline)
        self.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)(self._on_document_symbol)

    def _analyze_document(self, uri: str, text: str) -> list[types.Diagnostic]:
        """Parse a document and convert its syntax errors to diagnostics."""
        diagnostics = get_diagnostics_for_document(text, uri)
        logger.debug("%s: %d diagnostic(s)", uri, len(diagnostics))
        return diagnostics

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info(f"Document opened: {document.uri}")

        diagnostics = self._analyze_document(document.uri, document.text)
        self._publish_diagnostics(document.uri, diagnostics)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        uri = params.text_document.uri

        doc = self.workspace.get_text_document(uri)
        if doc is None:
            return

        logger.debug(f"Document changed: {uri}")

        diagnostics = self._analyze_document(uri, doc.source)
        self._publish_diagnostics(uri, diagnostics)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        uri = params.text_document.uri
        logger.info(f"Document saved: {uri}")

        doc = self.workspace.get_text_document(uri)
        if doc:
            diagnostics = self._analyze_document(uri, doc.source)
            self._publish_diagnostics(uri, diagnostics)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info(f"Document closed: {uri}")

        # Clear diagnostics
        self._publish_diagnostics(uri, [])

    # =========================================================================
    # Document Symbols
    # =========================================================================

    def _on_document_symbol(
        self, params: types.DocumentSymbolParams
    ) -> Optional[list[types.DocumentSymbol]]:
        """Handle document symbols request (for outline view)."""
        uri = params.text_document.uri

        doc = self.workspace.get_text_document(uri)
        if doc is None:
            return None

        return get_document_symbols(doc.source, uri)


# =============================================================================
# Server Creation and Main Entry Point
# =============================================================================


def create_server() -> MonkeyLanguageServer:
    """Create and configure a Monkey language server instance."""
    server = MonkeyLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        """Handle initialized notification."""
        logger.info("Monkey Language Server initialized successfully")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        """Handle shutdown request."""
        logger.info("Shutting down Monkey Language Server")

    return server


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Monkey Language Server",
        prog="monkey-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the Monkey language server.

    Starts the server in stdio mode for IDE integration, or on a TCP socket
    with ``--tcp``.
    """
    args = create_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    server = create_server()

    if args.tcp:
        logger.info(f"Starting Monkey LSP in TCP mode on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting Monkey LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
