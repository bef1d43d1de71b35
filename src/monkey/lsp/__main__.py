"""
Entry point for running the Monkey LSP server as a module.

Usage:
    python -m monkey.lsp
    python -m monkey.lsp --tcp --port 2087
"""

from monkey.lsp.server import main

if __name__ == "__main__":
    main()
