"""
Monkey Command-Line Interface.

Drives the lexer and parser over a source file.

Usage:
    monkey tokens input.monkey      # Print the token stream
    monkey ast input.monkey         # Pretty-print the syntax tree
    monkey check input.monkey       # Report syntax errors
    monkey fmt input.monkey         # Print the canonical rendering
"""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from monkey import __version__
from monkey.compiler import ParseResult, parse_file
from monkey.compiler.ast_nodes import ASTNode
from monkey.compiler.lexer import Lexer
from monkey.utils.errors import MonkeyError

logger = logging.getLogger("monkey.cli")


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey - lexer and parser for the Monkey scripting language",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tokens_parser = subparsers.add_parser("tokens", help="Print the token stream of a file")
    tokens_parser.add_argument("input", type=Path, help="Input Monkey file")

    ast_parser = subparsers.add_parser("ast", help="Pretty-print the syntax tree of a file")
    ast_parser.add_argument("input", type=Path, help="Input Monkey file")

    check_parser = subparsers.add_parser("check", help="Check a file for syntax errors")
    check_parser.add_argument("input", type=Path, help="Input Monkey file")

    fmt_parser = subparsers.add_parser(
        "fmt",
        help="Print the canonical (fully parenthesized) rendering of a file",
    )
    fmt_parser.add_argument("input", type=Path, help="Input Monkey file")

    return parser


# =============================================================================
# Command Handlers
# =============================================================================


def _report_errors(result: ParseResult) -> None:
    """Print rendered diagnostics for a failed parse to stderr."""
    use_color = sys.stderr.isatty() and not os.environ.get("NO_COLOR")
    for diagnostic in result.diagnostics:
        print(diagnostic.render(result.source, use_color=use_color), file=sys.stderr)
        print(file=sys.stderr)
    count = len(result.errors)
    print(
        f"{Colors.RED}Error:{Colors.RESET} {count} syntax error{'s' if count != 1 else ''}",
        file=sys.stderr,
    )


def _input_exists(input_path: Path) -> bool:
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return False
    return True


def _parse_input(input_path: Path) -> Optional[ParseResult]:
    if not _input_exists(input_path):
        return None
    result = parse_file(input_path)
    logger.debug("parsed %s: %d statement(s), %d error(s)",
                 input_path, len(result.program.statements), len(result.errors))
    return result


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    input_path: Path = args.input

    if not _input_exists(input_path):
        return 1

    source = input_path.read_text(encoding="utf-8")
    for token in Lexer(source, str(input_path)):
        print(f"{token.location}\t{token.type.name}\t{token.literal!r}")

    return 0


def cmd_ast(args: argparse.Namespace) -> int:
    """Handle the ast command."""
    result = _parse_input(args.input)
    if result is None:
        return 1

    _print_ast(result.program)

    if not result.ok:
        _report_errors(result)
        return 1
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    result = _parse_input(args.input)
    if result is None:
        return 1

    if result.ok:
        print(f"{Colors.GREEN}OK:{Colors.RESET} {args.input} (no syntax errors)")
        return 0

    _report_errors(result)
    return 1


def cmd_fmt(args: argparse.Namespace) -> int:
    """Handle the fmt command."""
    result = _parse_input(args.input)
    if result is None:
        return 1

    if not result.ok:
        _report_errors(result)
        return 1

    for stmt in result.program.statements:
        print(stmt)
    return 0


def _print_ast(node: Any, indent: int = 0, label: str = "") -> None:
    """Pretty print an AST node."""
    prefix = "  " * indent
    head = f"{prefix}{label}: " if label else prefix

    if node is None:
        print(f"{head}<missing>")
        return

    if not isinstance(node, ASTNode):
        print(f"{head}{node!r}")
        return

    print(f"{head}{type(node).__name__}")
    for fld in dataclasses.fields(node):
        if fld.name in ("token", "closing"):
            continue
        value = getattr(node, fld.name)
        if isinstance(value, tuple):
            print(f"{prefix}  {fld.name}: [")
            for item in value:
                if isinstance(item, tuple):
                    # Hash pairs
                    _print_ast(item[0], indent + 2, "key")
                    _print_ast(item[1], indent + 2, "value")
                else:
                    _print_ast(item, indent + 2)
            print(f"{prefix}  ]")
        else:
            _print_ast(value, indent + 1, fld.name)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "tokens": cmd_tokens,
        "ast": cmd_ast,
        "check": cmd_check,
        "fmt": cmd_fmt,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (MonkeyError, OSError, UnicodeDecodeError) as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
