"""
Document symbols for the Monkey LSP.

Every ``let`` binding becomes an outline entry. Bindings whose value is a
function literal are reported as functions, with the bindings made inside
their body nested beneath them; everything else is a variable.
"""

from dataclasses import dataclass, field
from typing import Optional

from lsprotocol import types

from monkey.compiler import parse_source
from monkey.compiler.ast_nodes import (
    BaseASTVisitor,
    BlockStatement,
    FunctionLiteral,
    LetStatement,
    Program,
)
from monkey.compiler.tokens import Token


@dataclass
class Symbol:
    """
    A named binding in a Monkey document.

    Attributes:
        name: The bound identifier
        kind: LSP symbol kind (Function or Variable)
        line: 0-indexed line of the ``let`` keyword
        character: 0-indexed column of the ``let`` keyword
        name_character: 0-indexed column of the identifier
        detail: Short signature, e.g. ``fn(x, y)``
        end: 0-indexed (line, column) where the binding ends; the end of
            the name when unset
        children: Bindings nested inside a function body
    """

    name: str
    kind: types.SymbolKind
    line: int
    character: int
    name_character: int
    detail: Optional[str] = None
    end: Optional[tuple[int, int]] = None
    children: list["Symbol"] = field(default_factory=list)

    def to_document_symbol(self) -> types.DocumentSymbol:
        """Convert to LSP DocumentSymbol."""
        name_end = self.name_character + len(self.name)
        end_line, end_character = self.end or (self.line, name_end)
        children = [child.to_document_symbol() for child in self.children]
        return types.DocumentSymbol(
            name=self.name,
            kind=self.kind,
            range=types.Range(
                start=types.Position(line=self.line, character=self.character),
                end=types.Position(line=end_line, character=end_character),
            ),
            selection_range=types.Range(
                start=types.Position(line=self.line, character=self.name_character),
                end=types.Position(line=self.line, character=name_end),
            ),
            detail=self.detail,
            children=children if children else None,
        )


def _position(token: Token) -> tuple[int, int]:
    if token.location is None:
        return 0, 0
    return max(0, token.location.line - 1), max(0, token.location.column - 1)


def _body_end(body: BlockStatement, symbol: Symbol) -> tuple[int, int]:
    """End of a function binding: past its closing brace, or past its last child."""
    if body.closing is not None and body.closing.location is not None:
        line, character = _position(body.closing)
        return line, character + 1
    ends = [(symbol.line, symbol.name_character + len(symbol.name))]
    ends.extend(child.end or (child.line, child.name_character + len(child.name))
                for child in symbol.children)
    return max(ends)


class SymbolCollector(BaseASTVisitor):
    """Collects ``let`` bindings, nesting those made inside function bodies."""

    def __init__(self) -> None:
        self.symbols: list[Symbol] = []
        self._stack: list[list[Symbol]] = [self.symbols]

    def collect(self, program: Program) -> list[Symbol]:
        self.visit(program)
        return self.symbols

    def visit_let_statement(self, node: LetStatement) -> None:
        line, character = _position(node.token)
        _, name_character = _position(node.name.token)

        if isinstance(node.value, FunctionLiteral):
            params = ", ".join(str(p) for p in node.value.parameters)
            symbol = Symbol(
                name=node.name.value,
                kind=types.SymbolKind.Function,
                line=line,
                character=character,
                name_character=name_character,
                detail=f"fn({params})",
            )
            self._stack[-1].append(symbol)
            self._stack.append(symbol.children)
            try:
                self.visit(node.value.body)
            finally:
                self._stack.pop()
            symbol.end = _body_end(node.value.body, symbol)
            return

        self._stack[-1].append(
            Symbol(
                name=node.name.value,
                kind=types.SymbolKind.Variable,
                line=line,
                character=character,
                name_character=name_character,
            )
        )
        self.visit(node.value)


def get_document_symbols(source: str, uri: str = "") -> list[types.DocumentSymbol]:
    """
    Build the outline for a document.

    Partial trees are fine: bindings before and after a syntax error are
    still reported.
    """
    program = parse_source(source, filename=uri or None).program
    return [symbol.to_document_symbol() for symbol in SymbolCollector().collect(program)]
