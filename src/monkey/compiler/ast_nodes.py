"""
Abstract Syntax Tree (AST) node definitions for Monkey.

Every node is an immutable dataclass that keeps the token it was built from
and renders back to a canonical string via ``str()``. Expressions render
fully parenthesized (``((a + b) * c)``), which makes the rendering usable as
a structural oracle in tests.

A child may be ``None`` where the parser failed to build it; rendering
treats a missing child as empty text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from monkey.compiler.tokens import Token


class ASTNode(ABC):
    """Base class for all AST nodes."""

    token: Token

    def token_literal(self) -> str:
        """The literal text of the token this node was built from."""
        return self.token.literal

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ASTVisitor(ABC):
    """
    Visitor pattern base class for AST traversal.

    Implement this to create custom AST processors (printers, symbol
    collectors, evaluators).
    """

    def visit(self, node: Optional[ASTNode]) -> Any:
        """Dispatch to the appropriate visit method; missing nodes are skipped."""
        if node is None:
            return None
        return node.accept(self)


def _render(node: Optional[ASTNode]) -> str:
    return "" if node is None else str(node)


class Statement(ASTNode):
    """Base class for all statements."""

    pass


class Expression(ASTNode):
    """Base class for all expressions."""

    pass


# -----------------------------------------------------------------------------
# Expressions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier(Expression):
    """
    An identifier expression.

    Example:
        x, myVariable, _private
    """

    token: Token
    value: str

    def __str__(self) -> str:
        return self.value

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_identifier(self)


@dataclass(frozen=True, slots=True)
class IntegerLiteral(Expression):
    """A 64-bit signed integer literal."""

    token: Token
    value: int

    def __str__(self) -> str:
        return self.token.literal

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_integer_literal(self)


@dataclass(frozen=True, slots=True)
class FloatLiteral(Expression):
    """A floating-point literal."""

    token: Token
    value: float

    def __str__(self) -> str:
        return self.token.literal

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_float_literal(self)


@dataclass(frozen=True, slots=True)
class StringLiteral(Expression):
    """
    A string literal.

    ``value`` holds the text between the quotes; the token literal keeps the
    quotes and is what the node renders as.
    """

    token: Token
    value: str

    def __str__(self) -> str:
        return self.token.literal

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_string_literal(self)


@dataclass(frozen=True, slots=True)
class Boolean(Expression):
    """A ``true`` or ``false`` literal."""

    token: Token
    value: bool

    def __str__(self) -> str:
        return self.token.literal

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_boolean(self)


@dataclass(frozen=True, slots=True)
class PrefixExpression(Expression):
    """
    A unary operation.

    Example:
        -x, !flag
    """

    token: Token
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.operator}{_render(self.right)})"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_prefix_expression(self)


@dataclass(frozen=True, slots=True)
class InfixExpression(Expression):
    """
    A binary operation.

    Example:
        a + b, x == y
    """

    token: Token
    left: Optional[Expression]
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_infix_expression(self)


@dataclass(frozen=True, slots=True)
class IfExpression(Expression):
    """
    A conditional expression with an optional ``else`` block.

    Example:
        if (x < y) { x } else { y }
    """

    token: Token
    condition: Optional[Expression]
    consequence: "BlockStatement"
    alternative: Optional["BlockStatement"] = None

    def __str__(self) -> str:
        text = f"if{_render(self.condition)} {self.consequence}"
        if self.alternative is not None:
            text += f"else {self.alternative}"
        return text

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_if_expression(self)


@dataclass(frozen=True, slots=True)
class FunctionLiteral(Expression):
    """
    A function literal.

    Example:
        fn(x, y) { x + y; }
    """

    token: Token
    parameters: tuple[Identifier, ...]
    body: "BlockStatement"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token.literal}({params}) {self.body}"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_function_literal(self)


@dataclass(frozen=True, slots=True)
class CallExpression(Expression):
    """
    A function application.

    Example:
        add(1, 2 * 3), fn(x) { x }(5)
    """

    token: Token
    function: Optional[Expression]
    arguments: tuple[Optional[Expression], ...]

    def __str__(self) -> str:
        args = ", ".join(_render(a) for a in self.arguments)
        return f"{_render(self.function)}({args})"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_call_expression(self)


@dataclass(frozen=True, slots=True)
class ArrayLiteral(Expression):
    """
    An array literal.

    Example:
        [1, 2 * 2, fn(x) { x }]
    """

    token: Token
    elements: tuple[Optional[Expression], ...]

    def __str__(self) -> str:
        return "[" + ", ".join(_render(e) for e in self.elements) + "]"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_array_literal(self)


@dataclass(frozen=True, slots=True)
class IndexExpression(Expression):
    """
    A collection index.

    Example:
        myArray[1 + 1]
    """

    token: Token
    left: Optional[Expression]
    index: Optional[Expression]

    def __str__(self) -> str:
        return f"({_render(self.left)}[{_render(self.index)}])"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_index_expression(self)


@dataclass(frozen=True, slots=True)
class HashLiteral(Expression):
    """
    A hash literal.

    Pairs are kept in source order; a repeated key keeps both pairs.

    Example:
        {"one": 1, two: 1 + 1}
    """

    token: Token
    pairs: tuple[tuple[Optional[Expression], Optional[Expression]], ...]

    def __str__(self) -> str:
        body = ", ".join(f"{_render(k)}:{_render(v)}" for k, v in self.pairs)
        return "{" + body + "}"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_hash_literal(self)


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LetStatement(Statement):
    """
    A binding: ``let <name> = <value>;``.
    """

    token: Token
    name: Identifier
    value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token.literal} {self.name} = {_render(self.value)};"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_let_statement(self)


@dataclass(frozen=True, slots=True)
class ReturnStatement(Statement):
    """A ``return <value>;`` statement."""

    token: Token
    return_value: Optional[Expression]

    def __str__(self) -> str:
        return f"{self.token.literal} {_render(self.return_value)};"

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_return_statement(self)


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Statement):
    """A statement consisting of a single expression."""

    token: Token
    expression: Optional[Expression]

    def __str__(self) -> str:
        return _render(self.expression)

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_expression_statement(self)


@dataclass(frozen=True, slots=True)
class BlockStatement(Statement):
    """A brace-delimited sequence of statements."""

    token: Token
    statements: tuple[Statement, ...]
    # None when the input ended before the closing brace
    closing: Optional[Token] = None

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_block_statement(self)


# -----------------------------------------------------------------------------
# Program (Root Node)
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Program(ASTNode):
    """
    The root node of a Monkey program.

    Contains all top-level statements. A program has no token of its own;
    its token literal is that of its first statement.
    """

    statements: tuple[Statement, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def accept(self, visitor: "ASTVisitor") -> Any:
        return visitor.visit_program(self)


# -----------------------------------------------------------------------------
# Visitor with default implementations
# -----------------------------------------------------------------------------


class BaseASTVisitor(ASTVisitor):
    """
    Base visitor with default implementations that traverse children.

    Subclass this and override specific visit_* methods as needed.
    """

    def visit_program(self, node: Program) -> Any:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_let_statement(self, node: LetStatement) -> Any:
        self.visit(node.name)
        self.visit(node.value)

    def visit_return_statement(self, node: ReturnStatement) -> Any:
        self.visit(node.return_value)

    def visit_expression_statement(self, node: ExpressionStatement) -> Any:
        self.visit(node.expression)

    def visit_block_statement(self, node: BlockStatement) -> Any:
        for stmt in node.statements:
            self.visit(stmt)

    def visit_identifier(self, node: Identifier) -> Any:
        pass

    def visit_integer_literal(self, node: IntegerLiteral) -> Any:
        pass

    def visit_float_literal(self, node: FloatLiteral) -> Any:
        pass

    def visit_string_literal(self, node: StringLiteral) -> Any:
        pass

    def visit_boolean(self, node: Boolean) -> Any:
        pass

    def visit_prefix_expression(self, node: PrefixExpression) -> Any:
        self.visit(node.right)

    def visit_infix_expression(self, node: InfixExpression) -> Any:
        self.visit(node.left)
        self.visit(node.right)

    def visit_if_expression(self, node: IfExpression) -> Any:
        self.visit(node.condition)
        self.visit(node.consequence)
        self.visit(node.alternative)

    def visit_function_literal(self, node: FunctionLiteral) -> Any:
        for param in node.parameters:
            self.visit(param)
        self.visit(node.body)

    def visit_call_expression(self, node: CallExpression) -> Any:
        self.visit(node.function)
        for arg in node.arguments:
            self.visit(arg)

    def visit_array_literal(self, node: ArrayLiteral) -> Any:
        for element in node.elements:
            self.visit(element)

    def visit_index_expression(self, node: IndexExpression) -> Any:
        self.visit(node.left)
        self.visit(node.index)

    def visit_hash_literal(self, node: HashLiteral) -> Any:
        for key, value in node.pairs:
            self.visit(key)
            self.visit(value)
