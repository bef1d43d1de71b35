"""
Monkey Parser.

A Pratt parser (recursive descent with operator-precedence climbing) that
pulls tokens from a :class:`~monkey.compiler.lexer.Lexer` and builds an AST.

Expression parsing is table driven: each token type that can start an
expression has a prefix handler, and each token type that can continue one
has an infix handler. New syntax is added by registering handlers, without
touching the precedence-climbing loop.

The parser never raises on bad input. Errors are accumulated in
:attr:`Parser.errors` (plain messages) and :attr:`Parser.diagnostics`
(located, renderable records); a sub-tree that failed to parse is left as
``None``.
"""

import logging
from typing import Callable, Optional

from monkey.compiler.ast_nodes import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from monkey.compiler.lexer import Lexer
from monkey.compiler.tokens import Token, TokenType
from monkey.utils.diagnostics import (
    Diagnostic,
    DiagnosticEmitter,
    DiagnosticLabel,
    ErrorCode,
    SourceSpan,
    matching_delimiter,
)

logger = logging.getLogger("monkey.parser")

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Optional[Expression]], Optional[Expression]]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# Operator precedence levels (higher = tighter binding)
class Precedence:
    """Operator precedence levels."""

    LOWEST = 1
    EQUALS = 2        # ==
    LESSGREATER = 3   # > or <
    SUM = 4           # +
    PRODUCT = 5       # *
    PREFIX = 6        # -X or !X
    CALL = 7          # myFunction(X)
    INDEX = 8         # array[index]


# Map token types to their precedence
PRECEDENCE_MAP: dict[TokenType, int] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

CLOSING_DELIMITERS: frozenset[TokenType] = frozenset(
    {TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE}
)

# Deepest expression nesting accepted before parsing is abandoned
MAX_NESTING_DEPTH = 64


class _NestingLimitReached(Exception):
    """Unwinds nested expression parsing back to the statement level."""


def parse_int64(literal: str) -> int:
    """
    Parse integer literal text into a signed 64-bit value.

    ``0x``/``0o``/``0b`` prefixes select the base, and a leading ``0``
    followed by more digits means octal. Raises ValueError for malformed
    text or values outside the signed 64-bit range.
    """
    lowered = literal.lower()
    if lowered[:2] in ("0x", "0o", "0b"):
        base = {"x": 16, "o": 8, "b": 2}[lowered[1]]
        digits = literal[2:]
    elif len(literal) > 1 and literal.startswith("0"):
        base = 8
        digits = literal[1:]
    else:
        base = 10
        digits = literal

    if not digits or not digits.isalnum():
        raise ValueError(f"invalid integer literal: {literal!r}")

    value = int(digits, base)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer literal out of range: {literal!r}")
    return value


class Parser:
    """
    Pratt parser for Monkey.

    Keeps a two-token window over the lexer: the token being parsed
    (``current``) and one token of lookahead (``peek``).

    Usage:
        parser = Parser(Lexer(source))
        program = parser.parse_program()
        if parser.errors:
            ...
    """

    def __init__(self, lexer: Lexer) -> None:
        """
        Initialize the parser and prime the two-token window.

        Args:
            lexer: The lexer to pull tokens from
        """
        self.lexer = lexer
        self.errors: list[str] = []
        self._emitter = DiagnosticEmitter(lexer.source, lexer.filename or "<input>")

        self._current: Optional[Token] = None
        self._peek: Optional[Token] = None

        self._prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self._infix_parse_fns: dict[TokenType, InfixParseFn] = {}
        self._precedences: dict[TokenType, int] = dict(PRECEDENCE_MAP)
        self._depth = 0

        self.register_prefix(TokenType.IDENT, self._parse_identifier)
        self.register_prefix(TokenType.INT, self._parse_integer_literal)
        self.register_prefix(TokenType.FLOAT, self._parse_float_literal)
        self.register_prefix(TokenType.STRING, self._parse_string_literal)
        self.register_prefix(TokenType.TRUE, self._parse_boolean)
        self.register_prefix(TokenType.FALSE, self._parse_boolean)
        self.register_prefix(TokenType.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenType.IF, self._parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self._parse_function_literal)
        self.register_prefix(TokenType.LBRACKET, self._parse_array_literal)
        self.register_prefix(TokenType.LBRACE, self._parse_hash_literal)

        for token_type in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(token_type, self._parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self._parse_call_expression)
        self.register_infix(TokenType.LBRACKET, self._parse_index_expression)

        # Read two tokens, so current and peek are both set
        self._next_token()
        self._next_token()

    # -------------------------------------------------------------------------
    # Handler registries
    # -------------------------------------------------------------------------

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn) -> None:
        """Bind a handler for expressions that start with ``token_type``."""
        self._prefix_parse_fns[token_type] = fn

    def register_infix(
        self,
        token_type: TokenType,
        fn: InfixParseFn,
        precedence: Optional[int] = None,
    ) -> None:
        """
        Bind a handler for expressions continued by ``token_type``.

        A token kind without a precedence never continues an expression, so
        new operators must also pass ``precedence``.
        """
        self._infix_parse_fns[token_type] = fn
        if precedence is not None:
            self._precedences[token_type] = precedence

    # -------------------------------------------------------------------------
    # Token window
    # -------------------------------------------------------------------------

    @property
    def current(self) -> Optional[Token]:
        """The token being parsed."""
        return self._current

    @property
    def peek(self) -> Optional[Token]:
        """One token of lookahead."""
        return self._peek

    def _next_token(self) -> None:
        self._current = self._peek
        self._peek = self.lexer.next_token()

    def _skip_to_end(self) -> None:
        while self._current is not None and not self._current.is_eof:
            self._next_token()

    def _current_is(self, token_type: TokenType) -> bool:
        return self._current is not None and self._current.type == token_type

    def _peek_is(self, token_type: TokenType) -> bool:
        return self._peek is not None and self._peek.type == token_type

    def _peek_precedence(self) -> int:
        if self._peek is None:
            return Precedence.LOWEST
        return self._precedences.get(self._peek.type, Precedence.LOWEST)

    def _current_precedence(self) -> int:
        if self._current is None:
            return Precedence.LOWEST
        return self._precedences.get(self._current.type, Precedence.LOWEST)

    def _expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the lookahead has the given type, else record an error."""
        if self._peek_is(token_type):
            self._next_token()
            return True
        self._peek_error(token_type)
        return False

    def _expect_closing(self, token_type: TokenType, opening: Optional[Token]) -> bool:
        """Like :meth:`_expect_peek`, pointing the diagnostic at the opening delimiter."""
        if self._peek_is(token_type):
            self._next_token()
            return True
        diagnostic = self._peek_error(token_type)
        if opening is not None and opening.location is not None:
            diagnostic.labels.append(
                DiagnosticLabel(
                    self._span_for(opening),
                    f"unclosed '{opening.literal}' starts here",
                    is_primary=False,
                )
            )
        return False

    # -------------------------------------------------------------------------
    # Error reporting
    # -------------------------------------------------------------------------

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Located diagnostics, one per entry in :attr:`errors`."""
        return self._emitter.diagnostics

    def render_diagnostics(self, use_color: bool = True) -> str:
        """Render all diagnostics as formatted strings."""
        return self._emitter.render_all(use_color)

    def _span_for(self, token: Optional[Token]) -> Optional[SourceSpan]:
        if token is None or token.location is None:
            return None
        loc = token.location
        length = 1 if token.is_eof else max(1, len(token.literal))
        return SourceSpan.from_location(
            loc.line, loc.column, length, loc.filename or self._emitter.filename
        )

    def _error(
        self,
        code: str,
        message: str,
        token: Optional[Token],
        helps: Optional[list[str]] = None,
    ) -> Diagnostic:
        self.errors.append(message)
        logger.debug("parse error at %s: %s", token.location if token else "end", message)
        return self._emitter.error(code, message, self._span_for(token), helps)

    def _peek_error(self, token_type: TokenType) -> Diagnostic:
        found = self._peek.type if self._peek is not None else TokenType.EOF
        message = f"expected next token to be {token_type}, got {found} instead"
        if token_type in CLOSING_DELIMITERS:
            opening = {
                TokenType.RPAREN: "(",
                TokenType.RBRACKET: "[",
                TokenType.RBRACE: "{",
            }[token_type]
            return self._error(
                ErrorCode.E0202,
                message,
                self._peek,
                [f"add matching closing '{matching_delimiter(opening)}'"],
            )
        return self._error(ErrorCode.E0201, message, self._peek)

    def _no_prefix_parse_fn_error(self) -> None:
        token = self._current
        token_type = token.type if token is not None else TokenType.EOF
        message = f"no prefix parse function for {token_type} found"

        if token is not None and token.type == TokenType.ILLEGAL:
            literal = token.literal
            if literal[:1] in ("'", '"'):
                self._error(ErrorCode.E0206, message, token, ["unterminated string literal"])
            elif literal[:1].isdigit():
                self._error(ErrorCode.E0207, message, token, [f"malformed number {literal!r}"])
            else:
                self._error(ErrorCode.E0208, message, token, [f"illegal character {literal!r}"])
            return

        self._error(ErrorCode.E0204, message, token)

    # -------------------------------------------------------------------------
    # Program Parsing
    # -------------------------------------------------------------------------

    def parse_program(self) -> Program:
        """
        Parse the entire program.

        Returns:
            The root Program AST node. Check :attr:`errors` before trusting it.
        """
        statements: list[Statement] = []

        while self._current is not None and not self._current.is_eof:
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self._next_token()

        return Program(tuple(statements))

    # -------------------------------------------------------------------------
    # Statement Parsing
    # -------------------------------------------------------------------------

    def _parse_statement(self) -> Optional[Statement]:
        """Parse a single statement."""
        if self._current_is(TokenType.LET):
            return self._parse_let_statement()
        if self._current_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        """
        Parse a let statement.

        Handles:
            let x = value
            let x = value;
        """
        token = self._current

        if not self._expect_peek(TokenType.IDENT):
            return None

        name = Identifier(self._current, self._current.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()

        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> ReturnStatement:
        token = self._current

        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()

        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        token = self._current
        expression = self.parse_expression(Precedence.LOWEST)

        if self._peek_is(TokenType.SEMICOLON):
            self._next_token()

        return ExpressionStatement(token, expression)

    def _parse_block_statement(self) -> BlockStatement:
        """
        Parse statements after ``{`` up to ``}``.

        End of input also ends the block; no error is reported for the
        missing ``}``.
        """
        token = self._current
        statements: list[Statement] = []

        self._next_token()

        while (
            self._current is not None
            and not self._current_is(TokenType.RBRACE)
            and not self._current.is_eof
        ):
            stmt = self._parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self._next_token()

        closing = self._current if self._current_is(TokenType.RBRACE) else None
        return BlockStatement(token, tuple(statements), closing)

    # -------------------------------------------------------------------------
    # Expression Parsing (Pratt Parser / Precedence Climbing)
    # -------------------------------------------------------------------------

    def parse_expression(self, precedence: int = Precedence.LOWEST) -> Optional[Expression]:
        """
        Parse an expression using precedence climbing.

        The prefix handler for the current token builds the left operand;
        infix handlers then extend it while the lookahead binds tighter than
        ``precedence``.

        Nesting deeper than :data:`MAX_NESTING_DEPTH` records one error and
        abandons the rest of the input; the outermost call returns ``None``.
        """
        if self._depth >= MAX_NESTING_DEPTH:
            self._error(
                ErrorCode.E0209,
                f"expression nested too deeply (limit is {MAX_NESTING_DEPTH})",
                self._current,
            )
            raise _NestingLimitReached()

        self._depth += 1
        try:
            return self._parse_expression(precedence)
        except _NestingLimitReached:
            if self._depth > 1:
                raise
            self._skip_to_end()
            return None
        finally:
            self._depth -= 1

    def _parse_expression(self, precedence: int) -> Optional[Expression]:
        prefix = None
        if self._current is not None:
            prefix = self._prefix_parse_fns.get(self._current.type)
        if prefix is None:
            self._no_prefix_parse_fn_error()
            return None

        left = prefix()

        while not self._peek_is(TokenType.SEMICOLON) and precedence < self._peek_precedence():
            infix = self._infix_parse_fns.get(self._peek.type)
            if infix is None:
                return left

            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self._current, self._current.literal)

    def _parse_integer_literal(self) -> Optional[Expression]:
        token = self._current
        try:
            value = parse_int64(token.literal)
        except ValueError:
            self._error(
                ErrorCode.E0207,
                f'could not parse "{token.literal}" as integer',
                token,
            )
            return None
        return IntegerLiteral(token, value)

    def _parse_float_literal(self) -> Optional[Expression]:
        token = self._current
        try:
            value = float(token.literal)
        except ValueError:
            self._error(
                ErrorCode.E0207,
                f'could not parse "{token.literal}" as float',
                token,
            )
            return None
        return FloatLiteral(token, value)

    def _parse_string_literal(self) -> Expression:
        token = self._current
        return StringLiteral(token, token.literal[1:-1])

    def _parse_boolean(self) -> Expression:
        return Boolean(self._current, self._current_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Expression:
        """Parse ``!x`` or ``-x``; the operand binds at PREFIX precedence."""
        token = self._current

        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)

        return PrefixExpression(token, token.literal, right)

    def _parse_infix_expression(self, left: Optional[Expression]) -> Expression:
        """
        Parse the right operand of a binary operator.

        Recursing with the operator's own precedence makes operators of
        equal precedence fold to the left.
        """
        token = self._current
        precedence = self._current_precedence()

        self._next_token()
        right = self.parse_expression(precedence)

        return InfixExpression(token, left, token.literal, right)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        opening = self._current

        self._next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        if not self._expect_closing(TokenType.RPAREN, opening):
            return None

        return expression

    def _parse_if_expression(self) -> Optional[Expression]:
        """
        Parse a conditional.

        Handles:
            if (condition) { consequence }
            if (condition) { consequence } else { alternative }
        """
        token = self._current

        if not self._expect_peek(TokenType.LPAREN):
            return None
        opening = self._current

        self._next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self._expect_closing(TokenType.RPAREN, opening):
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None

        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_is(TokenType.ELSE):
            self._next_token()

            if not self._expect_peek(TokenType.LBRACE):
                return None

            alternative = self._parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self) -> Optional[Expression]:
        """
        Parse a function literal.

        Handles:
            fn() { body }
            fn(x, y) { body }
        """
        token = self._current

        if not self._expect_peek(TokenType.LPAREN):
            return None

        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None

        body = self._parse_block_statement()

        return FunctionLiteral(token, parameters, body)

    def _parse_function_parameters(self) -> Optional[tuple[Identifier, ...]]:
        opening = self._current
        identifiers: list[Identifier] = []

        if self._peek_is(TokenType.RPAREN):
            self._next_token()
            return ()

        if not self._expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self._current, self._current.literal))

        while self._peek_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self._current, self._current.literal))

        if not self._expect_closing(TokenType.RPAREN, opening):
            return None

        return tuple(identifiers)

    def _parse_call_expression(self, function: Optional[Expression]) -> Optional[Expression]:
        token = self._current

        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None

        return CallExpression(token, function, arguments)

    def _parse_index_expression(self, left: Optional[Expression]) -> Optional[Expression]:
        token = self._current

        self._next_token()
        index = self.parse_expression(Precedence.LOWEST)

        if not self._expect_closing(TokenType.RBRACKET, token):
            return None

        return IndexExpression(token, left, index)

    def _parse_array_literal(self) -> Optional[Expression]:
        token = self._current

        elements = self._parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None

        return ArrayLiteral(token, elements)

    def _parse_hash_literal(self) -> Optional[Expression]:
        """
        Parse a hash literal.

        Handles:
            {}
            {key: value, key: value}
        """
        token = self._current
        pairs: list[tuple[Optional[Expression], Optional[Expression]]] = []

        while not self._peek_is(TokenType.RBRACE):
            self._next_token()
            key = self.parse_expression(Precedence.LOWEST)

            if not self._expect_peek(TokenType.COLON):
                return None

            self._next_token()
            value = self.parse_expression(Precedence.LOWEST)

            pairs.append((key, value))

            if not self._peek_is(TokenType.RBRACE) and not self._expect_peek(TokenType.COMMA):
                return None

        if not self._expect_closing(TokenType.RBRACE, token):
            return None

        return HashLiteral(token, tuple(pairs))

    def _parse_expression_list(
        self, end: TokenType
    ) -> Optional[tuple[Optional[Expression], ...]]:
        """
        Parse comma-separated expressions up to ``end``.

        The current token is the opening delimiter. Shared by call
        arguments and array elements.
        """
        opening = self._current
        items: list[Optional[Expression]] = []

        if self._peek_is(end):
            self._next_token()
            return ()

        self._next_token()
        items.append(self.parse_expression(Precedence.LOWEST))

        while self._peek_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            items.append(self.parse_expression(Precedence.LOWEST))

        if not self._expect_closing(end, opening):
            return None

        return tuple(items)
