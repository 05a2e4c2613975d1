"""Monkey parser — recursive descent for statements, Pratt parsing for expressions."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

from monkey.ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.errors import Diagnostic
from monkey.lexer import Lexer
from monkey.tokens import Token, TokenType

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]

_INT64_MAX = 2**63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))

# Deepest chain of nested expressions accepted before giving up on a statement
MAX_NESTING = 100


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # f(x)


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

# Where a failed statement's remaining tokens are skipped to
_SYNC_TOKENS: frozenset[TokenType] = frozenset(
    {TokenType.SEMICOLON, TokenType.RBRACE, TokenType.EOF}
)


class Parser:
    """Parser over a Lexer with one token of lookahead.

    Problems are recorded as diagnostics and parsing carries on, so one pass
    reports as many errors as it can find. ``errors()`` is empty after a clean
    parse.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._diagnostics: list[Diagnostic] = []
        self._depth = 0

        self.cur_token: Token = lexer.next_token()
        self.peek_token: Token = lexer.next_token()

        self._prefix_parse_fns: dict[TokenType, PrefixParseFn] = {}
        self._infix_parse_fns: dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self._parse_identifier)
        self.register_prefix(TokenType.INT, self._parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self._parse_boolean)
        self.register_prefix(TokenType.FALSE, self._parse_boolean)
        self.register_prefix(TokenType.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenType.IF, self._parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self._parse_function_literal)

        for tt in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.ASTERISK,
            TokenType.SLASH,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(tt, self._parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self._parse_call_expression)

    def register_prefix(self, tt: TokenType, fn: PrefixParseFn) -> None:
        self._prefix_parse_fns[tt] = fn

    def register_infix(self, tt: TokenType, fn: InfixParseFn) -> None:
        self._infix_parse_fns[tt] = fn

    def errors(self) -> list[str]:
        """Diagnostic messages collected so far, in the order they were found."""
        return [d.message for d in self._diagnostics]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self._lexer.next_token()

    def _cur_token_is(self, tt: TokenType) -> bool:
        return self.cur_token.type == tt

    def _peek_token_is(self, tt: TokenType) -> bool:
        return self.peek_token.type == tt

    def _expect_peek(self, tt: TokenType) -> bool:
        """Advance if the next token has type *tt*; otherwise record a diagnostic."""
        if self._peek_token_is(tt):
            self._next_token()
            return True
        self._peek_error(tt)
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _synchronize(self) -> None:
        """Skip the rest of a failed statement."""
        while self.cur_token.type not in _SYNC_TOKENS:
            self._next_token()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _peek_error(self, tt: TokenType) -> None:
        self._expected_error(tt, self.peek_token)

    def _expected_error(self, tt: TokenType, got: Token) -> None:
        msg = f"expected next token to be {tt}, got {got.type} instead"
        self._diagnostics.append(Diagnostic(msg, got.span))

    def _no_prefix_parse_fn_error(self, tok: Token) -> None:
        msg = f"no prefix parse function for {tok.type} found"
        self._diagnostics.append(Diagnostic(msg, tok.span))

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Consume every token and return the Program root."""
        statements: list[Statement] = []

        while not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is None:
                self._synchronize()
            else:
                statements.append(stmt)
            self._next_token()

        return Program(tuple(statements))

    def _parse_statement(self) -> Statement | None:
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        if self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> LetStatement | None:
        token = self.cur_token

        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()

        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> ReturnStatement | None:
        token = self.cur_token

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
            return ReturnStatement(token, None)
        if self._peek_token_is(TokenType.RBRACE) or self._peek_token_is(TokenType.EOF):
            return ReturnStatement(token, None)

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> ExpressionStatement | None:
        token = self.cur_token

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ExpressionStatement(token, expression)

    def _parse_block_statement(self) -> BlockStatement | None:
        token = self.cur_token  # '{'
        statements: list[Statement] = []

        self._next_token()
        while not self._cur_token_is(TokenType.RBRACE) and not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is None:
                self._synchronize()
                if self._cur_token_is(TokenType.RBRACE):
                    break
            else:
                statements.append(stmt)
            self._next_token()

        if not self._cur_token_is(TokenType.RBRACE):
            self._expected_error(TokenType.RBRACE, self.cur_token)
            return None
        return BlockStatement(token, tuple(statements))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self, precedence: Precedence) -> Expression | None:
        if self._depth >= MAX_NESTING:
            self._diagnostics.append(
                Diagnostic("expression nested too deeply", self.cur_token.span)
            )
            return None
        self._depth += 1
        try:
            return self._parse_expression_inner(precedence)
        finally:
            self._depth -= 1

    def _parse_expression_inner(self, precedence: Precedence) -> Expression | None:
        prefix = self._prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self._no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()

        while (
            left is not None
            and not self._peek_token_is(TokenType.SEMICOLON)
            and precedence < self._peek_precedence()
        ):
            infix = self._infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        digits = tok.literal.lstrip("0")
        if len(digits) > _INT64_DIGITS or int(digits or "0") > _INT64_MAX:
            msg = f"could not parse {tok.literal!r} as integer"
            self._diagnostics.append(Diagnostic(msg, tok.span))
            return None
        return IntegerLiteral(tok, int(digits or "0"))

    def _parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Expression | None:
        token = self.cur_token
        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Expression | None:
        token = self.cur_token
        precedence = self._cur_precedence()
        self._next_token()
        # Same precedence on the right keeps binary operators left-associative
        right = self._parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def _parse_grouped_expression(self) -> Expression | None:
        self._next_token()
        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Expression | None:
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None
        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self._expect_peek(TokenType.RPAREN):
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self) -> Expression | None:
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None
        body = self._parse_block_statement()
        if body is None:
            return None

        return FunctionLiteral(token, tuple(parameters), body)

    def _parse_function_parameters(self) -> list[Identifier] | None:
        identifiers: list[Identifier] = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return identifiers

        if not self._expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def _parse_call_expression(self, function: Expression) -> Expression | None:
        token = self.cur_token  # '('
        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, tuple(arguments))

    def _parse_expression_list(self, end: TokenType) -> list[Expression] | None:
        items: list[Expression] = []

        if self._peek_token_is(end):
            self._next_token()
            return items

        self._next_token()
        item = self._parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            item = self._parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self._expect_peek(end):
            return None
        return items


def parse(source: str) -> tuple[Program, list[str]]:
    """Convenience function: parse source text, returning the Program and diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors()
