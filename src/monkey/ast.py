"""AST node types for parsed Monkey programs, plus rendering back to source text."""

from __future__ import annotations

from dataclasses import dataclass, field

from monkey.tokens import Token

# ----------------------------------------------------------------------
# Expressions
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Identifier:
    """Name reference."""

    token: Token
    value: str


@dataclass(frozen=True, slots=True)
class IntegerLiteral:
    """Signed 64-bit integer literal."""

    token: Token
    value: int


@dataclass(frozen=True, slots=True)
class Boolean:
    """``true`` or ``false``."""

    token: Token
    value: bool


@dataclass(frozen=True, slots=True)
class PrefixExpression:
    """Unary operator applied to the operand on its right: ``!x``, ``-x``."""

    token: Token
    operator: str
    right: Expression


@dataclass(frozen=True, slots=True)
class InfixExpression:
    """Binary operator between two operands."""

    token: Token
    left: Expression
    operator: str
    right: Expression


@dataclass(frozen=True, slots=True)
class IfExpression:
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None


@dataclass(frozen=True, slots=True)
class FunctionLiteral:
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement


@dataclass(frozen=True, slots=True)
class CallExpression:
    """Application of ``function`` (identifier or function literal) to arguments."""

    token: Token  # the '(' token
    function: Expression
    arguments: tuple[Expression, ...]


# ----------------------------------------------------------------------
# Statements
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LetStatement:
    """``let <name> = <value>;``"""

    token: Token
    name: Identifier
    value: Expression


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    """``return [<value>];``; value is None for a bare return."""

    token: Token
    return_value: Expression | None


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Bare expression used as a statement; compares equal by expression alone."""

    token: Token = field(compare=False)  # first token of the expression
    expression: Expression


@dataclass(frozen=True, slots=True)
class BlockStatement:
    """Brace-delimited statement sequence: function and branch bodies."""

    token: Token  # the '{' token
    statements: tuple[Statement, ...]


@dataclass(frozen=True, slots=True)
class Program:
    """Root node."""

    statements: tuple[Statement, ...]


Expression = (
    Identifier
    | IntegerLiteral
    | Boolean
    | PrefixExpression
    | InfixExpression
    | IfExpression
    | FunctionLiteral
    | CallExpression
)
Statement = LetStatement | ReturnStatement | ExpressionStatement | BlockStatement
Node = Program | Statement | Expression


# ----------------------------------------------------------------------
# Node capabilities
# ----------------------------------------------------------------------


def token_literal(node: Node) -> str:
    """Return the literal text of the token that introduced *node*."""
    if isinstance(node, Program):
        if node.statements:
            return token_literal(node.statements[0])
        return ""
    return node.token.literal


def render(node: Node) -> str:
    """Render *node* back to canonical source-like text.

    Operator expressions are fully parenthesised, so the result shows how
    precedence and associativity were resolved.
    """
    if isinstance(node, Program):
        return "".join(render(s) for s in node.statements)
    if isinstance(node, (LetStatement, ReturnStatement, ExpressionStatement, BlockStatement)):
        return _render_statement(node)
    return _render_expression(node)


def _render_statement(stmt: Statement) -> str:
    if isinstance(stmt, LetStatement):
        return f"{stmt.token.literal} {stmt.name.value} = {_render_expression(stmt.value)};"
    if isinstance(stmt, ReturnStatement):
        if stmt.return_value is None:
            return f"{stmt.token.literal};"
        return f"{stmt.token.literal} {_render_expression(stmt.return_value)};"
    if isinstance(stmt, ExpressionStatement):
        return _render_expression(stmt.expression)
    if isinstance(stmt, BlockStatement):
        return "".join(_render_statement(s) for s in stmt.statements)
    raise TypeError(f"not a statement: {type(stmt).__name__}")


def _render_expression(expr: Expression) -> str:
    if isinstance(expr, Identifier):
        return expr.value
    if isinstance(expr, (IntegerLiteral, Boolean)):
        return expr.token.literal
    if isinstance(expr, PrefixExpression):
        return f"({expr.operator}{_render_expression(expr.right)})"
    if isinstance(expr, InfixExpression):
        left = _render_expression(expr.left)
        right = _render_expression(expr.right)
        return f"({left} {expr.operator} {right})"
    if isinstance(expr, IfExpression):
        out = f"if ({_render_expression(expr.condition)}) {_render_braced(expr.consequence)}"
        if expr.alternative is not None:
            out += f" else {_render_braced(expr.alternative)}"
        return out
    if isinstance(expr, FunctionLiteral):
        params = ", ".join(p.value for p in expr.parameters)
        return f"{expr.token.literal}({params}) {_render_braced(expr.body)}"
    if isinstance(expr, CallExpression):
        args = ", ".join(_render_expression(a) for a in expr.arguments)
        return f"{_render_expression(expr.function)}({args})"
    raise TypeError(f"not an expression: {type(expr).__name__}")


def _render_braced(block: BlockStatement) -> str:
    """Render an embedded block so that the text parses back to the same block."""
    if not block.statements:
        return "{ }"
    parts = []
    for stmt in block.statements:
        text = _render_statement(stmt)
        if isinstance(stmt, ExpressionStatement):
            text += ";"
        parts.append(text)
    return "{ " + " ".join(parts) + " }"
