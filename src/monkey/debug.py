"""--debug AST dump and --tokens stream dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

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
from monkey.tokens import Token


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for stmt in program.statements:
        _dump_statement(stmt, 1, file)


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one token per line as ``line:col TYPE 'literal'``."""
    for tok in tokens:
        where = f"{tok.span.start.line}:{tok.span.start.column}" if tok.span else "?:?"
        file.write(f"{where:<8} {tok.type.name:<10} {tok.literal!r}\n")


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_statement(stmt: Statement, depth: int, f: TextIO) -> None:
    if isinstance(stmt, LetStatement):
        f.write(f"{_indent(depth)}Let {stmt.name.value}\n")
        _dump_expression(stmt.value, depth + 1, f)
    elif isinstance(stmt, ReturnStatement):
        f.write(f"{_indent(depth)}Return\n")
        if stmt.return_value is not None:
            _dump_expression(stmt.return_value, depth + 1, f)
    elif isinstance(stmt, ExpressionStatement):
        f.write(f"{_indent(depth)}ExpressionStatement\n")
        _dump_expression(stmt.expression, depth + 1, f)
    elif isinstance(stmt, BlockStatement):
        _dump_block("Block", stmt, depth, f)


def _dump_block(label: str, block: BlockStatement, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}{label}\n")
    for stmt in block.statements:
        _dump_statement(stmt, depth + 1, f)


def _dump_expression(expr: Expression, depth: int, f: TextIO) -> None:
    pad = _indent(depth)
    if isinstance(expr, Identifier):
        f.write(f"{pad}Identifier({expr.value})\n")
    elif isinstance(expr, IntegerLiteral):
        f.write(f"{pad}Integer({expr.value})\n")
    elif isinstance(expr, Boolean):
        f.write(f"{pad}Boolean({str(expr.value).lower()})\n")
    elif isinstance(expr, PrefixExpression):
        f.write(f"{pad}Prefix {expr.operator}\n")
        _dump_expression(expr.right, depth + 1, f)
    elif isinstance(expr, InfixExpression):
        f.write(f"{pad}Infix {expr.operator}\n")
        _dump_expression(expr.left, depth + 1, f)
        _dump_expression(expr.right, depth + 1, f)
    elif isinstance(expr, IfExpression):
        f.write(f"{pad}If\n")
        _dump_expression(expr.condition, depth + 1, f)
        _dump_block("Then", expr.consequence, depth + 1, f)
        if expr.alternative is not None:
            _dump_block("Else", expr.alternative, depth + 1, f)
    elif isinstance(expr, FunctionLiteral):
        params = ", ".join(p.value for p in expr.parameters)
        f.write(f"{pad}Function({params})\n")
        _dump_block("Body", expr.body, depth + 1, f)
    elif isinstance(expr, CallExpression):
        f.write(f"{pad}Call\n")
        _dump_expression(expr.function, depth + 1, f)
        for arg in expr.arguments:
            _dump_expression(arg, depth + 1, f)
