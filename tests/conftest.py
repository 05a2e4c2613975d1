"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from monkey.ast import Expression, ExpressionStatement, Program
from monkey.lexer import tokenize
from monkey.parser import parse
from monkey.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source, asserts a clean parse, and returns the Program."""

    def _parse(source: str) -> Program:
        program, errors = parse(source)
        assert errors == [], f"parser had {len(errors)} errors: {errors}"
        return program

    return _parse


@pytest.fixture
def parse_expr(parse_source):
    """Return a helper that parses a single expression statement and returns its expression."""

    def _parse(source: str) -> Expression:
        program = parse_source(source)
        assert len(program.statements) == 1, f"Expected 1 statement, got {program.statements}"
        stmt = program.statements[0]
        assert isinstance(stmt, ExpressionStatement), (
            f"Expected ExpressionStatement, got {type(stmt).__name__}"
        )
        return stmt.expression

    return _parse


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_literals(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token literals match the expected list."""
    actual = [t.literal for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
