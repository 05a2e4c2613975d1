"""Tests for let, return, expression and block statements."""

from __future__ import annotations

import pytest

from monkey.ast import (
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IntegerLiteral,
    LetStatement,
    ReturnStatement,
    render,
    token_literal,
)


class TestLetStatements:
    @pytest.mark.parametrize(
        "source, name, value",
        [
            ("let x = 5;", "x", "5"),
            ("let y = true;", "y", "true"),
            ("let foobar = y;", "foobar", "y"),
            ("let total = a + b * c;", "total", "(a + (b * c))"),
        ],
    )
    def test_binding(self, parse_source, source, name, value):
        program = parse_source(source)
        assert len(program.statements) == 1
        stmt = program.statements[0]
        assert isinstance(stmt, LetStatement)
        assert token_literal(stmt) == "let"
        assert stmt.name.value == name
        assert token_literal(stmt.name) == name
        assert render(stmt.value) == value

    def test_semicolon_optional(self, parse_source):
        program = parse_source("let x = 5")
        stmt = program.statements[0]
        assert isinstance(stmt, LetStatement)
        assert stmt.value == IntegerLiteral(stmt.value.token, 5)

    def test_several(self, parse_source):
        program = parse_source("let x = 5;\nlet y = 10;\nlet foobar = 838383;")
        names = [s.name.value for s in program.statements]
        assert names == ["x", "y", "foobar"]

    def test_function_value(self, parse_source):
        program = parse_source("let add = fn(a, b) { a + b };")
        stmt = program.statements[0]
        assert isinstance(stmt.value, FunctionLiteral)


class TestReturnStatements:
    @pytest.mark.parametrize(
        "source, value",
        [
            ("return 5;", "5"),
            ("return true;", "true"),
            ("return foobar;", "foobar"),
            ("return add(1, 2);", "add(1, 2)"),
        ],
    )
    def test_value(self, parse_source, source, value):
        program = parse_source(source)
        assert len(program.statements) == 1
        stmt = program.statements[0]
        assert isinstance(stmt, ReturnStatement)
        assert token_literal(stmt) == "return"
        assert render(stmt.return_value) == value

    def test_bare_return(self, parse_source):
        program = parse_source("return;")
        stmt = program.statements[0]
        assert isinstance(stmt, ReturnStatement)
        assert stmt.return_value is None
        assert render(stmt) == "return;"

    def test_bare_return_at_end_of_input(self, parse_source):
        program = parse_source("return")
        assert program.statements[0].return_value is None

    def test_bare_return_before_closing_brace(self, parse_expr):
        fn = parse_expr("fn() { return }")
        assert isinstance(fn, FunctionLiteral)
        (stmt,) = fn.body.statements
        assert isinstance(stmt, ReturnStatement)
        assert stmt.return_value is None


class TestExpressionStatements:
    def test_identifier(self, parse_source):
        program = parse_source("foobar;")
        stmt = program.statements[0]
        assert isinstance(stmt, ExpressionStatement)
        assert isinstance(stmt.expression, Identifier)
        assert stmt.expression.value == "foobar"
        assert token_literal(stmt.expression) == "foobar"

    def test_integer(self, parse_source):
        program = parse_source("12345;")
        stmt = program.statements[0]
        assert isinstance(stmt.expression, IntegerLiteral)
        assert stmt.expression.value == 12345
        assert token_literal(stmt.expression) == "12345"

    def test_semicolons_terminate_statements(self, parse_source):
        program = parse_source("a; b; c")
        assert [render(s) for s in program.statements] == ["a", "b", "c"]

    def test_newline_does_not_terminate(self, parse_source):
        program = parse_source("a\n+ b")
        assert len(program.statements) == 1
        assert render(program) == "(a + b)"

    def test_statements_without_separator(self, parse_source):
        program = parse_source("a b")
        assert [render(s) for s in program.statements] == ["a", "b"]


class TestProgram:
    def test_empty_program(self, parse_source):
        program = parse_source("")
        assert program.statements == ()
        assert token_literal(program) == ""

    def test_program_token_literal(self, parse_source):
        program = parse_source("let x = 1; return x;")
        assert token_literal(program) == "let"

    def test_mixed_statements(self, parse_source):
        program = parse_source("let x = 1; return x; x + 1;")
        kinds = [type(s) for s in program.statements]
        assert kinds == [LetStatement, ReturnStatement, ExpressionStatement]

    def test_int64_max(self, parse_expr):
        assert parse_expr("9223372036854775807").value == 2**63 - 1
