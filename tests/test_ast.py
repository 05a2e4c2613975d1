"""Tests for AST construction, rendering, and render/re-parse stability."""

from __future__ import annotations

import pytest

from monkey.ast import (
    BlockStatement,
    ExpressionStatement,
    Identifier,
    IntegerLiteral,
    LetStatement,
    Program,
    ReturnStatement,
    render,
    token_literal,
)
from monkey.parser import parse
from monkey.tokens import Token, TokenType


class TestRender:
    def test_hand_built_let(self):
        program = Program(
            (
                LetStatement(
                    Token(TokenType.LET, "let"),
                    Identifier(Token(TokenType.IDENT, "myVar"), "myVar"),
                    Identifier(Token(TokenType.IDENT, "anotherVar"), "anotherVar"),
                ),
            )
        )
        assert render(program) == "let myVar = anotherVar;"

    def test_return_with_value(self):
        stmt = ReturnStatement(
            Token(TokenType.RETURN, "return"),
            IntegerLiteral(Token(TokenType.INT, "5"), 5),
        )
        assert render(stmt) == "return 5;"

    def test_block_is_concatenation(self):
        x = Identifier(Token(TokenType.IDENT, "x"), "x")
        block = BlockStatement(
            Token(TokenType.LBRACE, "{"),
            (ExpressionStatement(x.token, x), ExpressionStatement(x.token, x)),
        )
        assert render(block) == "xx"
        assert token_literal(block) == "{"

    def test_not_a_node(self):
        with pytest.raises(TypeError):
            render("x")  # type: ignore[arg-type]


class TestEquality:
    def test_nodes_compare_structurally(self):
        a, _ = parse("let x = 1 + 2;")
        b, _ = parse("let   x=1+2")
        assert a == b

    def test_nodes_are_immutable(self):
        program, _ = parse("x")
        with pytest.raises(AttributeError):
            program.statements = ()  # type: ignore[misc]


class TestRoundTrip:
    """Rendering then re-parsing an expression yields an equal tree."""

    @pytest.mark.parametrize(
        "source",
        [
            "-a * b",
            "!-a",
            "a + b * c + d / e - f",
            "3 > 5 == false",
            "(5 + 5) * 2",
            "-(5 + 5)",
            "add(1, 2 * 3, 4 + 5)",
            "a + add(b * c) + d",
            "fn(x, y) { x + y; }",
            "fn() { }",
            "fn(x) { let y = x * 2; return y; }(3)",
            "if (x < y) { x } else { y }",
            "if (a) { if (b) { c } }",
            "f(1)(2)",
        ],
    )
    def test_expression(self, source):
        first, errors = parse(source)
        assert errors == []
        text = render(first)
        second, errors = parse(text)
        assert errors == [], f"{text!r} did not re-parse: {errors}"
        assert second.statements[0].expression == first.statements[0].expression

    def test_rendering_is_a_fixed_point(self):
        program, _ = parse("a + b * c")
        text = render(program)
        again, _ = parse(text)
        assert render(again) == text
