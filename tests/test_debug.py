"""Tests for the AST and token dumps."""

from __future__ import annotations

import io

from monkey.debug import dump_ast, dump_tokens
from monkey.lexer import tokenize
from monkey.parser import parse


def dumped(source: str) -> list[str]:
    program, errors = parse(source)
    assert errors == []
    out = io.StringIO()
    dump_ast(program, file=out)
    return out.getvalue().splitlines()


class TestDumpAst:
    def test_let(self):
        assert dumped("let x = -1;") == [
            "Program",
            "  Let x",
            "    Prefix -",
            "      Integer(1)",
        ]

    def test_if_else(self):
        assert dumped("if (a) { true } else { return; }") == [
            "Program",
            "  ExpressionStatement",
            "    If",
            "      Identifier(a)",
            "      Then",
            "        ExpressionStatement",
            "          Boolean(true)",
            "      Else",
            "        Return",
        ]

    def test_function_call(self):
        assert dumped("fn(x, y) { x }(1, 2)") == [
            "Program",
            "  ExpressionStatement",
            "    Call",
            "      Function(x, y)",
            "        Body",
            "          ExpressionStatement",
            "            Identifier(x)",
            "      Integer(1)",
            "      Integer(2)",
        ]


class TestDumpTokens:
    def test_positions_and_literals(self):
        out = io.StringIO()
        dump_tokens(tokenize("let x\n=="), file=out)
        lines = out.getvalue().splitlines()
        assert lines[0].split() == ["1:1", "LET", "'let'"]
        assert lines[2].split() == ["2:1", "EQ", "'=='"]
        assert lines[-1].split() == ["2:3", "EOF", "''"]
