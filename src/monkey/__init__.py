"""Monkey language front end: lexer, parser and AST."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.ast import Program

__version__ = "0.1.0"


def parse(source: str) -> tuple[Program, list[str]]:
    """Parse source text; returns the Program and its (possibly empty) diagnostics."""
    from monkey.parser import parse as _parse

    return _parse(source)


def check(source: str) -> Program:
    """Parse source text, raising ParseError if any diagnostics were reported."""
    from monkey.errors import ParseError
    from monkey.lexer import Lexer
    from monkey.parser import Parser

    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.diagnostics:
        raise ParseError(parser.diagnostics, source)
    return program
