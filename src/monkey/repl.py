"""Interactive read-parse-print loop."""

from __future__ import annotations

import getpass
from typing import TextIO

from monkey.ast import render
from monkey.lexer import Lexer
from monkey.parser import Parser

PROMPT = ">> "


def greeting(user: str | None = None) -> str:
    """Banner shown when the REPL starts."""
    if user is None:
        user = getpass.getuser()
    return f"Hello {user}! This is the Monkey programming language!\nEnter commands\n"


def format_parser_errors(errors: list[str]) -> str:
    lines = ["Woops! We ran into some monkey business here!", " parser errors:"]
    lines.extend(f"\t{msg}" for msg in errors)
    return "\n".join(lines) + "\n"


def start(stdin: TextIO, stdout: TextIO, prompt: str = PROMPT) -> None:
    """Read one line per prompt, parse it, and print its rendering or its errors.

    Returns when *stdin* is exhausted.
    """
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return

        parser = Parser(Lexer(line))
        program = parser.parse_program()
        errors = parser.errors()
        if errors:
            stdout.write(format_parser_errors(errors))
            continue

        stdout.write("".join(render(stmt) + "\n" for stmt in program.statements))
