"""Command-line interface for the Monkey front end."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monkey.errors import ParseError
from monkey.repl import PROMPT

CONFIG_NAME = "monkey.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    prompt: str
    greeting: bool
    show_tokens: bool
    debug: bool
    watch: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey language parser; starts a REPL when no input file is given",
    )
    p.add_argument("input", nargs="?", help="Input .monkey file")
    p.add_argument("-o", "--output", help="Output file for the rendered program (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--prompt", default=None, help=f"REPL prompt (default: {PROMPT!r})")
    p.add_argument(
        "--greeting",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the REPL greeting banner",
    )
    p.add_argument("--tokens", action="store_true", help="Dump the token stream to stderr")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("--watch", action="store_true", help="Watch for changes and reparse")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input) if args.input else None
    search_dir = input_file.parent if input_file is not None else Path(".")
    if not search_dir.parts:
        search_dir = Path(".")

    if args.watch and input_file is None:
        raise argparse.ArgumentTypeError("--watch requires an input file")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)
    repl_cfg = _section(config, "repl")
    output_cfg = _section(config, "output")

    prompt = PROMPT
    if isinstance(repl_cfg.get("prompt"), str):
        prompt = repl_cfg["prompt"]
    if args.prompt is not None:
        prompt = args.prompt

    greeting = True
    if isinstance(repl_cfg.get("greeting"), bool):
        greeting = repl_cfg["greeting"]
    if args.greeting is not None:
        greeting = args.greeting

    show_tokens = args.tokens or output_cfg.get("tokens") is True
    debug = args.debug or output_cfg.get("debug") is True

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        prompt=prompt,
        greeting=greeting,
        show_tokens=show_tokens,
        debug=debug,
        watch=args.watch,
    )


def compile_file(options: CliOptions) -> str:
    """Read and parse a Monkey file, returning one rendered statement per line."""
    from monkey.ast import render
    from monkey.debug import dump_ast, dump_tokens
    from monkey.lexer import Lexer, tokenize
    from monkey.parser import Parser

    assert options.input_file is not None
    source = options.input_file.read_text(encoding="utf-8")

    if options.show_tokens:
        dump_tokens(tokenize(source))

    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.diagnostics:
        raise ParseError(parser.diagnostics, source)

    if options.debug:
        dump_ast(program)

    return "".join(render(stmt) + "\n" for stmt in program.statements)


def _write_output(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, reparse on each modification."""
    assert options.input_file is not None
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write_output(options, compile_file(options))
                    print(f"Parsed {options.input_file}", file=sys.stderr)
                except ParseError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def run_repl(options: CliOptions) -> None:
    from monkey.repl import greeting, start

    if options.greeting:
        sys.stdout.write(greeting())
    start(sys.stdin, sys.stdout, options.prompt)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.input_file is None:
        run_repl(options)
        return 0

    if options.watch:
        watch_loop(options)
        return 0

    try:
        text = compile_file(options)
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    _write_output(options, text)
    return 0
