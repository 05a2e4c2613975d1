"""Parse diagnostics and the error type that reports them with source context."""

from __future__ import annotations

from dataclasses import dataclass

from monkey.tokens import Span


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable parse problem, located at the offending token if known."""

    message: str
    span: Span | None = None


class ParseError(Exception):
    """Raised when a caller requires a clean parse and diagnostics were reported."""

    def __init__(self, diagnostics: list[Diagnostic], source: str) -> None:
        self.diagnostics = list(diagnostics)
        self.source = source
        super().__init__(self.format())

    @property
    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def format(self, filename: str = "input.monkey") -> str:
        return "\n\n".join(_format_one(d, self.source, filename) for d in self.diagnostics)


def _format_one(diag: Diagnostic, source: str, filename: str) -> str:
    if diag.span is None:
        return f"error: {diag.message}\n --> {filename}"

    lines = source.splitlines(keepends=True)
    line_idx = diag.span.start.line - 1
    col = diag.span.start.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the token on its line; EOF gets a single caret
    if diag.span.end.line == diag.span.start.line:
        underline_len = max(1, diag.span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(diag.span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {diag.message}\n"
        f"{' ' * gutter_width}--> {filename}:{diag.span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )
