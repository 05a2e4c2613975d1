"""Minimal LSP server for Monkey — parse diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from monkey import __version__
from monkey.errors import Diagnostic as ParseDiagnostic
from monkey.lexer import Lexer
from monkey.parser import Parser

server = LanguageServer("monkey-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _to_lsp(diag: ParseDiagnostic) -> Diagnostic:
    if diag.span is None:
        start = end = Position(line=0, character=0)
    else:
        start = Position(line=diag.span.start.line - 1, character=diag.span.start.column - 1)
        end = Position(line=diag.span.end.line - 1, character=diag.span.end.column - 1)
        if end == start:
            # EOF tokens are zero-width; widen so editors show a marker
            end = Position(line=start.line, character=start.character + 1)
    return Diagnostic(
        range=Range(start=start, end=end),
        message=diag.message,
        severity=DiagnosticSeverity.Error,
        source="monkey",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    parser = Parser(Lexer(doc.source))
    parser.parse_program()

    diagnostics = [_to_lsp(d) for d in parser.diagnostics]
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
