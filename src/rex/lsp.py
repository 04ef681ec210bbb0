"""Minimal LSP server for Rex — scan diagnostics only."""

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

from rex import __version__
from rex.scanner import Scanner
from rex.strings import find_escape_errors
from rex.tokens import Token, TokenType

server = LanguageServer("rex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _token_range(token: Token, leading_lines: int, start_col: int = 0, width: int | None = None) -> Range:
    # Scanner positions are 1-based and relative to the trimmed source
    line = token.position.line - 1 + leading_lines
    col = token.position.column - 1 + start_col
    if width is None:
        width = max(1, len(token.value))
    return Range(
        start=Position(line=line, character=col),
        end=Position(line=line, character=col + width),
    )


def _opens_with_quote(source: str, token: Token) -> bool:
    lines = source.split("\n")
    line_idx = token.position.line - 1
    if not 0 <= line_idx < len(lines):
        return False
    return lines[line_idx][token.position.column - 1 : token.position.column] == '"'


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    scanner = Scanner(doc.source, filename)
    diagnostics: list[Diagnostic] = []

    for token in scanner:
        if token.type == TokenType.ILLEGAL:
            diagnostics.append(
                Diagnostic(
                    range=_token_range(token, scanner.leading_lines),
                    message=f"illegal character {token.value!r}",
                    severity=DiagnosticSeverity.Error,
                    source="rex",
                )
            )
        errors = find_escape_errors(token)
        quoted = bool(errors) and "\n" not in token.value and _opens_with_quote(scanner.source, token)
        for exc in errors:
            # Single-line quoted bodies start one column after the token;
            # other strings are reported at their first character.
            diagnostics.append(
                Diagnostic(
                    range=_token_range(
                        token,
                        scanner.leading_lines,
                        start_col=exc.offset + 1 if quoted else 0,
                        width=2 if quoted else None,
                    ),
                    message=exc.message,
                    severity=DiagnosticSeverity.Warning,
                    source="rex",
                )
            )

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
