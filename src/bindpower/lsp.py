"""bindpower Language Server: pygls-based LSP for .bpx expression files.

Provides per-line parse diagnostics and hover with the canonical
rendering of the expression under the cursor, via stdio transport.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer
from pygls.uris import to_fs_path

from bindpower import __version__
from bindpower.config import find_config, load_config
from bindpower.errors import ConfigError, Severity
from bindpower.operators import OperatorTable, default_table
from bindpower.render import render
from bindpower.source import LineResult, parse_lines

logger = logging.getLogger(__name__)

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.NOTE: lsp.DiagnosticSeverity.Information,
}


# ── Conversion helpers ────────────────────────────────────────────


def utf16_column(text: str, column: int) -> int:
    """Convert a codepoint offset within text to UTF-16 code units."""
    return len(text[:column].encode("utf-16-le")) // 2


def result_to_diagnostic(result: LineResult) -> lsp.Diagnostic:
    """Convert a failed line into an LSP Diagnostic covering the offending character."""
    assert result.error is not None
    diag = result.error.diagnostic
    line = result.source.line - 1
    raw = result.source.raw
    col = result.error_column
    start = utf16_column(raw, col)
    # Past the end of the line there is no character to cover
    end = utf16_column(raw, col + 1) if col < len(raw) else start + 1
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=line, character=start),
            end=lsp.Position(line=line, character=end),
        ),
        severity=_SEVERITY_MAP[diag.severity],
        source="bindpower",
        code=diag.code,
        message=f"[{diag.code}] {diag.message}",
    )


def table_for(uri: str) -> OperatorTable:
    """Table from the nearest bindpower.toml above the document, else the default."""
    if not uri.startswith("file:"):
        return default_table()
    path = to_fs_path(uri)
    if path is None:
        return default_table()
    try:
        return load_config(find_config(Path(path))).table
    except FileNotFoundError:
        return default_table()
    except ConfigError as e:
        logger.warning("ignoring invalid config for %s: %s", uri, e)
        return default_table()


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached analysis results for a single open document."""

    source: str = ""
    results: list[LineResult] = field(default_factory=list)
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)

    def result_at(self, line: int) -> LineResult | None:
        """Result for a 0-indexed LSP line, if that line holds an expression."""
        for result in self.results:
            if result.source.line - 1 == line:
                return result
        return None


server = LanguageServer(
    "bindpower-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def analyze(source: str, table: OperatorTable) -> DocumentState:
    ds = DocumentState(source=source)
    ds.results = parse_lines(source, table)
    ds.diagnostics = [result_to_diagnostic(r) for r in ds.results if not r.ok]
    return ds


def hover_text(ds: DocumentState, line: int) -> str | None:
    result = ds.result_at(line)
    if result is None or result.expr is None:
        return None
    return f"```\n{render(result.expr)}\n```"


def _refresh(uri: str, source: str) -> None:
    ds = analyze(source, table_for(uri))
    _state[uri] = ds
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    _refresh(params.text_document.uri, params.text_document.text)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    # Full sync: take last content change
    source = params.content_changes[-1].text if params.content_changes else ""
    _refresh(params.text_document.uri, source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    ds = _state.get(params.text_document.uri)
    if ds is None:
        return None
    text = hover_text(ds, params.position.line)
    if text is None:
        return None
    return lsp.Hover(contents=lsp.MarkupContent(
        kind=lsp.MarkupKind.Markdown,
        value=text,
    ))


def main() -> None:
    """Start the bindpower language server on stdio."""
    server.start_io()
