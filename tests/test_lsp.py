"""Tests for the bindpower LSP helpers."""

from __future__ import annotations

from lsprotocol import types as lsp

from bindpower.config import table_to_toml
from bindpower.errors import Severity
from bindpower.lsp import (
    _SEVERITY_MAP,
    DocumentState,
    analyze,
    hover_text,
    result_to_diagnostic,
    table_for,
    utf16_column,
)
from bindpower.operators import OperatorTable, default_table, infix, prefix
from bindpower.source import parse_lines


class TestSeverityMap:
    def test_error_maps(self):
        assert _SEVERITY_MAP[Severity.ERROR] == lsp.DiagnosticSeverity.Error

    def test_warning_maps(self):
        assert _SEVERITY_MAP[Severity.WARNING] == lsp.DiagnosticSeverity.Warning

    def test_note_maps(self):
        assert _SEVERITY_MAP[Severity.NOTE] == lsp.DiagnosticSeverity.Information


class TestDiagnostics:
    def test_position_is_zero_indexed(self, table):
        (result,) = [r for r in parse_lines("1\n\n  1+x\n", table) if not r.ok]
        diag = result_to_diagnostic(result)
        assert diag.range.start.line == 2
        assert diag.range.start.character == 4
        assert diag.range.end.character == 5
        assert diag.severity == lsp.DiagnosticSeverity.Error
        assert diag.code == "E100"
        assert diag.source == "bindpower"

    def test_columns_count_utf16_units(self):
        table = OperatorTable([prefix("f", "\U0001d453", 5)], [])
        (result,) = parse_lines("  \U0001d453\U0001d453x\n", table)
        assert result.error_column == 4
        diag = result_to_diagnostic(result)
        assert diag.range.start.character == 6
        assert diag.range.end.character == 7

    def test_range_covers_surrogate_pair(self, table):
        (result,) = parse_lines("1\U0001d453\n", table)
        diag = result_to_diagnostic(result)
        assert diag.range.start.character == 1
        assert diag.range.end.character == 3

    def test_error_at_end_of_line(self):
        table = OperatorTable([prefix("neg", "\u00e9", 5)], [infix("+", "+", 1, 2)])
        (result,) = parse_lines("\u00e91+\n", table)
        assert result.error.code == "E102"
        diag = result_to_diagnostic(result)
        assert diag.range.start.character == 3
        assert diag.range.end.character == 4

    def test_utf16_column(self):
        assert utf16_column("a\U0001d453b", 2) == 3
        assert utf16_column("\u00e9x", 1) == 1

    def test_analyze(self, table):
        ds = analyze("1+2\n(1\n3*\n", table)
        assert len(ds.results) == 3
        assert [d.code for d in ds.diagnostics] == ["E102", "E102"]
        assert [d.range.start.line for d in ds.diagnostics] == [1, 2]

    def test_analyze_clean(self, table):
        assert analyze("# nothing\n1\n", table).diagnostics == []


class TestHover:
    def test_hover_shows_rendering(self, table):
        ds = analyze("# c\n1+2*3\n", table)
        assert hover_text(ds, 1) == "```\n(+ 1 (* 2 3))\n```"

    def test_hover_on_comment_or_error(self, table):
        ds = analyze("# c\n(1\n", table)
        assert hover_text(ds, 0) is None
        assert hover_text(ds, 1) is None
        assert hover_text(ds, 7) is None

    def test_empty_state(self):
        assert DocumentState().result_at(0) is None


class TestTableFor:
    def test_default_without_config(self, tmp_path, monkeypatch):
        monkeypatch.setattr("bindpower.config.CONFIG_NAME", "bindpower-missing-for-test.toml")
        doc = tmp_path / "a.bpx"
        doc.write_text("1\n")
        assert table_for(doc.as_uri()) == default_table()

    def test_nearest_config(self, tmp_path):
        table = OperatorTable([], [infix("&", "&", 5, 6)])
        (tmp_path / "bindpower.toml").write_text(table_to_toml(table))
        sub = tmp_path / "sub"
        sub.mkdir()
        doc = sub / "a.bpx"
        doc.write_text("1&2\n")
        assert table_for(doc.as_uri()) == table

    def test_invalid_config_falls_back(self, tmp_path):
        (tmp_path / "bindpower.toml").write_text("[[following]]\nname = 1\n")
        doc = tmp_path / "a.bpx"
        doc.write_text("1\n")
        assert table_for(doc.as_uri()) == default_table()

    def test_non_file_uri(self):
        assert table_for("untitled:Untitled-1") == default_table()
