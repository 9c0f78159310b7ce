"""Expression files (.bpx): one expression per line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from bindpower.errors import ParseError
from bindpower.expr import Expr
from bindpower.operators import OperatorTable
from bindpower.parser import parse

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class ExpressionLine:
    """A non-blank, non-comment line. ``line`` is 1-indexed."""

    line: int
    column: int  # 0-indexed start of text within the raw line
    raw: str
    text: str


@dataclass
class LineResult:
    source: ExpressionLine
    expr: Expr | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_column(self) -> int:
        """0-indexed column of the error within the raw line."""
        assert self.error is not None
        return self.source.column + self.error.position


def split_lines(content: str) -> list[str]:
    """Split on \\n, \\r\\n and \\r only; str.splitlines also breaks on \\f and U+2028."""
    return _LINE_BREAK.split(content)


def expression_lines(content: str) -> list[ExpressionLine]:
    lines: list[ExpressionLine] = []
    for n, raw in enumerate(split_lines(content), start=1):
        text = raw.strip()
        if not text or text.startswith("#"):
            continue
        column = len(raw) - len(raw.lstrip())
        lines.append(ExpressionLine(n, column, raw, text))
    return lines


def parse_lines(content: str, table: OperatorTable) -> list[LineResult]:
    """Parse every expression line, collecting errors instead of stopping."""
    results: list[LineResult] = []
    for src in expression_lines(content):
        try:
            results.append(LineResult(src, expr=parse(src.text, table)))
        except ParseError as e:
            results.append(LineResult(src, error=e))
    return results


class SourceFile:
    """A loaded expression file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.content = path.read_text()
        self.lines = split_lines(self.content)

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""
