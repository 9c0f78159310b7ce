"""Shared test helpers for the bindpower test suite."""

from __future__ import annotations

from bindpower.cursor import Cursor
from bindpower.operators import OperatorTable, default_table
from bindpower.parser import parse, parse_expression
from bindpower.render import render


def parse_str(text: str, table: OperatorTable | None = None) -> str:
    """Parse the whole of text and return its canonical rendering."""
    return render(parse(text, table))


def parse_prefix(text: str, min_bp: int = 0,
                 table: OperatorTable | None = None) -> tuple[str, int]:
    """Parse one expression from the start of text. Returns (rendering, stop offset)."""
    cursor = Cursor(text)
    expr = parse_expression(table or default_table(), cursor, min_bp)
    return render(expr), cursor.position
