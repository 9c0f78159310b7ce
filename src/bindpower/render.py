"""Text forms of expression trees.

``render`` is the canonical s-expression form used to compare parser
output. ``dump`` is an indented view for reading larger trees.
"""

from __future__ import annotations

from bindpower.expr import Atom, Expr, Node


def render(expr: Expr) -> str:
    if isinstance(expr, Atom):
        return expr.text
    return "(" + " ".join(render(child) for child in expr.children) + ")"


def dump(expr: Expr, indent: str = "  ") -> str:
    """Return one line per tree node, nested by depth."""
    lines: list[str] = []
    _dump(expr, 0, indent, lines)
    return "\n".join(lines)


def _dump(expr: Expr, depth: int, indent: str, lines: list[str]) -> None:
    pad = indent * depth
    if isinstance(expr, Atom):
        lines.append(f"{pad}{expr.text}")
        return
    assert isinstance(expr, Node)
    if expr.operator is not None:
        lines.append(f"{pad}{expr.operator}")
        rest = expr.operands
    else:
        lines.append(f"{pad}()")
        rest = expr.children
    for child in rest:
        _dump(child, depth + 1, indent, lines)
