"""Expression tree produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Atom:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Node:
    """Interior node. By convention children[0] is an Atom naming the operator."""

    children: tuple[Expr, ...]

    @property
    def operator(self) -> str | None:
        if self.children and isinstance(self.children[0], Atom):
            return self.children[0].text
        return None

    @property
    def operands(self) -> tuple[Expr, ...]:
        return self.children[1:]

    def __str__(self) -> str:
        from bindpower.render import render

        return render(self)


Expr = Union[Atom, Node]
