"""Declarative operator tables.

An operator is data: a role-specific kind carrying its binding powers, a
name used as the head of the node it builds, and the ordered symbols that
trigger and delimit it. The engine in ``bindpower.parser`` reads these
tables by linear scan, so declaration order decides every tie.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from bindpower.errors import TableError

# ── Operator kinds ───────────────────────────────────────────────


@dataclass(frozen=True)
class Prefix:
    right_bp: int


@dataclass(frozen=True)
class ParenLike:
    """Leading operator fully delimited by its closing symbol; no right operand."""


@dataclass(frozen=True)
class Postfix:
    left_bp: int


@dataclass(frozen=True)
class Infix:
    left_bp: int
    right_bp: int


LeadingKind = Union[Prefix, ParenLike]
FollowingKind = Union[Postfix, Infix]
OperatorKind = Union[Prefix, ParenLike, Postfix, Infix]

_LEADING_KINDS = (Prefix, ParenLike)
_FOLLOWING_KINDS = (Postfix, Infix)


@dataclass(frozen=True)
class OperatorSpec:
    kind: OperatorKind
    name: str
    symbols: tuple[str, ...]

    @property
    def entry(self) -> str:
        return self.symbols[0]

    @property
    def delimiters(self) -> tuple[str, ...]:
        return self.symbols[1:]

    @property
    def is_leading(self) -> bool:
        return isinstance(self.kind, _LEADING_KINDS)

    @property
    def is_following(self) -> bool:
        return isinstance(self.kind, _FOLLOWING_KINDS)

    @property
    def left_bp(self) -> int:
        if not isinstance(self.kind, _FOLLOWING_KINDS):
            raise TableError(f"leading operator '{self.name}' has no left binding power")
        return self.kind.left_bp


# ── Constructors ─────────────────────────────────────────────────


def _symbols(name: str, symbols: Iterable[str]) -> tuple[str, ...]:
    syms = tuple(symbols)
    if not syms:
        raise TableError(f"operator '{name}' needs at least one symbol")
    return syms


def prefix(name: str, symbols: Iterable[str], right_bp: int) -> OperatorSpec:
    return OperatorSpec(Prefix(right_bp), name, _symbols(name, symbols))


def paren_like(name: str, symbols: Iterable[str]) -> OperatorSpec:
    return OperatorSpec(ParenLike(), name, _symbols(name, symbols))


def postfix(name: str, symbols: Iterable[str], left_bp: int) -> OperatorSpec:
    return OperatorSpec(Postfix(left_bp), name, _symbols(name, symbols))


def infix(name: str, symbols: Iterable[str], left_bp: int, right_bp: int) -> OperatorSpec:
    return OperatorSpec(Infix(left_bp, right_bp), name, _symbols(name, symbols))


# ── Table ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Ambiguity:
    """A declaration that can never match because an earlier one shares its entry."""

    role: str  # "leading" or "following"
    token: str
    winner: str
    shadowed: str


class OperatorTable:
    """Ordered leading and following operator declarations."""

    def __init__(
        self,
        leading: Iterable[OperatorSpec],
        following: Iterable[OperatorSpec],
    ) -> None:
        self.leading = tuple(leading)
        self.following = tuple(following)
        for op in self.leading:
            if not op.is_leading:
                raise TableError(f"'{op.name}' is declared leading but has kind {op.kind!r}")
        for op in self.following:
            if not op.is_following:
                raise TableError(f"'{op.name}' is declared following but has kind {op.kind!r}")

    def find_leading(self, ch: str | None) -> OperatorSpec | None:
        for op in self.leading:
            if op.entry == ch:
                return op
        return None

    def find_following(self, ch: str | None) -> OperatorSpec | None:
        for op in self.following:
            if op.entry == ch:
                return op
        return None

    def ambiguities(self) -> list[Ambiguity]:
        found: list[Ambiguity] = []
        for role, ops in (("leading", self.leading), ("following", self.following)):
            first: dict[str, OperatorSpec] = {}
            for op in ops:
                winner = first.setdefault(op.entry, op)
                if winner is not op:
                    found.append(Ambiguity(role, op.entry, winner.name, op.name))
        return found

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OperatorTable):
            return NotImplemented
        return self.leading == other.leading and self.following == other.following

    def __hash__(self) -> int:
        return hash((self.leading, self.following))

    def __repr__(self) -> str:
        return (
            f"OperatorTable(leading={[op.name for op in self.leading]}, "
            f"following={[op.name for op in self.following]})"
        )


def default_table() -> OperatorTable:
    """The sample arithmetic language with if/then/else, parens and subscript."""
    return OperatorTable(
        leading=[
            prefix("-", "-", 51),
            prefix("if-then-else", "ITE", 41),
            paren_like("paren", "()"),
        ],
        following=[
            postfix("?", "?", 20),
            postfix("subscript", "[]", 100),
            infix("+", "+", 50, 51),
            infix("-", "-", 50, 51),
            infix("*", "*", 80, 81),
            infix("=", "=", 21, 20),
        ],
    )
