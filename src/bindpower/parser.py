"""Binding-power expression engine.

Parses a character stream into an expression tree using only what an
``OperatorTable`` declares. Leading operators (prefix, paren-like) are
matched where an expression starts; following operators (postfix, infix)
are matched after a completed operand. Mixfix operators carry extra
symbols, each preceded by a sub-expression parsed at threshold 0.
"""

from __future__ import annotations

import logging

from bindpower.atoms import parse_atom
from bindpower.cursor import Cursor
from bindpower.errors import (
    MissingOrMismatchedDelimiter,
    NestingTooDeep,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
)
from bindpower.expr import Atom, Expr, Node
from bindpower.operators import Infix, OperatorSpec, OperatorTable, Prefix, default_table

logger = logging.getLogger(__name__)


class Parser:
    """Parses expressions from one cursor against one operator table."""

    def __init__(self, table: OperatorTable, cursor: Cursor) -> None:
        self.table = table
        self.cursor = cursor

    # ── Delimited sub-expressions ────────────────────────────────

    def _expect(self, symbol: str, op: OperatorSpec) -> None:
        ch = self.cursor.peek()
        if ch is None:
            raise UnexpectedEndOfInput(
                self.cursor.position, expected=symbol, operator=op.name,
            )
        if ch != symbol:
            raise MissingOrMismatchedDelimiter(symbol, ch, self.cursor.position, op.name)
        self.cursor.advance()

    def _parse_delimited(self, op: OperatorSpec, children: list[Expr]) -> None:
        """Parse one sub-expression before each of op's remaining symbols."""
        for symbol in op.delimiters:
            children.append(self.parse_expression(0))
            self._expect(symbol, op)

    # ── Binding-power loop ───────────────────────────────────────

    def parse_expression(self, min_bp: int) -> Expr:
        """Parse one expression whose following operators all bind tighter than min_bp."""
        logger.debug("enter min_bp=%d at offset %d", min_bp, self.cursor.position)
        left = self._parse_leading()

        while True:
            ch = self.cursor.peek()
            if ch is None:
                break

            op = self.table.find_following(ch)
            if op is None:
                break

            if op.left_bp <= min_bp:
                # Belongs to an enclosing call with a lower threshold
                logger.debug(
                    "%r yields at offset %d (left_bp %d <= min_bp %d)",
                    op.name, self.cursor.position, op.left_bp, min_bp,
                )
                break

            logger.debug("following %r at offset %d", op.name, self.cursor.position)
            self.cursor.advance()
            children: list[Expr] = [Atom(op.name), left]
            self._parse_delimited(op, children)
            if isinstance(op.kind, Infix):
                children.append(self.parse_expression(op.kind.right_bp))
            left = Node(tuple(children))

        return left

    def _parse_leading(self) -> Expr:
        """Parse an atom or a leading operator with its operands."""
        op = self.table.find_leading(self.cursor.peek())
        if op is None:
            return parse_atom(self.cursor)

        logger.debug("leading %r at offset %d", op.name, self.cursor.position)
        self.cursor.advance()
        children: list[Expr] = [Atom(op.name)]
        self._parse_delimited(op, children)

        # Paren-like scope ends at its closing symbol
        if isinstance(op.kind, Prefix):
            children.append(self.parse_expression(op.kind.right_bp))

        return Node(tuple(children))


# ── Entry points ─────────────────────────────────────────────────


def parse_expression(table: OperatorTable, cursor: Cursor, min_bp: int = 0) -> Expr:
    """Parse one expression from cursor, leaving it just past the consumed text."""
    return Parser(table, cursor).parse_expression(min_bp)


def parse(text: str, table: OperatorTable | None = None) -> Expr:
    """Parse the whole of text as a single expression."""
    if table is None:
        table = default_table()
    cursor = Cursor(text)
    try:
        expr = parse_expression(table, cursor, 0)
    except RecursionError:
        raise NestingTooDeep(cursor.position) from None
    trailing = cursor.peek()
    if trailing is not None:
        raise UnexpectedCharacter(trailing, cursor.position, context="end of input")
    return expr
