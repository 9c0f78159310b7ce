"""Recognizer for literal leaf tokens."""

from __future__ import annotations

from bindpower.cursor import Cursor
from bindpower.errors import UnexpectedCharacter, UnexpectedEndOfInput
from bindpower.expr import Atom

# str.isdigit() accepts other scripts' digits too
_DIGITS = frozenset("0123456789")


def parse_atom(cursor: Cursor) -> Atom:
    """Consume one ASCII digit and return it as an Atom."""
    ch = cursor.peek()
    if ch is None:
        raise UnexpectedEndOfInput(cursor.position)
    if ch not in _DIGITS:
        raise UnexpectedCharacter(ch, cursor.position)
    cursor.advance()
    return Atom(ch)
