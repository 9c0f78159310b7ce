"""Scan position over a fixed text buffer."""

from __future__ import annotations

from bindpower.errors import UnexpectedEndOfInput


class Cursor:
    """Single-codepoint lookahead over ``text``.

    One cursor belongs to one parse at a time; the engine threads it through
    every recursive call instead of sharing it.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0

    def peek(self) -> str | None:
        """Return the current codepoint without consuming it, or None at the end."""
        if self.position < len(self.text):
            return self.text[self.position]
        return None

    def advance(self) -> None:
        if self.position >= len(self.text):
            raise UnexpectedEndOfInput(self.position)
        self.position += 1

    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def remaining(self) -> str:
        return self.text[self.position:]

    def __repr__(self) -> str:
        return f"Cursor({self.text!r}, position={self.position})"
