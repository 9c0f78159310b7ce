"""Tests for the scan cursor and the atom recognizer."""

from __future__ import annotations

import pytest

from bindpower.atoms import parse_atom
from bindpower.cursor import Cursor
from bindpower.errors import UnexpectedCharacter, UnexpectedEndOfInput
from bindpower.expr import Atom


class TestCursor:
    def test_peek_does_not_consume(self):
        cursor = Cursor("ab")
        assert cursor.peek() == "a"
        assert cursor.peek() == "a"
        assert cursor.position == 0

    def test_advance(self):
        cursor = Cursor("ab")
        cursor.advance()
        assert cursor.peek() == "b"
        assert cursor.position == 1
        assert cursor.remaining() == "b"

    def test_end(self):
        cursor = Cursor("a")
        cursor.advance()
        assert cursor.peek() is None
        assert cursor.at_end()

    def test_empty(self):
        cursor = Cursor("")
        assert cursor.peek() is None
        assert cursor.at_end()

    def test_advance_at_end_is_fatal(self):
        cursor = Cursor("")
        with pytest.raises(UnexpectedEndOfInput):
            cursor.advance()

    def test_advances_by_codepoint(self):
        cursor = Cursor("∧1")
        assert cursor.peek() == "∧"
        cursor.advance()
        assert cursor.peek() == "1"
        assert cursor.position == 1


class TestParseAtom:
    def test_digit(self):
        cursor = Cursor("7+")
        assert parse_atom(cursor) == Atom("7")
        assert cursor.position == 1

    def test_only_one_digit(self):
        cursor = Cursor("42")
        assert parse_atom(cursor) == Atom("4")
        assert cursor.peek() == "2"

    @pytest.mark.parametrize("text", ["a", "+", " ", "²", "٣"])
    def test_non_digit(self, text):
        cursor = Cursor(text)
        with pytest.raises(UnexpectedCharacter) as exc:
            parse_atom(cursor)
        assert exc.value.found == text
        assert cursor.position == 0

    def test_end_of_input(self):
        with pytest.raises(UnexpectedEndOfInput):
            parse_atom(Cursor(""))
