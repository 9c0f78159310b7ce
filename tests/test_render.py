"""Tests for expression rendering."""

from __future__ import annotations

import dataclasses

import pytest

from bindpower.expr import Atom, Node
from bindpower.parser import parse
from bindpower.render import dump, render


class TestRender:
    def test_atom(self):
        assert render(Atom("1")) == "1"

    def test_node(self):
        assert render(Node((Atom("+"), Atom("1"), Atom("2")))) == "(+ 1 2)"

    def test_no_arity_special_casing(self):
        assert render(Node(())) == "()"
        assert render(Node((Atom("x"),))) == "(x)"
        assert render(Node((Node((Atom("f"),)), Atom("1")))) == "((f) 1)"

    def test_str_matches_render(self):
        expr = parse("1+2*3")
        assert str(expr) == render(expr) == "(+ 1 (* 2 3))"
        assert str(Atom("9")) == "9"

    def test_stable_across_calls(self):
        expr = parse("1=2=I(3)T(4)E(5[6])")
        first = render(expr)
        assert all(render(expr) == first for _ in range(5))
        assert render(parse("1=2=I(3)T(4)E(5[6])")) == first


class TestExpr:
    def test_immutable(self):
        expr = parse("1+2")
        with pytest.raises(dataclasses.FrozenInstanceError):
            expr.children = ()

    def test_operator_convention_not_enforced(self):
        node = Node((Node((Atom("f"),)), Atom("1")))
        assert node.operator is None
        assert Node(()).operator is None


class TestDump:
    def test_atom(self):
        assert dump(Atom("1")) == "1"

    def test_tree(self):
        assert dump(parse("1+2*3")) == "+\n  1\n  *\n    2\n    3"

    def test_headless_node(self):
        assert dump(Node((Node((Atom("f"),)), Atom("1")))) == "()\n  f\n  1"
