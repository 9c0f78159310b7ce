"""Sample inputs for the default table, with their expected renderings."""

from __future__ import annotations

EXAMPLES: list[tuple[str, str]] = [
    ("-1--2", "(- (- 1) (- 2))"),
    ("1+2*3", "(+ 1 (* 2 3))"),
    ("1*2+3", "(+ (* 1 2) 3)"),
    ("1*(2+3)", "(* 1 (paren (+ 2 3)))"),
    ("-1+2", "(+ (- 1) 2)"),
    ("-1*2", "(- (* 1 2))"),
    ("1*2?", "(? (* 1 2))"),
    ("-1*2?", "(? (- (* 1 2)))"),
    (
        "1=2=I(3)T(4)E(5[6])",
        "(= 1 (= 2 (if-then-else (paren 3) (paren 4) (paren (subscript 5 6)))))",
    ),
]
