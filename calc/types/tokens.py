from __future__ import annotations

from enum import Enum


class Tok(Enum):
    """Operator tokens.

    Deliberately not a str subclass: replay sequences mix tokens with Text
    values, and the text "+" must never be mistaken for the operator.
    """

    # general
    ADD = "+"
    SUB = "-"
    MUL = "*"
    QUO = "/"
    REM = "%"
    COMMA = ","

    # bracket
    LPAREN = "("
    RPAREN = ")"

    # function
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ABS = "abs"
    OPP = "opp"  # opposite number
    REC = "rec"  # reciprocal
    SUM = "sum"
    MAX = "max"
    MIN = "min"
    POW = "pow"

    @classmethod
    def lookup(cls, text: str) -> Tok | None:
        return cls._value2member_map_.get(text.lower())

    def __str__(self):
        return self.value

    def __repr__(self):
        return f"Tok({self.value!r})"
