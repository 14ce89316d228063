"""Symbolic placeholders used while compiling a formula.

An Exp is a deferred computation: a flat replay sequence of operator tokens,
concrete values and Var markers which, fed back through the evaluation engine
with the variables bound, yields the value the direct evaluation would have
produced. An ExpGroup is a list under construction with at least one symbolic
member, waiting for an aggregate function (sum/max/min/pow) to consume it.

Both are immutable; every combination builds a new object.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from calc.types.tokens import Tok
from calc.types.variable import Var

# Precedence recorded for sequences that delimit themselves (a variable, a
# constant, a function call or a bracketed group) and never need wrapping.
ATOMIC = 1 << 8

COMMA_PRECEDENCE = -1


class Exp:
    __slots__ = ("sequence", "origin", "precedence")

    def __init__(self, sequence: Iterable[Any], origin: Var | None = None, precedence: int = ATOMIC):
        self.sequence: tuple = tuple(sequence)
        # The single variable this expression was derived from, None when it mixes several
        self.origin = origin
        # Precedence of the outermost operator in `sequence`
        self.precedence = precedence

    def same_as(self, other: Any) -> bool:
        """True when both expressions are built from the same origin and replay identically."""
        return (
            isinstance(other, Exp)
            and other.origin is self.origin
            and other.sequence == self.sequence
        )

    def variables(self) -> Iterator[Var]:
        return (e for e in self.sequence if isinstance(e, Var))

    def __repr__(self):
        return f"Exp({render(self.sequence)!r})"


class ExpGroup:
    """Ordered list members, at least one of them symbolic."""
    __slots__ = ("members",)

    def __init__(self, members: Iterable[Any]):
        self.members: tuple = tuple(members)

    @property
    def items(self) -> tuple:
        """Concrete members only."""
        return tuple(m for m in self.members if not is_symbolic(m))

    @property
    def exps(self) -> tuple:
        """Symbolic members only."""
        return tuple(m for m in self.members if is_symbolic(m))

    def joined(self, other: Any, prepend: bool = False) -> ExpGroup:
        extra = _group_members(other)
        if prepend:
            return ExpGroup(extra + self.members)
        return ExpGroup(self.members + extra)

    def sequence(self) -> tuple:
        return join_members(self.members)

    def origin(self) -> Var | None:
        return common_origin(*self.members)

    def __repr__(self):
        return f"ExpGroup({render(self.sequence())!r})"


def is_symbolic(v: Any) -> bool:
    return isinstance(v, (Var, Exp, ExpGroup))


def make_group(left: Any, right: Any) -> ExpGroup:
    """The list operator applied to operands of which at least one is symbolic."""
    if isinstance(left, ExpGroup):
        return left.joined(right)
    if isinstance(right, ExpGroup):
        return right.joined(left, prepend=True)
    return ExpGroup(_group_members(left) + _group_members(right))


def _group_members(v: Any) -> tuple:
    # lists flatten into the group, mirroring the concrete list operator
    if isinstance(v, ExpGroup):
        return v.members
    if isinstance(v, list):
        return tuple(v)
    return (v,)


def precedence_of(v: Any) -> int:
    if isinstance(v, Exp):
        return v.precedence
    if isinstance(v, ExpGroup):
        return COMMA_PRECEDENCE
    return ATOMIC


def operand_sequence(v: Any, wrap: bool = False) -> tuple:
    """Replay sequence for a single operand, bracketed when `wrap` is set."""
    if isinstance(v, Exp):
        seq = v.sequence
    elif isinstance(v, ExpGroup):
        seq = v.sequence()
    else:
        seq = (v,)
    if wrap:
        return (Tok.LPAREN,) + seq + (Tok.RPAREN,)
    return seq


def binary_sequence(left: Any, token: Tok, right: Any, precedence: int) -> tuple:
    """`left token right` with just enough brackets to keep left-to-right reduction order."""
    return (
        operand_sequence(left, wrap=precedence_of(left) < precedence)
        + (token,)
        + operand_sequence(right, wrap=precedence_of(right) <= precedence)
    )


def call_sequence(token: Tok, argument_sequence: tuple) -> tuple:
    return (token, Tok.LPAREN) + argument_sequence + (Tok.RPAREN,)


def join_members(members: Iterable[Any]) -> tuple:
    out: list = []
    for i, m in enumerate(members):
        if i:
            out.append(Tok.COMMA)
        out.extend(operand_sequence(m, wrap=precedence_of(m) <= COMMA_PRECEDENCE))
    return tuple(out)


def common_origin(*operands: Any) -> Var | None:
    """The one variable every symbolic operand derives from, if there is exactly one."""
    origin = None
    for v in operands:
        if isinstance(v, Var):
            found = v
        elif isinstance(v, Exp):
            found = v.origin
            if found is None:
                return None
        elif isinstance(v, ExpGroup):
            found = v.origin()
            if found is None:
                return None
        else:
            continue
        if origin is None:
            origin = found
        elif origin is not found:
            return None
    return origin


def render(sequence: Iterable[Any]) -> str:
    """Human readable infix text for a replay sequence."""
    out = ""
    prev = None
    for e in sequence:
        if isinstance(e, Tok):
            text = e.value
        elif isinstance(e, str):
            text = repr(e)
        else:
            text = str(e)
        tight = prev is Tok.LPAREN or e is Tok.RPAREN or e is Tok.COMMA or (
            e is Tok.LPAREN and isinstance(prev, Tok) and prev.value.isalpha()
        )
        if out and not tight:
            out += " "
        out += text
        prev = e
    return out
