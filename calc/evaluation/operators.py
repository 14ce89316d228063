"""Operator registry.

Maps operator tokens to Operator records (class, precedence, arity and the
concrete execute function). The table is built once at import time and exposed
read-only; evaluators share it without locking.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from calc.errors import DivisionByZero, InvalidArguments
from calc.types.tokens import Tok
from calc.types.values import Value, is_integral, is_number, is_text


class OpClass(Enum):
    GENERAL = "general"
    BRACKET = "bracket"
    FUNCTION = "function"


@dataclass(frozen=True)
class Operator:
    token: Tok
    op_class: OpClass
    # Higher binds tighter
    precedence: int
    arity: int = 0
    execute: Callable[[Sequence[Value]], Value] | None = None

    @property
    def executable(self) -> bool:
        return self.execute is not None

    @property
    def is_function(self) -> bool:
        return self.op_class is OpClass.FUNCTION

    @property
    def is_bracket(self) -> bool:
        return self.op_class is OpClass.BRACKET

    def __str__(self):
        return self.token.value

    def __repr__(self):
        return f"Operator({self.token.value!r})"


# --- General operators (args are [a, b] in push order) ---

def _add(args: Sequence[Value]) -> Value:
    a, b = args
    if is_text(a) and is_text(b):
        return a + b
    if is_number(a) and is_number(b):
        return a + b
    raise InvalidArguments("+")


def _sub(args: Sequence[Value]) -> Value:
    a, b = args
    if is_number(a) and is_number(b):
        return a - b
    raise InvalidArguments("-")


def _mul(args: Sequence[Value]) -> Value:
    a, b = args
    if is_number(a) and is_number(b):
        return a * b
    if is_text(a) and is_number(b):
        return _repeat(a, b)
    if is_number(a) and is_text(b):
        return _repeat(b, a)
    raise InvalidArguments("*")


def _repeat(s: str, n: float) -> str:
    if not is_integral(n):
        raise InvalidArguments("*", "repeat count must be a whole number")
    if n < 0:
        return ""
    return s * int(n)


def _quo(args: Sequence[Value]) -> Value:
    a, b = args
    if is_number(a) and is_number(b):
        if b == 0:
            raise DivisionByZero("/")
        return a / b
    raise InvalidArguments("/")


def _rem(args: Sequence[Value]) -> Value:
    a, b = args
    if is_number(a) and is_number(b) and is_integral(a) and is_integral(b):
        i1, i2 = int(a), int(b)
        if i2 == 0:
            raise DivisionByZero("%")
        # truncated division: the sign follows the dividend
        r = abs(i1) % abs(i2)
        return float(r if i1 >= 0 else -r)
    raise InvalidArguments("%")


def _comma(args: Sequence[Value]) -> Value:
    a, b = args
    left = a if isinstance(a, list) else [a]
    right = b if isinstance(b, list) else [b]
    return left + right


# --- Function operators (a single argument, possibly a list) ---

def _unary(token: Tok, fn: Callable[[float], float]) -> Callable[[Sequence[Value]], Value]:
    def execute(args: Sequence[Value]) -> Value:
        (x,) = args
        if not is_number(x):
            raise InvalidArguments(token.value)
        try:
            return fn(x)
        except ValueError as ex:
            raise InvalidArguments(token.value, str(ex)) from ex
    return execute


def _reciprocal(x: float) -> float:
    if x == 0:
        raise DivisionByZero("rec")
    return 1 / x


def _numbers(token: Tok, v: Value) -> list[float]:
    """The argument as a non-empty list of numbers (a scalar number counts as a singleton)."""
    if is_number(v):
        return [v]
    if isinstance(v, list) and v and all(is_number(e) for e in v):
        return v
    raise InvalidArguments(token.value)


def _sum(args: Sequence[Value]) -> Value:
    (v,) = args
    numbers = _numbers(Tok.SUM, v)
    total = numbers[0]
    # left to right, matching a chain of `+`
    for f in numbers[1:]:
        total += f
    return total


def _extreme(token: Tok, better: Callable[[Value, Value], bool]) -> Callable[[Sequence[Value]], Value]:
    def execute(args: Sequence[Value]) -> Value:
        (v,) = args
        if is_number(v):
            return v
        if not (isinstance(v, list) and v):
            raise InvalidArguments(token.value)
        if not (all(is_number(e) for e in v) or all(is_text(e) for e in v)):
            raise InvalidArguments(token.value, "elements must be all numbers or all strings")
        best = v[0]
        for e in v[1:]:
            if better(e, best):
                best = e
        return best
    return execute


def _pow(args: Sequence[Value]) -> Value:
    (v,) = args
    if isinstance(v, list) and len(v) == 2 and all(is_number(e) for e in v):
        return _ieee_pow(v[0], v[1])
    raise InvalidArguments("pow", "expects exactly two numbers")


def _ieee_pow(x: float, y: float) -> float:
    # math.pow raises where IEEE 754 pow returns an infinity or nan
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and _odd_integer(y) else math.inf
    except ValueError:
        if x == 0:
            negative = math.copysign(1.0, x) < 0 and _odd_integer(y)
            return -math.inf if negative else math.inf
        return math.nan


def _odd_integer(f: float) -> bool:
    return is_integral(f) and int(f) % 2 == 1


def _build() -> Mapping[Tok, Operator]:
    m: dict[Tok, Operator] = {}
    # register general type operators
    for tok, precedence, fn in (
        (Tok.ADD, 1, _add),
        (Tok.SUB, 1, _sub),
        (Tok.MUL, 2, _mul),
        (Tok.QUO, 2, _quo),
        (Tok.REM, 2, _rem),
        (Tok.COMMA, -1, _comma),
    ):
        m[tok] = Operator(tok, OpClass.GENERAL, precedence, 2, fn)

    # register bracket type operators
    for tok in (Tok.LPAREN, Tok.RPAREN):
        m[tok] = Operator(tok, OpClass.BRACKET, -1)

    # register function type operators
    for tok, fn in (
        (Tok.SIN, _unary(Tok.SIN, math.sin)),
        (Tok.COS, _unary(Tok.COS, math.cos)),
        (Tok.TAN, _unary(Tok.TAN, math.tan)),
        (Tok.ABS, _unary(Tok.ABS, abs)),
        (Tok.OPP, _unary(Tok.OPP, lambda f: -f)),
        (Tok.REC, _unary(Tok.REC, _reciprocal)),
        (Tok.SUM, _sum),
        (Tok.MAX, _extreme(Tok.MAX, lambda a, b: a > b)),
        (Tok.MIN, _extreme(Tok.MIN, lambda a, b: a < b)),
        (Tok.POW, _pow),
    ):
        # opp doubles as prefix minus and must bind like `*`
        precedence = 2 if tok is Tok.OPP else 0
        m[tok] = Operator(tok, OpClass.FUNCTION, precedence, 1, fn)

    return MappingProxyType(m)


OPERATORS: Mapping[Tok, Operator] = _build()


def lookup(token: Tok | str) -> Operator | None:
    """Operator for a token or its text (function names are case-insensitive)."""
    if not isinstance(token, Tok):
        token = Tok.lookup(token)
        if token is None:
            return None
    return OPERATORS.get(token)


def get(token: Tok) -> Operator:
    return OPERATORS[token]
