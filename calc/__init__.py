"""
calc: evaluates infix expressions over numbers, strings and lists, and compiles
expressions with `$variables` into reusable formulas.

Usage:
    import calc

    calc.evaluate("sum($a, 2, 3) + 2*3", {"a": 1})    # 12.0

    f = calc.compile("$x * 2 + sin(0)")
    f.evaluate({"x": 5})                               # 10.0
"""

from calc.calculator import Calculator, compile, default_calculator, evaluate
from calc.compiler.formula import Formula
from calc.errors import (
    CalcError,
    CalcSyntaxError,
    DivisionByZero,
    InsufficientOperands,
    InvalidArguments,
    NoResult,
    UnknownVariable,
    UnmatchedParenthesis,
    Unexecutable,
    UnprovidedVariable,
    UnsupportedToken,
    UnsupportedVariableType,
)
from calc.types.values import Value

__all__ = [
    "Calculator",
    "Formula",
    "Value",
    "compile",
    "default_calculator",
    "evaluate",
    "CalcError",
    "CalcSyntaxError",
    "DivisionByZero",
    "InsufficientOperands",
    "InvalidArguments",
    "NoResult",
    "UnknownVariable",
    "UnmatchedParenthesis",
    "Unexecutable",
    "UnprovidedVariable",
    "UnsupportedToken",
    "UnsupportedVariableType",
]
