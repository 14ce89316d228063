# Core type aliases for calc's value domain.
# Values are plain Python objects: float for Number, str for Text and list for List.
# No wrapper classes are defined, operators dispatch on isinstance.
#
# Naming guidance:
# - Value:    any concrete runtime value (Number | Text | List).
# - Operand:  anything that can sit on the operand stack, including the
#             compiler's symbolic placeholders (Var, Exp, ExpGroup).

from __future__ import annotations

import json
import math
import numbers
from decimal import Decimal
from typing import Any, Callable, Mapping, Union

Number = float
Text = str
List = list
Value = Union[Number, Text, List]

# Runtime operand alias: Value or a symbolic placeholder during compilation
Operand = Any

Bindings = Mapping[str, Any]

# Resolves a variable name to an operand (concrete lookup or compile-time Var)
VariableResolver = Callable[[str], Operand]


def is_number(v: Any) -> bool:
    return type(v) is float


def is_text(v: Any) -> bool:
    return isinstance(v, str)


def is_list(v: Any) -> bool:
    return isinstance(v, list)


def is_integral(f: float) -> bool:
    """True when the number equals its truncation (finite whole number)."""
    return math.isfinite(f) and f == int(f)


def coerce(value: Any) -> Value | None:
    """Coerce a host value into the calc domain; None means unsupported.

    Every real numeric kind becomes a float, strings stay text. Booleans are
    rejected even though bool subclasses int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (numbers.Real, Decimal)):
        return float(value)
    return None


def format_value(value: Value) -> str:
    """Render a value the way the command-line tool prints it."""
    if isinstance(value, list):
        return json.dumps(value)
    if isinstance(value, str):
        return value
    return repr(value)

