from __future__ import annotations

from calc.types.tokens import Tok
from calc.types.variable import Var

from .formula import Formula


def disassemble(formula: Formula) -> str:
    out = []
    for i, ele in enumerate(formula.sequence):
        if isinstance(ele, Tok):
            line = f"{i:04d}: OP    {ele.value}"
        elif isinstance(ele, Var):
            line = f"{i:04d}: VAR   {ele}"
        else:
            line = f"{i:04d}: CONST {ele!r}"
        out.append(line)
    # Append variables info
    out.append("-- variables --")
    for idx, name in enumerate(formula.variables):
        out.append(f"[{idx}] {name}")
    return "\n".join(out)
