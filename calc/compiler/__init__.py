from __future__ import annotations

# Public surface for the compiler package
from .formula import Formula
from .compiler import Compiler, SymbolicExecutor, compile_expr
from .disasm import disassemble

__all__ = [
    "Formula",
    "Compiler",
    "SymbolicExecutor",
    "compile_expr",
    "disassemble",
]
