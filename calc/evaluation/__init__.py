from __future__ import annotations

from .engine import CONCRETE, ConcreteExecutor, Engine
from .evaluator import Evaluator, evaluate_tokens
from .operators import OPERATORS, OpClass, Operator, lookup
from .stack import Stack, Stacks

__all__ = [
    "CONCRETE",
    "ConcreteExecutor",
    "Engine",
    "Evaluator",
    "evaluate_tokens",
    "OPERATORS",
    "OpClass",
    "Operator",
    "lookup",
    "Stack",
    "Stacks",
]
