from __future__ import annotations

import logging
from typing import Any

from calc.errors import UnprovidedVariable
from calc.evaluation import operators
from calc.evaluation.engine import Engine
from calc.evaluation.evaluator import resolve_binding
from calc.types.expression import render
from calc.types.tokens import Tok
from calc.types.values import Bindings, Value
from calc.types.variable import Var

logger = logging.getLogger(__name__)


class Formula:
    """A compiled expression: a flat replay sequence of tokens, constants and Var markers.

    Read-only after construction. Every `evaluate` call replays the sequence on
    its own Engine, so one Formula can serve any number of callers.
    """
    __slots__ = ("sequence", "variables", "source")

    def __init__(self, sequence: tuple, source: str | None = None):
        self.sequence: tuple = tuple(sequence)
        # names in order of first appearance
        self.variables: tuple[str, ...] = tuple(
            dict.fromkeys(e.name for e in self.sequence if isinstance(e, Var))
        )
        self.source = source

    def evaluate(self, bindings: Bindings | None = None) -> Value:
        bindings = bindings if bindings is not None else {}
        engine = Engine()
        for ele in self.sequence:
            if isinstance(ele, Tok):
                engine.apply(operators.get(ele))
            elif isinstance(ele, Var):
                engine.push_operand(resolve_binding(bindings, ele.name, UnprovidedVariable))
            elif isinstance(ele, list):
                # results must never alias the formula's own constants
                engine.push_operand(list(ele))
            else:
                engine.push_operand(ele)
        result = engine.finish()
        logger.debug("replayed %s with %r -> %r", self, bindings, result)
        return result

    def is_constant(self) -> bool:
        return not self.variables

    def __len__(self) -> int:
        return len(self.sequence)

    def __iter__(self):
        return iter(self.sequence)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Formula) and other.sequence == self.sequence

    def __hash__(self):
        # list constants are unhashable; their tuple form hashes like the list compares
        return hash(tuple(tuple(e) if isinstance(e, list) else e for e in self.sequence))

    def __str__(self):
        return render(self.sequence)

    def __repr__(self):
        return f"Formula({render(self.sequence)!r})"
