from __future__ import annotations

import logging
import threading

from calc.compiler.compiler import Compiler
from calc.compiler.formula import Formula
from calc.evaluation.evaluator import Evaluator, binding_resolver
from calc.reader.lexer import lex
from calc.types.values import Bindings, Value

logger = logging.getLogger(__name__)


class Calculator:
    """
    Entry point for evaluating and compiling expressions.
    Holds no evaluation state: every call lexes its input and runs a fresh
    Engine, so one instance may be shared freely.
    """

    def evaluate(self, source: str, bindings: Bindings | None = None) -> Value:
        """Evaluate `source` with `bindings` supplying the `$name` variables."""
        result = Evaluator(binding_resolver(bindings)).run(lex(source))
        logger.debug("evaluated %r -> %r", source, result)
        return result

    def compile(self, source: str) -> Formula:
        """Compile `source` into a Formula that can be evaluated many times."""
        return Compiler().compile_tokens(lex(source), source=source)


_default: Calculator | None = None
_default_lock = threading.Lock()


def default_calculator() -> Calculator:
    """Shared instance behind the module-level helpers, created on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Calculator()
    return _default


def evaluate(source: str, bindings: Bindings | None = None) -> Value:
    return default_calculator().evaluate(source, bindings)


def compile(source: str) -> Formula:
    return default_calculator().compile(source)
