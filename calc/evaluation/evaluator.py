"""Token driver for the reduction engine.

Walks the lexer's token stream and turns each token into an engine transition:
literals become operands, `$name` is resolved through a VariableResolver, and
operators are routed by class. `-` in prefix position becomes the `opp`
function. The same driver serves direct evaluation and formula compilation;
only the resolver and the executor differ.
"""

from __future__ import annotations

from typing import Any, Iterable

from calc.errors import UnknownVariable, UnsupportedToken, UnsupportedVariableType
from calc.evaluation import operators
from calc.evaluation.engine import Engine
from calc.evaluation.operators import Operator
from calc.reader.lexer import IDENT, NUMBER, STRING, SYMBOL, Token, number_value
from calc.types.tokens import Tok
from calc.types.values import Bindings, Operand, Value, VariableResolver, coerce

VARIABLE_MARKER = "$"

_OPP = operators.get(Tok.OPP)


def resolve_binding(bindings: Bindings, name: str, missing: type = UnknownVariable) -> Value:
    """Look `name` up and coerce it into the value domain.

    `missing` is the error raised for an absent name: UnknownVariable for direct
    evaluation, UnprovidedVariable for formula replay.
    """
    try:
        raw = bindings[name]
    except KeyError:
        raise missing(name) from None
    value = coerce(raw)
    if value is None:
        raise UnsupportedVariableType(name, raw)
    return value


def binding_resolver(bindings: Bindings | None) -> VariableResolver:
    bindings = bindings if bindings is not None else {}

    def resolve(name: str) -> Value:
        return resolve_binding(bindings, name)
    return resolve


class Evaluator:
    """Feeds one token stream through a fresh Engine."""

    def __init__(self, resolve: VariableResolver, executor=None):
        self.resolve = resolve
        self.executor = executor

    def run(self, tokens: Iterable[Token]) -> Operand:
        engine = Engine(self.executor)
        # None before the first token, else the last Operator seen or False for an operand
        previous: Any = None
        awaiting_variable: Token | None = None

        for tok in tokens:
            if awaiting_variable is not None:
                if tok.kind != IDENT:
                    raise UnsupportedToken(tok.text, tok.pos)
                engine.push_operand(self.resolve(tok.text))
                awaiting_variable = None
                previous = False
                continue

            if tok.kind == NUMBER:
                engine.push_operand(number_value(tok.text))
                previous = False
            elif tok.kind == STRING:
                engine.push_operand(tok.text)
                previous = False
            elif tok.kind == SYMBOL and tok.text == VARIABLE_MARKER:
                awaiting_variable = tok
            else:
                op = self._operator_for(tok)
                if op.token is Tok.SUB and _prefix_position(previous):
                    # `-1+2`, `2+ -1` and `(-1-2)`: negate the following operand
                    op = _OPP
                    engine.push_prefix(op)
                else:
                    engine.apply(op)
                previous = op

        if awaiting_variable is not None:
            raise UnsupportedToken(awaiting_variable.text, awaiting_variable.pos)
        return engine.finish()

    @staticmethod
    def _operator_for(tok: Token) -> Operator:
        op = None
        if tok.kind == IDENT:
            op = operators.lookup(tok.text)
            if op is not None and not op.is_function:
                op = None
        elif tok.kind == SYMBOL:
            op = operators.lookup(tok.text)
            if op is not None and op.is_function:
                op = None
        if op is None:
            raise UnsupportedToken(tok.text, tok.pos)
        return op


def _prefix_position(previous: Any) -> bool:
    if previous is None:
        return True
    return isinstance(previous, Operator) and previous.token is not Tok.RPAREN


def evaluate_tokens(tokens: Iterable[Token], bindings: Bindings | None = None) -> Value:
    return Evaluator(binding_resolver(bindings)).run(tokens)
