from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Sequence

from calc import config
from calc.evaluation.evaluator import Evaluator
from calc.evaluation.operators import OpClass, Operator
from calc.reader.lexer import Token, lex
from calc.types.expression import (
    ATOMIC,
    Exp,
    ExpGroup,
    binary_sequence,
    call_sequence,
    common_origin,
    is_symbolic,
    join_members,
    make_group,
    operand_sequence,
    render,
)
from calc.types.tokens import Tok
from calc.types.values import Operand, is_number, is_text
from calc.types.variable import Var, VariableTable

from .disasm import disassemble
from .formula import Formula

logger = logging.getLogger(__name__)

_AGGREGATES = (Tok.SUM, Tok.MAX, Tok.MIN)


class SymbolicExecutor:
    """Executor that defers every reduction touching a symbolic operand.

    Reductions over concrete operands run the operator right away, so anything
    that does not depend on a variable is folded at compile time.
    """

    def execute(self, op: Operator, args: list) -> Operand:
        if not any(is_symbolic(a) for a in args):
            return op.execute(args)
        if op.op_class is OpClass.GENERAL:
            return self.defer_general(op, args[0], args[1])
        return self.defer_function(op, args[0])

    # --- general operators ---
    def defer_general(self, op: Operator, a: Any, b: Any) -> Operand:
        tok = op.token
        if tok is Tok.COMMA:
            return make_group(a, b)

        if _same_symbol(a, b):
            if tok is Tok.ADD:
                # x + x -> x * 2
                return _binary(a, Tok.MUL, 2.0, 2)
            if tok is Tok.SUB:
                return 0.0

        if tok is Tok.MUL:
            if _scalar_symbol(a) and _is_one(b):
                return a
            if _scalar_symbol(b) and _is_one(a):
                return b

        return _binary(a, tok, b, op.precedence)

    # --- functions ---
    def defer_function(self, op: Operator, arg: Any) -> Operand:
        tok = op.token
        if isinstance(arg, ExpGroup):
            if tok is Tok.SUM:
                members = _fold_leading(op, arg.members)
            elif tok in _AGGREGATES:
                members = _fold_runs(op, arg.members)
            else:
                members = arg.members
            return Exp(call_sequence(tok, join_members(members)), common_origin(*members), ATOMIC)
        return Exp(call_sequence(tok, operand_sequence(arg)), common_origin(arg), ATOMIC)


def _binary(a: Any, tok: Tok, b: Any, precedence: int) -> Exp:
    return Exp(binary_sequence(a, tok, b, precedence), common_origin(a, b), precedence)


def _same_symbol(a: Any, b: Any) -> bool:
    if isinstance(a, Var):
        return a is b
    if isinstance(a, Exp):
        return a.same_as(b)
    return False


def _scalar_symbol(v: Any) -> bool:
    # groups stand for lists, and `list * 1` must still fail at replay
    return isinstance(v, (Var, Exp))


def _is_one(v: Any) -> bool:
    return is_number(v) and v == 1.0


def _foldable(values: Sequence[Any]) -> bool:
    if all(is_text(v) for v in values):
        return True
    return all(is_number(v) and not math.isnan(v) for v in values)


def _fold_leading(op: Operator, members: tuple) -> tuple:
    """Sum the concrete members ahead of the first symbolic one.

    Only the leading run is folded: adding it up front performs exactly the
    additions the direct evaluation performs, in the same order.
    """
    run = 0
    while run < len(members) and not is_symbolic(members[run]):
        run += 1
    head = members[:run]
    if len(head) < 2 or not all(is_number(v) for v in head):
        return members
    return (op.execute([list(head)]),) + members[run:]


def _fold_runs(op: Operator, members: tuple) -> tuple:
    """Reduce each run of adjacent concrete members of max/min to one constant in place.

    The running candidate only changes on a strict comparison, so a run can be
    replaced by its own first extreme without moving anything across a symbol.
    """
    out: list = []
    run: list = []
    for m in members + (None,):
        if m is not None and not is_symbolic(m):
            run.append(m)
            continue
        if len(run) > 1 and _foldable(run):
            out.append(op.execute([run]))
        else:
            out.extend(run)
        run = []
        if m is not None:
            out.append(m)
    return tuple(out)


class Compiler:
    """One compile session: owns the variable table that interns `$name` occurrences."""

    def __init__(self):
        self.variables = VariableTable()

    def compile_tokens(self, tokens: Iterable[Token], source: str | None = None) -> Formula:
        result = Evaluator(self.variables.get, SymbolicExecutor()).run(tokens)
        formula = Formula(flatten(result), source=source)
        logger.debug("compiled %r -> %s", source, render(formula.sequence))
        if config.disasm_enabled():
            logger.info("=== DISASM ===\n%s\n=== END DISASM ===", disassemble(formula))
        return formula


def flatten(result: Operand) -> tuple:
    """Final replay sequence for whatever the reduction left on the operand stack."""
    return operand_sequence(result)


def compile_expr(source: str) -> Formula:
    return Compiler().compile_tokens(lex(source), source=source)
