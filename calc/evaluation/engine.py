"""Two-stack reduction engine.

The engine is an explicit state machine over an operand stack and an operator
stack. Each method is one named transition:

    push_operand     a value (or, when compiling, a symbolic placeholder)
    push_operator    reduce while the pending operator binds at least as tight, then push
    push_prefix      push a prefix operator without reducing anything
    open_bracket     push `(` as a precedence barrier
    close_bracket    reduce back to the matching `(`, then call a waiting function
    push_function    push a function waiting for its bracketed argument
    drain            reduce everything that is left
    result           the single remaining operand

Executing an operator is delegated to an executor object. The concrete executor
runs Operator.execute; the formula compiler plugs in a symbolic one. Both share
this loop unchanged.

This module is also built as an optional compiled extension (see setup.py), so
it sticks to plain classes.
"""

from __future__ import annotations

from calc.errors import InsufficientOperands, NoResult, Unexecutable, UnmatchedParenthesis
from calc.evaluation.operators import OpClass, Operator
from calc.evaluation.stack import Stacks
from calc.types.tokens import Tok


class ConcreteExecutor:
    """Runs operators on concrete values."""

    def execute(self, op: Operator, args: list):
        return op.execute(args)


CONCRETE = ConcreteExecutor()


class Engine:
    __slots__ = ("stacks", "executor")

    def __init__(self, executor=None):
        self.stacks = Stacks()
        self.executor = executor if executor is not None else CONCRETE

    # --- transitions ---
    def push_operand(self, v) -> None:
        self.stacks.operands.push(v)

    def push_operator(self, op: Operator) -> None:
        operators = self.stacks.operators
        while True:
            top = operators.top()
            if top is None or not top.executable or top.precedence < op.precedence:
                break
            self.execute_top()
        operators.push(op)

    def push_prefix(self, op: Operator) -> None:
        # nothing to the left belongs to a prefix operator
        self.stacks.operators.push(op)

    def open_bracket(self, op: Operator) -> None:
        self.stacks.operators.push(op)

    def close_bracket(self, op: Operator) -> None:
        operators = self.stacks.operators
        while True:
            top = operators.top()
            if top is None:
                raise UnmatchedParenthesis(op.token.value)
            if top.token is Tok.LPAREN:
                break
            if not top.executable:
                raise UnmatchedParenthesis(op.token.value)
            self.execute_top()
        operators.pop()
        # closing a bracket calls the function written in front of it
        top = operators.top()
        if top is not None and top.op_class is OpClass.FUNCTION:
            self.execute_top()

    def push_function(self, op: Operator) -> None:
        self.stacks.operators.push(op)

    def apply(self, op: Operator) -> None:
        """Route an operator to the transition for its class."""
        if op.op_class is OpClass.GENERAL:
            self.push_operator(op)
        elif op.op_class is OpClass.FUNCTION:
            self.push_function(op)
        elif op.token is Tok.LPAREN:
            self.open_bracket(op)
        else:
            self.close_bracket(op)

    def drain(self) -> None:
        operators = self.stacks.operators
        while True:
            top = operators.top()
            if top is None:
                return
            if not top.executable:
                if top.token is Tok.LPAREN:
                    raise UnmatchedParenthesis(top.token.value)
                raise Unexecutable(top.token.value)
            self.execute_top()

    def result(self):
        operands = self.stacks.operands
        if len(operands) != 1:
            raise NoResult(len(operands))
        return operands.top()

    def finish(self):
        self.drain()
        return self.result()

    # --- reduction primitive ---
    def execute_top(self) -> None:
        op = self.stacks.operators.pop()
        args = self.stacks.operands.pop_many(op.arity)
        if args is None:
            raise InsufficientOperands(op.token.value)
        self.stacks.operands.push(self.executor.execute(op, args))
