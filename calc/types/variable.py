from __future__ import annotations
import sys


class Var:
    """An unresolved variable seen while compiling.

    Instances are handed out by a VariableTable, which guarantees one object per
    name, so "same variable" is an identity test.
    """
    __slots__ = ("name", "handle")

    def __init__(self, name: str, handle: int):
        if not name:
            raise ValueError("variable name must not be empty")
        self.name = sys.intern(name)
        self.handle = handle

    def __eq__(self, other: Var) -> bool:
        return isinstance(other, Var) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Var({self.name!r})"

    def __str__(self):
        return "$" + self.name


class VariableTable:
    """Name -> Var interning table owned by a single compile session."""

    __slots__ = ("_vars",)

    def __init__(self):
        self._vars: dict[str, Var] = {}

    def get(self, name: str) -> Var:
        v = self._vars.get(name)
        if v is None:
            v = Var(name, len(self._vars))
            self._vars[name] = v
        return v

    def names(self) -> tuple[str, ...]:
        return tuple(self._vars)

    def __contains__(self, name: str) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)
