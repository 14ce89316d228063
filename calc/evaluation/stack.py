from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List


class Stack:
    """LIFO sequence whose pop/top report absence with None instead of raising.

    An empty stack is the normal end of every reduction loop, so callers test
    for None rather than catching IndexError. None is never pushed.
    """
    __slots__ = ("_data",)

    def __init__(self, items: List[Any] | None = None):
        self._data: List[Any] = list(items) if items else []

    def push(self, v: Any) -> None:
        self._data.append(v)

    def pop(self) -> Any | None:
        if not self._data:
            return None
        return self._data.pop()

    def top(self) -> Any | None:
        if not self._data:
            return None
        return self._data[-1]

    def pop_many(self, n: int) -> list | None:
        """Remove the last n elements and return them in push order; None if fewer exist."""
        if n > len(self._data):
            return None
        if n == 0:
            return []
        out = self._data[-n:]
        del self._data[-n:]
        return out

    def all(self) -> list:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __repr__(self):
        return f"Stack({self._data!r})"


@dataclass
class Stacks:
    """Operand and operator stacks of one evaluation."""
    operands: Stack = field(default_factory=Stack)
    operators: Stack = field(default_factory=Stack)

    def clear(self) -> None:
        self.operands.clear()
        self.operators.clear()
