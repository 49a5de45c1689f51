"""Conditions that gate groups of assertions."""

from __future__ import annotations

from typing import Callable, Iterable

Condition = Callable[[], bool]


class ConditionStack:
    """Ordered stack of the conditions active while rules are being declared.

    Assertions capture ``as_list()`` when they are attached, so nested
    ``conditional`` blocks compose outer-to-inner.
    """

    def __init__(self) -> None:
        self._stack: list[Condition] = []

    def push(self, condition: Condition) -> None:
        self._stack.append(condition)

    def pop(self) -> Condition:
        if not self._stack:
            raise IndexError("pop from an empty condition stack")
        return self._stack.pop()

    def peek(self) -> Condition:
        if not self._stack:
            raise IndexError("peek at an empty condition stack")
        return self._stack[-1]

    def as_list(self) -> tuple[Condition, ...]:
        """Immutable snapshot of the pushed conditions, outermost first."""
        return tuple(self._stack)

    def __len__(self) -> int:
        return len(self._stack)


def all_met(conditions: Iterable[Condition] | None) -> bool:
    """Return True if every condition returns True (vacuously True when empty)."""
    if not conditions:
        return True
    return all(condition() for condition in conditions)
