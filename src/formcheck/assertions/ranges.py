"""Compound range assertions (length, number, selection, progress).

Any subset of the five bounds may be set on one assertion; the set bounds are
ANDed. The default description lists the set bounds in a fixed order:
exactly, at most, at least, greater than, less than.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from formcheck.assertions.base import Assertion

N = TypeVar("N", int, float)

_BOUND_ORDER = ("exactly", "at_most", "at_least", "greater_than", "less_than")

_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class RangeAssertion(Assertion[Any], Generic[N]):
    subject: ClassVar[str]
    unbounded_description: ClassVar[str]
    #: Whether the assertion passes when no bound has been set.
    valid_when_unbounded: ClassVar[bool] = True

    def __init__(self) -> None:
        super().__init__()
        self.bounds: dict[str, N] = {}

    def exactly(self, value: N):
        """Asserts the value equals (=) a bound."""
        self.bounds["exactly"] = value
        return self

    def less_than(self, value: N):
        """Asserts the value is less than (<) a bound."""
        self.bounds["less_than"] = value
        return self

    def at_most(self, value: N):
        """Asserts the value is at most (<=) a bound."""
        self.bounds["at_most"] = value
        return self

    def at_least(self, value: N):
        """Asserts the value is at least (>=) a bound."""
        self.bounds["at_least"] = value
        return self

    def greater_than(self, value: N):
        """Asserts the value is greater than (>) a bound."""
        self.bounds["greater_than"] = value
        return self

    @abstractmethod
    def measure(self, view: Any) -> N | None:
        """Read the number to compare from the view, or None if there isn't one."""
        ...

    def within(self, value: N) -> bool:
        b = self.bounds
        if "exactly" in b and value != b["exactly"]:
            return False
        if "less_than" in b and value >= b["less_than"]:
            return False
        if "at_most" in b and value > b["at_most"]:
            return False
        if "at_least" in b and value < b["at_least"]:
            return False
        if "greater_than" in b and value <= b["greater_than"]:
            return False
        return True

    def is_valid(self, view: Any) -> bool:
        value = self.measure(view)
        if value is None:
            return False
        if not self.bounds:
            return self.valid_when_unbounded
        return self.within(value)

    def default_description(self) -> str:
        parts = [
            f"{name.replace('_', ' ')} {self.bounds[name]}"
            for name in _BOUND_ORDER
            if name in self.bounds
        ]
        if not parts:
            return self.unbounded_description
        return f"{self.subject} must be {', '.join(parts)}"


class LengthAssertion(RangeAssertion[int]):
    """Bounds on the length of a text field. Fails when no bound is set."""

    subject = "length"
    unbounded_description = "no length bound set"
    valid_when_unbounded = False

    def measure(self, view: Any) -> int:
        return len(view.text)


class NumberAssertion(RangeAssertion[int]):
    """The text must be a whole number, optionally within bounds."""

    subject = "value"
    unbounded_description = "value must be a number"

    def measure(self, view: Any) -> int | None:
        text = view.text
        if not _INTEGER_RE.fullmatch(text):
            return None
        return int(text)


class DecimalAssertion(RangeAssertion[float]):
    """The text must be a decimal number, optionally within bounds."""

    subject = "value"
    unbounded_description = "value must be a number"

    def measure(self, view: Any) -> float | None:
        text = view.text
        if not _DECIMAL_RE.fullmatch(text):
            return None
        return float(text)


class SelectionAssertion(RangeAssertion[int]):
    subject = "selection"
    unbounded_description = "selection bound not set"

    def measure(self, view: Any) -> int:
        return view.selected_position


class ProgressAssertion(RangeAssertion[int]):
    subject = "progress"
    unbounded_description = "progress bound not set"

    def measure(self, view: Any) -> int:
        return view.progress
