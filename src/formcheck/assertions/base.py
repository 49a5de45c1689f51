"""Base data structures for the assertion system."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from formcheck.conditions import Condition, all_met
from formcheck.errors import FormConfigurationError

if TYPE_CHECKING:
    from formcheck.views import ViewContainer

V = TypeVar("V")
A = TypeVar("A", bound="Assertion")


@dataclass(frozen=True)
class Verdict:
    """Result of evaluating a single assertion against a view.

    Attributes:
        passed: Whether the view's current value satisfies the assertion.
        reason: Optional failure detail that is more specific than the
            assertion's default description (e.g. which URI scheme was
            rejected). Ignored when ``passed`` is True.
    """

    passed: bool
    reason: str | None = None


PASS = Verdict(passed=True)
FAIL = Verdict(passed=False)


class Assertion(ABC, Generic[V]):
    """A single named predicate over one field's view.

    Conditions are captured by the owning field when the assertion is
    attached and are re-evaluated on every validation pass.
    """

    def __init__(self) -> None:
        self._description: str | None = None
        self.conditions: tuple[Condition, ...] = ()
        self.container: ViewContainer | None = None
        self._attached = False

    @abstractmethod
    def is_valid(self, view: V) -> bool:
        """Return True if the view passes the assertion."""
        ...

    @abstractmethod
    def default_description(self) -> str:
        """A short description of what the assertion tests."""
        ...

    def check(self, view: V) -> Verdict:
        return PASS if self.is_valid(view) else FAIL

    def description(self) -> str:
        return self._description or self.default_description()

    def describe(self: A, text: str | None) -> A:
        """Override the description used in validation errors."""
        self._description = text
        return self

    def describe_resource(self: A, res: str) -> A:
        """Override the description with a string resource from the container."""
        if self.container is None:
            raise FormConfigurationError(
                "Assertion must be attached to a field before resolving resources."
            )
        self._description = self.container.get_string(res)
        return self

    def failure_description(self, verdict: Verdict) -> str:
        return self._description or verdict.reason or self.default_description()

    def is_condition_met(self) -> bool:
        return all_met(self.conditions)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def attach(
        self, conditions: tuple[Condition, ...], container: ViewContainer | None
    ) -> None:
        if self._attached:
            raise FormConfigurationError(
                f"{self.kind} is already attached to a field."
            )
        self._attached = True
        self.conditions = tuple(conditions)
        self.container = container

    def __repr__(self) -> str:
        return f"{self.kind}({self.description()!r})"


class CustomAssertion(Assertion[Any]):
    """Wraps an arbitrary predicate over the view with a required description."""

    def __init__(self, description: str, predicate: Callable[[Any], bool]) -> None:
        super().__init__()
        if not description or not description.strip():
            raise FormConfigurationError(
                "Custom assertion descriptions should not be empty."
            )
        self.predicate = predicate
        self.describe(description)

    def is_valid(self, view: Any) -> bool:
        return bool(self.predicate(view))

    def default_description(self) -> str:
        return "no description set"
