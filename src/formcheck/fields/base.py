"""Field abstraction: a bound view plus the assertions attached to it."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from formcheck.assertions.base import Assertion, CustomAssertion
from formcheck.conditions import Condition, ConditionStack
from formcheck.debounce import Debouncer
from formcheck.errors import FormConfigurationError
from formcheck.results import FieldError, FieldResult
from formcheck.values import FieldValue

if TYPE_CHECKING:
    from formcheck.form import Form
    from formcheck.views import ViewContainer

V = TypeVar("V")
F = TypeVar("F", bound="FormField")
A = TypeVar("A", bound=Assertion)

ErrorCallback = Callable[[Any, list[FieldError]], None]
ValueCallback = Callable[[Any, FieldValue], None]
FieldBuilder = Callable[[F], Any]

_logger = logging.getLogger(__name__)


class FormField(ABC, Generic[V]):
    """Holds an ordered list of assertions for one view and validates them.

    Subclasses pick the view type they accept, how a value snapshot is read
    and which change event drives real-time validation.
    """

    view_type: ClassVar[type]

    def __init__(
        self,
        container: ViewContainer,
        view: V,
        name: str | None = None,
    ) -> None:
        if not isinstance(view, self.view_type):
            raise FormConfigurationError(
                f"{type(self).__name__} needs a {self.view_type.__name__}, "
                f"got {type(view).__name__}"
            )
        self.container = container
        self.view = view
        self.id: str = view.view_id
        self.name: str = name or container.field_name(self.id)
        self.form: Form | None = None
        self.error_callback: ErrorCallback | None = None
        self.value_callback: ValueCallback | None = None
        self._assertions: list[Assertion] = []
        self._conditions = ConditionStack()
        self._debouncer: Debouncer | None = None
        self._detached = False

    @property
    def logger(self) -> logging.Logger:
        return self.form.logger if self.form is not None else _logger

    def assert_(
        self, assertion: A | str, predicate: Callable[[V], bool] | None = None
    ) -> A:
        """Attach an assertion, or a custom one built from (description, predicate).

        The assertion captures every condition that is active right now.
        """
        if isinstance(assertion, str):
            if predicate is None:
                raise FormConfigurationError(
                    "A custom assertion needs a predicate."
                )
            assertion = CustomAssertion(assertion, predicate)
        assertion.attach(self._conditions.as_list(), self.container)
        self._assertions.append(assertion)
        return assertion

    def assertions(self) -> list[Assertion]:
        return list(self._assertions)

    def conditional(self: F, condition: Condition, builder: FieldBuilder[F]) -> None:
        """Declare assertions inside builder that only apply while condition holds.

        Nested calls stack their conditions; the stack is restored on exit.
        """
        self._conditions.push(condition)
        try:
            builder(self)
        finally:
            self._conditions.pop()

    def on_errors(self, callback: ErrorCallback | None) -> None:
        """Set custom logic for displaying errors for the field."""
        self.error_callback = callback

    def on_value(self, callback: ValueCallback | None) -> None:
        """Receive the value snapshot every time the field validates."""
        self.value_callback = callback

    def validate(self, silent: bool = False) -> FieldResult:
        """Run the attached assertions in order and return the field's result.

        Assertions whose conditions are not met are skipped. The value snapshot
        is taken whether or not validation passed. The owning form always hears
        about pass/fail (for submit gating); callbacks only run when not silent.
        """
        errors: list[FieldError] = []
        for assertion in self._assertions:
            if not assertion.is_condition_met():
                continue
            verdict = assertion.check(self.view)
            if not verdict.passed:
                errors.append(
                    FieldError(
                        id=self.id,
                        name=self.name,
                        description=assertion.failure_description(verdict),
                        assertion_kind=assertion.kind,
                    )
                )

        value = self.obtain_value()
        result = FieldResult(name=self.name, value=value, errors=errors)
        self.logger.debug(
            f"Validated field {self.name!r}: {len(errors)} error(s), silent={silent}"
        )

        if self.form is not None:
            self.form.set_field_valid(self, result.success())
        if not silent:
            self.propagate_errors(errors)
            if value is not None:
                self.propagate_value(value)
        return result

    def propagate_errors(self, errors: list[FieldError]) -> None:
        if self.error_callback is not None:
            self.error_callback(self.view, errors)

    def propagate_value(self, value: FieldValue) -> None:
        if self.value_callback is not None:
            self.value_callback(self.view, value)

    @abstractmethod
    def obtain_value(self) -> FieldValue | None:
        """Snapshot the view's current value."""
        ...

    @abstractmethod
    def start_real_time_validation(self, debounce: int) -> None:
        """Subscribe to the view's change event and validate on every change."""
        ...

    def _debounced_validation(self, debounce: int) -> Debouncer:
        self._debouncer = Debouncer(
            self.container.scheduler, debounce, self._validate_on_change
        )
        return self._debouncer

    def _validate_on_change(self) -> None:
        if self._detached:
            return
        self.validate()

    def detach(self) -> None:
        """Stop pending real-time validation and drop the form reference."""
        if self._debouncer is not None:
            self._debouncer.close()
        self._detached = True
        self.form = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"
