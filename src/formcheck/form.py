"""Form: an ordered collection of fields plus submission and gating logic."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from formcheck.errors import FormConfigurationError, FormDestroyedError, ViewNotFoundError
from formcheck.fields.base import FormField
from formcheck.fields.choice import ChoiceField
from formcheck.fields.slider import SliderField
from formcheck.fields.text import InputField, InputLayoutField, TextField
from formcheck.fields.toggle import ToggleField
from formcheck.results import FormResult
from formcheck.views import Menu, SubmitTrigger, ViewContainer

F = TypeVar("F", bound=FormField)

SubmitCallback = Callable[[FormResult], Any]
FormBuilder = Callable[["Form"], Any]

DEFAULT_DEBOUNCE = 500


class Form:
    """Coordinates validation across fields, in declaration order.

    With real-time validation and ``disable_submit`` on, the submit trigger is
    enabled exactly when no tracked field is failing. Fields report their
    state on every validation, real-time or explicit.
    """

    def __init__(
        self, container: ViewContainer, logger: logging.Logger | None = None
    ) -> None:
        self.container: ViewContainer | None = container
        self.logger = logger or logging.getLogger(__name__)
        self.real_time_enabled = False
        self.real_time_debounce = -1
        self.real_time_disable_submit = False
        self.submit_target: SubmitTrigger | None = None
        self._valid_map: dict[FormField, bool] | None = None
        self._fields: list[FormField] = []
        self._started = False

    def _checked_container(self) -> ViewContainer:
        if self.container is None:
            raise FormDestroyedError()
        return self.container

    def set_field_valid(self, field: FormField, valid: bool) -> None:
        """Record a field's latest pass/fail state and update submit gating."""
        if self._valid_map is None:
            return
        self._valid_map[field] = valid
        if self.submit_target is not None:
            self.submit_target.enabled = all(self._valid_map.values())

    def append_field(self, field: F) -> F:
        field.form = self
        self._fields.append(field)
        return field

    def fields(self) -> list[FormField]:
        return list(self._fields)

    def use_real_time_validation(
        self, debounce: int = DEFAULT_DEBOUNCE, disable_submit: bool = False
    ) -> Form:
        """Validate fields as they change instead of waiting for submission.

        Args:
            debounce: Milliseconds of quiet time after a change before the field
                validates. Must be >= 0; 0 validates synchronously. Choice and
                toggle fields ignore it.
            disable_submit: Disable the submit trigger while any field fails.
        """
        if debounce < 0:
            raise FormConfigurationError("Debounce must be >= 0.")
        self.real_time_enabled = True
        self.real_time_debounce = debounce
        if disable_submit:
            self.real_time_disable_submit = True
            self._valid_map = {}
        return self

    def _resolve(self, view: Any, view_id_hint: str = "view") -> Any:
        container = self._checked_container()
        if isinstance(view, str):
            return container.get_view_or_raise(view)
        if view is None:
            raise FormConfigurationError(f"A {view_id_hint} is required.")
        return view

    def _register(
        self,
        field: F,
        builder: Callable[[F], Any] | None,
        optional: bool = False,
    ) -> F:
        if builder is not None:
            if optional and isinstance(field, TextField):
                field.is_empty_or(builder)
            else:
                builder(field)
        return self.append_field(field)

    def text_input(
        self,
        view: Any,
        name: str | None = None,
        optional: bool = False,
        builder: Callable[[InputField], Any] | None = None,
    ) -> InputField:
        """Add a plain text input field.

        When ``optional`` is True, every rule from builder only applies while
        the text is not blank.
        """
        container = self._checked_container()
        field = InputField(container, self._resolve(view), name)
        return self._register(field, builder, optional)

    def input_layout(
        self,
        view: Any,
        name: str | None = None,
        optional: bool = False,
        builder: Callable[[InputLayoutField], Any] | None = None,
    ) -> InputLayoutField:
        """Add a decorated text input field."""
        container = self._checked_container()
        field = InputLayoutField(container, self._resolve(view), name)
        return self._register(field, builder, optional)

    def dropdown(
        self,
        view: Any,
        name: str | None = None,
        builder: Callable[[ChoiceField], Any] | None = None,
    ) -> ChoiceField:
        container = self._checked_container()
        field = ChoiceField(container, self._resolve(view), name)
        return self._register(field, builder)

    def toggle(
        self,
        view: Any,
        name: str | None = None,
        builder: Callable[[ToggleField], Any] | None = None,
    ) -> ToggleField:
        container = self._checked_container()
        field = ToggleField(container, self._resolve(view), name)
        return self._register(field, builder)

    def slider(
        self,
        view: Any,
        name: str | None = None,
        builder: Callable[[SliderField], Any] | None = None,
    ) -> SliderField:
        container = self._checked_container()
        field = SliderField(container, self._resolve(view), name)
        return self._register(field, builder)

    def validate(self, silent: bool = False) -> FormResult:
        """Validate every field in declaration order and merge the results."""
        result = FormResult()
        for field in self._fields:
            result += field.validate(silent=silent)
        self.logger.debug(
            f"Validated form: {len(self._fields)} field(s), "
            f"{len(result.errors())} error(s), silent={silent}"
        )
        return result

    def _submit_handler(self, on_submit: SubmitCallback) -> Callable[[], None]:
        def _handle() -> None:
            if self.destroyed:
                self.logger.debug("Ignoring submission on a destroyed form")
                return
            result = self.validate()
            if result.success():
                on_submit(result)
            else:
                self.logger.debug("Submission blocked by validation errors")

        return _handle

    def submit_with(self, trigger: SubmitTrigger | str, on_submit: SubmitCallback) -> None:
        """Validate on click and call on_submit only when validation passes."""
        container = self._checked_container()
        if isinstance(trigger, str):
            found = container.find_view(trigger)
            if found is None:
                raise ViewNotFoundError(
                    trigger,
                    f"Unable to find view {container.field_name(trigger)} in your container.",
                )
            trigger = found
        if not isinstance(trigger, SubmitTrigger):
            raise FormConfigurationError(
                f"Submit target must be a SubmitTrigger, got {type(trigger).__name__}"
            )
        trigger.set_on_click(self._submit_handler(on_submit))
        self.submit_target = trigger

    def submit_with_menu(self, menu: Menu, item_id: str, on_submit: SubmitCallback) -> None:
        """Like submit_with, for an action inside a menu."""
        container = self._checked_container()
        item = menu.find_item(item_id)
        if item is None:
            raise ViewNotFoundError(
                item_id,
                f"Didn't find item {container.field_name(item_id)} in the given menu.",
            )
        item.set_on_click(self._submit_handler(on_submit))
        self.submit_target = item

    def start(self) -> Form:
        """Signal that the form is fully built.

        Starts real-time observation of every field. When gating submission,
        runs one silent validation so the trigger starts in the right state
        without showing errors.

        Raises:
            FormConfigurationError: If the form was already started.
        """
        if self._started:
            raise FormConfigurationError("Form has already been started.")
        self._started = True
        if self.real_time_enabled:
            for field in self._fields:
                field.start_real_time_validation(self.real_time_debounce)
            if (
                self.real_time_disable_submit
                and self.submit_target is not None
                and self.submit_target.enabled
            ):
                self.validate(silent=True)
        self.logger.debug(
            f"Form started with {len(self._fields)} field(s), "
            f"real_time={self.real_time_enabled}"
        )
        return self

    def destroy(self) -> None:
        """Detach every field, unbind the submit trigger and release the container."""
        for field in self._fields:
            field.detach()
        self._fields.clear()
        if self._valid_map is not None:
            self._valid_map.clear()
        if self.submit_target is not None:
            self.submit_target.set_on_click(lambda: None)
            self.submit_target = None
        self.container = None
        self.logger.debug("Form destroyed")

    @property
    def destroyed(self) -> bool:
        return self.container is None


def build_form(
    container: ViewContainer,
    builder: FormBuilder,
    logger: logging.Logger | None = None,
) -> Form:
    """Build and start a form; it is destroyed when the container tears down."""
    form = Form(container, logger=logger)
    builder(form)
    container.add_teardown_listener(form.destroy)
    return form.start()
