"""Build forms from a validated ``FormConfig``.

``build_memory_container`` creates in-memory views filled with plain values,
and ``build_form_from_config`` registers the declared fields and rules on any
container that holds views with the configured ids.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from formcheck.assertions.base import Assertion
from formcheck.assertions.ranges import RangeAssertion
from formcheck.config import FieldConfig, FieldKind, FormConfig, RuleModel, WhenSpec
from formcheck.conditions import Condition
from formcheck.fields.base import FormField
from formcheck.form import Form, SubmitCallback, build_form
from formcheck.memory import (
    MemoryButton,
    MemoryChoiceInput,
    MemoryContainer,
    MemoryDecoratedTextInput,
    MemorySliderInput,
    MemoryTextInput,
    MemoryToggleInput,
)
from formcheck.views import ViewContainer, read_view_value


def _text_value(field: FieldConfig, raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    return str(raw)


def _choice_value(field: FieldConfig, raw: Any) -> int:
    if raw is None:
        return 0
    if isinstance(raw, str) and field.options:
        if raw not in field.options:
            raise ValueError(
                f"'{raw}' is not an option of field '{field.id}' "
                f"(options: {', '.join(field.options)})"
            )
        return field.options.index(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(
            f"Field '{field.id}' expects a position or an option, got {raw!r}"
        )
    if field.options and not 0 <= raw < len(field.options):
        raise ValueError(
            f"Position {raw} out of range for field '{field.id}' "
            f"({len(field.options)} options)"
        )
    return raw


def _toggle_value(field: FieldConfig, raw: Any) -> bool:
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise ValueError(f"Field '{field.id}' expects true or false, got {raw!r}")
    return raw


def _slider_value(field: FieldConfig, raw: Any) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"Field '{field.id}' expects a whole number, got {raw!r}")
    return raw


def _memory_view(field: FieldConfig, raw: Any) -> Any:
    if field.kind == FieldKind.TEXT:
        return MemoryTextInput(field.id, _text_value(field, raw))
    if field.kind == FieldKind.DECORATED:
        inner = MemoryTextInput(f"{field.id}_input", _text_value(field, raw))
        return MemoryDecoratedTextInput(field.id, inner)
    if field.kind == FieldKind.CHOICE:
        return MemoryChoiceInput(
            field.id, field.options, _choice_value(field, raw)
        )
    if field.kind == FieldKind.TOGGLE:
        return MemoryToggleInput(field.id, _toggle_value(field, raw))
    return MemorySliderInput(field.id, _slider_value(field, raw), field.maximum)


def build_memory_container(
    config: FormConfig, values: dict[str, Any] | None = None
) -> MemoryContainer:
    """Create one in-memory view per configured field, filled from ``values``.

    Raises:
        ValueError: If ``values`` names an unknown field or holds a value the
            field's kind cannot take.
    """
    values = values or {}
    known = {field.id for field in config.fields}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Values given for unknown fields: {', '.join(unknown)}")

    container = MemoryContainer(
        names={f.id: f.name for f in config.fields if f.name is not None}
    )
    for field in config.fields:
        container.add(_memory_view(field, values.get(field.id)))
    if config.submit is not None:
        container.add(MemoryButton(config.submit))
    return container


def _is_filled(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def when_condition(when: WhenSpec, container: ViewContainer) -> Condition:
    """Turn a ``when`` block into a condition over another field's view."""
    view = container.get_view_or_raise(when.field)
    if when.not_empty is not None:
        expected = when.not_empty
        return lambda: _is_filled(read_view_value(view)) == expected
    expected_value = when.equals
    return lambda: read_view_value(view) == expected_value


def _apply_bounds(assertion: RangeAssertion, bounds: dict[str, int | float]) -> None:
    for name, value in bounds.items():
        getattr(assertion, name)(value)


_RuleApplier = Callable[[Any, Any], Assertion]

_APPLIERS: dict[str, _RuleApplier] = {
    "not_empty": lambda field, spec: field.is_not_empty(),
    "url": lambda field, spec: field.is_url(),
    "uri": lambda field, spec: field.is_uri(*spec.schemes),
    "email": lambda field, spec: field.is_email(),
    "number": lambda field, spec: field.is_number(),
    "decimal": lambda field, spec: field.is_decimal(),
    "length": lambda field, spec: field.length(),
    "contains": lambda field, spec: (
        field.contains(spec.text).ignore_case()
        if spec.ignore_case
        else field.contains(spec.text)
    ),
    "regex": lambda field, spec: field.matches(spec.pattern),
    "selection": lambda field, spec: field.selection(),
    "progress": lambda field, spec: field.progress(),
    "checked": lambda field, spec: (
        field.is_checked() if spec.value else field.is_not_checked()
    ),
}


def apply_rule(field: FormField, rule: RuleModel) -> Assertion:
    """Attach the assertion a rule declares to a field."""
    spec = rule.spec
    assertion = _APPLIERS[rule.name](field, spec)
    if isinstance(assertion, RangeAssertion):
        _apply_bounds(assertion, spec.bounds())
    if spec.description is not None:
        assertion.describe(spec.description)
    return assertion


def _field_builder(
    field_config: FieldConfig, container: ViewContainer
) -> Callable[[FormField], None]:
    def _build(field: FormField) -> None:
        for rule in field_config.rules:
            when = rule.spec.when
            if when is None:
                apply_rule(field, rule)
            else:
                field.conditional(
                    when_condition(when, container),
                    lambda f, rule=rule: apply_rule(f, rule),
                )

    return _build


def _register_field(form: Form, field_config: FieldConfig) -> FormField:
    container = form.container
    builder = _field_builder(field_config, container)
    kind = field_config.kind
    if kind == FieldKind.TEXT:
        return form.text_input(
            field_config.id, field_config.name, field_config.optional, builder
        )
    if kind == FieldKind.DECORATED:
        return form.input_layout(
            field_config.id, field_config.name, field_config.optional, builder
        )
    if kind == FieldKind.CHOICE:
        return form.dropdown(field_config.id, field_config.name, builder)
    if kind == FieldKind.TOGGLE:
        return form.toggle(field_config.id, field_config.name, builder)
    return form.slider(field_config.id, field_config.name, builder)


def build_form_from_config(
    config: FormConfig,
    container: ViewContainer,
    logger: logging.Logger | None = None,
    on_submit: SubmitCallback | None = None,
) -> Form:
    """Register every configured field on a new, started form.

    When the config names a submit trigger, clicking it validates the form and
    calls ``on_submit`` with the result if validation passed.
    """

    def _builder(form: Form) -> None:
        if config.real_time.enabled:
            form.use_real_time_validation(
                debounce=config.real_time.debounce,
                disable_submit=config.real_time.disable_submit,
            )
        for field_config in config.fields:
            _register_field(form, field_config)
        if config.submit is not None:
            form.submit_with(config.submit, on_submit or (lambda _result: None))

    return build_form(container, _builder, logger=logger)
