"""Tests for the form aggregator: ordering, submission and lifecycle."""

import logging

import pytest

from formcheck.errors import FormConfigurationError, FormDestroyedError, ViewNotFoundError
from formcheck.fields import InputField
from formcheck.form import Form, build_form
from formcheck.memory import MemoryButton, MemoryMenu, MemoryTextInput


def test_two_field_form_reports_errors_in_declaration_order(form, container):
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.slider("seeker", builder=lambda f: f.progress().greater_than(1))

    result = form.validate()
    assert [e.name for e in result.errors()] == ["Input", "Seeker"]
    assert [e.description for e in result.errors()] == [
        "cannot be empty",
        "progress must be greater than 1",
    ]

    container.find_view("input").text = "hello"
    container.find_view("seeker").progress = 10
    result = form.validate()
    assert result.success()
    assert result["Input"].value == "hello"
    assert result["Seeker"].value == 10


def test_registration_accepts_view_instances(form):
    view = MemoryTextInput("loose")
    field = form.text_input(view, name="Loose", builder=lambda f: f.is_not_empty())
    assert isinstance(field, InputField)
    assert field.form is form
    assert form.fields() == [field]
    assert form.validate().errors()[0].name == "Loose"


def test_unknown_view_id_raises(form):
    with pytest.raises(ViewNotFoundError) as exc_info:
        form.text_input("missing")
    assert exc_info.value.view_id == "missing"
    assert isinstance(exc_info.value, FormConfigurationError)


def test_every_field_kind_registers(form):
    form.text_input("input")
    form.input_layout("layout")
    form.dropdown("spinner")
    form.toggle("check")
    form.slider("seeker")
    assert [f.id for f in form.fields()] == ["input", "layout", "spinner", "check", "seeker"]


def test_optional_text_field_skips_rules_when_blank(form, container):
    form.input_layout("layout", optional=True, builder=lambda f: f.length().at_least(20))

    assert form.validate().success()
    container.find_view("layout").edit_text.text = "too short"
    assert form.validate().errors()[0].description == "length must be at least 20"


def test_negative_debounce_rejected(form):
    with pytest.raises(FormConfigurationError, match="Debounce must be >= 0."):
        form.use_real_time_validation(debounce=-1)


# --- submission ---


def test_submit_runs_callback_only_when_valid(form, container):
    submitted = []
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.submit_with("submit", submitted.append)
    form.start()

    button = container.find_view("submit")
    button.click()
    assert submitted == []
    assert container.find_view("input").error == "cannot be empty"

    container.find_view("input").text = "x"
    button.click()
    assert len(submitted) == 1
    assert submitted[0]["Input"].value == "x"


def test_submit_with_unknown_id(form):
    with pytest.raises(ViewNotFoundError):
        form.submit_with("nope", lambda result: None)


def test_submit_with_non_trigger(form):
    with pytest.raises(FormConfigurationError, match="SubmitTrigger"):
        form.submit_with("input", lambda result: None)


def test_submit_with_menu_item(form, container):
    submitted = []
    save = MemoryButton("save")
    menu = MemoryMenu([save])
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.submit_with_menu(menu, "save", submitted.append)

    container.find_view("input").text = "x"
    save.click()
    assert len(submitted) == 1
    assert form.submit_target is save


def test_submit_with_menu_missing_item(form):
    with pytest.raises(ViewNotFoundError, match="Didn't find item"):
        form.submit_with_menu(MemoryMenu(), "save", lambda result: None)


# --- gating ---


def test_explicit_validation_updates_gating(form, container):
    button = container.find_view("submit")
    form.use_real_time_validation(debounce=0, disable_submit=True)
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.toggle("check", builder=lambda f: f.is_checked())
    form.submit_with(button, lambda result: None)
    form.start()

    assert button.enabled is False
    container.find_view("input").text = "x"
    assert button.enabled is False
    container.find_view("check").checked = True
    assert button.enabled is True


def test_gating_not_applied_without_disable_submit(form, container):
    button = container.find_view("submit")
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.submit_with(button, lambda result: None)
    form.start()

    form.validate()
    assert button.enabled is True


def test_initial_silent_validation_shows_no_errors(form, container):
    form.use_real_time_validation(debounce=0, disable_submit=True)
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.submit_with("submit", lambda result: None)
    form.start()

    assert container.find_view("submit").enabled is False
    assert container.find_view("input").error is None


# --- lifecycle ---


def test_destroy_clears_fields_and_container(form):
    form.text_input("input")
    form.destroy()
    assert form.fields() == []
    assert form.destroyed


def test_container_operations_fail_after_destroy(form):
    form.destroy()
    with pytest.raises(FormDestroyedError, match="destroyed"):
        form.text_input("input")
    with pytest.raises(FormDestroyedError):
        form.submit_with("submit", lambda result: None)


def test_validate_after_destroy_is_empty(form):
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.destroy()
    assert form.validate().success()


def test_submit_click_after_destroy_does_not_submit(form, container):
    calls = []
    button = container.find_view("submit")
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.submit_with("submit", calls.append)
    form.start()

    form.destroy()
    button.click()

    assert calls == []
    assert form.submit_target is None


def test_stale_submit_handler_ignored_after_destroy(form, container):
    calls = []
    handlers = []
    button = container.find_view("submit")
    button.set_on_click = handlers.append
    form.submit_with(button, calls.append)

    form.destroy()
    handlers[0]()

    assert calls == []


def test_start_twice_raises(form):
    form.start()
    with pytest.raises(FormConfigurationError, match="already been started"):
        form.start()


def test_start_twice_does_not_double_validate(form, container):
    seen = []
    form.use_real_time_validation(debounce=0)
    form.text_input("input", builder=lambda f: f.on_value(seen.append))
    form.start()
    with pytest.raises(FormConfigurationError):
        form.start()

    container.find_view("input").text = "hello"
    assert len(seen) == 1


def test_build_form_starts_and_destroys_on_teardown(container):
    form = build_form(
        container,
        lambda f: f.text_input("input", builder=lambda field: field.is_not_empty()),
    )
    assert len(form.fields()) == 1

    container.teardown()
    assert form.destroyed
    assert container.find_view("input") is None


def test_form_logger_is_threaded_to_fields(container, caplog):
    logger = logging.getLogger("formcheck_test_form")
    form = Form(container, logger=logger)
    field = form.text_input("input", builder=lambda f: f.is_not_empty())
    assert field.logger is logger

    with caplog.at_level(logging.DEBUG, logger="formcheck_test_form"):
        form.validate()
    assert "Validated field 'Input'" in caplog.text
