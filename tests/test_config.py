"""Tests for form config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from formcheck.config import (
    CheckedRule,
    FieldKind,
    FormConfig,
    LengthRule,
    NotEmptyRule,
    load_form_config,
    load_values,
)


def _example_forms() -> list[Path]:
    repo_root = Path(__file__).resolve().parents[1]
    examples_dir = repo_root / "examples"
    return sorted(p for p in examples_dir.glob("*-form.yaml") if p.is_file())


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str, name: str = "form.yaml") -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_load_minimal_form(tmp_yaml):
    path = tmp_yaml("""\
        fields:
          - id: name
            rules:
              - not_empty:
    """)
    cfg = load_form_config(path)
    assert len(cfg.fields) == 1
    field = cfg.fields[0]
    assert field.kind is FieldKind.TEXT
    assert field.name is None
    assert field.optional is False
    assert isinstance(field.rules[0], NotEmptyRule)
    assert field.rules[0].name == "not_empty"
    assert cfg.real_time.enabled is False
    assert cfg.real_time.debounce == 500
    assert cfg.submit is None


def test_rule_options_are_parsed(tmp_yaml):
    path = tmp_yaml("""\
        fields:
          - id: bio
            kind: decorated
            rules:
              - length: {at_least: 20, less_than: 200, description: "tell us more"}
          - id: terms
            kind: toggle
            rules:
              - checked: {value: false}
    """)
    cfg = load_form_config(path)
    length = cfg.field("bio").rules[0]
    assert isinstance(length, LengthRule)
    assert length.spec.bounds() == {"less_than": 200, "at_least": 20}
    assert length.spec.description == "tell us more"
    checked = cfg.field("terms").rules[0]
    assert isinstance(checked, CheckedRule)
    assert checked.spec.value is False


@pytest.mark.parametrize("path", _example_forms(), ids=lambda p: p.name)
def test_example_forms_load(path):
    cfg = load_form_config(path)
    assert cfg.fields


def test_fields_must_not_be_empty():
    with pytest.raises(ValidationError, match="fields must not be empty"):
        FormConfig(fields=[])


def test_duplicate_field_ids_rejected():
    with pytest.raises(ValidationError, match="Duplicate field id 'a'"):
        FormConfig(fields=[{"id": "a"}, {"id": "a"}])


def test_submit_id_must_not_clash():
    with pytest.raises(ValidationError, match="clashes"):
        FormConfig(fields=[{"id": "a"}], submit="a")


def test_negative_debounce_rejected():
    with pytest.raises(ValidationError, match="Debounce must be >= 0."):
        FormConfig(fields=[{"id": "a"}], real_time={"enabled": True, "debounce": -5})


def test_rule_must_fit_field_kind():
    with pytest.raises(ValidationError, match="needs a field of kind toggle"):
        FormConfig(fields=[{"id": "a", "rules": [{"checked": {}}]}])
    with pytest.raises(ValidationError, match="Rule 'email'"):
        FormConfig(fields=[{"id": "a", "kind": "slider", "rules": [{"email": None}]}])


def test_only_text_fields_are_optional():
    with pytest.raises(ValidationError, match="Only text fields can be optional"):
        FormConfig(fields=[{"id": "a", "kind": "toggle", "optional": True}])


def test_unknown_rule_rejected():
    with pytest.raises(ValidationError):
        FormConfig(fields=[{"id": "a", "rules": [{"palindrome": {}}]}])


def test_unknown_rule_option_rejected():
    with pytest.raises(ValidationError):
        FormConfig(fields=[{"id": "a", "rules": [{"length": {"at_mots": 3}}]}])


def test_blank_description_rejected():
    with pytest.raises(ValidationError, match="description must not be blank"):
        FormConfig(fields=[{"id": "a", "rules": [{"not_empty": {"description": " "}}]}])


def test_when_needs_exactly_one_test():
    with pytest.raises(ValidationError, match="exactly one of"):
        FormConfig(
            fields=[
                {"id": "a"},
                {"id": "b", "rules": [{"not_empty": {"when": {"field": "a"}}}]},
            ]
        )


def test_when_must_reference_known_field():
    with pytest.raises(ValidationError, match="unknown field 'ghost'"):
        FormConfig(
            fields=[
                {
                    "id": "a",
                    "rules": [{"not_empty": {"when": {"field": "ghost", "equals": "x"}}}],
                }
            ]
        )


def test_load_form_config_rejects_non_mapping(tmp_yaml):
    path = tmp_yaml("- just\n- a list\n")
    with pytest.raises(ValueError, match="YAML mapping"):
        load_form_config(path)


def test_load_values(tmp_yaml):
    path = tmp_yaml("name: Ada\nage: 36\n", name="values.yaml")
    assert load_values(path) == {"name": "Ada", "age": 36}
    assert load_values(tmp_yaml("", name="empty.yaml")) == {}
    with pytest.raises(ValueError):
        load_values(tmp_yaml("- a\n", name="list.yaml"))
