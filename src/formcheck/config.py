"""YAML form declarations, validated with pydantic."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class FieldKind(str, Enum):
    TEXT = "text"
    DECORATED = "decorated"
    CHOICE = "choice"
    TOGGLE = "toggle"
    SLIDER = "slider"


TEXT_KINDS = frozenset({FieldKind.TEXT, FieldKind.DECORATED})


class WhenSpec(BaseModel):
    """Apply a rule only while another field holds a given value."""

    model_config = ConfigDict(extra="forbid")
    field: str
    equals: str | bool | int | None = None
    not_empty: bool | None = None

    @model_validator(mode="after")
    def exactly_one_test(self) -> WhenSpec:
        given = [k for k in ("equals", "not_empty") if getattr(self, k) is not None]
        if len(given) != 1:
            raise ValueError(
                f"when on '{self.field}' needs exactly one of: equals, not_empty"
            )
        return self


class RuleSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")
    description: str | None = None
    when: WhenSpec | None = None

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("description must not be blank")
        return v


class BoundsSpec(RuleSpec):
    exactly: int | float | None = None
    less_than: int | float | None = None
    at_most: int | float | None = None
    at_least: int | float | None = None
    greater_than: int | float | None = None

    def bounds(self) -> dict[str, int | float]:
        return {
            k: v
            for k in ("exactly", "less_than", "at_most", "at_least", "greater_than")
            if (v := getattr(self, k)) is not None
        }


class UriSpec(RuleSpec):
    schemes: list[str] = []


class ContainsSpec(RuleSpec):
    text: str
    ignore_case: bool = False


class RegexSpec(RuleSpec):
    pattern: str


class CheckedSpec(RuleSpec):
    value: bool = True


class RuleModel(BaseModel):
    """A single-key rule; the key names the rule, the value holds its options."""

    model_config = ConfigDict(extra="forbid")
    kinds: ClassVar[frozenset[FieldKind]] = TEXT_KINDS

    @model_validator(mode="before")
    @classmethod
    def empty_options(cls, data: Any) -> Any:
        # `- not_empty:` parses to {"not_empty": None}
        if isinstance(data, dict):
            return {k: ({} if v is None else v) for k, v in data.items()}
        return data

    @property
    def name(self) -> str:
        return next(iter(type(self).model_fields))

    @property
    def spec(self) -> RuleSpec:
        return getattr(self, self.name)


class NotEmptyRule(RuleModel):
    not_empty: RuleSpec


class UrlRule(RuleModel):
    url: RuleSpec


class UriRule(RuleModel):
    uri: UriSpec


class EmailRule(RuleModel):
    email: RuleSpec


class NumberRule(RuleModel):
    number: BoundsSpec


class DecimalRule(RuleModel):
    decimal: BoundsSpec


class LengthRule(RuleModel):
    length: BoundsSpec


class ContainsRule(RuleModel):
    contains: ContainsSpec


class RegexRule(RuleModel):
    regex: RegexSpec


class SelectionRule(RuleModel):
    kinds: ClassVar[frozenset[FieldKind]] = frozenset({FieldKind.CHOICE})
    selection: BoundsSpec


class ProgressRule(RuleModel):
    kinds: ClassVar[frozenset[FieldKind]] = frozenset({FieldKind.SLIDER})
    progress: BoundsSpec


class CheckedRule(RuleModel):
    kinds: ClassVar[frozenset[FieldKind]] = frozenset({FieldKind.TOGGLE})
    checked: CheckedSpec


Rule = (
    NotEmptyRule
    | UrlRule
    | UriRule
    | EmailRule
    | NumberRule
    | DecimalRule
    | LengthRule
    | ContainsRule
    | RegexRule
    | SelectionRule
    | ProgressRule
    | CheckedRule
)

RULE_MODELS: tuple[type[RuleModel], ...] = (
    NotEmptyRule,
    UrlRule,
    UriRule,
    EmailRule,
    NumberRule,
    DecimalRule,
    LengthRule,
    ContainsRule,
    RegexRule,
    SelectionRule,
    ProgressRule,
    CheckedRule,
)


class FieldConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: str
    kind: FieldKind = FieldKind.TEXT
    name: str | None = None
    optional: bool = False
    options: list[str] = []
    maximum: int = 100
    rules: list[Rule] = []

    @model_validator(mode="after")
    def rules_fit_kind(self) -> FieldConfig:
        for rule in self.rules:
            if self.kind not in rule.kinds:
                allowed = ", ".join(sorted(k.value for k in rule.kinds))
                raise ValueError(
                    f"Rule '{rule.name}' on field '{self.id}' needs a field of kind "
                    f"{allowed}, not {self.kind.value}"
                )
        if self.optional and self.kind not in TEXT_KINDS:
            raise ValueError(f"Only text fields can be optional (field '{self.id}')")
        return self


class RealTimeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    debounce: int = 500
    disable_submit: bool = False

    @field_validator("debounce")
    @classmethod
    def debounce_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Debounce must be >= 0.")
        return v


class FormConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    fields: list[FieldConfig]
    real_time: RealTimeConfig = RealTimeConfig()
    submit: str | None = None

    @field_validator("fields")
    @classmethod
    def fields_must_not_be_empty(cls, v: list[FieldConfig]) -> list[FieldConfig]:
        if not v:
            raise ValueError("fields must not be empty")
        return v

    @model_validator(mode="after")
    def ids_are_consistent(self) -> FormConfig:
        ids: set[str] = set()
        for field in self.fields:
            if field.id in ids:
                raise ValueError(f"Duplicate field id '{field.id}'")
            ids.add(field.id)
        if self.submit is not None and self.submit in ids:
            raise ValueError(f"Submit id '{self.submit}' clashes with a field id")
        for field in self.fields:
            for rule in field.rules:
                when = rule.spec.when
                if when is not None and when.field not in ids:
                    raise ValueError(
                        f"Rule '{rule.name}' on field '{field.id}' depends on "
                        f"unknown field '{when.field}'"
                    )
        return self

    def field(self, field_id: str) -> FieldConfig:
        for field in self.fields:
            if field.id == field_id:
                return field
        raise KeyError(field_id)


def load_form_config(path: Path) -> FormConfig:
    """Load and validate a form declaration from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a YAML mapping")

    return FormConfig(**raw)


def load_values(path: Path) -> dict[str, Any]:
    """Load a field-id to value mapping from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a YAML mapping of field ids to values")
    return {str(k): v for k, v in raw.items()}
