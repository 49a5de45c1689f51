"""Validation results for single fields and whole forms."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from formcheck.values import FieldValue


@dataclass(frozen=True)
class FieldError:
    """One failed assertion on one field.

    Attributes:
        id: View id of the field.
        name: Display name of the field.
        description: Human-readable reason, shown to the user.
        assertion_kind: Class name of the assertion that failed
            (e.g. "NotEmptyAssertion").
    """

    id: str
    name: str
    description: str
    assertion_kind: str

    def __str__(self) -> str:
        return self.description


@dataclass
class FieldResult:
    """Outcome of validating a single field."""

    name: str
    value: FieldValue | None = None
    errors: list[FieldError] = field(default_factory=list)

    def success(self) -> bool:
        return not self.errors

    def has_errors(self) -> bool:
        return bool(self.errors)

    def __str__(self) -> str:
        if self.success():
            return "Success"
        return f"{len(self.errors)} errors"


class FormResult:
    """Errors and value snapshots merged across every field of a form.

    Errors keep field declaration order, then assertion attachment order, so
    ``errors()[0]`` is the first problem a user would see.
    """

    def __init__(self) -> None:
        self._errors: list[FieldError] = []
        self._values: dict[str, FieldValue] = {}

    def success(self) -> bool:
        return not self._errors

    def has_errors(self) -> bool:
        return bool(self._errors)

    def errors(self) -> list[FieldError]:
        return list(self._errors)

    def values(self) -> list[FieldValue]:
        return list(self._values.values())

    def get(self, name: str) -> FieldValue | None:
        return self._values.get(name)

    def __getitem__(self, name: str) -> FieldValue | None:
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def merge(self, field_result: FieldResult) -> None:
        """Append a field's errors and record its value (last name wins)."""
        self._errors.extend(field_result.errors)
        if field_result.value is not None:
            self._values[field_result.name] = field_result.value

    def __iadd__(self, field_result: FieldResult) -> FormResult:
        self.merge(field_result)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success(),
            "errors": [asdict(e) for e in self._errors],
            "values": {
                name: {"id": v.id, "value": v.value, "kind": v.kind.value}
                for name, v in self._values.items()
            },
        }

    def __repr__(self) -> str:
        return f"FormResult(errors={len(self._errors)}, values={list(self._values)})"
