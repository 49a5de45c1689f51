"""Snapshots of field values taken when a field validates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldValue:
    """The value of a field at the moment it was validated.

    Attributes:
        id: View id of the field the value belongs to.
        name: Display name of the field.
        value: The raw value (text, integer position/progress, or checked state).
        kind: Which of the closed set of value kinds ``value`` holds.
    """

    id: str
    name: str
    value: Any
    kind: ValueKind

    @classmethod
    def text(cls, id: str, name: str, value: str) -> FieldValue:
        return cls(id=id, name=name, value=value, kind=ValueKind.TEXT)

    @classmethod
    def integer(cls, id: str, name: str, value: int) -> FieldValue:
        return cls(id=id, name=name, value=value, kind=ValueKind.INTEGER)

    @classmethod
    def boolean(cls, id: str, name: str, value: bool) -> FieldValue:
        return cls(id=id, name=name, value=value, kind=ValueKind.BOOLEAN)

    def as_string(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)

    def as_int(self) -> int | None:
        if isinstance(self.value, bool):
            return None
        if isinstance(self.value, int):
            return self.value
        try:
            return int(str(self.value).strip())
        except ValueError:
            return None

    def as_float(self) -> float | None:
        if isinstance(self.value, bool):
            return None
        if isinstance(self.value, (int, float)):
            return float(self.value)
        try:
            return float(str(self.value).strip())
        except ValueError:
            return None

    def as_bool(self) -> bool:
        if isinstance(self.value, bool):
            return self.value
        return str(self.value).strip().lower() == "true"

    def __str__(self) -> str:
        return self.as_string()
