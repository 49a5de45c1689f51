"""Assertions over toggle (checkbox, switch, radio) state."""

from __future__ import annotations

from typing import Any

from formcheck.assertions.base import Assertion


class CheckedStateAssertion(Assertion[Any]):
    def __init__(self, checked: bool) -> None:
        super().__init__()
        self.checked = checked

    def is_valid(self, view: Any) -> bool:
        return view.checked == self.checked

    def default_description(self) -> str:
        return "should be checked" if self.checked else "should not be checked"
