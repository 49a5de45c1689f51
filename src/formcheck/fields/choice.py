"""Dropdown (single-choice) fields."""

from __future__ import annotations

from formcheck.assertions.ranges import SelectionAssertion
from formcheck.fields.base import FormField
from formcheck.values import FieldValue
from formcheck.views import ChoiceInput


class ChoiceField(FormField[ChoiceInput]):
    """A dropdown; its value is the selected position."""

    view_type = ChoiceInput

    def selection(self) -> SelectionAssertion:
        """Asserts on the selected position."""
        return self.assert_(SelectionAssertion())

    def obtain_value(self) -> FieldValue:
        return FieldValue.integer(self.id, self.name, self.view.selected_position)

    def start_real_time_validation(self, debounce: int) -> None:
        # Selections are discrete, so the debounce is not applied.
        self.view.add_selection_listener(lambda _position: self._validate_on_change())
