"""Toggle fields: checkboxes, switches and radio buttons."""

from __future__ import annotations

from formcheck.assertions.toggle import CheckedStateAssertion
from formcheck.fields.base import FormField
from formcheck.values import FieldValue
from formcheck.views import ToggleInput


class ToggleField(FormField[ToggleInput]):
    view_type = ToggleInput

    def is_checked(self) -> CheckedStateAssertion:
        return self.assert_(CheckedStateAssertion(True))

    def is_not_checked(self) -> CheckedStateAssertion:
        return self.assert_(CheckedStateAssertion(False))

    def obtain_value(self) -> FieldValue:
        return FieldValue.boolean(self.id, self.name, self.view.checked)

    def start_real_time_validation(self, debounce: int) -> None:
        self.view.add_checked_listener(lambda _checked: self._validate_on_change())
