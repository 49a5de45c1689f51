"""Bounded slider fields (seek bars, rating bars)."""

from __future__ import annotations

from formcheck.assertions.ranges import ProgressAssertion
from formcheck.fields.base import FormField
from formcheck.values import FieldValue
from formcheck.views import SliderInput


class SliderField(FormField[SliderInput]):
    view_type = SliderInput

    def progress(self) -> ProgressAssertion:
        """Asserts on the slider's progress."""
        return self.assert_(ProgressAssertion())

    def obtain_value(self) -> FieldValue:
        return FieldValue.integer(self.id, self.name, self.view.progress)

    def start_real_time_validation(self, debounce: int) -> None:
        debouncer = self._debounced_validation(debounce)
        self.view.add_progress_listener(lambda _progress: debouncer.trigger())
