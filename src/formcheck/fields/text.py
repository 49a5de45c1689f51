"""Text input fields, plain and decorated."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from formcheck.assertions.ranges import DecimalAssertion, LengthAssertion, NumberAssertion
from formcheck.assertions.text import (
    ContainsAssertion,
    EmailAssertion,
    NotEmptyAssertion,
    RegexAssertion,
    UriAssertion,
    UrlAssertion,
)
from formcheck.errors import FormConfigurationError
from formcheck.fields.base import FormField
from formcheck.values import FieldValue
from formcheck.views import DecoratedTextInput, TextInput

if TYPE_CHECKING:
    from formcheck.views import ViewContainer


def _show_first_error(view, errors) -> None:
    view.set_error(str(errors[0]) if errors else None)


class TextField(FormField):
    """Rules shared by every field whose value is text."""

    def __init__(self, container: ViewContainer, view, name: str | None = None) -> None:
        super().__init__(container, view, name)
        self.on_errors(_show_first_error)

    def text(self) -> str:
        return self.view.text

    def is_not_empty(self) -> NotEmptyAssertion:
        return self.assert_(NotEmptyAssertion())

    def is_empty_or(self, builder: Callable[[TextField], object]) -> None:
        """Apply the rules declared in builder only when the text is not blank."""
        self.conditional(lambda: bool(self.text().strip()), builder)

    def is_url(self) -> UrlAssertion:
        return self.assert_(UrlAssertion())

    def is_uri(self, *schemes: str) -> UriAssertion:
        return self.assert_(UriAssertion(schemes))

    def is_email(self) -> EmailAssertion:
        return self.assert_(EmailAssertion())

    def is_number(self) -> NumberAssertion:
        return self.assert_(NumberAssertion())

    def is_decimal(self) -> DecimalAssertion:
        return self.assert_(DecimalAssertion())

    def length(self) -> LengthAssertion:
        return self.assert_(LengthAssertion())

    def contains(self, text: str) -> ContainsAssertion:
        return self.assert_(ContainsAssertion(text))

    def matches(self, pattern: str) -> RegexAssertion:
        return self.assert_(RegexAssertion(pattern))

    def obtain_value(self) -> FieldValue:
        return FieldValue.text(self.id, self.name, self.text())


class InputField(TextField):
    """A plain text input."""

    view_type = TextInput

    def start_real_time_validation(self, debounce: int) -> None:
        debouncer = self._debounced_validation(debounce)
        self.view.add_text_listener(lambda _text: debouncer.trigger())


class InputLayoutField(TextField):
    """A decorated text input; errors are shown on the decoration."""

    view_type = DecoratedTextInput

    def __init__(self, container: ViewContainer, view, name: str | None = None) -> None:
        super().__init__(container, view, name)
        if view.edit_text is None:
            raise FormConfigurationError(
                f"Decorated input {container.field_name(self.id)} "
                "should have a child text input."
            )
        self.edit_text: TextInput = view.edit_text

    def start_real_time_validation(self, debounce: int) -> None:
        debouncer = self._debounced_validation(debounce)
        self.edit_text.add_text_listener(lambda _text: debouncer.trigger())
