"""Capabilities the validation core needs from a UI toolkit.

A toolkit binding implements these classes for its own widgets. The core only
reads values, subscribes to change notifications, shows error text and toggles
the submit trigger; everything else about the widgets stays with the toolkit.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from formcheck.debounce import AsyncioScheduler, Scheduler
from formcheck.errors import ViewNotFoundError


class View(ABC):
    @property
    @abstractmethod
    def view_id(self) -> str:
        """Stable identifier of the view inside its container."""
        ...


class TextInput(View):
    @property
    @abstractmethod
    def text(self) -> str: ...

    @abstractmethod
    def add_text_listener(self, listener: Callable[[str], None]) -> None:
        """Call listener with the new text on every text change."""
        ...

    @abstractmethod
    def set_error(self, message: str | None) -> None:
        """Show an inline error, or clear it when message is None."""
        ...


class DecoratedTextInput(View):
    """A text input wrapped in a decoration (label, helper and error text)."""

    @property
    @abstractmethod
    def edit_text(self) -> TextInput | None:
        """The wrapped text input, or None if the decoration is empty."""
        ...

    @property
    def text(self) -> str:
        inner = self.edit_text
        return inner.text if inner is not None else ""

    @abstractmethod
    def set_error(self, message: str | None) -> None: ...


class ChoiceInput(View):
    """Single-choice list such as a dropdown."""

    @property
    @abstractmethod
    def selected_position(self) -> int: ...

    @abstractmethod
    def add_selection_listener(self, listener: Callable[[int], None]) -> None: ...


class ToggleInput(View):
    """Boolean toggle such as a checkbox, switch or radio button."""

    @property
    @abstractmethod
    def checked(self) -> bool: ...

    @abstractmethod
    def add_checked_listener(self, listener: Callable[[bool], None]) -> None: ...


class SliderInput(View):
    """Bounded numeric slider such as a seek bar or rating bar."""

    @property
    @abstractmethod
    def progress(self) -> int: ...

    @abstractmethod
    def add_progress_listener(self, listener: Callable[[int], None]) -> None: ...


class SubmitTrigger(ABC):
    """Something clickable that submits the form: a button or a menu action."""

    @property
    @abstractmethod
    def enabled(self) -> bool: ...

    @enabled.setter
    @abstractmethod
    def enabled(self, value: bool) -> None: ...

    @abstractmethod
    def set_on_click(self, handler: Callable[[], None]) -> None: ...


class Menu(ABC):
    @abstractmethod
    def find_item(self, item_id: str) -> SubmitTrigger | None: ...


class ViewContainer(ABC):
    """Looks up views for a form and resolves names and string resources.

    The container outlives nothing: when its host is torn down it calls
    ``teardown()``, which notifies listeners (``build_form`` registers
    ``Form.destroy`` here).

    Debounced validation runs on ``scheduler``, which defaults to the running
    asyncio loop.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self.scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._teardown_listeners: list[Callable[[], None]] = []

    @abstractmethod
    def find_view(self, view_id: str) -> Any | None:
        """Return the view with this id, or None if missing or torn down."""
        ...

    def get_view_or_raise(self, view_id: str) -> Any:
        view = self.find_view(view_id)
        if view is None:
            raise ViewNotFoundError(
                view_id,
                f"Unable to find a view by ID {self.field_name(view_id)} in the container.",
            )
        return view

    def field_name(self, view_id: str) -> str:
        """Human-readable name for a view id, used when a field has no name."""
        return view_id

    def get_string(self, res: str | None) -> str | None:
        """Resolve a string resource to text. The default treats res as text."""
        return res

    def add_teardown_listener(self, listener: Callable[[], None]) -> None:
        self._teardown_listeners.append(listener)

    def teardown(self) -> None:
        listeners, self._teardown_listeners = self._teardown_listeners, []
        for listener in listeners:
            listener()


def read_view_value(view: Any) -> Any:
    """Return the raw current value of any supported input view."""
    if isinstance(view, (TextInput, DecoratedTextInput)):
        return view.text
    if isinstance(view, ChoiceInput):
        return view.selected_position
    if isinstance(view, ToggleInput):
        return view.checked
    if isinstance(view, SliderInput):
        return view.progress
    raise TypeError(f"Unsupported view type: {type(view).__name__}")
