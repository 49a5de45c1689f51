"""In-memory toolkit: views that hold plain Python values.

Used for headless validation (the ``formcheck check`` command) and in tests.
Assigning a value fires the view's change listeners, the same way a user
typing or clicking would.
"""

from __future__ import annotations

from typing import Any, Callable

from formcheck.debounce import Scheduler
from formcheck.views import (
    ChoiceInput,
    DecoratedTextInput,
    Menu,
    SliderInput,
    SubmitTrigger,
    TextInput,
    ToggleInput,
    ViewContainer,
)


class MemoryTextInput(TextInput):
    def __init__(self, view_id: str, text: str = "") -> None:
        self._view_id = view_id
        self._text = text
        self._listeners: list[Callable[[str], None]] = []
        self.error: str | None = None

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        for listener in list(self._listeners):
            listener(value)

    def add_text_listener(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def set_error(self, message: str | None) -> None:
        self.error = message


class MemoryDecoratedTextInput(DecoratedTextInput):
    def __init__(self, view_id: str, edit_text: MemoryTextInput | None = None) -> None:
        self._view_id = view_id
        self._edit_text = edit_text
        self.error: str | None = None

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def edit_text(self) -> MemoryTextInput | None:
        return self._edit_text

    def set_error(self, message: str | None) -> None:
        self.error = message


class MemoryChoiceInput(ChoiceInput):
    def __init__(
        self,
        view_id: str,
        options: list[str] | None = None,
        selected_position: int = 0,
    ) -> None:
        self._view_id = view_id
        self.options = list(options or [])
        self._position = selected_position
        self._listeners: list[Callable[[int], None]] = []

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def selected_position(self) -> int:
        return self._position

    def select(self, position: int) -> None:
        if self.options and not 0 <= position < len(self.options):
            raise IndexError(
                f"Position {position} out of range for {len(self.options)} options"
            )
        self._position = position
        for listener in list(self._listeners):
            listener(position)

    def add_selection_listener(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)


class MemoryToggleInput(ToggleInput):
    def __init__(self, view_id: str, checked: bool = False) -> None:
        self._view_id = view_id
        self._checked = checked
        self._listeners: list[Callable[[bool], None]] = []

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def checked(self) -> bool:
        return self._checked

    @checked.setter
    def checked(self, value: bool) -> None:
        self._checked = value
        for listener in list(self._listeners):
            listener(value)

    def toggle(self) -> None:
        self.checked = not self._checked

    def add_checked_listener(self, listener: Callable[[bool], None]) -> None:
        self._listeners.append(listener)


class MemorySliderInput(SliderInput):
    def __init__(self, view_id: str, progress: int = 0, maximum: int = 100) -> None:
        self._view_id = view_id
        self.maximum = maximum
        self._progress = self._clamp(progress)
        self._listeners: list[Callable[[int], None]] = []

    def _clamp(self, value: int) -> int:
        return max(0, min(value, self.maximum))

    @property
    def view_id(self) -> str:
        return self._view_id

    @property
    def progress(self) -> int:
        return self._progress

    @progress.setter
    def progress(self, value: int) -> None:
        self._progress = self._clamp(value)
        for listener in list(self._listeners):
            listener(self._progress)

    def add_progress_listener(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)


class MemoryButton(SubmitTrigger):
    """A button; ``click()`` does nothing while the button is disabled."""

    def __init__(self, view_id: str, enabled: bool = True) -> None:
        self.view_id = view_id
        self._enabled = enabled
        self._handler: Callable[[], None] | None = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def set_on_click(self, handler: Callable[[], None]) -> None:
        self._handler = handler

    def click(self) -> None:
        if self._enabled and self._handler is not None:
            self._handler()


class MemoryMenu(Menu):
    def __init__(self, items: list[MemoryButton] | None = None) -> None:
        self._items = {item.view_id: item for item in items or []}

    def add_item(self, item: MemoryButton) -> MemoryButton:
        self._items[item.view_id] = item
        return item

    def find_item(self, item_id: str) -> MemoryButton | None:
        return self._items.get(item_id)


class MemoryContainer(ViewContainer):
    """Holds views by id. ``teardown()`` empties it, like a destroyed screen."""

    def __init__(
        self,
        views: list[Any] | None = None,
        names: dict[str, str] | None = None,
        strings: dict[str, str] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(scheduler=scheduler)
        self._views: dict[str, Any] = {}
        self.names = dict(names or {})
        self.strings = dict(strings or {})
        for view in views or []:
            self.add(view)

    def add(self, view: Any) -> Any:
        self._views[view.view_id] = view
        return view

    def find_view(self, view_id: str) -> Any | None:
        return self._views.get(view_id)

    def field_name(self, view_id: str) -> str:
        return self.names.get(view_id, view_id)

    def get_string(self, res: str | None) -> str | None:
        if res is None:
            return None
        if res not in self.strings:
            raise KeyError(f"Unknown string resource: {res!r}")
        return self.strings[res]

    def teardown(self) -> None:
        super().teardown()
        self._views.clear()
