"""Exceptions raised for form wiring mistakes and detached forms."""

from __future__ import annotations


class FormConfigurationError(ValueError):
    """Raised when a form definition is wired incorrectly.

    These are programmer mistakes (unknown view ids, blank custom descriptions,
    negative debounce values) and surface immediately from the call that made
    them. Failing user input is never reported this way.
    """


class ViewNotFoundError(FormConfigurationError):
    """Raised when a view id cannot be found in the container."""

    def __init__(self, view_id: str, message: str | None = None):
        super().__init__(
            message or f"Unable to find a view by ID {view_id} in the container."
        )
        self.view_id = view_id


class FormDestroyedError(RuntimeError):
    """Raised when a destroyed form is asked to use its view container."""

    def __init__(self, message: str = "Form has been destroyed."):
        super().__init__(message)
