"""Assertions over the text of an input field."""

from __future__ import annotations

import re
from typing import Any, Callable
from urllib.parse import SplitResult, urlsplit

from formcheck.assertions.base import FAIL, PASS, Assertion, Verdict

# Same shape as Android's Patterns.EMAIL_ADDRESS.
EMAIL_RE = re.compile(
    r"[a-zA-Z0-9+._%\-]{1,256}"
    r"@"
    r"[a-zA-Z0-9][a-zA-Z0-9\-]{0,64}"
    r"(\.[a-zA-Z0-9][a-zA-Z0-9\-]{0,25})+"
)

WEB_URL_RE = re.compile(
    r"(?:(?:https?|ftp|rtsp)://"
    r"(?:(?:[a-zA-Z0-9$\-_.+!*'(),;?&=]|%[0-9a-fA-F]{2}){1,64}"
    r"(?::(?:[a-zA-Z0-9$\-_.+!*'(),;?&=]|%[0-9a-fA-F]{2}){1,25})?@)?)?"
    r"(?P<host>"
    r"(?:[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,63}"
    r"|(?:(?:25[0-5]|2[0-4]\d|1?\d?\d)\.){3}(?:25[0-5]|2[0-4]\d|1?\d?\d)"
    r"|localhost"
    r")"
    r"(?::\d{1,5})?"
    r"(?:[/?#]\S*)?",
    re.IGNORECASE,
)


class NotEmptyAssertion(Assertion[Any]):
    def is_valid(self, view: Any) -> bool:
        return len(view.text) > 0

    def default_description(self) -> str:
        return "cannot be empty"


class UrlAssertion(Assertion[Any]):
    def is_valid(self, view: Any) -> bool:
        return WEB_URL_RE.fullmatch(view.text) is not None

    def default_description(self) -> str:
        return "must be a valid URL"


class UriAssertion(Assertion[Any]):
    """The text must parse as a URI, optionally with a known scheme.

    Failures carry a specific reason, e.g. ``scheme 'content' not in ['file']``.
    """

    def __init__(self, schemes: tuple[str, ...] = ()) -> None:
        super().__init__()
        self.schemes: list[str] = list(schemes)
        self.predicate: Callable[[SplitResult], bool] | None = None

    def has_scheme(self, *schemes: str) -> UriAssertion:
        """Asserts that the URI has a scheme within the given values."""
        self.schemes = list(schemes)
        return self

    def that(self, predicate: Callable[[SplitResult], bool]) -> UriAssertion:
        """Makes a custom assertion on the parsed URI."""
        self.predicate = predicate
        return self

    def check(self, view: Any) -> Verdict:
        try:
            uri = urlsplit(view.text)
            scheme = uri.scheme or ""
            if self.schemes and scheme not in self.schemes:
                allowed = ", ".join(f"'{s}'" for s in self.schemes)
                return Verdict(False, f"scheme '{scheme}' not in [{allowed}]")
            if self.predicate is not None and not self.predicate(uri):
                return Verdict(False, "didn't pass custom validation")
        except ValueError:
            # urlsplit rejects malformed netlocs (e.g. unbalanced IPv6 brackets)
            return FAIL
        return PASS

    def is_valid(self, view: Any) -> bool:
        return self.check(view).passed

    def default_description(self) -> str:
        return "must be a valid Uri"


class EmailAssertion(Assertion[Any]):
    def is_valid(self, view: Any) -> bool:
        return EMAIL_RE.fullmatch(view.text) is not None

    def default_description(self) -> str:
        return "must be a valid email address"


class ContainsAssertion(Assertion[Any]):
    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text
        self._ignore_case = False

    def ignore_case(self) -> ContainsAssertion:
        """Case is ignored when checking if the input contains the string."""
        self._ignore_case = True
        return self

    def is_valid(self, view: Any) -> bool:
        if self._ignore_case:
            return self.text.casefold() in view.text.casefold()
        return self.text in view.text

    def default_description(self) -> str:
        return f'must contain "{self.text}"'


class RegexAssertion(Assertion[Any]):
    """The whole text must match the regular expression."""

    def __init__(self, pattern: str) -> None:
        super().__init__()
        self.pattern = pattern
        self._regex = re.compile(pattern)

    def is_valid(self, view: Any) -> bool:
        return self._regex.fullmatch(view.text) is not None

    def default_description(self) -> str:
        return f'must match regex "{self.pattern}"'
