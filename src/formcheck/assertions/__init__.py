"""Assertion system for validating field values."""

from formcheck.assertions.base import FAIL, PASS, Assertion, CustomAssertion, Verdict
from formcheck.assertions.ranges import (
    DecimalAssertion,
    LengthAssertion,
    NumberAssertion,
    ProgressAssertion,
    RangeAssertion,
    SelectionAssertion,
)
from formcheck.assertions.text import (
    ContainsAssertion,
    EmailAssertion,
    NotEmptyAssertion,
    RegexAssertion,
    UriAssertion,
    UrlAssertion,
)
from formcheck.assertions.toggle import CheckedStateAssertion

__all__ = [
    "Assertion",
    "CheckedStateAssertion",
    "ContainsAssertion",
    "CustomAssertion",
    "DecimalAssertion",
    "EmailAssertion",
    "FAIL",
    "LengthAssertion",
    "NotEmptyAssertion",
    "NumberAssertion",
    "PASS",
    "ProgressAssertion",
    "RangeAssertion",
    "RegexAssertion",
    "SelectionAssertion",
    "UriAssertion",
    "UrlAssertion",
    "Verdict",
]
