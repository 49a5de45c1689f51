"""Field kinds, one per category of input view."""

from formcheck.fields.base import FormField
from formcheck.fields.choice import ChoiceField
from formcheck.fields.slider import SliderField
from formcheck.fields.text import InputField, InputLayoutField, TextField
from formcheck.fields.toggle import ToggleField

__all__ = [
    "ChoiceField",
    "FormField",
    "InputField",
    "InputLayoutField",
    "SliderField",
    "TextField",
    "ToggleField",
]
