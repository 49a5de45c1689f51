"""Pytest configuration and fixtures."""

import logging

import pytest

from formcheck.debounce import ManualScheduler
from formcheck.form import Form
from formcheck.memory import (
    MemoryButton,
    MemoryChoiceInput,
    MemoryContainer,
    MemoryDecoratedTextInput,
    MemorySliderInput,
    MemoryTextInput,
    MemoryToggleInput,
)


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up formcheck loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("formcheck")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def container(scheduler):
    """A container with one view of every kind plus a submit button."""
    return MemoryContainer(
        views=[
            MemoryTextInput("input"),
            MemoryDecoratedTextInput("layout", MemoryTextInput("layout_input")),
            MemoryChoiceInput("spinner", ["Choose", "Red", "Blue"]),
            MemoryToggleInput("check"),
            MemorySliderInput("seeker"),
            MemoryButton("submit"),
        ],
        names={"input": "Input", "layout": "Layout", "seeker": "Seeker"},
        strings={"err_required": "this field is required"},
        scheduler=scheduler,
    )


@pytest.fixture
def form(container):
    return Form(container)
