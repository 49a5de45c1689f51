"""Tests for verbose logging."""

import logging
from pathlib import Path

import pytest

from formcheck.verbose import close_logger, setup_logger


def test_verbose_logger_creates_debug_log(tmp_path: Path):
    """Logger should always create debug.log file."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_verbose_logger_writes_to_file(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_verbose_mode_adds_stderr_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    assert [type(h).__name__ for h in logger.handlers] == ["FileHandler"]


def test_logger_creates_parent_directories(tmp_path: Path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file)
    assert debug_file.parent.exists()


def test_unique_logger_names_are_isolated(tmp_path: Path):
    log1 = tmp_path / "one.log"
    log2 = tmp_path / "two.log"
    logger1 = setup_logger(log1, logger_name="formcheck_one")
    logger2 = setup_logger(log2, logger_name="formcheck_two")

    logger1.debug("from one")
    logger2.debug("from two")

    assert "from two" not in log1.read_text()
    assert "from one" not in log2.read_text()


def test_same_logger_name_raises_error(tmp_path: Path):
    setup_logger(tmp_path / "a.log", logger_name="formcheck_shared")

    with pytest.raises(RuntimeError) as exc_info:
        setup_logger(tmp_path / "b.log", logger_name="formcheck_shared")

    assert "formcheck_shared" in str(exc_info.value)
    assert "already exists" in str(exc_info.value)


def test_close_logger_allows_reuse(tmp_path: Path):
    logger = setup_logger(tmp_path / "a.log", logger_name="formcheck_reuse")
    close_logger(logger)
    assert logger.handlers == []
    setup_logger(tmp_path / "b.log", logger_name="formcheck_reuse")


def test_form_validation_is_logged(tmp_path: Path, container):
    from formcheck.form import Form

    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file, logger_name="formcheck_form_log")
    form = Form(container, logger=logger)
    form.text_input("input", builder=lambda f: f.is_not_empty())
    form.validate()

    content = debug_file.read_text()
    assert "Validated field 'Input': 1 error(s)" in content
    assert "Validated form: 1 field(s), 1 error(s)" in content
