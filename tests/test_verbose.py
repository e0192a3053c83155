"""Tests for debug logging setup."""

import logging
from pathlib import Path

from fluentmatch import expect
from fluentmatch.verbose import setup_logger


def test_logger_creates_debug_log(tmp_path: Path):
    """Logger should create the debug file when one is given."""
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert logger.name == "fluentmatch"
    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_logger_writes_to_file(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_matcher_modules_log_under_configured_logger(tmp_path: Path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    expect([1, 2]).to_contain(2)

    assert "to_contain passed" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    assert len(logger.handlers) == 2
    handler_types = [type(h).__name__ for h in logger.handlers]
    assert "StreamHandler" in handler_types
    assert "FileHandler" in handler_types


def test_non_verbose_mode_only_file_handler(tmp_path: Path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=False)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.FileHandler)


def test_no_file_and_not_verbose_is_silent():
    logger = setup_logger(debug_file=None, verbose=False)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_stderr_only(capsys):
    logger = setup_logger(debug_file=None, verbose=True)
    logger.debug("to stderr")

    assert "to stderr" in capsys.readouterr().err


def test_logger_creates_parent_directories(tmp_path: Path):
    debug_file = tmp_path / "nested" / "dir" / "debug.log"
    setup_logger(debug_file=debug_file, verbose=False)

    assert debug_file.exists()


def test_reconfiguring_replaces_handlers(tmp_path: Path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    setup_logger(first, verbose=False, logger_name="fluentmatch_reconfigure")
    logger = setup_logger(second, verbose=False, logger_name="fluentmatch_reconfigure")
    logger.debug("after reconfigure")

    assert len(logger.handlers) == 1
    assert "after reconfigure" not in first.read_text()
    assert "after reconfigure" in second.read_text()


def test_unique_logger_names_are_isolated(tmp_path: Path):
    log1 = tmp_path / "one.log"
    log2 = tmp_path / "two.log"
    logger1 = setup_logger(log1, verbose=False, logger_name="fluentmatch_one")
    logger2 = setup_logger(log2, verbose=False, logger_name="fluentmatch_two")

    logger1.debug("Message from one")
    logger2.debug("Message from two")

    assert "Message from one" in log1.read_text()
    assert "Message from two" not in log1.read_text()
    assert "Message from two" in log2.read_text()
