"""Tests for log destination selection."""

from __future__ import annotations

import logging
import os

from translate_browser.debug import (
    DEFAULT_LOG_FILE,
    LOG_FORMAT,
    _file_or_stderr_handler,
    debug_enabled,
    requested_log_path,
)


def test_debug_switch_reads_truthy_values() -> None:
    assert debug_enabled({"TRANSLATE_BROWSER_DEBUG": "Yes"})
    assert not debug_enabled({"TRANSLATE_BROWSER_DEBUG": "0"})
    assert not debug_enabled({})


def test_log_path_explicit_default_and_none(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert requested_log_path({"TRANSLATE_BROWSER_LOG": "~/tb.log"}) == os.path.join(str(tmp_path), "tb.log")
    assert requested_log_path({"TRANSLATE_BROWSER_DEBUG": "1"}) == os.path.join(str(tmp_path), DEFAULT_LOG_FILE)
    assert requested_log_path({}) is None


def test_writable_path_gets_a_file_handler(tmp_path) -> None:
    path = tmp_path / "browser.log"

    handler, error = _file_or_stderr_handler(str(path), logging.DEBUG)
    try:
        assert error is None
        assert isinstance(handler, logging.FileHandler)
        assert handler.level == logging.DEBUG
        assert handler.formatter._fmt == LOG_FORMAT
        assert path.exists()
    finally:
        handler.close()


def test_unopenable_path_falls_back_to_stderr(tmp_path) -> None:
    path = tmp_path / "missing" / "browser.log"

    handler, error = _file_or_stderr_handler(str(path), logging.INFO)

    assert isinstance(error, OSError)
    assert not isinstance(handler, logging.FileHandler)
    assert isinstance(handler, logging.StreamHandler)
    assert handler.level == logging.INFO
    assert not path.parent.exists()
