from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from bbpush import app, settings


def test_file_log_path_resolves_against_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "CONFIG_DIR", str(tmp_path))
    config = {"level": "debug", "console": False, "file": {"enabled": True, "path": "logs/bbpush.log"}}

    handlers = app._build_log_handlers(config)
    try:
        assert len(handlers) == 1
        handler = handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert Path(handler.baseFilename) == tmp_path / "logs" / "bbpush.log"
        assert handler.level == logging.DEBUG
    finally:
        for handler in handlers:
            handler.close()


def test_log_lines_are_written_unmodified(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "CONFIG_DIR", str(tmp_path))
    config = {"console": False, "file": {"enabled": True, "path": "bbpush.log"}}

    handlers = app._build_log_handlers(config)
    record = logging.LogRecord("bbpush", logging.INFO, __file__, 1, "target %s", ("forum-3",), None)
    try:
        assert "target forum-3" in handlers[0].format(record)
    finally:
        for handler in handlers:
            handler.close()


def test_console_handler_uses_stderr() -> None:
    handlers = app._build_log_handlers({"console": True})
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert handlers[0].level == logging.INFO
