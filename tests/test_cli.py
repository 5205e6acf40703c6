"""Tests for the command-line entry point and logging setup."""

import logging
import sys
from unittest.mock import patch

import pytest

from hecto import __main__ as cli
from hecto.log import LOG_LEVEL_ENV, configure_logging


@pytest.fixture
def hecto_logger():
    logger = logging.getLogger("hecto")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_version_flag(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["hecto", "--version"])
    cli.main()
    out = capsys.readouterr().out
    assert out.startswith("hecto ")


def test_main_opens_file_argument(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", ["hecto", str(tmp_path / "doc.txt")])
    with patch("hecto.log.configure_logging") as configure, \
         patch("hecto.editor.Editor") as editor_cls:
        cli.main()
    configure.assert_called_once()
    editor = editor_cls.return_value
    editor.load_file.assert_called_once_with(str(tmp_path / "doc.txt"))
    editor.run.assert_called_once()


def test_main_without_argument_starts_empty(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["hecto"])
    with patch("hecto.log.configure_logging"), \
         patch("hecto.editor.Editor") as editor_cls:
        cli.main()
    editor_cls.return_value.load_file.assert_not_called()
    editor_cls.return_value.run.assert_called_once()


def test_configure_logging_writes_to_file(tmp_path, monkeypatch, hecto_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    path = configure_logging(tmp_path / "logs" / "hecto.log")
    assert path == tmp_path / "logs" / "hecto.log"
    assert hecto_logger.level == logging.DEBUG
    assert hecto_logger.propagate is False

    logging.getLogger("hecto.document").info("saved something")
    for handler in hecto_logger.handlers:
        handler.flush()
    assert "saved something" in path.read_text(encoding="utf-8")


def test_configure_logging_unknown_level_defaults_to_warning(tmp_path, monkeypatch, hecto_logger):
    monkeypatch.setenv(LOG_LEVEL_ENV, "chatty")
    configure_logging(tmp_path / "hecto.log")
    assert hecto_logger.level == logging.WARNING


def test_configure_logging_unusable_directory(tmp_path, hecto_logger):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    assert configure_logging(blocker / "hecto.log") is None
