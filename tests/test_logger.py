from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from seqparse.output.logger import ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_get_logger_namespacing():
    assert get_logger("seqparse").name == "seqparse"
    assert get_logger("seqparse.processing").name == "seqparse.processing"
    assert get_logger("tools").name == "seqparse.tools"


def test_console_and_file_output(tmp_path: Path):
    buffer = io.StringIO()
    log_file = tmp_path / "logs" / "seqparse.log"

    configure_logging(level="info", log_file=log_file, console=Console(file=buffer, width=200))
    get_logger("processing.test").info("hello there")
    get_logger("processing.test").debug("too quiet")

    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Session started:" in text
    assert "[INFO] seqparse.processing.test: hello there" in text
    assert "too quiet" not in text
    assert "hello there" in buffer.getvalue()


def test_reconfigure_replaces_handlers():
    console = Console(file=io.StringIO())

    configure_logging(level="warning", console=console)
    logger = configure_logging(level="debug", console=console)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
