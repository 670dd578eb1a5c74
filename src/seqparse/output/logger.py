"""
Logging setup for seqparse.

Library modules obtain loggers through `get_logger` and never print. An
application (or a test) calls `configure_logging` once to attach a Rich
console handler and, optionally, a plain-text log file.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..config import app_config

ROOT_LOGGER_NAME = "seqparse"
FILE_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def _write_session_header(log_file: Path) -> None:
    """Append a session banner to the log file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(f"\n{'='*60}\n")
        f.write(f"Session started: {datetime.now().isoformat()}\n")
        f.write(f"{'='*60}\n")


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure the seqparse logger, replacing handlers from earlier calls.

    Args:
        level: Level name; defaults to the configured `log.level`
        log_file: Optional log file; defaults to the configured `log.log_file`
        console: Rich console for the console handler (stderr when omitted)
        propagate: Whether records also reach the root logger

    Returns:
        The configured `seqparse` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel((level or app_config.log.level).upper())
    logger.propagate = propagate

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    target = log_file or app_config.log.log_file
    if target:
        target = Path(target)
        _write_session_header(target)
        file_handler = logging.FileHandler(target, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the seqparse namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
