"""
File system collaborators for the sequence engine.

This module handles the only I/O the engine performs:
- Listing the regular files of a directory (the directory lister)
- Probing the byte length of a file (the size prober)

Both are plain callables so callers and tests can substitute their own.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable

from ..config import app_config
from ..core.errors import DirectoryUnavailableError
from ..output.logger import get_logger

logger = get_logger(__name__)

DirectoryLister = Callable[[str], list[str]]
SizeProber = Callable[[str], int]


def natural_key(s: str) -> list[object]:
    """Convert string to list of mixed integers and strings for natural sorting."""
    return [int(c) if i % 2 else c for i, c in enumerate(re.split(r"([0-9]+)", s))]


def list_directory_files(path: str) -> list[str]:
    """List the names of the regular files in `path`, naturally sorted.

    Directories, `.` and `..` are never returned. An empty `path` means the
    current working directory.

    Args:
        path: Directory to list, usually with a trailing separator.

    Returns:
        Entry names (not joined with `path`).

    Raises:
        DirectoryUnavailableError: If the directory cannot be opened.
    """
    directory = path or "."
    include_hidden = app_config.scan.include_hidden
    names: list[str] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if entry.name in {".", ".."}:
                    continue
                if not include_hidden and entry.name.startswith("."):
                    continue
                if entry.is_dir():
                    continue
                names.append(entry.name)
    except OSError as ex:
        raise DirectoryUnavailableError(directory, f"{type(ex).__name__}: {ex}") from ex

    names.sort(key=natural_key)
    return names


def probe_file_size(path: str) -> int:
    """Return the size of `path` in bytes, or 0 if it cannot be read."""
    try:
        return os.path.getsize(path)
    except OSError as ex:
        logger.warning("Could not probe size of %s: %s", path, ex)
        return 0
