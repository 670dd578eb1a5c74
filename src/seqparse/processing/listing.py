"""
Listing the files designated by a pattern.

`compile_and_list_files` compiles a pattern, lists its directory and keeps the
entries that instantiate it, grouped by frame number and then by view index.
"""

from __future__ import annotations

from ..core.constants import NO_VIEW
from ..core.types import SequenceFromPattern
from ..output.logger import get_logger
from ..utils.path import DirectoryLister, list_directory_files
from .matcher import match_filename
from .pattern import CompiledPattern

logger = get_logger(__name__)


def compile_and_list_files(pattern: str, directory_lister: DirectoryLister | None = None) -> SequenceFromPattern:
    """Return every file of the pattern's directory that instantiates `pattern`.

    Args:
        pattern: e.g. `/renders/shot_####.exr` or `/renders/cam_%V.%04d.exr`
        directory_lister: Callable listing entry names of a directory

    Returns:
        frame number -> (view index -> absolute path), both levels in
        ascending order. The view index is -1 for patterns without a view
        field. When two files resolve to the same frame and view, the first
        listed one is kept.

    Raises:
        ValueError: If `pattern` is empty.
        CompileError: If `pattern` nests printf-style fields.
        DirectoryUnavailableError: If the directory cannot be listed.
    """
    if not pattern:
        raise ValueError("Pattern must not be empty")

    compiled = CompiledPattern.parse(pattern)
    lister = directory_lister or list_directory_files
    entries = lister(compiled.path)

    sequence: SequenceFromPattern = {}
    for name in entries:
        result = match_filename(name, compiled)
        if result is None:
            continue
        views = sequence.setdefault(result.frame_number, {})
        absolute_file_name = compiled.path + name
        if result.view_number in views:
            logger.warning(
                "Several files have frame %d and view %d: keeping %s, ignoring %s",
                result.frame_number,
                result.view_number,
                views[result.view_number],
                absolute_file_name,
            )
            continue
        views[result.view_number] = absolute_file_name

    return {frame: dict(sorted(views.items())) for frame, views in sorted(sequence.items())}


def flatten(sequence: SequenceFromPattern, only_view: int = NO_VIEW) -> list[str]:
    """Flatten a pattern listing into paths, frame by frame.

    With `only_view` set, other views are skipped; files without a view
    (index -1) are always kept.
    """
    paths: list[str] = []
    for frame in sorted(sequence):
        for view, path in sorted(sequence[frame].items()):
            if only_view != NO_VIEW and view not in (only_view, NO_VIEW):
                continue
            paths.append(path)
    return paths
