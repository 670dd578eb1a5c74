"""
Primitive string helpers used by the pattern compiler, matcher and tokenizer.

This module handles:
- Case-insensitive prefix tests
- Permissive integer conversion and zero-padded rendering
- Splitting a path into directory, stem and extension
"""

from __future__ import annotations

import re

_LEADING_DIGITS = re.compile(r"[0-9]+")


def starts_with(text: str, prefix: str, case_sensitive: bool = False) -> bool:
    """Return True if `text` begins with `prefix` (case-insensitive by default)."""
    if case_sensitive:
        return text.startswith(prefix)
    return text.lower().startswith(prefix.lower())


def string_to_int(text: str) -> int:
    """Parse the leading decimal digits of `text`.

    Conversion is permissive: anything without leading digits parses as 0.
    Examples:
        "0042" -> 42
        "7abc" -> 7
        "abc"  -> 0
    """
    match = _LEADING_DIGITS.match(text.strip())
    if not match:
        return 0
    return int(match.group(0))


def zero_pad(number: int, width: int) -> str:
    """Render `number` in decimal, left-padded with zeros to `width` characters."""
    return str(number).zfill(width)


def split_path(file_name: str) -> tuple[str, str]:
    """Split a path into (directory with trailing separator, name).

    The last `/` wins; `\\` is only considered when there is no `/`.
    Examples:
        "/a/b/shot_0001.png" -> ("/a/b/", "shot_0001.png")
        "C:\\x\\f.exr" -> ("C:\\x\\", "f.exr")
        "f.exr" -> ("", "f.exr")
    """
    pos = file_name.rfind("/")
    if pos == -1:
        pos = file_name.rfind("\\")
    if pos == -1:
        return "", file_name
    return file_name[: pos + 1], file_name[pos + 1 :]


def split_extension(name: str) -> tuple[str, str]:
    """Split a name into (stem, extension) at the last dot.

    A name whose only dot is its first character (".jpg", ".bashrc") has no
    extension. A trailing dot ("notes.") stays part of the stem.
    """
    pos = name.rfind(".")
    if pos <= 0 or pos == len(name) - 1:
        return name, ""
    return name[:pos], name[pos + 1 :]
