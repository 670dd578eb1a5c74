"""Exception types raised by the sequence parsing engine."""

from __future__ import annotations


class SequenceParsingError(Exception):
    """Base class for all errors raised by seqparse."""


class CompileError(SequenceParsingError, ValueError):
    """A pattern could not be compiled (nested printf fields)."""

    def __init__(self, pattern: str, position: int) -> None:
        super().__init__(f"Nested printf-style variables are not supported: {pattern!r} (at index {position})")
        self.pattern = pattern
        self.position = position


class UnrecognizedVariableError(SequenceParsingError, RuntimeError):
    """A token that is not one of the known variable kinds reached validation or rendering."""


class DirectoryUnavailableError(SequenceParsingError, FileNotFoundError):
    """The directory lister could not enumerate a directory."""

    def __init__(self, path: str, reason: str = "") -> None:
        message = f"Directory cannot be listed: {path!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.path = path
