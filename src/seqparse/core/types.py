"""
Core data types for seqparse.

Pattern tokens are position-tagged records produced by the pattern compiler.
Every token remembers where it started in the pattern (`offset`), how it was
spelled there (`source`) and how many literal characters precede it
(`preceding_literal_count`), which is what the filename matcher uses to decide
whether a variable is expected at a given place in a filename.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union


class VariableKind(Enum):
    """How the text matched against a variable is interpreted."""

    FRAME_NUMBER = 0
    SHORT_VIEW = 1
    LONG_VIEW = 2


@dataclass(frozen=True)
class LiteralToken:
    """Fixed characters that must appear verbatim in a filename.

    `text` is what a matching filename contains; `source` is the spelling in the
    pattern (they differ for an escaped `%%`).
    """

    text: str
    source: str
    offset: int
    preceding_literal_count: int


@dataclass(frozen=True)
class FrameField:
    """A `#` run or a `%0<width>d` field."""

    width: int
    source: str
    offset: int
    preceding_literal_count: int

    @property
    def kind(self) -> VariableKind:
        return VariableKind.FRAME_NUMBER


@dataclass(frozen=True)
class LooseFrameField:
    """A bare `%d` field, width-unconstrained."""

    source: str
    offset: int
    preceding_literal_count: int

    @property
    def kind(self) -> VariableKind:
        return VariableKind.FRAME_NUMBER


@dataclass(frozen=True)
class ShortView:
    """A `%v` field: `l`, `r` or `view<N>`."""

    source: str
    offset: int
    preceding_literal_count: int

    @property
    def kind(self) -> VariableKind:
        return VariableKind.SHORT_VIEW


@dataclass(frozen=True)
class LongView:
    """A `%V` field: `left`, `right` or `view<N>`."""

    source: str
    offset: int
    preceding_literal_count: int

    @property
    def kind(self) -> VariableKind:
        return VariableKind.LONG_VIEW


VariableToken = Union[FrameField, LooseFrameField, ShortView, LongView]
Token = Union[LiteralToken, FrameField, LooseFrameField, ShortView, LongView]

VARIABLE_TOKEN_TYPES = (FrameField, LooseFrameField, ShortView, LongView)


class ElementKind(Enum):
    """Kind of a run inside a tokenized filename."""

    TEXT = "text"
    FRAME_NUMBER = "frame_number"


class FileNameElement(NamedTuple):
    """One maximal text or digit run of a filename stem."""

    kind: ElementKind
    data: str


class MatchResult(NamedTuple):
    """Frame and view extracted from a filename that instantiates a pattern."""

    frame_number: int
    view_number: int


# frame number -> (view index -> absolute path)
SequenceFromPattern = dict[int, dict[int, str]]
