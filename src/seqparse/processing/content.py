"""
Tokenized view of a single file path.

A `FileNameContent` splits a filename stem into alternating text and digit
runs. Two contents can be compared to decide whether they belong to the same
sequence and, if so, which digit run carries the frame number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..core.constants import HASH_CHAR
from ..core.types import ElementKind, FileNameElement
from ..utils.strings import split_extension, split_path, string_to_int

_RUNS = re.compile(r"[0-9]+|[^0-9]+")


def tokenize_stem(stem: str) -> tuple[FileNameElement, ...]:
    """Split `stem` into maximal text and digit runs, left to right.

    Examples:
        "file08_001" -> TEXT "file", FRAME_NUMBER "08", TEXT "_", FRAME_NUMBER "001"
    """
    return tuple(
        FileNameElement(ElementKind.FRAME_NUMBER if "0" <= run[0] <= "9" else ElementKind.TEXT, run)
        for run in _RUNS.findall(stem)
    )


def is_valid_frame_variation(a: str, b: str) -> bool:
    """Return True if two differing digit strings can be two frames of one field.

    Strings of equal length always can. When the lengths differ, the shorter
    one must not be zero padded and the longer one must not start with a zero:
    `01` and `010000` could never come from the same `##` field.
    """
    if len(a) == len(b):
        return True
    shorter, longer = (a, b) if len(a) < len(b) else (b, a)
    if len(shorter) > 1 and shorter[0] == "0":
        return False
    return longer[0] != "0"


@dataclass(frozen=True)
class FileNameContent:
    """Immutable, parsed form of one file path."""

    absolute_file_name: str
    path: str
    file_name: str
    stem: str
    extension: str
    elements: tuple[FileNameElement, ...]
    digit_runs: tuple[str, ...] = field(init=False, repr=False)
    canonical_pattern: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        runs = tuple(e.data for e in self.elements if e.kind is ElementKind.FRAME_NUMBER)
        object.__setattr__(self, "digit_runs", runs)
        object.__setattr__(self, "canonical_pattern", self._canonical_pattern())

    @classmethod
    def from_path(cls, absolute_file_name: str) -> FileNameContent:
        """Parse a path such as `/renders/shot_0001.png`."""
        path, file_name = split_path(absolute_file_name)
        stem, extension = split_extension(file_name)
        return cls(
            absolute_file_name=absolute_file_name,
            path=path,
            file_name=file_name,
            stem=stem,
            extension=extension,
            elements=tokenize_stem(stem),
        )

    def _canonical_pattern(self) -> str:
        parts: list[str] = []
        ordinal = 0
        for element in self.elements:
            if element.kind is ElementKind.TEXT:
                parts.append(element.data)
            else:
                parts.append(HASH_CHAR * len(element.data) + str(ordinal))
                ordinal += 1
        return "".join(parts)

    @property
    def has_single_number(self) -> bool:
        return len(self.digit_runs) == 1

    @property
    def is_composed_only_of_digits(self) -> bool:
        """True for stems like `0001` or `0001_final`: a leading digit run and at most one more element."""
        return 0 < len(self.elements) <= 2 and self.elements[0].kind is ElementKind.FRAME_NUMBER

    def text_elements(self) -> list[str]:
        return [e.data for e in self.elements if e.kind is ElementKind.TEXT]

    def number_by_index(self, index: int) -> str | None:
        """Return the digit run with ordinal `index`, or None if there is none."""
        if 0 <= index < len(self.digit_runs):
            return self.digit_runs[index]
        return None

    def frame_number_at(self, indexes: tuple[int, ...] | list[int]) -> int | None:
        """Read the frame number stored at the digit runs `indexes`.

        Every run must hold the same integer; returns None when they disagree,
        when an index is out of range, or when `indexes` is empty.
        """
        values = set()
        for index in indexes:
            run = self.number_by_index(index)
            if run is None:
                return None
            values.add(string_to_int(run))
        if len(values) != 1:
            return None
        return values.pop()

    def shape_matches(self, other: FileNameContent) -> bool:
        """Same extension, same element count and same element kinds in order."""
        if self.extension != other.extension or len(self.elements) != len(other.elements):
            return False
        return all(a.kind is b.kind for a, b in zip(self.elements, other.elements))

    def frame_slot_candidates(self, other: FileNameContent) -> list[int]:
        """Return the digit-run ordinals that may carry the frame number.

        Both files must have the same shape and identical text runs. Among the
        digit runs that differ (and differ validly, see
        `is_valid_frame_variation`) the ones whose numeric difference is
        smallest are returned; ties are all returned. An empty list means the
        two files do not belong to the same sequence.
        """
        if not self.shape_matches(other):
            return []

        candidates: list[tuple[int, int]] = []
        ordinal = 0
        for mine, theirs in zip(self.elements, other.elements):
            if mine.kind is ElementKind.TEXT:
                if mine.data != theirs.data:
                    return []
                continue
            if mine.data != theirs.data and is_valid_frame_variation(mine.data, theirs.data):
                candidates.append((ordinal, abs(string_to_int(mine.data) - string_to_int(theirs.data))))
            ordinal += 1

        if not candidates:
            return []
        minimum = min(diff for _, diff in candidates)
        return [index for index, diff in candidates if diff == minimum]

    def matches_pattern(self, other: FileNameContent) -> bool:
        """Return True if `other` belongs to the same sequence as this file."""
        return bool(self.frame_slot_candidates(other))

    def generate_pattern_with_frame_number_at_indexes(self, indexes: tuple[int, ...] | list[int]) -> str | None:
        """Build a pattern that abstracts the digit runs `indexes` as `#` fields.

        Every other digit run is frozen to this file's digits. The result is
        prefixed with this file's directory.

        Returns:
            The pattern, or None if an index does not name a digit run.
        """
        wanted = set(indexes)
        if any(index < 0 or index >= len(self.digit_runs) for index in wanted):
            return None

        parts: list[str] = []
        ordinal = 0
        for element in self.elements:
            if element.kind is ElementKind.TEXT:
                parts.append(element.data)
                continue
            parts.append(HASH_CHAR * len(element.data) if ordinal in wanted else element.data)
            ordinal += 1
        if self.extension:
            parts.append("." + self.extension)
        return self.path + "".join(parts)
