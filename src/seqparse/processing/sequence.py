"""
Sequence aggregation for seqparse.

A `SequenceFromFiles` is grown one file at a time. The first file is the
baseline; the second file that matches it fixes which digit run(s) carry the
frame number; every later file must vary in exactly those runs.
"""

from __future__ import annotations

from enum import Enum

from ..config import app_config
from ..output.logger import get_logger
from ..utils.path import DirectoryLister, SizeProber, list_directory_files, probe_file_size
from ..utils.strings import split_path
from .content import FileNameContent

logger = get_logger(__name__)


class SequenceState(Enum):
    """Aggregation state."""

    EMPTY = "empty"
    SEEDED = "seeded"
    LOCKED = "locked"


class SequenceFromFiles:
    """Files of one directory that form a numbered sequence.

    Args:
        first_file: Optional baseline file inserted at construction
        size_estimation: Sum file sizes of accepted members (config default when None)
        size_prober: Callable returning the byte size of a path
        max_sequence_hole: Missing-frame run that stops range summaries (config default when None)

    Raises:
        ValueError: If `max_sequence_hole` is smaller than 1.

    Not safe for concurrent mutation; shard scans by directory and merge sequentially.
    """

    def __init__(
        self,
        first_file: FileNameContent | None = None,
        *,
        size_estimation: bool | None = None,
        size_prober: SizeProber | None = None,
        max_sequence_hole: int | None = None,
    ) -> None:
        settings = app_config.sequence
        self._size_estimation = settings.size_estimation if size_estimation is None else size_estimation
        self._size_prober = size_prober or probe_file_size
        self._max_sequence_hole = settings.max_sequence_hole if max_sequence_hole is None else max_sequence_hole
        if self._max_sequence_hole < 1:
            raise ValueError(f"max_sequence_hole must be at least 1, got {self._max_sequence_hole}")

        self._members: list[FileNameContent] = []
        self._files_list: list[str] = []
        self._frame_slot_indexes: tuple[int, ...] | None = None
        self._frame_to_path: dict[int, str] = {}
        self._total_size = 0

        if first_file is not None:
            self.try_insert(first_file)

    # ------------------------------
    # State
    # ------------------------------

    @property
    def state(self) -> SequenceState:
        if not self._members:
            return SequenceState.EMPTY
        if self._frame_slot_indexes is None:
            return SequenceState.SEEDED
        return SequenceState.LOCKED

    @property
    def members(self) -> tuple[FileNameContent, ...]:
        return tuple(self._members)

    @property
    def frame_slot_indexes(self) -> tuple[int, ...] | None:
        return self._frame_slot_indexes

    @property
    def frame_indexes(self) -> dict[int, str]:
        """Frame number to absolute path, in ascending frame order."""
        return dict(sorted(self._frame_to_path.items()))

    @property
    def files_list(self) -> list[str]:
        """Absolute paths in insertion order."""
        return list(self._files_list)

    @property
    def estimated_total_size(self) -> int:
        return self._total_size

    @property
    def empty(self) -> bool:
        return not self._files_list

    def count(self) -> int:
        return len(self._files_list)

    def __len__(self) -> int:
        return len(self._files_list)

    @property
    def is_single_file(self) -> bool:
        return len(self._members) == 1

    def contains(self, absolute_file_name: str) -> bool:
        return absolute_file_name in self._files_list

    @property
    def first_frame(self) -> int | None:
        return min(self._frame_to_path) if self._frame_to_path else None

    @property
    def last_frame(self) -> int | None:
        return max(self._frame_to_path) if self._frame_to_path else None

    @property
    def file_extension(self) -> str:
        return self._members[0].extension if self._members else ""

    @property
    def path(self) -> str:
        return self._members[0].path if self._members else ""

    # ------------------------------
    # Insertion
    # ------------------------------

    def _accept(self, file: FileNameContent, frame_number: int | None) -> None:
        self._members.append(file)
        self._files_list.append(file.absolute_file_name)
        if frame_number is not None:
            self._frame_to_path[frame_number] = file.absolute_file_name
        if self._size_estimation:
            self._total_size += self._size_prober(file.absolute_file_name)

    def _reject(self, file: FileNameContent, reason: str) -> bool:
        logger.debug("Rejected %s: %s", file.absolute_file_name, reason)
        return False

    def try_insert(self, file: FileNameContent) -> bool:
        """Offer `file` to the sequence.

        Returns:
            True if the file was accepted. A rejected file leaves the sequence
            unchanged.
        """
        if not self._members:
            self._accept(file, None)
            return True

        baseline = self._members[0]
        if file.path != baseline.path:
            return self._reject(file, "different directory")
        if self.contains(file.absolute_file_name):
            return self._reject(file, "already in sequence")

        candidates = tuple(file.frame_slot_candidates(baseline))
        if not candidates:
            return self._reject(file, "does not match the baseline")

        if self._frame_slot_indexes is None:
            baseline_frame = baseline.frame_number_at(candidates)
            file_frame = file.frame_number_at(candidates)
            if baseline_frame is None or file_frame is None:
                return self._reject(file, f"digit runs {list(candidates)} do not agree")
            if baseline_frame == file_frame:
                return self._reject(file, f"duplicate frame number {file_frame}")
            self._frame_slot_indexes = candidates
            self._frame_to_path[baseline_frame] = baseline.absolute_file_name
            self._accept(file, file_frame)
            return True

        if candidates != self._frame_slot_indexes:
            return self._reject(file, f"varies in digit runs {list(candidates)}")
        for ordinal, (mine, theirs) in enumerate(zip(file.digit_runs, baseline.digit_runs)):
            if ordinal not in self._frame_slot_indexes and mine != theirs:
                return self._reject(file, f"digit run {ordinal} differs from the baseline")

        frame = file.frame_number_at(self._frame_slot_indexes)
        if frame is None:
            return self._reject(file, "frame digit runs do not agree")
        if frame in self._frame_to_path:
            return self._reject(file, f"duplicate frame number {frame}")
        self._accept(file, frame)
        return True

    # ------------------------------
    # Rendering
    # ------------------------------

    def generate_valid_sequence_pattern(self) -> str:
        """Pattern that designates every member, e.g. `/renders/shot_####.png`."""
        if self.empty:
            return ""
        baseline = self._members[0]
        if self.is_single_file:
            return baseline.absolute_file_name
        pattern = baseline.generate_pattern_with_frame_number_at_indexes(self._frame_slot_indexes or ())
        return pattern or baseline.absolute_file_name

    def frame_ranges(self) -> list[tuple[int, int]]:
        """Group present frame numbers into closed ranges of consecutive frames.

        Scanning stops at the first run of `max_sequence_hole` missing frames.
        """
        frames = self._frame_to_path
        if not frames:
            return []
        last = max(frames)
        current = min(frames)
        ranges: list[tuple[int, int]] = []
        while current <= last:
            hole = 0
            while current not in frames and hole < self._max_sequence_hole:
                current += 1
                hole += 1
            if hole >= self._max_sequence_hole:
                break
            start = current
            while current + 1 <= last and current + 1 in frames:
                current += 1
            ranges.append((start, current))
            current += 1
        return ranges

    def generate_user_friendly_sequence_pattern(self) -> str:
        """Path-free pattern followed by its frame ranges.

        Examples:
            "shot_####.png 1-24"
            "shot_####.png ( 1-3 / 7-9 / 12 ) "
        """
        if self.empty:
            return ""
        if self.is_single_file:
            return self._members[0].file_name

        _, pattern = split_path(self.generate_valid_sequence_pattern())
        ranges = self.frame_ranges()
        if len(ranges) == 1:
            start, end = ranges[0]
            return f"{pattern} {start}-{end}"
        parts = [f"{start}-{end}" if start != end else str(start) for start, end in ranges]
        return f"{pattern} ( {' / '.join(parts)} ) "

    def __repr__(self) -> str:
        return f"SequenceFromFiles({self.generate_user_friendly_sequence_pattern()!r}, {len(self)} files)"


def discover_sequence_from_seed_file(
    absolute_file_name: str,
    directory_lister: DirectoryLister | None = None,
    **options,
) -> SequenceFromFiles:
    """Build the sequence that `absolute_file_name` belongs to.

    The seed becomes the baseline, then every other entry of its directory is
    offered to `try_insert`.

    Args:
        absolute_file_name: Path of one file of the sequence
        directory_lister: Callable listing entry names of a directory
        **options: Forwarded to `SequenceFromFiles`

    Raises:
        DirectoryUnavailableError: If the seed's directory cannot be listed.
    """
    lister = directory_lister or list_directory_files
    seed = FileNameContent.from_path(absolute_file_name)
    sequence = SequenceFromFiles(seed, **options)

    for name in lister(seed.path):
        sequence.try_insert(FileNameContent.from_path(seed.path + name))

    logger.info("Discovered %s (%d files)", sequence.generate_user_friendly_sequence_pattern(), len(sequence))
    return sequence
