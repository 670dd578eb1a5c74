from __future__ import annotations

import logging
from pathlib import Path

import pytest

from seqparse import DirectoryUnavailableError, FileNameContent, SequenceFromFiles, SequenceState
from seqparse import discover_sequence_from_seed_file


def content(name: str) -> FileNameContent:
    return FileNameContent.from_path(name)


def build(*names: str, **options) -> SequenceFromFiles:
    sequence = SequenceFromFiles(**options)
    for name in names:
        assert sequence.try_insert(content(name)), name
    return sequence


def test_empty_sequence():
    sequence = SequenceFromFiles()

    assert sequence.state is SequenceState.EMPTY
    assert sequence.empty
    assert len(sequence) == 0
    assert sequence.generate_valid_sequence_pattern() == ""
    assert sequence.generate_user_friendly_sequence_pattern() == ""
    assert sequence.first_frame is None
    assert sequence.frame_ranges() == []


def test_single_file_sequence():
    sequence = SequenceFromFiles(content("/r/shot_0001.png"))

    assert sequence.state is SequenceState.SEEDED
    assert sequence.is_single_file
    assert sequence.frame_indexes == {}
    assert sequence.generate_valid_sequence_pattern() == "/r/shot_0001.png"
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_0001.png"
    assert sequence.path == "/r/"
    assert sequence.file_extension == "png"


def test_second_file_locks_frame_slot():
    sequence = build("/r/shot_0001.png", "/r/shot_0002.png")

    assert sequence.state is SequenceState.LOCKED
    assert sequence.frame_slot_indexes == (0,)
    assert sequence.frame_indexes == {1: "/r/shot_0001.png", 2: "/r/shot_0002.png"}
    assert sequence.generate_valid_sequence_pattern() == "/r/shot_####.png"


def test_frame_slot_is_the_varying_run():
    sequence = build("a1_b2.png", "a1_b3.png")

    assert sequence.frame_slot_indexes == (1,)
    assert sequence.generate_valid_sequence_pattern() == "a1_b#.png"


def test_incompatible_padding_is_rejected():
    sequence = build("file01.png")

    assert not sequence.try_insert(content("file010000.png"))
    assert sequence.state is SequenceState.SEEDED
    assert sequence.files_list == ["file01.png"]


def test_aliased_frame_slots():
    sequence = build("f1_1.png", "f2_2.png", "f3_3.png")

    assert sequence.frame_slot_indexes == (0, 1)
    assert sequence.generate_valid_sequence_pattern() == "f#_#.png"
    assert not sequence.try_insert(content("f4_5.png"))


def test_locked_sequence_rejections():
    sequence = build("/r/a01_0001.png", "/r/a01_0002.png")

    assert not sequence.try_insert(content("/other/a01_0003.png"))
    assert not sequence.try_insert(content("/r/a01_0002.png"))
    assert not sequence.try_insert(content("/r/a01_0003.jpg"))
    assert not sequence.try_insert(content("/r/a02_0100.png"))
    # frame run varies as expected but another run drifted from the baseline
    assert not sequence.try_insert(content("/r/a09_0002.png"))
    assert sequence.try_insert(content("/r/a01_0003.png"))
    assert sequence.count() == 3


def test_rejection_is_logged(caplog):
    sequence = build("shot_0001.png")

    with caplog.at_level(logging.DEBUG, logger="seqparse"):
        assert not sequence.try_insert(content("take_0002.png"))

    assert "take_0002.png" in caplog.text


def test_contiguous_range():
    sequence = build("shot_0001.png", "shot_0002.png", "shot_0003.png")

    assert sequence.frame_ranges() == [(1, 3)]
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png 1-3"
    assert sequence.first_frame == 1
    assert sequence.last_frame == 3


def test_ranges_with_gap():
    names = [f"/r/shot_{frame:04d}.png" for frame in (1, 2, 3, 7, 8, 9)]
    sequence = build(*names)

    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png ( 1-3 / 7-9 ) "


def test_range_scan_stops_at_large_hole():
    names = [f"/r/shot_{frame:04d}.png" for frame in (1, 2, 3, 7, 8, 9, 5000)]
    sequence = build(*names)

    assert sequence.last_frame == 5000
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png ( 1-3 / 7-9 ) "


def test_configurable_hole_and_singletons():
    sequence = build("shot_0001.png", "shot_0005.png", "shot_0100.png", max_sequence_hole=10)

    assert sequence.frame_ranges() == [(1, 1), (5, 5)]
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png ( 1 / 5 ) "


@pytest.mark.parametrize("hole", [0, -5])
def test_hole_limit_must_be_positive(hole):
    with pytest.raises(ValueError):
        SequenceFromFiles(max_sequence_hole=hole)


def test_smallest_hole_limit_still_reports_frames():
    sequence = build("shot_0001.png", "shot_0002.png", max_sequence_hole=1)
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png 1-2"


def test_frame_indexes_sorted_and_files_in_insertion_order():
    sequence = build("shot_0003.png", "shot_0001.png", "shot_0002.png")

    assert list(sequence.frame_indexes) == [1, 2, 3]
    assert sequence.files_list == ["shot_0003.png", "shot_0001.png", "shot_0002.png"]
    assert sequence.contains("shot_0001.png")


def test_size_estimation_with_prober():
    probed = []

    def prober(path: str) -> int:
        probed.append(path)
        return 100

    sequence = build("shot_0001.png", "shot_0002.png", "shot_0003.png", size_estimation=True, size_prober=prober)

    assert sequence.estimated_total_size == 300
    assert probed == ["shot_0001.png", "shot_0002.png", "shot_0003.png"]


def test_size_estimation_disabled():
    sequence = build("shot_0001.png", "shot_0002.png", size_estimation=False, size_prober=lambda path: 100)
    assert sequence.estimated_total_size == 0


def test_size_estimation_missing_file(tmp_path: Path, caplog):
    missing = str(tmp_path / "shot_0001.png")

    with caplog.at_level(logging.WARNING, logger="seqparse"):
        sequence = SequenceFromFiles(content(missing), size_estimation=True)

    assert sequence.estimated_total_size == 0
    assert "Could not probe size" in caplog.text


def test_size_estimation_real_files(tmp_path: Path):
    for frame, size in ((1, 10), (2, 20)):
        (tmp_path / f"shot_{frame:04d}.png").write_bytes(b"x" * size)

    sequence = discover_sequence_from_seed_file(str(tmp_path / "shot_0001.png"), size_estimation=True)
    assert sequence.estimated_total_size == 30


def test_discover_from_directory(tmp_path: Path):
    for name in ("shot_0001.png", "shot_0002.png", "shot_0003.png", "shot_0001.jpg", "notes.txt"):
        (tmp_path / name).write_text("")
    (tmp_path / "shot_0004.png").mkdir()

    seed = str(tmp_path / "shot_0002.png")
    sequence = discover_sequence_from_seed_file(seed)

    directory = str(tmp_path) + "/"
    assert sequence.generate_valid_sequence_pattern() == directory + "shot_####.png"
    assert sequence.generate_user_friendly_sequence_pattern() == "shot_####.png 1-3"
    assert sequence.frame_indexes == {
        1: directory + "shot_0001.png",
        2: seed,
        3: directory + "shot_0003.png",
    }
    assert sequence.files_list[0] == seed


def test_discover_with_injected_lister():
    listed = []

    def lister(path: str) -> list[str]:
        listed.append(path)
        return ["a1_b1.exr", "a1_b2.exr", "a1_b3.exr", "a2_b1.exr", "readme.txt"]

    sequence = discover_sequence_from_seed_file("/plates/a1_b1.exr", directory_lister=lister)

    assert listed == ["/plates/"]
    assert sequence.generate_valid_sequence_pattern() == "/plates/a1_b#.exr"
    assert sorted(sequence.frame_indexes) == [1, 2, 3]


def test_discover_missing_directory(tmp_path: Path):
    with pytest.raises(DirectoryUnavailableError) as excinfo:
        discover_sequence_from_seed_file(str(tmp_path / "missing" / "shot_0001.png"))

    assert "missing" in excinfo.value.path
