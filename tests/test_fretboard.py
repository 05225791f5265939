"""Unit tests for string sets, the note-to-fret resolver and fret normalization."""

import itertools
from math import comb

import pytest

from fretshape.fretboard import (
    STANDARD_TUNING,
    StringSetMismatchError,
    close_chord_position,
    fret_normalizer,
    get_string_sets,
    interval_distance_from_notes,
    notes_to_chord,
)
from fretshape.intervals import Interval, make_finger_options
from fretshape.models import MUTED, FingerOptions, FingerPosition

C, E, G, B = Interval.UNISON, Interval.MAJOR_THIRD, Interval.PERFECT_FIFTH, Interval.MAJOR_SEVENTH


def _chord(*pairs: tuple[int, int | str]) -> list[FingerPosition]:
    return [FingerPosition(string, fret) for string, fret in pairs]


def _frets(chord: list[FingerPosition]) -> list[int | str]:
    return [p.fret for p in chord]


def _strings(chord: list[FingerPosition]) -> list[int]:
    return [p.string for p in chord]


# ── get_string_sets ─────────────────────────────────────────────────────────

def test_string_sets_choose_three_of_six() -> None:
    combos = list(get_string_sets(3))
    assert len(combos) == 20
    assert all(len(c) == 6 and sum(c) == 3 for c in combos)
    assert combos[0] == [False, False, False, True, True, True]
    assert combos[-1] == [True, True, True, False, False, False]


@pytest.mark.parametrize("size", [4, 6, 7])
def test_string_set_count_is_binomial(size: int) -> None:
    tuning = [0] + [5] * (size - 1)
    for count in range(size + 1):
        combos = list(get_string_sets(count, tuning))
        assert len(combos) == comb(size, count)
        assert len({tuple(c) for c in combos}) == len(combos)
        assert all(len(c) == size and sum(c) == count for c in combos)


def test_string_sets_zero_yields_single_empty_mask() -> None:
    assert list(get_string_sets(0)) == [[False] * 6]


def test_string_sets_too_many_strings_yields_nothing() -> None:
    assert list(get_string_sets(7)) == []
    assert list(get_string_sets(-1)) == []


def test_string_sets_all_strings() -> None:
    assert list(get_string_sets(6)) == [[True] * 6]


# ── interval_distance_from_notes ────────────────────────────────────────────

def test_interval_distances_skip_unused_strings() -> None:
    assert interval_distance_from_notes([C, E, G, None, B, None]) == [0, 4, 3, None, 4, None]


def test_interval_distances_can_be_negative() -> None:
    notes = [G, E, C, None, Interval.MAJOR_SIXTH, None]
    assert interval_distance_from_notes(notes) == [7, -3, -4, None, 9, None]


# ── notes_to_chord ──────────────────────────────────────────────────────────

def test_major_triad_on_lowest_three_strings() -> None:
    chord = notes_to_chord([C, E, G], [True, True, True, False, False, False])
    assert _strings(chord) == [6, 5, 4]
    assert _frets(chord) == [4, 3, 1]


def test_major_seventh_on_lowest_four_strings() -> None:
    chord = notes_to_chord([C, E, G, B], [True, True, True, True, False, False])
    assert _strings(chord) == [6, 5, 4, 3]
    assert _frets(chord) == [5, 4, 2, 1]


def test_power_chord() -> None:
    chord = notes_to_chord([C, G], [True, True, False, False, False, False])
    assert _strings(chord) == [6, 5]
    assert _frets(chord) == [1, 3]


def test_scattered_strings_keep_muted_gaps_in_the_offsets() -> None:
    chord = notes_to_chord([C, E, G], [True, False, True, False, True, False])
    assert _strings(chord) == [6, 4, 2]
    # frets 12, 6, 12 before sliding down: E on the low string, G# on D, B on the B string
    assert _frets(chord) == [7, 1, 7]


def test_single_note_lands_on_fret_one() -> None:
    chord = notes_to_chord([C], [False, False, True, False, False, False])
    assert chord == [FingerPosition(4, 1, FingerOptions())]


def test_include_muted_emits_every_string() -> None:
    chord = notes_to_chord([C, E, G], [True, True, True, False, False, False], include_muted=True)
    assert _strings(chord) == [6, 5, 4, 3, 2, 1]
    assert _frets(chord) == [4, 3, 1, MUTED, MUTED, MUTED]


def test_caller_notes_are_not_consumed() -> None:
    notes = [C, E, G]
    string_set = [False, False, False, True, True, True]
    first = notes_to_chord(notes, string_set)
    second = notes_to_chord(notes, string_set)
    assert notes == [C, E, G]
    assert first == second


def test_finger_options_follow_each_string_interval() -> None:
    seen: list[int | None] = []

    def options(interval: int | None) -> FingerOptions:
        seen.append(interval)
        return FingerOptions(text="x" if interval is None else str(int(interval)))

    chord = notes_to_chord([E, C, G], [False, True, True, True, False, False], options, include_muted=True)
    assert seen == [None, E, C, G, None, None]
    assert [p.options.text for p in chord if not p.is_muted] == ["4", "0", "7"]


def test_default_labels_callback() -> None:
    chord = notes_to_chord([C, E, G], [True, True, True, False, False, False], make_finger_options())
    assert [p.options.text for p in chord] == ["R", "3", "5"]


def test_custom_tuning() -> None:
    # four-string bass-style tuning, all fourths
    chord = notes_to_chord([C, G], [True, True, False, False], tuning=[0, 5, 5, 5])
    assert _strings(chord) == [4, 3]
    assert _frets(chord) == [1, 3]


@pytest.mark.parametrize(
    "note_count, string_count",
    [(n, s) for n, s in itertools.product(range(7), range(7)) if n != s],
)
def test_count_mismatch_raises(note_count: int, string_count: int) -> None:
    notes = [C] * note_count
    string_set = [i < string_count for i in range(6)]
    with pytest.raises(StringSetMismatchError) as excinfo:
        notes_to_chord(notes, string_set)
    assert excinfo.value.note_count == note_count
    assert excinfo.value.string_count == string_count


def test_string_set_length_must_match_tuning() -> None:
    with pytest.raises(ValueError, match="tuning"):
        notes_to_chord([C], [True, False, False], tuning=STANDARD_TUNING)


def test_mismatch_error_is_a_value_error() -> None:
    assert issubclass(StringSetMismatchError, ValueError)


# ── fret_normalizer ─────────────────────────────────────────────────────────

def test_normalizer_moves_lowest_fret_to_one() -> None:
    chord = _chord((1, 5), (2, 7), (3, 9))
    normalized = fret_normalizer(chord)
    assert _frets(normalized) == [1, 3, 5]
    assert _strings(normalized) == [1, 2, 3]
    assert _frets(chord) == [5, 7, 9]


def test_normalizer_leaves_muted_strings_alone() -> None:
    chord = _chord((1, 8), (2, MUTED), (3, 10), (5, 12))
    assert _frets(fret_normalizer(chord)) == [1, MUTED, 3, 5]


def test_normalizer_keeps_options() -> None:
    options = FingerOptions(text="R")
    chord = [FingerPosition(6, 8, options)]
    assert fret_normalizer(chord) == [FingerPosition(6, 1, options)]


def test_normalizer_already_normalized() -> None:
    chord = _chord((1, 1), (2, 3), (3, 5))
    assert fret_normalizer(chord) == chord


@pytest.mark.parametrize(
    "fret, numeric, fretted",
    [(0, True, False), (7, True, True), (MUTED, False, False), (True, False, False)],
)
def test_position_fret_kinds(fret: int | str, numeric: bool, fretted: bool) -> None:
    position = FingerPosition(1, fret)
    assert position.is_numeric is numeric
    assert position.is_fretted is fretted


def test_normalizer_counts_open_strings_as_numeric() -> None:
    chord = _chord((1, 0), (2, MUTED), (3, 3))
    assert _frets(fret_normalizer(chord)) == [1, MUTED, 4]


def test_close_position_skips_non_numeric_frets() -> None:
    chord = [FingerPosition(1, MUTED), FingerPosition(2, True), FingerPosition(3, 3), FingerPosition(4, 20)]
    assert _frets(close_chord_position(chord)) == [MUTED, True, 3, 8]


def test_normalizer_all_muted_or_empty() -> None:
    assert fret_normalizer([]) == []
    muted = _chord((1, MUTED), (2, MUTED))
    assert fret_normalizer(muted) == muted


# ── close_chord_position ────────────────────────────────────────────────────

def test_close_position_single_note_unchanged() -> None:
    chord = _chord((1, 5))
    assert close_chord_position(chord) == chord


def test_close_position_already_close() -> None:
    chord = _chord((1, 5), (2, 8), (3, 10))
    assert close_chord_position(chord) == chord


def test_close_position_lowers_wide_notes() -> None:
    assert _frets(close_chord_position(_chord((1, 5), (2, 20), (3, 30)))) == [5, 8, 6]


def test_close_position_raises_low_notes() -> None:
    assert _frets(close_chord_position(_chord((1, 10), (2, 0)))) == [10, 12]


def test_close_position_keeps_entry_order_and_muted() -> None:
    chord = _chord((6, 5), (5, MUTED), (4, 32))
    closed = close_chord_position(chord)
    assert _strings(closed) == [6, 5, 4]
    assert _frets(closed) == [5, MUTED, 8]
