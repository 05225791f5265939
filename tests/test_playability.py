"""Unit tests for the is_chord_doable heuristic."""

import pytest

from fretshape.models import MUTED, OPEN, FingerOptions, FingerPosition
from fretshape.playability import is_chord_doable


def _chord(*frets: int | str) -> list[FingerPosition]:
    return [FingerPosition(string, fret) for string, fret in enumerate(frets, start=1)]


@pytest.mark.parametrize(
    "frets",
    [
        (1, 2, 3),
        (3, 3, 3, 3),
        (3, 3, 4, 5, 5, 3),
        (5, 6, 8, 9),
        (3, 5, 3, 5, 3),
    ],
)
def test_compact_shapes_are_doable(frets: tuple[int, ...]) -> None:
    assert is_chord_doable(_chord(*frets)) is True


@pytest.mark.parametrize(
    "frets",
    [
        (1, 7),
        (5, 13),
        (3, 5, 7, 9, 11),
    ],
)
def test_wide_spans_are_rejected(frets: tuple[int, ...]) -> None:
    assert is_chord_doable(_chord(*frets)) is False


def test_span_of_exactly_five_is_rejected() -> None:
    assert is_chord_doable(_chord(5, 7, 9, 10)) is False
    assert is_chord_doable(_chord(5, 6, 8, 10)) is False


def test_span_of_four_is_allowed() -> None:
    assert is_chord_doable(_chord(5, 7, 9, 9)) is True


def test_five_distinct_frets_are_rejected() -> None:
    assert is_chord_doable(_chord(1, 2, 3, 4, 5)) is False


def test_four_distinct_frets_are_allowed() -> None:
    assert is_chord_doable(_chord(1, 2, 3, 4, 4)) is True


def test_open_strings_do_not_count() -> None:
    assert is_chord_doable(_chord(OPEN, 3, 5)) is True
    assert is_chord_doable(_chord(OPEN, 1, OPEN, 2, 3)) is True
    assert is_chord_doable(_chord(OPEN, 1, 2, 3, 4, 5)) is False


def test_muted_strings_do_not_count() -> None:
    assert is_chord_doable(_chord(MUTED, 3, 5, MUTED)) is True
    assert is_chord_doable(_chord(OPEN, MUTED, 5, 7, OPEN, MUTED)) is True


@pytest.mark.parametrize(
    "chord",
    [
        [],
        _chord(5),
        _chord(OPEN, OPEN, OPEN, OPEN, OPEN, OPEN),
        _chord(MUTED, MUTED, MUTED),
        [FingerPosition(1, 5, FingerOptions(text="1", color="red"))],
    ],
)
def test_at_most_one_fretted_note_is_always_doable(chord: list[FingerPosition]) -> None:
    assert is_chord_doable(chord) is True
