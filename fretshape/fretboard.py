"""Fretboard: string sets, the note-to-fret resolver and fret normalization."""

from collections.abc import Iterator, Sequence
from dataclasses import replace
from typing import Final

from fretshape.bunching import Placement, bunch_by_period
from fretshape.intervals import SEMITONES_PER_OCTAVE, FingerOptionsFn, no_finger_options
from fretshape.models import MUTED, Chord, FingerPosition

Tuning = tuple[int, ...]

#: Semitone gaps between adjacent open strings, low E to high E (E A D G B E).
STANDARD_TUNING: Final[Tuning] = (0, 5, 5, 5, 4, 5)


class StringSetMismatchError(ValueError):
    """The number of notes differs from the number of strings chosen to carry them."""

    def __init__(self, note_count: int, string_count: int) -> None:
        super().__init__(
            f"Cannot place {note_count} note(s) on {string_count} selected string(s)."
        )
        self.note_count = note_count
        self.string_count = string_count


def get_string_sets(count: int, tuning: Sequence[int] = STANDARD_TUNING) -> Iterator[list[bool]]:
    """
    Yield every way to sound exactly ``count`` of the instrument's strings.

    Masks are indexed like ``tuning`` (index 0 = lowest string) and come out
    in ascending binary order, reading the mask as a bit string with the
    first string as the most significant bit. ``count == 0`` yields a single
    all-false mask; a count larger than the number of strings yields nothing.
    """
    size = len(tuning)
    if count < 0 or count > size:
        return
    for value in range(1 << size):
        mask = [bool(value >> (size - 1 - i) & 1) for i in range(size)]
        if sum(mask) == count:
            yield mask


def interval_distance_from_notes(voiced: Sequence[int | None]) -> list[int | None]:
    """
    Semitone step from each sounded note to the previous sounded one.

    The first sounded note is measured from 0 (the root). Unused strings give
    None and do not reset the reference.
    """
    distances: list[int | None] = []
    previous = 0
    for interval in voiced:
        if interval is None:
            distances.append(None)
            continue
        distances.append(interval - previous)
        previous = interval
    return distances


def _assign_notes(notes: Sequence[int], string_set: Sequence[bool]) -> list[int | None]:
    """Lay the notes, in order, onto the strings switched on in ``string_set``."""
    voiced: list[int | None] = []
    cursor = 0
    for sounded in string_set:
        if sounded:
            voiced.append(notes[cursor])
            cursor += 1
        else:
            voiced.append(None)
    return voiced


def fret_normalizer(chord: Sequence[FingerPosition]) -> Chord:
    """
    Slide a shape down the neck so its lowest sounded fret is fret 1.

    Frets 5, 7, 9 become 1, 3, 5. Muted strings are left alone and a chord
    with nothing sounded comes back unchanged.

    Returns:
        A new chord; the input is not modified.
    """
    frets = [position.fret for position in chord if position.is_numeric]
    if not frets:
        return list(chord)

    shift = min(frets) - 1
    return [
        replace(position, fret=position.fret - shift) if position.is_numeric else position
        for position in chord
    ]


def close_chord_position(chord: Sequence[FingerPosition]) -> Chord:
    """
    Fold every fret to within half an octave of the first sounded fret.

    This is the plain octave-folding heuristic: it keeps the first note fixed
    and moves each other note up or down by 12 frets until it is no more than
    6 frets away. ``bunch_by_period`` finds the optimal window instead; this
    one is kept for callers that want the first note anchored.

    Returns:
        A new chord with the same entry order and string numbers.
    """
    half = SEMITONES_PER_OCTAVE // 2
    reference: int | None = None
    closed: Chord = []
    for position in chord:
        fret = position.fret
        if not position.is_numeric:
            closed.append(position)
            continue
        if reference is None:
            reference = fret
        while fret - reference > half:
            fret -= SEMITONES_PER_OCTAVE
        while reference - fret > half:
            fret += SEMITONES_PER_OCTAVE
        closed.append(replace(position, fret=fret))
    return closed


def notes_to_chord(
    notes: Sequence[int],
    string_set: Sequence[bool],
    interval_to_finger_options: FingerOptionsFn = no_finger_options,
    tuning: Sequence[int] = STANDARD_TUNING,
    include_muted: bool = False,
) -> Chord:
    """
    Resolve an ordered list of intervals into a fretted chord shape.

    Algorithm overview
    ------------------
    1. **String assignment**: the notes are laid, in order, on the strings
       switched on in ``string_set`` (index 0 = lowest string).

    2. **Provisional frets**: walking from the lowest string up, each
       sounded string's fret is the running sum of the interval steps minus
       the open-string gaps of ``tuning``. Muted strings still contribute
       their open-string gap. Only differences between these frets matter.

    3. **Bunching**: the frets are pulled into the narrowest window modulo
       12 with ``bunch_by_period``, so octave-displaced notes do not spread
       the shape across the neck.

    4. **Normalization**: the shape is slid down until its lowest fret is 1.

    String numbers follow the guitar convention (1 = highest string), so the
    lowest string of a six-string tuning is string 6.

    Args:
        notes:                      Intervals, lowest voice first. Not modified.
        string_set:                 Which strings sound, same length as ``tuning``.
        interval_to_finger_options: Display hints per interval (None for muted).
        tuning:                     Open-string gaps in semitones, low to high.
        include_muted:              Also emit a ``MUTED`` entry for every silent string.

    Returns:
        Finger positions ordered from the lowest string to the highest.

    Raises:
        ValueError:             If ``string_set`` and ``tuning`` differ in length.
        StringSetMismatchError: If the number of sounded strings differs from
                                the number of notes.
    """
    string_count = len(tuning)
    if len(string_set) != string_count:
        raise ValueError(
            f"String set has {len(string_set)} entries but the tuning has {string_count} strings."
        )
    sounded_count = sum(1 for sounded in string_set if sounded)
    if sounded_count != len(notes):
        raise StringSetMismatchError(len(notes), sounded_count)

    voiced = _assign_notes(notes, string_set)
    distances = interval_distance_from_notes(voiced)

    provisional: list[Placement[int]] = []
    offset = 0
    for index, (open_gap, distance) in enumerate(zip(tuning, distances)):
        if distance is None:
            offset -= open_gap
            continue
        offset += distance - open_gap
        provisional.append(Placement(position=offset, item=index))

    frets: dict[int, int] = {}
    if provisional:
        frets = {placement.item: placement.position for placement in bunch_by_period(provisional)}

    chord: Chord = []
    for index, interval in enumerate(voiced):
        string_number = string_count - index
        if interval is None:
            if include_muted:
                chord.append(FingerPosition(string_number, MUTED, interval_to_finger_options(None)))
            continue
        chord.append(FingerPosition(string_number, frets[index], interval_to_finger_options(interval)))

    return fret_normalizer(chord)
