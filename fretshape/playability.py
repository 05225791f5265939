"""Playability heuristic for resolved chord shapes."""

from collections.abc import Iterable

from fretshape.models import FingerPosition

#: A shape whose fretted notes are this many frets apart, or more, is too wide.
MAX_FRET_SPAN = 5

#: Most distinct frets a single hand is expected to hold down at once.
MAX_DISTINCT_FRETS = 4


def is_chord_doable(chord: Iterable[FingerPosition]) -> bool:
    """
    Decide whether one hand can plausibly finger a chord shape.

    Only fretted notes count: open and muted strings need no finger. A shape
    with at most one fretted note is always doable. Otherwise it is rejected
    when the fretted notes span ``MAX_FRET_SPAN`` frets or more, or use more
    than ``MAX_DISTINCT_FRETS`` different frets. Both limits are rough stand-ins
    for hand stretch, not an anatomical model.
    """
    frets = [int(position.fret) for position in chord if position.is_fretted]
    if len(frets) <= 1:
        return True

    if max(frets) - min(frets) >= MAX_FRET_SPAN:
        return False

    return len(set(frets)) <= MAX_DISTINCT_FRETS
