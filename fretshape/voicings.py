"""Voicings: drop-voicing permutations and rotation inversions of a note list."""

from collections.abc import Callable, Iterator, Sequence
from typing import Final

VoicingFn = Callable[[Sequence[int]], list[int]]


def _drop(notes: Sequence[int], *from_top: int) -> list[int]:
    """
    Move the notes counted ``from_top`` (1 = highest) below all the others.

    Dropped notes keep their relative order. Counts that reach past the
    lowest note are ignored, so short inputs come back unchanged.
    """
    size = len(notes)
    dropped = {size - n for n in from_top if 0 < n <= size}
    low = [note for i, note in enumerate(notes) if i in dropped]
    rest = [note for i, note in enumerate(notes) if i not in dropped]
    return low + rest


def close(notes: Sequence[int]) -> list[int]:
    """Close position: the notes as given, copied."""
    return list(notes)


def drop_2(notes: Sequence[int]) -> list[int]:
    """Second-highest note dropped an octave to the bottom."""
    return _drop(notes, 2)


def drop_3(notes: Sequence[int]) -> list[int]:
    """Third-highest note dropped an octave to the bottom."""
    return _drop(notes, 3)


def drop_2_and_3(notes: Sequence[int]) -> list[int]:
    return _drop(notes, 2, 3)


def drop_2_and_4(notes: Sequence[int]) -> list[int]:
    return _drop(notes, 2, 4)


def swap_last_two(notes: Sequence[int]) -> list[int]:
    """Exchange the two highest notes."""
    swapped = list(notes)
    if len(swapped) >= 2:
        swapped[-1], swapped[-2] = swapped[-2], swapped[-1]
    return swapped


VOICINGS: Final[dict[str, VoicingFn]] = {
    "CLOSE": close,
    "DROP_2": drop_2,
    "DROP_3": drop_3,
    "DROP_2_AND_3": drop_2_and_3,
    "DROP_2_AND_4": drop_2_and_4,
    "SWAP_LAST_TWO": swap_last_two,
}


def get_voicing(name: str) -> VoicingFn:
    """
    Look up a voicing by name, ignoring case and treating spaces or dashes as underscores.

    Raises:
        KeyError: If no voicing has that name.
    """
    key = name.strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return VOICINGS[key]
    except KeyError:
        supported = ", ".join(VOICINGS)
        raise KeyError(f"Unknown voicing '{name}'. Use one of: {supported}.") from None


def allowed_voicings(count: int) -> list[str]:
    """Voicing names that are distinct and meaningful for ``count`` notes."""
    if count < 2:
        return []
    if count == 2:
        return ["CLOSE"]
    if count == 3:
        return ["CLOSE", "DROP_2"]
    return list(VOICINGS)


# ── Inversions ──────────────────────────────────────────────────────────────

def generate_inversions(notes: Sequence[int]) -> Iterator[list[int]]:
    """
    Yield the inversions of ``notes`` after the one given.

    Each inversion moves the current lowest note to the top, so ``n`` notes
    give ``n - 1`` rotations. The caller's sequence is never modified.
    """
    current = list(notes)
    for _ in range(len(current) - 1):
        current = current[1:] + current[:1]
        yield list(current)


def get_all_inversions(notes: Sequence[int], voicing: VoicingFn = close) -> Iterator[list[int]]:
    """
    Yield ``voicing`` applied to ``notes`` and then to each of its inversions.

    The notes are used in the order given; sort them first for root-position
    stacking.
    """
    yield voicing(notes)
    for inversion in generate_inversions(notes):
        yield voicing(inversion)
