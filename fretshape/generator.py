"""ShapeGenerator: turns a set of intervals into every fingering for a string set."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from fretshape.fretboard import STANDARD_TUNING, get_string_sets, notes_to_chord
from fretshape.intervals import FingerOptionsFn, make_finger_options
from fretshape.models import Chord
from fretshape.playability import is_chord_doable
from fretshape.voicings import get_all_inversions, get_voicing


@dataclass(frozen=True)
class ChordShape:
    """
    One resolved fingering.

    Attributes:
        index:     Position in the inversion sequence (0 = the voicing as given).
        notes:     Intervals as laid on the strings, lowest string first.
        positions: The resolved chord, lowest string first.
        doable:    Result of the playability heuristic.
    """

    index: int
    notes: list[int]
    positions: Chord
    doable: bool

    @property
    def frets(self) -> list[int]:
        """Numeric frets of the sounded strings."""
        return [int(p.fret) for p in self.positions if not p.is_muted]

    @property
    def fret_span(self) -> int:
        frets = self.frets
        return max(frets) - min(frets) if frets else 0


class ShapeGenerator:
    """
    Generates chord shapes for a set of intervals.

    Pipeline
    --------
    1. The distinct intervals are sorted ascending (root-position stacking).
    2. The configured voicing is applied to that order and to every inversion.
    3. Each voiced inversion is resolved onto the string set with
       ``notes_to_chord`` and tagged with ``is_chord_doable``.
    4. With ``doable_only`` set, shapes that fail the heuristic are dropped.
    """

    DEFAULT_VOICING = "CLOSE"

    def __init__(
        self,
        voicing: str = DEFAULT_VOICING,
        tuning: Sequence[int] = STANDARD_TUNING,
        doable_only: bool = False,
        include_muted: bool = False,
        finger_options: FingerOptionsFn | None = None,
    ) -> None:
        """
        Args:
            voicing:        Voicing name, e.g. "CLOSE" or "DROP_2".
            tuning:         Open-string gaps in semitones, low to high.
            doable_only:    Drop shapes the playability heuristic rejects.
            include_muted:  Emit muted entries for silent strings.
            finger_options: Display-hint callback. Defaults to the interval labels.

        Raises:
            KeyError: If the voicing name is unknown.
        """
        self.voicing_name = voicing
        self.voicing = get_voicing(voicing)
        self.tuning = tuple(tuning)
        self.doable_only = doable_only
        self.include_muted = include_muted
        self.finger_options = finger_options or make_finger_options()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _prepare(self, intervals: Iterable[int]) -> list[int]:
        return sorted(set(int(interval) for interval in intervals))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, intervals: Iterable[int], string_set: Sequence[bool]) -> list[ChordShape]:
        """
        Resolve every inversion of ``intervals`` onto ``string_set``.

        Raises:
            StringSetMismatchError: If the string set sounds a different number
                                    of strings than there are distinct intervals.
            ValueError:             If the string set does not match the tuning.
        """
        notes = self._prepare(intervals)
        shapes: list[ChordShape] = []
        for index, voiced in enumerate(get_all_inversions(notes, self.voicing)):
            positions = notes_to_chord(
                voiced,
                string_set,
                self.finger_options,
                tuning=self.tuning,
                include_muted=self.include_muted,
            )
            doable = is_chord_doable(positions)
            if self.doable_only and not doable:
                continue
            shapes.append(ChordShape(index=index, notes=voiced, positions=positions, doable=doable))
        return shapes

    def explore(self, intervals: Iterable[int]) -> Iterator[tuple[list[bool], list[ChordShape]]]:
        """Yield ``(string_set, shapes)`` for every string set that fits the intervals."""
        notes = self._prepare(intervals)
        for string_set in get_string_sets(len(notes), self.tuning):
            yield string_set, self.generate(notes, string_set)
