"""Data models for resolved chord shapes."""

from dataclasses import dataclass
from typing import Final, Union

#: Fret marker for a string that is not played.
MUTED: Final[str] = "x"

#: Fret number of an open (unfretted) string.
OPEN: Final[int] = 0

Fret = Union[int, str]


@dataclass(frozen=True)
class FingerOptions:
    """Display hints attached to one finger position.

    The engine never reads these; they are passed through untouched to
    whatever draws the chord diagram.
    """

    text: str | None = None
    color: str | None = None
    class_name: str | None = None


@dataclass(frozen=True)
class FingerPosition:
    """
    One string of a resolved chord shape.

    Attributes:
        string:  String number, 1 = highest-pitched string.
        fret:    Fret number, or ``MUTED`` for a string that is not sounded.
        options: Display hints for the note on this string.
    """

    string: int
    fret: Fret
    options: FingerOptions | None = None

    @property
    def is_muted(self) -> bool:
        return self.fret == MUTED

    @property
    def is_numeric(self) -> bool:
        """True when the fret is a number (open or fretted), not a marker."""
        return isinstance(self.fret, int) and not isinstance(self.fret, bool)

    @property
    def is_fretted(self) -> bool:
        """True for a numeric fret other than an open string."""
        return self.is_numeric and self.fret != OPEN


Chord = list[FingerPosition]
