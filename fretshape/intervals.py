"""Interval vocabulary: semitone classes, their names, spellings and labels."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from fretshape.models import FingerOptions

SEMITONES_PER_OCTAVE = 12


class Interval(IntEnum):
    """Semitone distance above the chord's reference pitch (0 = root)."""

    UNISON = 0
    MINOR_SECOND = 1
    MAJOR_SECOND = 2
    MINOR_THIRD = 3
    MAJOR_THIRD = 4
    PERFECT_FOURTH = 5
    TRITONE = 6
    PERFECT_FIFTH = 7
    MINOR_SIXTH = 8
    MAJOR_SIXTH = 9
    MINOR_SEVENTH = 10
    MAJOR_SEVENTH = 11


# ── Name → value aliases ────────────────────────────────────────────────────

#: Jazz extensions, each folded onto the basic interval it shares a pitch class with.
EXTENDED_INTERVALS: Final[dict[str, Interval]] = {
    "ROOT": Interval.UNISON,
    "FLAT_NINTH": Interval.MINOR_SECOND,
    "NINTH": Interval.MAJOR_SECOND,
    "SHARP_NINTH": Interval.MINOR_THIRD,
    "ELEVENTH": Interval.PERFECT_FOURTH,
    "SHARP_ELEVENTH": Interval.TRITONE,
    "FLAT_THIRTEENTH": Interval.MINOR_SIXTH,
    "THIRTEENTH": Interval.MAJOR_SIXTH,
}

#: Every known interval name mapped to its semitone value.
INTERVAL_NAMES: Final[dict[str, Interval]] = {
    **{interval.name: interval for interval in Interval},
    **EXTENDED_INTERVALS,
}

#: Degree spellings accepted by ``string_to_interval``, matched against the whole string.
INTERVAL_ALIASES: Final[list[tuple[re.Pattern[str], Interval]]] = [
    (re.compile(r"1|i", re.IGNORECASE), Interval.UNISON),
    (re.compile(r"b2|bii", re.IGNORECASE), Interval.MINOR_SECOND),
    (re.compile(r"2|ii", re.IGNORECASE), Interval.MAJOR_SECOND),
    (re.compile(r"b3|biii|#2|#ii|#9", re.IGNORECASE), Interval.MINOR_THIRD),
    (re.compile(r"3|iii", re.IGNORECASE), Interval.MAJOR_THIRD),
    (re.compile(r"4|iv", re.IGNORECASE), Interval.PERFECT_FOURTH),
    (re.compile(r"b5|#4|#iv|#11", re.IGNORECASE), Interval.TRITONE),
    (re.compile(r"5|v", re.IGNORECASE), Interval.PERFECT_FIFTH),
    (re.compile(r"b6|bvi|b13", re.IGNORECASE), Interval.MINOR_SIXTH),
    (re.compile(r"6|vi|13|bbvii|bb7", re.IGNORECASE), Interval.MAJOR_SIXTH),
    (re.compile(r"b7|bvii", re.IGNORECASE), Interval.MINOR_SEVENTH),
    (re.compile(r"7|vii", re.IGNORECASE), Interval.MAJOR_SEVENTH),
]


# ── Value → label table ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class IntervalLabel:
    """Human-readable name and default diagram markings for an interval."""

    full: str
    finger_options: FingerOptions


def _label(full: str, text: str, color: str, class_name: str) -> IntervalLabel:
    return IntervalLabel(full=full, finger_options=FingerOptions(text=text, color=color, class_name=class_name))


INTERVAL_LABELS: Final[dict[Interval, IntervalLabel]] = {
    Interval.UNISON: _label("Root", "R", "#d62728", "interval-root"),
    Interval.MINOR_SECOND: _label("Minor second", "b2", "#8c564b", "interval-second"),
    Interval.MAJOR_SECOND: _label("Major second", "2", "#8c564b", "interval-second"),
    Interval.MINOR_THIRD: _label("Minor third", "b3", "#1f77b4", "interval-third"),
    Interval.MAJOR_THIRD: _label("Major third", "3", "#1f77b4", "interval-third"),
    Interval.PERFECT_FOURTH: _label("Perfect fourth", "4", "#9467bd", "interval-fourth"),
    Interval.TRITONE: _label("Tritone", "b5", "#e377c2", "interval-tritone"),
    Interval.PERFECT_FIFTH: _label("Perfect fifth", "5", "#2ca02c", "interval-fifth"),
    Interval.MINOR_SIXTH: _label("Minor sixth", "b6", "#bcbd22", "interval-sixth"),
    Interval.MAJOR_SIXTH: _label("Major sixth", "6", "#bcbd22", "interval-sixth"),
    Interval.MINOR_SEVENTH: _label("Minor seventh", "b7", "#ff7f0e", "interval-seventh"),
    Interval.MAJOR_SEVENTH: _label("Major seventh", "7", "#ff7f0e", "interval-seventh"),
}

#: Labels for the extension names; they share colors with the interval they fold onto.
EXTENSION_LABELS: Final[dict[str, IntervalLabel]] = {
    "FLAT_NINTH": _label("Flat ninth", "b9", "#8c564b", "interval-ninth"),
    "NINTH": _label("Ninth", "9", "#8c564b", "interval-ninth"),
    "SHARP_NINTH": _label("Sharp ninth", "#9", "#1f77b4", "interval-ninth"),
    "ELEVENTH": _label("Eleventh", "11", "#9467bd", "interval-eleventh"),
    "SHARP_ELEVENTH": _label("Sharp eleventh", "#11", "#e377c2", "interval-eleventh"),
    "FLAT_THIRTEENTH": _label("Flat thirteenth", "b13", "#bcbd22", "interval-thirteenth"),
    "THIRTEENTH": _label("Thirteenth", "13", "#bcbd22", "interval-thirteenth"),
}


def string_to_interval(text: str) -> Interval | None:
    """
    Parse a scale-degree spelling such as ``"b3"``, ``"#11"`` or ``"bVII"``.

    Matching is case-insensitive and must cover the whole string, so ``"12"``
    does not match ``"1"``. Plain ``"9"`` and ``"11"`` are not degrees of a
    single octave and return None.

    Returns:
        The matching Interval, or None.
    """
    for pattern, interval in INTERVAL_ALIASES:
        if pattern.fullmatch(text):
            return interval
    return None


def parse_interval(text: str) -> Interval:
    """
    Parse an interval given as a degree spelling or a name.

    Degree spellings are tried first, so ``"3"`` is a major third. Names such
    as ``"major_third"`` or ``"sharp-eleventh"`` are matched case-insensitively.
    Digits are always degrees, never semitone counts, so ``"8"`` is rejected.

    Raises:
        ValueError: If the text is not a recognised interval.
    """
    cleaned = text.strip()
    interval = string_to_interval(cleaned)
    if interval is not None:
        return interval

    name = cleaned.upper().replace("-", "_").replace(" ", "_")
    if name in INTERVAL_NAMES:
        return INTERVAL_NAMES[name]

    raise ValueError(f"Unknown interval '{text}'.")


def invert_interval(interval: int) -> Interval:
    """Return the complementary interval, e.g. a major third inverts to a minor sixth."""
    return Interval((SEMITONES_PER_OCTAVE - interval) % SEMITONES_PER_OCTAVE)


def label_for(interval: int) -> IntervalLabel:
    """Default label for a semitone value (reduced modulo 12)."""
    return INTERVAL_LABELS[Interval(interval % SEMITONES_PER_OCTAVE)]


def label_for_name(name: str) -> IntervalLabel:
    """Label for an interval name, preferring the extension's own label."""
    key = name.upper()
    if key in EXTENSION_LABELS:
        return EXTENSION_LABELS[key]
    return INTERVAL_LABELS[INTERVAL_NAMES[key]]


# ── Finger options callbacks ────────────────────────────────────────────────

FingerOptionsFn = Callable[[int | None], FingerOptions]


@dataclass(frozen=True)
class LabelOverride:
    """
    A caller's change to how one interval is marked on the diagram.

    Attributes:
        text:    Replacement text. None keeps the default; "" clears it.
        colored: Paint the marker with the interval's default color.
    """

    text: str | None = None
    colored: bool = False


def no_finger_options(interval: int | None) -> FingerOptions:
    """Callback that attaches no display hints."""
    return FingerOptions()


def make_finger_options(overrides: Mapping[int, LabelOverride] | None = None) -> FingerOptionsFn:
    """
    Build an ``interval_to_finger_options`` callback from the default labels.

    The class tag always comes from the default label. Text comes from the
    override when one sets it, otherwise from the default. Colors are off
    unless the override turns them on. Muted strings get empty options.
    """
    resolved = dict(overrides or {})

    def interval_to_finger_options(interval: int | None) -> FingerOptions:
        if interval is None:
            return FingerOptions()
        base = label_for(interval).finger_options
        override = resolved.get(interval % SEMITONES_PER_OCTAVE, LabelOverride())
        return FingerOptions(
            text=override.text if override.text is not None else base.text,
            color=base.color if override.colored else None,
            class_name=base.class_name,
        )

    return interval_to_finger_options
