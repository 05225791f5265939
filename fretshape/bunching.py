"""Circular bunching: pull octave-equivalent positions into the narrowest window."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

T = TypeVar("T")

DEFAULT_PERIOD = 12


@dataclass(frozen=True)
class Placement(Generic[T]):
    """An integer position carrying an opaque payload."""

    position: int
    item: T


def bunch_by_period(placements: Sequence[Placement[T]], period: int = DEFAULT_PERIOD) -> list[Placement[T]]:
    """
    Move positions by multiples of ``period`` so they sit as close together as possible.

    Algorithm
    ---------
    Points on a circle of circumference ``period`` are all covered by the arc
    that is the complement of the largest gap between neighbours. So:

    1. Reduce every position to its remainder in ``[0, period)``.
    2. Sort the remainders (stable, so equal remainders keep input order).
    3. Measure the gap before each sorted remainder, scanning the inner gaps
       first and the wrap-around gap (last back to first) last.
    4. Cut the circle at the largest gap. When several gaps tie, the first
       one in scan order wins.
    5. Remainders sorted before the cut are lifted by ``period``; the rest
       keep their remainder. The result spans ``period - largest_gap``.

    Output keeps the input order and payloads.

    Args:
        placements: Non-empty sequence of positions with payloads.
        period:     Circle circumference, 12 for pitch classes.

    Returns:
        New placements with bunched positions. A single placement is returned
        as given, without reducing its position.

    Raises:
        ValueError: If ``placements`` is empty.
    """
    count = len(placements)
    if count == 0:
        raise ValueError("Provide a non-empty list of placements.")
    if count == 1:
        return list(placements)

    remainders = np.mod(np.array([p.position for p in placements], dtype=np.int64), period)
    order = np.argsort(remainders, kind="stable")
    ordered = remainders[order]

    # gaps[j] sits just before ordered[j + 1]; the final entry is the wrap gap before ordered[0]
    gaps = np.append(np.diff(ordered), ordered[0] + period - ordered[-1])
    cut = (int(np.argmax(gaps)) + 1) % count

    lifted = ordered + np.where(np.arange(count) < cut, period, 0)
    bunched = np.empty(count, dtype=np.int64)
    bunched[order] = lifted

    return [
        Placement(position=int(position), item=placement.item)
        for position, placement in zip(bunched, placements)
    ]
