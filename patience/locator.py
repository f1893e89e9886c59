from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, TypeVar

T = TypeVar("T")


def find_deck(
    val: T,
    tails: Sequence[T],
    less: Callable[[T, T], bool],
    lo: int = 0,
    hi: int | None = None,
) -> int:
    """Return the leftmost deck in ``[lo, hi)`` whose tail is less than ``val``.

    ``tails`` holds the trailing element of every deck and must be
    non-increasing under ``less``. When no deck qualifies the result is
    ``hi``; at the top level that is ``len(tails)`` and means a new deck.
    """
    if hi is None:
        hi = len(tails)

    if hi == lo:
        return hi

    if hi == lo + 1:
        return lo if less(tails[lo], val) else hi

    # a miss in [lo, mid) falls back to mid, which is known to qualify
    mid = lo + (hi - lo) // 2
    if less(tails[mid], val):
        return find_deck(val, tails, less, lo, mid)
    return find_deck(val, tails, less, mid, hi)
