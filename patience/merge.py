from __future__ import annotations

import logging
from collections.abc import MutableSequence
from typing import Callable, TypeVar

from patience.linked import LinkedList

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger("patience")


def merge_runs(runs: list[R], merge_pair: Callable[[R, R], R]) -> R | None:
    """Reduce ``runs`` to one with a balanced pairwise schedule.

    Every round pairs neighbours starting from the right end; with an odd
    count the leftmost run waits for the next round. ``runs`` is consumed.
    """
    if not runs:
        return None

    rounds = 0
    while len(runs) > 1:
        merged: list[R] = []
        i = len(runs) - 1
        while i > 0:
            merged.append(merge_pair(runs[i - 1], runs[i]))
            i -= 2
        if i == 0:
            merged.append(runs[0])
        merged.reverse()
        runs = merged
        rounds += 1

    logger.debug("merge finished after %d rounds", rounds)
    return runs[0]


def _reverse(a: MutableSequence[T], lo: int, hi: int) -> None:
    hi -= 1
    while lo < hi:
        a[lo], a[hi] = a[hi], a[lo]
        lo += 1
        hi -= 1


def rotate(a: MutableSequence[T], lo: int, mid: int, hi: int) -> None:
    """Swap the blocks ``a[lo:mid]`` and ``a[mid:hi]`` in place."""
    if lo == mid or mid == hi:
        return
    _reverse(a, lo, mid)
    _reverse(a, mid, hi)
    _reverse(a, lo, hi)


def _insert_left(a, lo, mid, hi, less):
    # a[lo] is a single element going into the sorted a[mid:hi]
    i, j = mid, hi
    x = a[lo]
    while i < j:
        h = (i + j) // 2
        if less(a[h], x):
            i = h + 1
        else:
            j = h
    for k in range(lo, i - 1):
        a[k] = a[k + 1]
    a[i - 1] = x


def _insert_right(a, lo, mid, hi, less):
    # a[mid] is a single element going into the sorted a[lo:mid]
    i, j = lo, mid
    x = a[mid]
    while i < j:
        h = (i + j) // 2
        if not less(x, a[h]):
            i = h + 1
        else:
            j = h
    for k in range(mid, i, -1):
        a[k] = a[k - 1]
    a[i] = x


def _symmerge(a, lo, mid, hi, less):
    if mid - lo == 1:
        _insert_left(a, lo, mid, hi, less)
        return
    if hi - mid == 1:
        _insert_right(a, lo, mid, hi, less)
        return

    half = (lo + hi) // 2
    n = half + mid
    if mid > half:
        start, r = n - hi, half
    else:
        start, r = lo, mid
    p = n - 1
    while start < r:
        c = (start + r) // 2
        if not less(a[p - c], a[c]):
            start = c + 1
        else:
            r = c
    end = n - start

    if start < mid < end:
        rotate(a, start, mid, end)
    if lo < start < half:
        _symmerge(a, lo, start, half, less)
    if half < end < hi:
        _symmerge(a, half, end, hi, less)


def inplace_merge(
    a: MutableSequence[T],
    lo: int,
    mid: int,
    hi: int,
    less: Callable[[T, T], bool],
) -> None:
    """Stable merge of the sorted slices ``a[lo:mid]`` and ``a[mid:hi]``.

    Uses rotations instead of a buffer, so the extra storage is constant
    apart from the O(log n) recursion.
    """
    if lo >= mid or mid >= hi:
        return
    if not less(a[mid], a[mid - 1]):
        return
    _symmerge(a, lo, mid, hi, less)


def merge_linked(
    left: LinkedList[T],
    right: LinkedList[T],
    less: Callable[[T, T], bool],
) -> LinkedList[T]:
    left.merge(right, less)
    return left
