from __future__ import annotations

import logging
import operator
from collections.abc import Iterable, MutableSequence
from typing import Callable, TypeVar

from patience.decks import ContiguousDecks, DeckCollection, LinkedDecks
from patience.linked import LinkedList

T = TypeVar("T")

Less = Callable[[T, T], bool]

logger = logging.getLogger("patience")


def _make_less(less: Less | None, reverse: bool) -> Less:
    if less is None:
        less = operator.lt

    if reverse:
        forward = less

        def less(x, y):
            return forward(y, x)

    return less


def _on_keys(less: Less) -> Less:
    # items are (key, value) pairs; values never take part in comparisons
    def pair_less(x, y):
        return less(x[0], y[0])

    return pair_less


def _check_range(seq: MutableSequence[T], lo: int, hi: int | None) -> int:
    n = len(seq)
    if hi is None:
        hi = n
    if not 0 <= lo <= hi <= n:
        raise ValueError(f"invalid range [{lo}, {hi}) for sequence of length {n}")
    return hi


def _build_and_deliver(
    storage: type[DeckCollection],
    seq: MutableSequence[T],
    lo: int,
    hi: int,
    less: Less,
) -> None:
    decks = storage(less)
    for i in range(lo, hi):
        decks.add(seq[i])
    logger.debug("%s: %d items in %d decks", storage.__name__, hi - lo, len(decks))

    decks.produce_output(seq, lo)


def _sort_range_with(
    storage: type[DeckCollection],
    seq: MutableSequence[T],
    lo: int,
    hi: int | None,
    less: Less,
    key: Callable[[T], object] | None,
) -> None:
    hi = _check_range(seq, lo, hi)
    if hi - lo <= 1:
        return

    if key is None:
        _build_and_deliver(storage, seq, lo, hi, less)
        return

    # key is called once per item, as list.sort does
    pairs = [(key(seq[i]), seq[i]) for i in range(lo, hi)]
    _build_and_deliver(storage, pairs, 0, len(pairs), _on_keys(less))
    for i, (_, value) in enumerate(pairs, lo):
        seq[i] = value


def sort_range(
    seq: MutableSequence[T],
    lo: int = 0,
    hi: int | None = None,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """Sort ``seq[lo:hi]`` in place, merging decks inside ``seq`` itself."""
    _sort_range_with(ContiguousDecks, seq, lo, hi, _make_less(less, reverse), key)


def sort_through_list(
    seq: MutableSequence[T],
    lo: int = 0,
    hi: int | None = None,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """Like :func:`sort_range`, but the decks are linked runs merged by splicing."""
    _sort_range_with(LinkedDecks, seq, lo, hi, _make_less(less, reverse), key)


def _relink(lst: LinkedList[T], less: Less) -> None:
    decks = LinkedDecks(less)
    n = len(lst)
    try:
        while lst:
            decks.add_node(lst)
        logger.debug("LinkedList: %d items in %d decks", n, len(decks))

        decks.produce_list(lst)
    finally:
        # no-op after a successful merge; otherwise hands the nodes back
        decks.release_into(lst)


def sort_list(
    lst: LinkedList[T],
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """Sort a LinkedList by relinking its nodes; no value is copied.

    If ``less`` or ``key`` raises, ``lst`` still holds all of its items,
    in an unspecified order.
    """
    if not isinstance(lst, LinkedList):
        raise TypeError(f"sort_list() expects a LinkedList, got {type(lst).__name__}")

    less = _make_less(less, reverse)
    if key is None:
        _relink(lst, less)
        return

    nodes = list(lst.iter_nodes())
    keys = [key(node.value) for node in nodes]
    for node, k in zip(nodes, keys):
        node.value = (k, node.value)
    try:
        _relink(lst, _on_keys(less))
    finally:
        for node in nodes:
            node.value = node.value[1]


def sort(
    seq,
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> None:
    """Patience sort ``seq`` in place.

    ``seq`` is any mutable sequence or a :class:`LinkedList`. ``less`` is a
    strict weak order (``operator.lt`` by default); ``key`` and ``reverse``
    behave as in ``list.sort`` but the result is not guaranteed stable.
    """
    if isinstance(seq, LinkedList):
        sort_list(seq, less, key=key, reverse=reverse)
    else:
        sort_range(seq, 0, None, less, key=key, reverse=reverse)


def patience_sorted(
    iterable: Iterable[T],
    less: Less | None = None,
    *,
    key: Callable[[T], object] | None = None,
    reverse: bool = False,
) -> list[T]:
    result = list(iterable)
    sort_range(result, 0, None, less, key=key, reverse=reverse)
    return result
