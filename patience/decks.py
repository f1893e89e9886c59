"""Deck collections: building decks from input and delivering the merged result.

A collection keeps the decks themselves plus the list of their trailing
elements, which stays non-increasing left to right so that the locator can
binary search it.

    ContiguousDecks -- decks are Python lists, merged in place in the
                       destination sequence.
    LinkedDecks     -- decks are LinkedList runs, merged by splicing nodes.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, MutableSequence
from typing import Callable, Generic, TypeVar

from patience.linked import LinkedList
from patience.locator import find_deck
from patience.merge import inplace_merge, merge_linked, merge_runs

T = TypeVar("T")


class DeckCollection(Generic[T]):
    """Ordered decks whose tails decrease from left to right."""

    def __init__(self, less: Callable[[T, T], bool] | None = None) -> None:
        self.less = less if less is not None else operator.lt
        self.decks: list = []
        self.tails: list[T] = []

    def __len__(self) -> int:
        return len(self.decks)

    def _locate(self, value: T) -> int:
        """Index of the deck that takes ``value``, allocating one if needed."""
        idx = find_deck(value, self.tails, self.less)
        if idx == len(self.decks):
            self.decks.append(self._new_deck())
            self.tails.append(value)
        else:
            self.tails[idx] = value
        return idx

    def _new_deck(self):
        raise NotImplementedError

    def add(self, value: T) -> None:
        self.decks[self._locate(value)].append(value)


class ContiguousDecks(DeckCollection[T]):
    def _new_deck(self) -> list[T]:
        return []

    def produce_output(self, a: MutableSequence[T], lo: int = 0) -> None:
        """Lay the decks out from ``a[lo]`` on and merge them in place."""
        ranges: list[tuple[int, int]] = []
        pos = lo
        for deck in self.decks:
            for value in deck:
                a[pos] = value
                pos += 1
            ranges.append((pos - len(deck), pos))
        self.decks, self.tails = [], []

        def merge_pair(left, right):
            inplace_merge(a, left[0], left[1], right[1], self.less)
            return left[0], right[1]

        merge_runs(ranges, merge_pair)


class LinkedDecks(DeckCollection[T]):
    def _new_deck(self) -> LinkedList[T]:
        return LinkedList()

    def add_node(self, source: LinkedList[T]) -> None:
        """Move the first node of ``source`` onto the tail of its deck."""
        node = source.first_node
        self.decks[self._locate(node.value)].splice(source, node)

    def _merged(self) -> LinkedList[T]:
        # merged runs are always decks from self.decks, so a failed merge
        # leaves every node in some deck
        result = merge_runs(list(self.decks), lambda left, right: merge_linked(left, right, self.less))
        self.decks, self.tails = [], []
        return result if result is not None else LinkedList()

    def produce_output(self, a: MutableSequence[T], lo: int = 0) -> None:
        for pos, value in enumerate(self._merged(), lo):
            a[pos] = value

    def produce_list(self, dest: LinkedList[T]) -> None:
        """Splice the merged run into ``dest``, which must be empty."""
        dest.splice(self._merged())

    def release_into(self, dest: LinkedList[T]) -> None:
        """Give every node held by the decks back to ``dest``, in no set order."""
        for deck in self.decks:
            dest.splice(deck)
        self.decks, self.tails = [], []


def build_decks(
    values: Iterable[T],
    less: Callable[[T, T], bool] | None = None,
    storage: type[DeckCollection] = ContiguousDecks,
) -> DeckCollection[T]:
    decks = storage(less)
    for value in values:
        decks.add(value)
    return decks
