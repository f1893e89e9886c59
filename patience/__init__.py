"""Patience sort over random-access sequences and linked lists.

Exports the sort entry points and the linked list they relink.
"""

from patience.decks import ContiguousDecks, LinkedDecks, build_decks  # noqa: F401
from patience.linked import LinkedList  # noqa: F401
from patience.patience_sort import (  # noqa: F401
    patience_sorted,
    sort,
    sort_list,
    sort_range,
    sort_through_list,
)

__all__ = [
    "ContiguousDecks",
    "LinkedDecks",
    "LinkedList",
    "build_decks",
    "patience_sorted",
    "sort",
    "sort_list",
    "sort_range",
    "sort_through_list",
]
