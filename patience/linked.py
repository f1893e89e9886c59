from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Node(Generic[T]):
    __slots__ = ("value", "prev", "next")

    def __init__(self, value: T) -> None:
        self.value = value
        self.prev: Node[T] = self
        self.next: Node[T] = self


class LinkedList(Generic[T]):
    """Doubly-linked list with a sentinel node.

    Nodes move between lists with :meth:`splice` and :meth:`merge`; values are
    never copied or re-created on the way.
    """

    def __init__(self, iterable: Iterable[T] = ()) -> None:
        self._head: Node = Node(None)
        self._size = 0
        self.extend(iterable)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        node = self._head.next
        while node is not self._head:
            yield node.value
            node = node.next

    def __reversed__(self) -> Iterator[T]:
        node = self._head.prev
        while node is not self._head:
            yield node.value
            node = node.prev

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkedList):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"

    @property
    def first_node(self) -> Node[T]:
        if not self._size:
            raise IndexError("first of empty LinkedList")
        return self._head.next

    @property
    def first(self) -> T:
        return self.first_node.value

    @property
    def last(self) -> T:
        if not self._size:
            raise IndexError("last of empty LinkedList")
        return self._head.prev.value

    def append(self, value: T) -> None:
        self._link_before(self._head, Node(value))
        self._size += 1

    def appendleft(self, value: T) -> None:
        self._link_before(self._head.next, Node(value))
        self._size += 1

    def extend(self, iterable: Iterable[T]) -> None:
        for value in iterable:
            self.append(value)

    def popleft(self) -> T:
        node = self.first_node
        self._unlink(node)
        self._size -= 1
        return node.value

    def pop(self) -> T:
        if not self._size:
            raise IndexError("pop from empty LinkedList")
        node = self._head.prev
        self._unlink(node)
        self._size -= 1
        return node.value

    def clear(self) -> None:
        self._head.next = self._head.prev = self._head
        self._size = 0

    def splice(self, other: LinkedList[T], node: Node[T] | None = None) -> None:
        """Move ``node`` (or all of ``other``) from ``other`` to the end of self."""
        if node is not None:
            other._unlink(node)
            other._size -= 1
            self._link_before(self._head, node)
            self._size += 1
            return

        if other is self or not other:
            return
        first, last = other._head.next, other._head.prev
        self._link_chain(first, last)
        self._size += other._size
        other.clear()

    def merge(self, other: LinkedList[T], less: Callable[[T, T], bool] = operator.lt) -> None:
        """Merge the sorted ``other`` into this sorted list, emptying ``other``.

        Equal elements keep self's ones first. If ``less`` raises, both lists
        stay well formed and together still hold every node.
        """
        if other is self or not other:
            return

        cur = self._head.next
        node = other._head.next
        moved = 0
        try:
            while node is not other._head and cur is not self._head:
                if less(node.value, cur.value):
                    nxt = node.next
                    self._link_before(cur, node)
                    moved += 1
                    node = nxt
                else:
                    cur = cur.next
        finally:
            # whatever was not moved stays chained to other's sentinel
            if node is other._head:
                other.clear()
            else:
                other._head.next = node
                node.prev = other._head
                other._size -= moved
            self._size += moved

        # the rest of other goes after everything in self
        self.splice(other)

    def iter_nodes(self) -> Iterator[Node[T]]:
        node = self._head.next
        while node is not self._head:
            nxt = node.next
            yield node
            node = nxt

    def _link_chain(self, first: Node[T], last: Node[T]) -> None:
        tail = self._head.prev
        tail.next = first
        first.prev = tail
        last.next = self._head
        self._head.prev = last

    @staticmethod
    def _link_before(pos: Node[T], node: Node[T]) -> None:
        prev = pos.prev
        prev.next = node
        node.prev = prev
        node.next = pos
        pos.prev = node

    @staticmethod
    def _unlink(node: Node[T]) -> None:
        node.prev.next = node.next
        node.next.prev = node.prev
        node.prev = node.next = node
