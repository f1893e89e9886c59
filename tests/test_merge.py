import operator

import pytest

from patience.linked import LinkedList
from patience.merge import inplace_merge, merge_linked, merge_runs, rotate


@pytest.mark.parametrize(
    "mid, expected",
    [
        (0, [1, 2, 3, 4, 5]),
        (2, [3, 4, 5, 1, 2]),
        (4, [5, 1, 2, 3, 4]),
        (5, [1, 2, 3, 4, 5]),
    ],
)
def test_rotate(mid: int, expected: list[int]) -> None:
    a = [1, 2, 3, 4, 5]
    rotate(a, 0, mid, 5)
    assert a == expected


def test_rotate_subrange() -> None:
    a = [0, 1, 2, 3, 4, 5]
    rotate(a, 1, 2, 5)
    assert a == [0, 2, 3, 4, 1, 5]


@pytest.mark.parametrize(
    "left, right",
    [
        ([1], [0]),
        ([5], [1, 2, 3, 6]),
        ([1, 2, 4, 7], [3]),
        ([1, 3, 5, 7], [2, 4, 6, 8, 10]),
        ([10, 11, 12], [1, 2, 3]),
        ([1, 1, 2, 2], [1, 2, 2, 3]),
        (list(range(0, 40, 3)), list(range(1, 30, 2))),
    ],
)
def test_inplace_merge(left: list[int], right: list[int]) -> None:
    a = [-1] + left + right + [99]
    inplace_merge(a, 1, 1 + len(left), 1 + len(left) + len(right), operator.lt)
    assert a == [-1] + sorted(left + right) + [99]


def test_inplace_merge_is_stable() -> None:
    left = [(1, "l"), (3, "l"), (3, "l2"), (5, "l")]
    right = [(1, "r"), (3, "r"), (4, "r"), (5, "r")]
    a = left + right
    inplace_merge(a, 0, 4, 8, lambda x, y: x[0] < y[0])
    assert a == sorted(left + right, key=lambda p: p[0])


def test_inplace_merge_empty_sides() -> None:
    a = [3, 1, 2]
    inplace_merge(a, 0, 0, 3, operator.lt)
    inplace_merge(a, 0, 3, 3, operator.lt)
    assert a == [3, 1, 2]


def test_inplace_merge_random(rng) -> None:
    for _ in range(100):
        left = sorted(rng.randint(0, 20) for _ in range(rng.randint(1, 30)))
        right = sorted(rng.randint(0, 20) for _ in range(rng.randint(1, 30)))
        a = left + right
        inplace_merge(a, 0, len(left), len(a), operator.lt)
        assert a == sorted(left + right)


def test_merge_runs_empty_and_single() -> None:
    assert merge_runs([], lambda a, b: a + b) is None
    assert merge_runs(["x"], lambda a, b: a + b) == "x"


def test_merge_runs_pairs_from_the_right() -> None:
    calls = []

    def merge_pair(a, b):
        calls.append((a, b))
        return a + b

    assert merge_runs(["a", "b", "c", "d", "e"], merge_pair) == "abcde"
    assert calls == [("d", "e"), ("b", "c"), ("bc", "de"), ("a", "bcde")]


def test_merge_runs_round_count_is_logarithmic() -> None:
    depth = {}

    def merge_pair(a, b):
        d = max(depth.get(a, 0), depth.get(b, 0)) + 1
        merged = a + b
        depth[merged] = d
        return merged

    runs = [chr(ord("a") + i) for i in range(16)]
    result = merge_runs(runs, merge_pair)
    assert result == "abcdefghijklmnop"
    assert depth[result] == 4


def test_merge_linked() -> None:
    left = LinkedList([2, 4, 6])
    right = LinkedList([1, 3, 5, 7])
    merged = merge_linked(left, right, operator.lt)
    assert merged is left
    assert list(merged) == [1, 2, 3, 4, 5, 6, 7]
    assert not right
