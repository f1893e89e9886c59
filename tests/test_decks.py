import operator

from patience.decks import ContiguousDecks, LinkedDecks, build_decks
from patience.linked import LinkedList

EXAMPLE = [1, 5, 1, 5, 12, 4, 104, 15, 2, 8]
EXAMPLE_DECKS = [[1, 5, 12, 104], [1, 5, 15], [4, 8], [2]]


def _tails_non_increasing(decks) -> bool:
    tails = decks.tails
    return all(not decks.less(tails[i], tails[i + 1]) for i in range(len(tails) - 1))


def test_example_deck_formation() -> None:
    decks = build_decks(EXAMPLE)
    assert decks.decks == EXAMPLE_DECKS
    assert decks.tails == [104, 15, 8, 2]
    assert len(decks) == 4


def test_linked_deck_formation_matches() -> None:
    decks = build_decks(EXAMPLE, storage=LinkedDecks)
    assert [list(d) for d in decks.decks] == EXAMPLE_DECKS
    assert all(isinstance(d, LinkedList) for d in decks.decks)


def test_empty_input_allocates_nothing() -> None:
    decks = build_decks([])
    assert len(decks) == 0
    out = []
    decks.produce_output(out)
    assert out == []


def test_sorted_input_makes_one_deck() -> None:
    assert len(build_decks(range(50))) == 1
    assert len(build_decks([7])) == 1


def test_descending_input_makes_one_deck_per_item() -> None:
    decks = build_decks(range(30, 0, -1))
    assert len(decks) == 30
    assert all(len(d) == 1 for d in decks.decks)


def test_duplicates_start_new_decks() -> None:
    decks = build_decks([3, 3, 3])
    assert decks.decks == [[3], [3], [3]]


def test_invariants_hold_during_build(rng) -> None:
    decks = ContiguousDecks()
    for _ in range(500):
        decks.add(rng.randint(0, 100))
        assert _tails_non_increasing(decks)
    for deck in decks.decks:
        assert all(deck[i] < deck[i + 1] for i in range(len(deck) - 1))
    assert [d[-1] for d in decks.decks] == decks.tails


def test_custom_order_builds_descending_decks() -> None:
    decks = build_decks([5, 3, 4, 1], operator.gt)
    assert decks.decks == [[5, 3, 1], [4]]


def test_contiguous_output_writes_from_offset() -> None:
    decks = build_decks(EXAMPLE)
    out = ["x"] * 3 + [None] * len(EXAMPLE)
    decks.produce_output(out, 3)
    assert out == ["x"] * 3 + sorted(EXAMPLE)
    assert len(decks) == 0


def test_linked_output_to_sequence_and_list() -> None:
    decks = build_decks(EXAMPLE, storage=LinkedDecks)
    out = [None] * len(EXAMPLE)
    decks.produce_output(out)
    assert out == sorted(EXAMPLE)

    decks = build_decks(EXAMPLE, storage=LinkedDecks)
    dest = LinkedList()
    decks.produce_list(dest)
    assert list(dest) == sorted(EXAMPLE)
    assert len(dest) == len(EXAMPLE)


def test_add_node_moves_nodes_out_of_source() -> None:
    values = [object() for _ in range(3)]
    order = {id(v): i for i, v in enumerate(values)}
    source = LinkedList(values)
    decks = LinkedDecks(lambda a, b: order[id(a)] < order[id(b)])
    while source:
        decks.add_node(source)
    assert len(source) == 0
    assert len(decks) == 1
    assert all(a is b for a, b in zip(decks.decks[0], values))
