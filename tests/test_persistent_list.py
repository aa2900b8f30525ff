import copy
import pickle

from linkcell import PersistentList, shared_suffix


def test_prepend_tail_head_scenario():
    numbers = PersistentList().prepend(1).prepend(2).prepend(3)

    assert numbers.head() == 3
    assert numbers.tail().head() == 2
    assert numbers.tail().tail().head() == 1
    assert numbers.tail().tail().tail().head() is None


def test_tail_of_empty_list_stays_empty():
    empty = PersistentList()

    assert empty.head() is None
    assert empty.tail().tail().tail().head() is None
    assert not empty.tail()


def test_prepend_does_not_mutate_receiver():
    base = PersistentList.from_iterable([1, 2])
    grown = base.prepend(0)

    assert list(base) == [1, 2]
    assert list(grown) == [0, 1, 2]
    assert len(grown) == 3


def test_prepend_then_tail_restores_original_head():
    for base in (PersistentList(), PersistentList.from_iterable("ab")):
        assert base.prepend("x").tail().head() == base.head()


def test_diverging_views_share_their_common_suffix():
    common = PersistentList.from_iterable([3, 4, 5])
    left = common.prepend(1)
    right = common.prepend(2).prepend(9)

    assert shared_suffix(left, right) == 3
    assert shared_suffix(left, common) == 3
    assert left.tail() == right.tail().tail()
    # The common head is owned by its own view and by both prepended nodes.
    assert common.share_count() == 3


def test_share_count_follows_views():
    base = PersistentList.from_iterable([1])
    assert base.share_count() == 1

    alias = base.prepend(0).tail()
    assert base.share_count() == 2

    del alias
    assert base.share_count() == 1


def test_releasing_a_view_keeps_nodes_other_views_need():
    common = PersistentList.from_iterable([2, 3, 4])
    left = common.prepend(1)

    del common
    assert list(left) == [1, 2, 3, 4]

    keeper = left.tail()
    left.release()
    assert list(left) == []
    assert list(keeper) == [2, 3, 4]
    assert keeper.share_count() == 1


def test_releasing_the_last_view_empties_the_whole_chain(census):
    numbers = PersistentList.from_iterable([1, 2])
    assert census.live("persistent") == 2

    numbers.release()

    assert list(numbers) == []
    assert census.live("persistent") == 0
    numbers.release()


def test_release_stops_at_the_first_shared_node(census):
    common = PersistentList.from_iterable([3, 4, 5])
    left = common.prepend(2).prepend(1)
    assert census.live("persistent") == 5

    left.release()

    assert census.live("persistent") == 3
    assert list(common) == [3, 4, 5]
    assert common.share_count() == 1


def test_copies_register_as_views():
    base = PersistentList.from_iterable([1, 2, 3])

    alias = copy.copy(base)
    assert alias.share_count() == 2
    assert shared_suffix(alias, base) == 3

    del base
    assert list(alias) == [1, 2, 3]
    assert alias.share_count() == 1


def test_deep_copies_and_pickles_own_fresh_nodes():
    base = PersistentList.from_iterable([[1], [2]])

    cloned = copy.deepcopy(base)
    restored = pickle.loads(pickle.dumps(base))

    assert cloned == base
    assert restored == base
    assert shared_suffix(cloned, base) == 0
    assert cloned.head() is not base.head()
    assert base.share_count() == 1

    del base
    assert list(restored) == [[1], [2]]


def test_equality_compares_contents():
    assert PersistentList.from_iterable([1, 2]) == PersistentList.from_iterable([1, 2])
    assert PersistentList.from_iterable([1, 2]) != PersistentList.from_iterable([2, 1])
    assert PersistentList() == PersistentList()


def test_long_chain_release_is_iterative(census):
    numbers = PersistentList.from_iterable(range(200_000))
    assert numbers.head() == 0

    numbers.release()
    assert census.live("persistent") == 0

    numbers = PersistentList.from_iterable(range(200_000))
    del numbers
    assert census.live("persistent") == 0


def test_materialise_round_trips_element_order():
    numbers = PersistentList.from_iterable(["a", "b", "c"])

    table = numbers.materialise()

    assert table.tolist() == ["a", "b", "c"]
    assert table.next.tolist() == [1, 2, -1]
