from __future__ import annotations

from collections import deque

from hypothesis import given, settings, strategies as st

from linkcell import ExclusiveList, MutableDoublyLinkedList, PersistentList, shared_suffix
from tests.utils import apply_deque_operation, deque_operations, stack_operations

_value_lists = st.lists(st.integers(min_value=-100, max_value=100), max_size=30)


@settings(max_examples=100)
@given(operations=deque_operations)
def test_deque_matches_reference_model(operations) -> None:
    subject = MutableDoublyLinkedList()
    model: deque = deque()
    for operation in operations:
        actual, expected = apply_deque_operation(subject, model, operation)
        assert actual == expected
        subject.validate()
        front = subject.peek_front()
        if model:
            assert front is not None and front.value == model[0]
            front.release()
        else:
            assert front is None
    assert subject.values() == list(model)
    assert len(subject) == len(model)


@settings(max_examples=100)
@given(operations=stack_operations)
def test_stack_pops_in_reverse_push_order(operations) -> None:
    subject = ExclusiveList()
    model: list = []
    for name, value in operations:
        if name == "push":
            subject.push(value)
            model.append(value)
        else:
            assert subject.pop() == (model.pop() if model else None)
    assert list(subject) == model[::-1]
    assert subject.materialise().tolist() == model[::-1]


@settings(max_examples=50)
@given(values=_value_lists, extra=st.integers())
def test_prepend_then_tail_restores_head(values, extra) -> None:
    base = PersistentList.from_iterable(values)
    derived = base.prepend(extra)

    assert derived.tail().head() == base.head()
    assert list(base) == values
    assert list(derived) == [extra, *values]


@settings(max_examples=50)
@given(common=_value_lists, left=_value_lists, right=_value_lists)
def test_diverging_views_share_exactly_the_common_suffix(common, left, right) -> None:
    base = PersistentList.from_iterable(common)
    left_view, right_view = base, base
    for value in left:
        left_view = left_view.prepend(value)
    for value in right:
        right_view = right_view.prepend(value)

    assert shared_suffix(left_view, right_view) == len(common)
    del base
    assert list(left_view) == [*reversed(left), *common]
    assert list(right_view) == [*reversed(right), *common]
