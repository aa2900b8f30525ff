from __future__ import annotations

import copy
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from linkcell.core.census import CENSUS
from linkcell.core.snapshot import LinkTable, collect_chain, materialise_chain

T = TypeVar("T")

_KIND = "persistent"


class _Node(Generic[T]):
    __slots__ = ("value", "next", "shares", "__weakref__")

    def __init__(self, value: T, next_node: Optional["_Node[T]"]) -> None:
        self.value = value
        self.next = next_node
        # Owners: list views whose head this is, plus the predecessor node(s).
        self.shares = 0
        if next_node is not None:
            next_node.shares += 1


class PersistentList(Generic[T]):
    """Immutable singly-linked list whose views share common suffixes.

    ``prepend`` and ``tail`` are O(1) and never copy or mutate existing
    nodes. Dropping a view releases its head and keeps walking down the
    chain only while nodes lose their last owner.
    """

    __slots__ = ("_head", "__weakref__")

    def __init__(self) -> None:
        self._head: Optional[_Node[T]] = None

    @classmethod
    def _from_head(cls, head: Optional[_Node[T]]) -> "PersistentList[T]":
        view = cls.__new__(cls)
        view._head = head
        if head is not None:
            head.shares += 1
        return view

    @classmethod
    def from_iterable(cls, values: Iterable[T]) -> "PersistentList[T]":
        """Build a list whose iteration order matches ``values``."""

        view: PersistentList[T] = cls()
        for value in reversed(list(values)):
            view = view.prepend(value)
        return view

    def prepend(self, value: T) -> "PersistentList[T]":
        node = _Node(value, self._head)
        CENSUS.track(_KIND, node)
        return self._from_head(node)

    def tail(self) -> "PersistentList[T]":
        if self._head is None:
            return type(self)()
        return self._from_head(self._head.next)

    def head(self) -> Optional[T]:
        if self._head is None:
            return None
        return self._head.value

    def share_count(self) -> int:
        """Number of owners of this view's head node, 0 when empty."""

        return 0 if self._head is None else self._head.shares

    def iter(self) -> Iterator[T]:
        node = self._head
        while node is not None:
            yield node.value
            node = node.next

    __iter__ = iter

    def __len__(self) -> int:
        return sum(1 for _ in self.iter())

    def __bool__(self) -> bool:
        return self._head is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentList):
            return NotImplemented
        if self._head is other._head:
            return True
        return list(self.iter()) == list(other.iter())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PersistentList({list(self.iter())!r})"

    def materialise(self) -> LinkTable:
        nodes = collect_chain(self._head, lambda node: node.next)
        return materialise_chain(
            nodes, value_of=lambda node: node.value, next_of=lambda node: node.next
        )

    def release(self) -> None:
        """Drop this view's claim on its chain; the view becomes empty."""

        node, self._head = self._head, None
        while node is not None:
            node.shares -= 1
            if node.shares > 0:
                break
            successor = node.next
            node.next = None
            node = successor

    def __copy__(self) -> "PersistentList[T]":
        return self._from_head(self._head)

    def __deepcopy__(self, memo: dict) -> "PersistentList[T]":
        return self.from_iterable(copy.deepcopy(list(self.iter()), memo))

    def __reduce__(self):
        # Pickled as plain values; the copy starts with fresh, unshared nodes.
        return (type(self).from_iterable, (list(self.iter()),))

    def __del__(self) -> None:
        if getattr(self, "_head", None) is not None:
            self.release()


def shared_suffix(first: PersistentList[T], second: PersistentList[T]) -> int:
    """Count the trailing nodes two views share by identity."""

    ids_first = [id(node) for node in collect_chain(first._head, lambda node: node.next)]
    ids_second = [id(node) for node in collect_chain(second._head, lambda node: node.next)]
    shared = 0
    for left, right in zip(reversed(ids_first), reversed(ids_second)):
        if left != right:
            break
        shared += 1
    return shared


__all__ = ["PersistentList", "shared_suffix"]
