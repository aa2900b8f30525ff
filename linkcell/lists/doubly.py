from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from linkcell.core.cell import Ref, RefCell, RefMut
from linkcell.core.census import CENSUS
from linkcell.core.snapshot import (
    LinkTable,
    collect_chain,
    materialise_chain,
    validate_links,
)
from linkcell.errors import BorrowConflictError, LinkInvariantError
from linkcell.logging import get_logger

LOGGER = get_logger("lists.doubly")

T = TypeVar("T")

_KIND = "doubly"


class _Links(Generic[T]):
    __slots__ = ("elem", "next", "prev")

    def __init__(self, elem: T) -> None:
        self.elem = elem
        self.next: Optional[RefCell[_Links[T]]] = None
        self.prev: Optional[RefCell[_Links[T]]] = None


def _new_node(elem: T) -> RefCell[_Links[T]]:
    node = RefCell(_Links(elem))
    CENSUS.track(_KIND, node)
    return node


def _links_of(node: RefCell[_Links[T]]) -> _Links[T]:
    with node.borrow() as guard:
        return guard.value


class MutableDoublyLinkedList(Generic[T]):
    """Deque of shared nodes mutated through borrow-checked cells.

    Every node is a `RefCell` reachable from its neighbours and, at the ends,
    from the list's ``head``/``tail`` entries. Link adjustments take an
    exclusive borrow of each node they touch before changing anything, so a
    conflicting outstanding borrow (for example a `peek_front` guard) makes
    the operation raise `BorrowMutError` with the list left as it was.
    """

    __slots__ = ("_head", "_tail", "_length", "__weakref__")

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._head: Optional[RefCell[_Links[T]]] = None
        self._tail: Optional[RefCell[_Links[T]]] = None
        self._length = 0
        for value in values:
            self.push_back(value)

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        elems = []
        node = self._head
        while node is not None:
            guard = node.try_borrow()
            if guard is None:
                return "MutableDoublyLinkedList(<borrowed>)"
            with guard:
                elems.append(guard.value.elem)
                node = guard.value.next
        return f"MutableDoublyLinkedList({elems!r})"

    def push_front(self, elem: T) -> None:
        new_head = _new_node(elem)
        old_head = self._head
        if old_head is None:
            self._tail = new_head
        else:
            with old_head.borrow_mut() as old_guard, new_head.borrow_mut() as new_guard:
                old_guard.value.prev = new_head
                new_guard.value.next = old_head
        self._head = new_head
        self._length += 1

    def push_back(self, elem: T) -> None:
        new_tail = _new_node(elem)
        old_tail = self._tail
        if old_tail is None:
            self._head = new_tail
        else:
            with old_tail.borrow_mut() as old_guard, new_tail.borrow_mut() as new_guard:
                old_guard.value.next = new_tail
                new_guard.value.prev = old_tail
        self._tail = new_tail
        self._length += 1

    def pop_front(self) -> Optional[T]:
        old_head = self._head
        if old_head is None:
            return None
        with old_head.borrow_mut() as old_guard:
            links = old_guard.value
            new_head = links.next
            if new_head is None:
                self._tail = None
            else:
                with new_head.borrow_mut() as new_guard:
                    new_guard.value.prev = None
                    links.next = None
            self._head = new_head
            self._length -= 1
            return links.elem

    def pop_back(self) -> Optional[T]:
        old_tail = self._tail
        if old_tail is None:
            return None
        with old_tail.borrow_mut() as old_guard:
            links = old_guard.value
            new_tail = links.prev
            if new_tail is None:
                self._head = None
            else:
                with new_tail.borrow_mut() as new_guard:
                    new_guard.value.next = None
                    links.prev = None
            self._tail = new_tail
            self._length -= 1
            return links.elem

    def peek_front(self) -> Optional[Ref[T]]:
        if self._head is None:
            return None
        return self._head.borrow().project("elem")

    def peek_back(self) -> Optional[Ref[T]]:
        if self._tail is None:
            return None
        return self._tail.borrow().project("elem")

    def peek_front_mut(self) -> Optional[RefMut[T]]:
        if self._head is None:
            return None
        return self._head.borrow_mut().project("elem")

    def peek_back_mut(self) -> Optional[RefMut[T]]:
        if self._tail is None:
            return None
        return self._tail.borrow_mut().project("elem")

    def into_iter(self) -> "IntoIter[T]":
        """Move every node into a draining iterator, leaving this list empty."""

        drained: MutableDoublyLinkedList[T] = type(self)()
        drained._head, drained._tail, drained._length = self._head, self._tail, self._length
        self._head = self._tail = None
        self._length = 0
        return IntoIter(drained)

    def clear(self) -> None:
        while self._head is not None:
            self.pop_front()

    def values(self) -> List[T]:
        return self.materialise().tolist()

    def materialise(self) -> LinkTable:
        nodes = collect_chain(self._head, lambda node: _links_of(node).next)
        return materialise_chain(
            nodes,
            value_of=lambda node: _links_of(node).elem,
            next_of=lambda node: _links_of(node).next,
            prev_of=lambda node: _links_of(node).prev,
        )

    def validate(self) -> None:
        """Raise `LinkInvariantError` if links or entry references disagree."""

        if (self._head is None) != (self._tail is None):
            raise LinkInvariantError("head and tail must both be set or both be empty")
        table = self.materialise()
        validate_links(table)
        if table.size != self._length:
            raise LinkInvariantError(
                f"chain holds {table.size} node(s) but length is {self._length}"
            )
        if self._tail is not None:
            if _links_of(self._tail).next is not None:
                raise LinkInvariantError("tail has a forward link")
            if collect_chain(self._head, lambda node: _links_of(node).next)[-1] is not self._tail:
                raise LinkInvariantError("tail entry is not the last node in the chain")

    def __del__(self) -> None:
        if getattr(self, "_head", None) is None:
            return
        try:
            self.clear()
        except BorrowConflictError:
            LOGGER.warning(
                "Dropping list with an outstanding borrow; %d node(s) left to the cycle collector.",
                self._length,
            )


class IntoIter(Generic[T]):
    """Draining iterator: ``next`` pops the front, `next_back` pops the back."""

    __slots__ = ("_source",)

    def __init__(self, source: MutableDoublyLinkedList[T]) -> None:
        self._source = source

    def __iter__(self) -> "IntoIter[T]":
        return self

    def __next__(self) -> T:
        if not self._source:
            raise StopIteration
        return self._source.pop_front()

    def next_back(self) -> Optional[T]:
        return self._source.pop_back()

    def __reversed__(self) -> Iterator[T]:
        while self._source:
            yield self._source.pop_back()

    def __len__(self) -> int:
        return len(self._source)


__all__ = ["MutableDoublyLinkedList", "IntoIter"]
