from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, TypeVar

from linkcell.core.cell import BorrowFlag
from linkcell.core.census import CENSUS
from linkcell.core.snapshot import LinkTable, collect_chain, materialise_chain
from linkcell.errors import BorrowConflictError

T = TypeVar("T")

_KIND = "exclusive"


class _Node(Generic[T]):
    __slots__ = ("value", "next", "__weakref__")

    def __init__(self, value: T, next_node: Optional["_Node[T]"]) -> None:
        self.value = value
        self.next = next_node


class ValueSlot(Generic[T]):
    """Read/write view onto one element stored in an `ExclusiveList`.

    A slot handed out by ``peek_mut`` owns an exclusive borrow of the list
    until ``release()``, the end of a ``with`` block, or collection. Slots
    yielded by ``iter_mut`` ride on the iterator's borrow instead.
    """

    __slots__ = ("_node", "_flag", "_active")

    def __init__(self, node: _Node[T], flag: Optional[BorrowFlag] = None) -> None:
        if flag is not None:
            flag.acquire_exclusive()
        self._node = node
        self._flag = flag
        self._active = True

    def _target(self) -> _Node[T]:
        if not self._active:
            raise BorrowConflictError("ValueSlot used after release")
        return self._node

    @property
    def active(self) -> bool:
        return self._active

    @property
    def value(self) -> T:
        return self._target().value

    @value.setter
    def value(self, new_value: T) -> None:
        self._target().value = new_value

    def release(self) -> None:
        if self._active:
            self._active = False
            if self._flag is not None:
                self._flag.release_exclusive()

    def __enter__(self) -> "ValueSlot[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        if getattr(self, "_active", False):
            self.release()

    def __repr__(self) -> str:
        if not self._active:
            return "ValueSlot(<released>)"
        return f"ValueSlot({self._node.value!r})"


class ExclusiveList(Generic[T]):
    """Stack of singly-linked nodes, each owned solely by its predecessor.

    ``pop``/``peek`` return ``None`` on an empty list. ``iter()`` holds a
    shared borrow of the list and ``iter_mut()`` an exclusive one for as long
    as the generator is alive; structural changes while either is open raise
    `BorrowMutError`.
    """

    __slots__ = ("_head", "_length", "_flag", "__weakref__")

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._head: Optional[_Node[T]] = None
        self._length = 0
        self._flag = BorrowFlag()
        for value in values:
            self.push(value)

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        if self._flag.is_exclusive:
            return "ExclusiveList(<borrowed>)"
        return f"ExclusiveList({list(self.iter())!r})"

    def _check_writable(self) -> None:
        # Raises while an iterator or a peek_mut slot still holds a borrow.
        self._flag.acquire_exclusive()
        self._flag.release_exclusive()

    def push(self, value: T) -> None:
        self._check_writable()
        node = _Node(value, self._head)
        CENSUS.track(_KIND, node)
        self._head = node
        self._length += 1

    def pop(self) -> Optional[T]:
        self._check_writable()
        node = self._head
        if node is None:
            return None
        self._head, node.next = node.next, None
        self._length -= 1
        return node.value

    def peek(self) -> Optional[T]:
        if self._head is None:
            return None
        return self._head.value

    def peek_mut(self) -> Optional[ValueSlot[T]]:
        self._check_writable()
        if self._head is None:
            return None
        return ValueSlot(self._head, self._flag)

    def iter(self) -> Iterator[T]:
        self._flag.acquire_shared()
        try:
            node = self._head
            while node is not None:
                yield node.value
                node = node.next
        finally:
            self._flag.release_shared()

    __iter__ = iter

    def iter_mut(self) -> Iterator[ValueSlot[T]]:
        self._flag.acquire_exclusive()
        try:
            node = self._head
            while node is not None:
                yield ValueSlot(node)
                node = node.next
        finally:
            self._flag.release_exclusive()

    def into_iter(self) -> Iterator[T]:
        while self._head is not None:
            yield self.pop()

    def clear(self) -> None:
        """Unlink every node one at a time, head first."""

        self._check_writable()
        self._unlink_all()

    def _unlink_all(self) -> None:
        node, self._head = self._head, None
        self._length = 0
        while node is not None:
            successor = node.next
            node.next = None
            node = successor

    def materialise(self) -> LinkTable:
        nodes = collect_chain(self._head, lambda node: node.next)
        return materialise_chain(
            nodes, value_of=lambda node: node.value, next_of=lambda node: node.next
        )

    def __del__(self) -> None:
        # A live peek_mut slot keeps only its own node, which stays readable.
        if getattr(self, "_head", None) is not None:
            self._unlink_all()


__all__ = ["ExclusiveList", "ValueSlot"]
