"""Shared cons cells with a reassignable tail.

`Cons.set_tail` is the only operation in linkcell able to close a loop of
strong references. It exists so such structures can be represented and
detected; nothing else in the package calls it.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from linkcell.core.cell import RefCell
from linkcell.core.census import CENSUS

T = TypeVar("T")

_KIND = "cons"


class Cons(Generic[T]):
    __slots__ = ("value", "_tail", "__weakref__")

    def __init__(self, value: T, tail: Optional["Cons[T]"] = None) -> None:
        self.value = value
        self._tail: RefCell[Optional[Cons[T]]] = RefCell(tail)
        CENSUS.track(_KIND, self)

    def tail(self) -> Optional["Cons[T]"]:
        with self._tail.borrow() as guard:
            return guard.value

    def set_tail(self, tail: Optional["Cons[T]"]) -> Optional["Cons[T]"]:
        """Point this cell at ``tail`` and return the previous successor."""

        return self._tail.replace(tail)

    def __repr__(self) -> str:
        return f"Cons({self.value!r})"


def has_cycle(node: Optional[Cons[T]]) -> bool:
    """Floyd's tortoise and hare over `Cons.tail` links."""

    slow = fast = node
    while fast is not None:
        fast = fast.tail()
        if fast is None:
            return False
        fast = fast.tail()
        slow = slow.tail()
        if fast is slow:
            return fast is not None
    return False


def chain_length(node: Optional[Cons[T]], *, limit: int = 1_000_000) -> int:
    """Number of distinct cells reachable from ``node``, capped at ``limit``."""

    seen: set[int] = set()
    current = node
    while current is not None and id(current) not in seen and len(seen) < limit:
        seen.add(id(current))
        current = current.tail()
    return len(seen)


__all__ = ["Cons", "has_cycle", "chain_length"]
