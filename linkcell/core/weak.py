from __future__ import annotations

import weakref
from typing import Generic, Optional, TypeVar

from linkcell.errors import OwnerGoneError

T = TypeVar("T")


class WeakHandle(Generic[T]):
    """Non-owning reference whose dereference is an explicit, fallible upgrade."""

    __slots__ = ("_ref", "_label")

    def __init__(self, target: T, *, label: Optional[str] = None) -> None:
        self._ref = weakref.ref(target)
        self._label = label if label is not None else type(target).__name__

    @property
    def label(self) -> str:
        return self._label

    @property
    def alive(self) -> bool:
        return self._ref() is not None

    def try_upgrade(self) -> Optional[T]:
        return self._ref()

    def upgrade(self) -> T:
        target = self._ref()
        if target is None:
            raise OwnerGoneError(f"{self._label} has already been destroyed")
        return target

    def points_to(self, candidate: object) -> bool:
        return self._ref() is candidate

    def __repr__(self) -> str:
        state = "alive" if self.alive else "gone"
        return f"WeakHandle({self._label}, {state})"


__all__ = ["WeakHandle"]
