"""Runtime borrow tracking for interior mutability.

A `RefCell` hands out any number of shared `Ref` guards or exactly one
exclusive `RefMut` guard. Conflicting requests fail immediately with
`BorrowError` / `BorrowMutError`; nothing ever blocks. Guards release on
`release()`, on leaving a ``with`` block, or when the guard is collected.

Example
-------
>>> cell = RefCell([1, 2])
>>> with cell.borrow_mut() as guard:
...     guard.value.append(3)
>>> cell.borrow().value
[1, 2, 3]
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from linkcell.errors import BorrowConflictError, BorrowError, BorrowMutError

T = TypeVar("T")

_UNUSED = 0
_EXCLUSIVE = -1


class BorrowFlag:
    """Borrow counter: positive for shared borrows, -1 for an exclusive one."""

    __slots__ = ("_state",)

    def __init__(self) -> None:
        self._state = _UNUSED

    @property
    def shared_count(self) -> int:
        return max(self._state, 0)

    @property
    def is_exclusive(self) -> bool:
        return self._state == _EXCLUSIVE

    @property
    def is_unused(self) -> bool:
        return self._state == _UNUSED

    @property
    def state(self) -> str:
        if self._state == _EXCLUSIVE:
            return "exclusive"
        return "shared" if self._state > 0 else "unused"

    def acquire_shared(self) -> None:
        if self._state == _EXCLUSIVE:
            raise BorrowError("already mutably borrowed")
        self._state += 1

    def acquire_exclusive(self) -> None:
        if self._state == _EXCLUSIVE:
            raise BorrowMutError("already mutably borrowed")
        if self._state > 0:
            raise BorrowMutError(f"already borrowed by {self._state} shared reference(s)")
        self._state = _EXCLUSIVE

    def release_shared(self) -> None:
        if self._state <= 0:
            raise BorrowConflictError("released a shared borrow that was not held")
        self._state -= 1

    def release_exclusive(self) -> None:
        if self._state != _EXCLUSIVE:
            raise BorrowConflictError("released an exclusive borrow that was not held")
        self._state = _UNUSED


class _Guard(Generic[T]):
    __slots__ = ("_cell", "_attr", "_active")

    def __init__(self, cell: "RefCell[Any]", attr: Optional[str] = None) -> None:
        self._cell = cell
        self._attr = attr
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def _target(self) -> Any:
        if not self._active:
            raise BorrowConflictError(f"{type(self).__name__} used after release")
        return self._cell._value

    @property
    def value(self) -> T:
        target = self._target()
        if self._attr is None:
            return target
        return getattr(target, self._attr)

    def _unlock(self) -> None:
        raise NotImplementedError

    def release(self) -> None:
        if self._active:
            self._active = False
            self._unlock()

    def project(self, attr: str):
        """Hand this guard's borrow over to a new guard viewing ``value.<attr>``.

        The original guard becomes inactive without releasing the borrow,
        which the projected guard now owns.
        """

        self._target()
        projected = type(self)._adopt(self._cell, attr)
        self._active = False
        return projected

    @classmethod
    def _adopt(cls, cell: "RefCell[Any]", attr: Optional[str]):
        guard = cls.__new__(cls)
        _Guard.__init__(guard, cell, attr)
        return guard

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __del__(self) -> None:
        if getattr(self, "_active", False):
            self.release()

    def __repr__(self) -> str:
        if not self._active:
            return f"{type(self).__name__}(<released>)"
        return f"{type(self).__name__}({self.value!r})"


class Ref(_Guard[T]):
    """Shared, read-only borrow of a `RefCell`."""

    __slots__ = ()

    def __init__(self, cell: "RefCell[Any]", attr: Optional[str] = None) -> None:
        cell._flag.acquire_shared()
        super().__init__(cell, attr)

    def _unlock(self) -> None:
        self._cell._flag.release_shared()


class RefMut(_Guard[T]):
    """Exclusive, writable borrow of a `RefCell`."""

    __slots__ = ()

    def __init__(self, cell: "RefCell[Any]", attr: Optional[str] = None) -> None:
        cell._flag.acquire_exclusive()
        super().__init__(cell, attr)

    @property
    def value(self) -> T:
        return _Guard.value.fget(self)

    @value.setter
    def value(self, new_value: T) -> None:
        target = self._target()
        if self._attr is None:
            self._cell._value = new_value
        else:
            setattr(target, self._attr, new_value)

    def _unlock(self) -> None:
        self._cell._flag.release_exclusive()


class RefCell(Generic[T]):
    """Shared mutable container guarded by a runtime borrow flag."""

    __slots__ = ("_value", "_flag", "__weakref__")

    def __init__(self, value: T) -> None:
        self._value = value
        self._flag = BorrowFlag()

    @property
    def borrow_state(self) -> str:
        return self._flag.state

    def borrow(self) -> Ref[T]:
        return Ref(self)

    def borrow_mut(self) -> RefMut[T]:
        return RefMut(self)

    def try_borrow(self) -> Optional[Ref[T]]:
        if self._flag.is_exclusive:
            return None
        return Ref(self)

    def try_borrow_mut(self) -> Optional[RefMut[T]]:
        if not self._flag.is_unused:
            return None
        return RefMut(self)

    def replace(self, value: T) -> T:
        """Swap in ``value`` under an exclusive borrow and return the old value."""

        with self.borrow_mut() as guard:
            previous = guard.value
            guard.value = value
        return previous

    def __repr__(self) -> str:
        if self._flag.is_exclusive:
            return "RefCell(<borrowed>)"
        return f"RefCell({self._value!r})"


__all__ = ["BorrowFlag", "RefCell", "Ref", "RefMut"]
