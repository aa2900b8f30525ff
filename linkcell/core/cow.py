"""Borrowed-or-owned results for copy-on-actual-mutation transforms."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

import numpy as np

T = TypeVar("T")


@dataclass(frozen=True)
class Borrowed(Generic[T]):
    """The caller's original object, returned untouched."""

    value: T

    @property
    def is_owned(self) -> bool:
        return False

    def into_owned(self, *, clone: Callable[[T], T] = copy.copy) -> "Owned[T]":
        return Owned(clone(self.value))

    def to_mut(self, *, clone: Callable[[T], T] = copy.copy) -> "Owned[T]":
        return self.into_owned(clone=clone)


@dataclass(frozen=True)
class Owned(Generic[T]):
    """A private copy produced because something had to change."""

    value: T

    @property
    def is_owned(self) -> bool:
        return True

    def into_owned(self, *, clone: Callable[[T], T] = copy.copy) -> "Owned[T]":
        return self

    def to_mut(self, *, clone: Callable[[T], T] = copy.copy) -> "Owned[T]":
        return self


Cow = Union[Borrowed[T], Owned[T]]


def rewrite_if(
    source: T,
    needs_change: Callable[[T], bool],
    rewrite: Callable[[T], T],
    *,
    clone: Callable[[T], T] = copy.copy,
) -> Cow[T]:
    """Return `Borrowed(source)` unless ``needs_change`` says a rewrite is due.

    ``rewrite`` only ever sees a clone of ``source``, so the original is
    never mutated.
    """

    if not needs_change(source):
        return Borrowed(source)
    return Owned(rewrite(clone(source)))


def _abs_in_place(values: np.ndarray) -> np.ndarray:
    np.abs(values, out=values)
    return values


def abs_all(values: Any) -> Cow[np.ndarray]:
    array = np.asarray(values)
    return rewrite_if(
        array,
        lambda arr: bool(np.any(arr < 0)),
        _abs_in_place,
        clone=np.copy,
    )


__all__ = ["Borrowed", "Owned", "Cow", "rewrite_if", "abs_all"]
