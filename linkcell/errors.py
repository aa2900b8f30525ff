"""Exception hierarchy shared by every linkcell structure.

Empty containers are not errors: `pop`, `peek` and friends return ``None``.
Everything else that can go wrong is raised as a subclass of `LinkcellError`
so callers can decide whether a failure is recoverable or fatal.
"""

from __future__ import annotations


class LinkcellError(Exception):
    """Base class for linkcell failures."""


class BorrowConflictError(LinkcellError, RuntimeError):
    """A borrow was requested that overlaps an outstanding exclusive borrow."""


class BorrowError(BorrowConflictError):
    """Shared borrow requested while an exclusive borrow is outstanding."""


class BorrowMutError(BorrowConflictError):
    """Exclusive borrow requested while any other borrow is outstanding."""


class OwnerGoneError(LinkcellError, LookupError):
    """A weak back-reference was upgraded after its owner was destroyed."""


class IndexOutOfRangeError(LinkcellError, IndexError):
    """Positional removal referenced a slot that does not exist."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for collection of length {length}")
        self.index = index
        self.length = length


class OwnershipError(LinkcellError, ValueError):
    """An item that already has a live owner was attached elsewhere."""


class LinkInvariantError(LinkcellError, AssertionError):
    """A materialised chain failed link-consistency validation."""


__all__ = [
    "LinkcellError",
    "BorrowConflictError",
    "BorrowError",
    "BorrowMutError",
    "OwnerGoneError",
    "IndexOutOfRangeError",
    "OwnershipError",
    "LinkInvariantError",
]
