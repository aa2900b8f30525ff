"""linkcell: linked structures with explicit ownership, sharing and borrowing.

Quick Start
-----------
>>> from linkcell import ExclusiveList, PersistentList, MutableDoublyLinkedList
>>>
>>> stack = ExclusiveList()
>>> stack.push(1); stack.push(2)
>>> stack.pop()
2
>>>
>>> base = PersistentList().prepend(1)
>>> base.prepend(2).tail().head()
1
>>>
>>> deque = MutableDoublyLinkedList([1, 2, 3])
>>> deque.peek_front().value
1

Classes
-------
ExclusiveList : Stack whose nodes each have exactly one owner.
PersistentList : Immutable list views sharing common suffixes.
MutableDoublyLinkedList : Deque of shared nodes behind runtime borrow checks.
Tree, Branch, Leaf : Owner tree with weak child-to-parent references.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("linkcell")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .core import (
    CENSUS,
    Borrowed,
    BorrowFlag,
    LinkTable,
    NodeCensus,
    Owned,
    Ref,
    RefCell,
    RefMut,
    WeakHandle,
    abs_all,
    rewrite_if,
)
from .errors import (
    BorrowConflictError,
    BorrowError,
    BorrowMutError,
    IndexOutOfRangeError,
    LinkcellError,
    LinkInvariantError,
    OwnerGoneError,
    OwnershipError,
)
from .lists import (
    Cons,
    ExclusiveList,
    IntoIter,
    MutableDoublyLinkedList,
    PersistentList,
    ValueSlot,
    chain_length,
    has_cycle,
    shared_suffix,
)
from .tree import UNOWNED, Branch, Leaf, Tree, add_branch, add_leaf, describe_location

__all__ = [
    "__version__",
    # Structures
    "ExclusiveList",
    "ValueSlot",
    "PersistentList",
    "shared_suffix",
    "MutableDoublyLinkedList",
    "IntoIter",
    "Tree",
    "Branch",
    "Leaf",
    "UNOWNED",
    "add_branch",
    "add_leaf",
    "describe_location",
    "Cons",
    "has_cycle",
    "chain_length",
    # Primitives
    "BorrowFlag",
    "RefCell",
    "Ref",
    "RefMut",
    "WeakHandle",
    "CENSUS",
    "NodeCensus",
    "LinkTable",
    "Borrowed",
    "Owned",
    "abs_all",
    "rewrite_if",
    # Errors
    "LinkcellError",
    "BorrowConflictError",
    "BorrowError",
    "BorrowMutError",
    "OwnerGoneError",
    "IndexOutOfRangeError",
    "OwnershipError",
    "LinkInvariantError",
]
