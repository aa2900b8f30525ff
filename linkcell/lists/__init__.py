"""Linked lists covering exclusive, persistent and shared-mutable ownership."""

from .cons import Cons, chain_length, has_cycle
from .doubly import IntoIter, MutableDoublyLinkedList
from .exclusive import ExclusiveList, ValueSlot
from .persistent import PersistentList, shared_suffix

__all__ = [
    "Cons",
    "chain_length",
    "has_cycle",
    "IntoIter",
    "MutableDoublyLinkedList",
    "ExclusiveList",
    "ValueSlot",
    "PersistentList",
    "shared_suffix",
]
