"""Ownership primitives shared by the linked structures."""

from .cell import BorrowFlag, Ref, RefCell, RefMut
from .census import CENSUS, NodeCensus
from .cow import Borrowed, Cow, Owned, abs_all, rewrite_if
from .snapshot import LinkTable, collect_chain, materialise_chain, validate_links
from .weak import WeakHandle

__all__ = [
    "BorrowFlag",
    "Ref",
    "RefCell",
    "RefMut",
    "CENSUS",
    "NodeCensus",
    "Borrowed",
    "Cow",
    "Owned",
    "abs_all",
    "rewrite_if",
    "LinkTable",
    "collect_chain",
    "materialise_chain",
    "validate_links",
    "WeakHandle",
]
