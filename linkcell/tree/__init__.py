"""Owner trees whose children hold weak back-references to their parents."""

from .owned import UNOWNED, Branch, Leaf, Tree, add_branch, add_leaf, describe_location

__all__ = [
    "UNOWNED",
    "Branch",
    "Leaf",
    "Tree",
    "add_branch",
    "add_leaf",
    "describe_location",
]
