"""Tree → Branch → Leaf ownership with weak back-references.

Parents own their children through borrow-checked lists; children point
back at their parent through a `WeakHandle`, so no reference cycle ever
forms and dropping a `Tree` frees every branch and leaf nobody else holds.

Locations are dotted paths:

* attached: ``"<tree-id>.<branch-id>.<leaf-id>"``
* never attached: ``"<unowned>.<id>"``
* owner destroyed: `OwnerGoneError`
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from linkcell import config as lc_config
from linkcell.core.cell import RefCell
from linkcell.core.census import CENSUS
from linkcell.core.weak import WeakHandle
from linkcell.errors import IndexOutOfRangeError, OwnerGoneError, OwnershipError
from linkcell.logging import get_logger

LOGGER = get_logger("tree.owned")

UNOWNED = "<unowned>"

_OWNER_POLICIES = {"recover", "fatal"}


def _describe(node: Any) -> str:
    return f"{type(node).__name__.lower()} '{node.id}'"


class _Child:
    __slots__ = ("id", "_owner", "__weakref__")

    def __init__(self, ident: str) -> None:
        self.id = ident
        self._owner: RefCell[Optional[WeakHandle[Any]]] = RefCell(None)
        CENSUS.track(type(self).__name__.lower(), self)

    @property
    def is_attached(self) -> bool:
        with self._owner.borrow() as guard:
            handle = guard.value
        return handle is not None and handle.alive

    def owner(self) -> Any:
        """Upgrade the back-reference: ``None`` if never attached.

        Raises `OwnerGoneError` when the owner has been destroyed.
        """

        with self._owner.borrow() as guard:
            handle = guard.value
        if handle is None:
            return None
        return handle.upgrade()

    def location(self) -> str:
        try:
            owner = self.owner()
        except OwnerGoneError as exc:
            raise OwnerGoneError(f"{_describe(self)} outlived its owner: {exc}") from exc
        if owner is None:
            return f"{UNOWNED}.{self.id}"
        return f"{owner.location()}.{self.id}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


def _adopt(parent: Any, children: RefCell[List[Any]], child: _Child) -> None:
    with children.borrow_mut() as children_guard, child._owner.borrow_mut() as owner_guard:
        current = owner_guard.value
        if current is not None and current.alive:
            raise OwnershipError(f"{_describe(child)} already belongs to {current.label}")
        # The back-reference exists before the child lands in owned storage.
        owner_guard.value = WeakHandle(parent, label=_describe(parent))
        children_guard.value.append(child)
    LOGGER.debug("Attached %s to %s.", _describe(child), _describe(parent))


def _release(parent: Any, children: RefCell[List[Any]], index: int) -> Any:
    with children.borrow_mut() as children_guard:
        items = children_guard.value
        if not -len(items) <= index < len(items):
            raise IndexOutOfRangeError(index, len(items))
        child = items[index]
        with child._owner.borrow_mut() as owner_guard:
            owner_guard.value = None
            del items[index]
    LOGGER.debug("Detached %s from %s.", _describe(child), _describe(parent))
    return child


def _snapshot(children: RefCell[List[Any]]) -> Tuple[Any, ...]:
    with children.borrow() as guard:
        return tuple(guard.value)


class Leaf(_Child):
    __slots__ = ()

    def __init__(self, ident: str = "leaf") -> None:
        super().__init__(ident)

    def branch(self) -> Optional["Branch"]:
        return self.owner()


class Branch(_Child):
    __slots__ = ("_leaves",)

    def __init__(self, ident: str = "branch") -> None:
        super().__init__(ident)
        self._leaves: RefCell[List[Leaf]] = RefCell([])

    def tree(self) -> Optional["Tree"]:
        return self.owner()

    @property
    def leaves(self) -> Tuple[Leaf, ...]:
        return _snapshot(self._leaves)

    def __len__(self) -> int:
        return len(self.leaves)

    def add_leaf(self, leaf: Leaf) -> Leaf:
        _adopt(self, self._leaves, leaf)
        return leaf

    def remove_leaf(self, index: int) -> Leaf:
        return _release(self, self._leaves, index)


class Tree:
    __slots__ = ("id", "_branches", "__weakref__")

    def __init__(self, ident: str = "tree") -> None:
        self.id = ident
        self._branches: RefCell[List[Branch]] = RefCell([])
        CENSUS.track("tree", self)

    def location(self) -> str:
        return self.id

    @property
    def branches(self) -> Tuple[Branch, ...]:
        return _snapshot(self._branches)

    def __len__(self) -> int:
        return len(self.branches)

    def add_branch(self, branch: Branch) -> Branch:
        _adopt(self, self._branches, branch)
        return branch

    def remove_branch(self, index: int) -> Branch:
        return _release(self, self._branches, index)

    def __repr__(self) -> str:
        return f"Tree({self.id!r})"


def add_branch(tree: Tree, branch: Branch) -> Branch:
    return tree.add_branch(branch)


def add_leaf(branch: Branch, leaf: Leaf) -> Leaf:
    return branch.add_leaf(leaf)


def describe_location(node: Any, *, policy: Optional[str] = None) -> Optional[str]:
    """Resolve ``node.location()`` under the owner-gone policy.

    ``"recover"`` logs and returns ``None``; ``"fatal"`` logs at critical
    level and re-raises `OwnerGoneError`. Defaults to the runtime config.
    """

    if policy is None:
        policy = lc_config.runtime_config().owner_policy
    if policy not in _OWNER_POLICIES:
        raise ValueError(f"Unsupported owner policy '{policy}'. Expected one of {_OWNER_POLICIES}.")
    try:
        return node.location()
    except OwnerGoneError as exc:
        if policy == "fatal":
            LOGGER.critical("%s", exc)
            raise
        LOGGER.warning("%s", exc)
        return None


__all__ = [
    "UNOWNED",
    "Tree",
    "Branch",
    "Leaf",
    "add_branch",
    "add_leaf",
    "describe_location",
]
