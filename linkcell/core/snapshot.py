from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import numpy as np

from linkcell.errors import LinkInvariantError

NO_LINK = -1
FOREIGN_LINK = -2


@dataclass(frozen=True)
class LinkTable:
    """Index-based snapshot of a linked chain.

    ``next[i]``/``prev[i]`` hold the position of the linked node within the
    snapshot, ``NO_LINK`` for an absent link and ``FOREIGN_LINK`` for a link
    that leaves the chain. ``prev`` is ``None`` for singly-linked chains.
    """

    values: np.ndarray
    next: np.ndarray
    prev: Optional[np.ndarray] = None

    @property
    def size(self) -> int:
        return int(self.values.shape[0])

    def tolist(self) -> List[Any]:
        return self.values.tolist()

    def materialise(self) -> dict[str, Any]:
        snapshot: dict[str, Any] = {
            "values": self.tolist(),
            "next": self.next.tolist(),
        }
        if self.prev is not None:
            snapshot["prev"] = self.prev.tolist()
        return snapshot


def collect_chain(head: Any, next_of: Callable[[Any], Any]) -> List[Any]:
    """Walk ``head`` forward, stopping at the end or at the first revisited node."""

    nodes: List[Any] = []
    seen: set[int] = set()
    current = head
    while current is not None and id(current) not in seen:
        nodes.append(current)
        seen.add(id(current))
        current = next_of(current)
    return nodes


def materialise_chain(
    nodes: List[Any],
    *,
    value_of: Callable[[Any], Any],
    next_of: Callable[[Any], Any],
    prev_of: Optional[Callable[[Any], Any]] = None,
) -> LinkTable:
    index = {id(node): position for position, node in enumerate(nodes)}

    def _resolve(target: Any) -> int:
        if target is None:
            return NO_LINK
        return index.get(id(target), FOREIGN_LINK)

    count = len(nodes)
    values = np.empty(count, dtype=object)
    for position, node in enumerate(nodes):
        values[position] = value_of(node)
    next_links = np.fromiter(
        (_resolve(next_of(node)) for node in nodes), dtype=np.int64, count=count
    )
    prev_links = None
    if prev_of is not None:
        prev_links = np.fromiter(
            (_resolve(prev_of(node)) for node in nodes), dtype=np.int64, count=count
        )
    return LinkTable(values=values, next=next_links, prev=prev_links)


def _expected_forward(count: int) -> np.ndarray:
    expected = np.arange(1, count + 1, dtype=np.int64)
    if count:
        expected[-1] = NO_LINK
    return expected


def _expected_backward(count: int) -> np.ndarray:
    return np.arange(-1, count - 1, dtype=np.int64)


def validate_links(table: LinkTable) -> None:
    """Raise `LinkInvariantError` unless every link pair is mutually consistent."""

    expected_next = _expected_forward(table.size)
    broken = np.nonzero(table.next != expected_next)[0]
    if broken.size:
        raise LinkInvariantError(
            f"forward links inconsistent at positions {broken.tolist()}"
        )
    if table.prev is None:
        return
    expected_prev = _expected_backward(table.size)
    broken = np.nonzero(table.prev != expected_prev)[0]
    if broken.size:
        raise LinkInvariantError(
            f"backward links inconsistent at positions {broken.tolist()}"
        )


__all__ = [
    "FOREIGN_LINK",
    "NO_LINK",
    "LinkTable",
    "collect_chain",
    "materialise_chain",
    "validate_links",
]
