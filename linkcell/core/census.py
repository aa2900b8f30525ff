"""Liveness tracking for linked nodes.

Tracking is opt-in through ``LINKCELL_TRACK_NODES``. Nodes are held in
weak sets, so a node counts as live exactly as long as something still
references it; a reference cycle keeps its nodes counted until the cyclic
garbage collector runs.
"""

from __future__ import annotations

import weakref
from typing import Dict, Optional

from linkcell import config as lc_config


class NodeCensus:
    def __init__(self) -> None:
        self._live: Dict[str, weakref.WeakSet] = {}

    @property
    def enabled(self) -> bool:
        return lc_config.runtime_config().track_nodes

    def track(self, kind: str, node: object) -> None:
        if not self.enabled:
            return
        bucket = self._live.get(kind)
        if bucket is None:
            bucket = self._live[kind] = weakref.WeakSet()
        bucket.add(node)

    def live(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            bucket = self._live.get(kind)
            return 0 if bucket is None else len(bucket)
        return sum(len(bucket) for bucket in self._live.values())

    def snapshot(self) -> Dict[str, int]:
        return {kind: len(bucket) for kind, bucket in sorted(self._live.items())}

    def reset(self) -> None:
        self._live.clear()


CENSUS = NodeCensus()


__all__ = ["CENSUS", "NodeCensus"]
