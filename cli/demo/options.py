from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from linkcell import config as lc_config

_DEQUE_OPERATIONS = {"push_front", "push_back", "pop_front", "pop_back", "peek_front", "peek_back"}
_VALUED_OPERATIONS = {"push_front", "push_back"}


@dataclass(frozen=True)
class DequeOperation:
    name: str
    value: Optional[str] = None


def parse_deque_operation(token: str) -> DequeOperation:
    """Parse ``push_front:1`` / ``pop_back`` style tokens."""

    name, sep, value = token.partition(":")
    name = name.strip().lower().replace("-", "_")
    if name not in _DEQUE_OPERATIONS:
        raise ValueError(f"Unknown operation '{name}'. Expected one of {sorted(_DEQUE_OPERATIONS)}.")
    if name in _VALUED_OPERATIONS:
        if not sep or value == "":
            raise ValueError(f"Operation '{name}' needs a value, e.g. '{name}:1'.")
        return DequeOperation(name=name, value=value)
    if sep:
        raise ValueError(f"Operation '{name}' does not take a value.")
    return DequeOperation(name=name)


def resolve_owner_policy(
    policy: Literal["auto", "recover", "fatal"],
) -> Literal["recover", "fatal"]:
    """Return the effective owner-gone policy derived from CLI inputs."""

    if policy in ("recover", "fatal"):
        return policy
    return "fatal" if lc_config.runtime_config().owner_gone_is_fatal else "recover"


__all__ = ["DequeOperation", "parse_deque_operation", "resolve_owner_policy"]
