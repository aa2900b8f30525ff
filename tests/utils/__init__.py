"""Shared test utilities for linkcell."""

from .strategies import (
    apply_deque_operation,
    deque_operations,
    stack_operations,
)

__all__ = ["deque_operations", "stack_operations", "apply_deque_operation"]
