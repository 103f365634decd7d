"""Validation helpers and errors shared by the query buffer."""

from __future__ import annotations

from .codec import iter_boundaries
from .state import QueryState


class BufferValidationError(RuntimeError):
    """Raised when a caller provides a cursor that is out of range or mid-rune."""

    def __init__(self, message: str, *, cursor: int | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class BufferCapacityError(RuntimeError):
    """Raised when an insertion would grow the query past its capacity."""

    def __init__(self, *, requested: int, capacity: int) -> None:
        super().__init__(
            f"query would grow to {requested} bytes (capacity {capacity})"
        )
        self.requested = requested
        self.capacity = capacity


def ensure_capacity(requested: int, capacity: int) -> int:
    if requested > capacity:
        raise BufferCapacityError(requested=requested, capacity=capacity)
    return requested


def is_boundary(state: QueryState, offset: int) -> bool:
    if offset == state.length:
        return True
    return offset in set(iter_boundaries(bytes(state.data)))


def ensure_cursor(state: QueryState, offset: int) -> int:
    if offset < 0 or offset > state.length:
        raise BufferValidationError("Cursor out of range", cursor=offset)
    if not is_boundary(state, offset):
        raise BufferValidationError("Cursor splits a code point", cursor=offset)
    return offset


__all__ = [
    "BufferCapacityError",
    "BufferValidationError",
    "ensure_capacity",
    "ensure_cursor",
    "is_boundary",
]
