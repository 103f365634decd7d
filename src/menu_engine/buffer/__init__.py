"""Query buffer, UTF-8 codec, and cursor validation."""

from .codec import REPLACEMENT, decode_codepoint, encoded_length, is_continuation
from .query import (
    DEFAULT_CAPACITY,
    DEFAULT_DELIMITERS,
    BufferDelta,
    BufferView,
    QueryBuffer,
    Transaction,
)
from .state import QueryState
from .validation import (
    BufferCapacityError,
    BufferValidationError,
    ensure_capacity,
    ensure_cursor,
)

__all__ = [
    "REPLACEMENT",
    "decode_codepoint",
    "encoded_length",
    "is_continuation",
    "DEFAULT_CAPACITY",
    "DEFAULT_DELIMITERS",
    "BufferDelta",
    "BufferView",
    "QueryBuffer",
    "QueryState",
    "Transaction",
    "BufferCapacityError",
    "BufferValidationError",
    "ensure_capacity",
    "ensure_cursor",
]
