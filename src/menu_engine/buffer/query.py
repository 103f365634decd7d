"""Capacity-checked UTF-8 query buffer with rune-safe cursor movement."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Union

from menu_engine.runtime import telemetry

from .codec import decode_codepoint, is_continuation, iter_boundaries
from .state import QueryState
from .validation import BufferCapacityError, ensure_capacity, ensure_cursor

DEFAULT_CAPACITY = 8192
DEFAULT_DELIMITERS = " "

TextLike = Union[str, bytes, bytearray]


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    raw: bytes
    cursor: int
    column: int


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: int
    label: str
    applied: bool = True


def _encode(data: TextLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class QueryBuffer:
    """Owns the query text and its cursor.

    Content changes go through ``_splice`` which calls ``on_change`` once per
    applied edit; cursor movement never does.
    """

    def __init__(
        self,
        *,
        name: str = "query",
        capacity: int = DEFAULT_CAPACITY,
        delimiters: str = DEFAULT_DELIMITERS,
        on_change: Optional[Callable[["QueryBuffer"], None]] = None,
        state: Optional[QueryState] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.name = name
        self.capacity = capacity
        self.delimiters = delimiters
        self.on_change = on_change
        self.state = state or QueryState()

    @property
    def raw(self) -> bytes:
        return bytes(self.state.data)

    @property
    def text(self) -> str:
        return self.raw.decode("utf-8", errors="replace")

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def at_start(self) -> bool:
        return self.state.cursor == 0

    @property
    def at_end(self) -> bool:
        return self.state.cursor >= self.state.length

    def __len__(self) -> int:
        return self.state.length

    def snapshot(self) -> BufferView:
        before = self.raw[: self.state.cursor]
        return BufferView(
            version=self.state.version,
            text=self.text,
            raw=self.raw,
            cursor=self.state.cursor,
            column=len(before.decode("utf-8", errors="replace")),
        )

    # -- mutation -----------------------------------------------------------

    def insert(self, data: TextLike) -> BufferDelta:
        payload = _encode(data)
        cursor = self.state.cursor
        return self._splice(
            cursor, cursor, payload, cursor + len(payload), label="insert"
        )

    def delete(self, count: int) -> BufferDelta:
        """Remove ``-count`` bytes left of the cursor, or ``count`` to its right."""

        cursor = self.state.cursor
        if count < 0:
            start = max(0, cursor + count)
            return self._splice(start, cursor, b"", start, label="delete")
        end = min(self.state.length, cursor + count)
        return self._splice(cursor, end, b"", cursor, label="delete")

    def backspace(self) -> BufferDelta:
        if self.at_start:
            return self._unchanged("backspace")
        return self.delete(self._previous_boundary(self.state.cursor) - self.cursor)

    def delete_forward(self) -> BufferDelta:
        if self.at_end:
            return self._unchanged("delete_forward")
        return self.delete(self._next_boundary(self.state.cursor) - self.cursor)

    def kill_to_end(self) -> BufferDelta:
        cursor = self.state.cursor
        return self._splice(
            cursor, self.state.length, b"", cursor, label="kill_to_end"
        )

    def kill_to_start(self) -> BufferDelta:
        return self._splice(0, self.state.cursor, b"", 0, label="kill_to_start")

    def delete_word_left(self) -> BufferDelta:
        start = self._word_edge(self.state.cursor, -1)
        return self._splice(
            start, self.state.cursor, b"", start, label="delete_word_left"
        )

    def set_text(self, data: TextLike) -> BufferDelta:
        payload = _encode(data)
        return self._splice(
            0, self.state.length, payload, len(payload), label="set_text", force=True
        )

    def clear(self) -> BufferDelta:
        return self._splice(0, self.state.length, b"", 0, label="clear", force=True)

    def paste(self, data: TextLike) -> BufferDelta:
        """Insert pasted content up to its first newline."""

        payload = _encode(data).split(b"\n", 1)[0]
        cursor = self.state.cursor
        return self._splice(
            cursor, cursor, payload, cursor + len(payload), label="paste"
        )

    # -- movement -----------------------------------------------------------

    def move_cursor(self, direction: int) -> bool:
        cursor = self.state.cursor
        if direction < 0:
            if cursor == 0:
                return False
            self.state.set_cursor(self._previous_boundary(cursor))
            return True
        if cursor >= self.state.length:
            return False
        self.state.set_cursor(self._next_boundary(cursor))
        return True

    def move_word_edge(self, direction: int) -> bool:
        target = self._word_edge(self.state.cursor, direction)
        if target == self.state.cursor:
            return False
        self.state.set_cursor(target)
        return True

    def move_to_start(self) -> bool:
        if self.state.cursor == 0:
            return False
        self.state.set_cursor(0)
        return True

    def move_to_end(self) -> bool:
        if self.at_end:
            return False
        self.state.set_cursor(self.state.length)
        return True

    def set_cursor(self, offset: int) -> None:
        self.state.set_cursor(ensure_cursor(self.state, offset))

    # -- internals ----------------------------------------------------------

    def _splice(
        self,
        start: int,
        end: int,
        payload: bytes,
        cursor_after: int,
        *,
        label: str,
        force: bool = False,
    ) -> BufferDelta:
        if start == end and not payload and not force:
            return self._unchanged(label)

        requested = self.state.length - (end - start) + len(payload)
        try:
            ensure_capacity(requested, self.capacity)
        except BufferCapacityError as exc:
            telemetry.record_event(
                "query.rejected",
                level="warning",
                data={
                    "buffer": self.name,
                    "label": label,
                    "requested": exc.requested,
                    "capacity": exc.capacity,
                },
            )
            return self._unchanged(label)

        with Transaction(self, label):
            self.state.replace(start, end, payload)
            self.state.set_cursor(self._snap(cursor_after))

        if self.on_change is not None:
            self.on_change(self)
        return BufferDelta(
            version=self.state.version,
            text=self.text,
            cursor=self.state.cursor,
            label=label,
        )

    def _unchanged(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self.state.version,
            text=self.text,
            cursor=self.state.cursor,
            label=label,
            applied=False,
        )

    def _boundaries(self) -> list[int]:
        return list(iter_boundaries(self.raw)) + [self.state.length]

    def _snap(self, offset: int) -> int:
        for boundary in self._boundaries():
            if boundary >= offset:
                return boundary
        return self.state.length

    def _next_boundary(self, offset: int) -> int:
        _, consumed = decode_codepoint(self.state.data, offset)
        return min(self.state.length, offset + consumed)

    def _previous_boundary(self, offset: int) -> int:
        """Step back over continuation bytes to the start of the code point."""

        data = self.state.data
        offset -= 1
        while offset > 0 and is_continuation(data[offset]):
            offset -= 1
        return max(offset, 0)

    def _char_at(self, offset: int) -> str:
        codepoint, _ = decode_codepoint(self.state.data, offset)
        return chr(codepoint)

    def _is_delimiter(self, offset: int) -> bool:
        return self._char_at(offset) in self.delimiters

    def _word_edge(self, offset: int, direction: int) -> int:
        if direction < 0:
            while offset > 0 and self._is_delimiter(self._previous_boundary(offset)):
                offset = self._previous_boundary(offset)
            while offset > 0 and not self._is_delimiter(
                self._previous_boundary(offset)
            ):
                offset = self._previous_boundary(offset)
            return offset

        length = self.state.length
        while offset < length and self._is_delimiter(offset):
            offset = self._next_boundary(offset)
        while offset < length and not self._is_delimiter(offset):
            offset = self._next_boundary(offset)
        return offset


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single content change in a telemetry span."""

    def __init__(self, buffer: QueryBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"query::{self.label}",
            component="query",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_DELIMITERS",
    "BufferDelta",
    "BufferView",
    "QueryBuffer",
    "Transaction",
]
