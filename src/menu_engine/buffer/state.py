"""Cursor and content state for the query buffer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class QueryState:
    """Mutable UTF-8 bytes plus a byte-offset cursor.

    ``version`` increases on every content change and is left untouched by
    cursor movement.
    """

    data: bytearray = field(default_factory=bytearray)
    cursor: int = 0
    version: int = 0

    @property
    def length(self) -> int:
        return len(self.data)

    def set_cursor(self, offset: int) -> None:
        self.cursor = offset

    def replace(self, start: int, end: int, data: bytes) -> None:
        self.data[start:end] = data
        self.version += 1
