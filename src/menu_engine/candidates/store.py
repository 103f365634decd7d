"""Immutable candidate arena loaded once before a session starts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Callable, Iterable, Iterator, List, Optional, Sequence, Union

from menu_engine.runtime import telemetry

Line = Union[str, bytes]


@dataclass(slots=True)
class Candidate:
    """One input line. ``text`` never changes; ``marked`` and ``score`` do."""

    text: str
    marked: bool = False
    score: float = 0.0


def _normalize_line(line: Line) -> str:
    if isinstance(line, (bytes, bytearray)):
        line = bytes(line).decode("utf-8", errors="replace")
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class CandidateStore(Sequence[Candidate]):
    """Ordered candidates; positions double as stable ids for match lists."""

    def __init__(self, candidates: Iterable[Candidate] = ()) -> None:
        self._items: List[Candidate] = list(candidates)

    @classmethod
    def from_lines(cls, lines: Iterable[Line]) -> "CandidateStore":
        with telemetry.span("candidates::load", component="candidates") as handle:
            store = cls(Candidate(text=_normalize_line(line)) for line in lines)
            handle.add_metadata("count", len(store))
        return store

    @classmethod
    def from_stream(cls, stream: IO) -> "CandidateStore":
        return cls.from_lines(stream)

    def __getitem__(self, index):  # type: ignore[override]
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._items)

    def texts(self) -> list[str]:
        return [item.text for item in self._items]

    def marked(self) -> list[Candidate]:
        return [item for item in self._items if item.marked]

    def widest(self, cost: Callable[[str], float]) -> Optional[Candidate]:
        """Return the candidate with the largest ``cost``; the first one on ties."""

        best: Optional[Candidate] = None
        best_cost = float("-inf")
        for item in self._items:
            value = cost(item.text)
            if value > best_cost:
                best, best_cost = item, value
        return best


__all__ = ["Candidate", "CandidateStore"]
