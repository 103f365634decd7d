"""Matcher that turns the query into a freshly built match list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Tuple

from menu_engine.candidates import Candidate, CandidateStore
from menu_engine.runtime import telemetry

from .policies import FuzzyPolicy, MatchPolicy, RankingPolicy, SubstringPolicy

if TYPE_CHECKING:  # pragma: no cover
    from menu_engine.config import MenuConfig


@dataclass(frozen=True, slots=True)
class MatchList:
    """Candidate positions surviving ``query``, in ranked order.

    Neighbours of position ``i`` are ``i - 1`` and ``i + 1``; the list is
    never edited, only replaced.
    """

    indices: Tuple[int, ...] = ()
    query: str = ""

    def __len__(self) -> int:
        return len(self.indices)

    def __bool__(self) -> bool:
        return bool(self.indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __getitem__(self, position: int) -> int:
        return self.indices[position]

    @property
    def head(self) -> Optional[int]:
        return 0 if self.indices else None

    @property
    def tail(self) -> Optional[int]:
        return len(self.indices) - 1 if self.indices else None

    def successor(self, position: int) -> Optional[int]:
        following = position + 1
        return following if following < len(self.indices) else None

    def predecessor(self, position: int) -> Optional[int]:
        return position - 1 if position > 0 else None


def build_policy(config: "MenuConfig") -> RankingPolicy:
    if config.policy is MatchPolicy.FUZZY:
        return FuzzyPolicy(case_sensitive=config.case_sensitive)
    return SubstringPolicy(
        case_sensitive=config.case_sensitive, delimiters=config.word_delimiters
    )


class Matcher:
    """Runs the configured policy over the whole store on every rebuild."""

    def __init__(self, store: CandidateStore, policy: RankingPolicy) -> None:
        self.store = store
        self.policy = policy

    @classmethod
    def from_config(cls, store: CandidateStore, config: "MenuConfig") -> "Matcher":
        return cls(store, build_policy(config))

    def rebuild(self, query: str) -> MatchList:
        with telemetry.span(
            "matching::rebuild",
            component="matching",
            metadata={"policy": self.policy.kind.value, "query_length": len(query)},
        ) as handle:
            if not query:
                indices = tuple(range(len(self.store)))
            else:
                indices = tuple(self.policy.rank(query, self.store))
            handle.add_metadata("matches", len(indices))
        return MatchList(indices=indices, query=query)

    def candidate(self, matches: MatchList, position: int) -> Candidate:
        return self.store[matches[position]]


__all__ = ["MatchList", "Matcher", "build_policy"]
