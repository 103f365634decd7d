"""Ranking policies: tiered substring/prefix matching and fuzzy subsequences."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, List, Optional, Protocol, Sequence

from menu_engine.candidates import Candidate

Fold = Callable[[str], str]


class MatchPolicy(str, Enum):
    """Closed set of ranking policies selectable at configuration time."""

    SUBSTRING = "substring"
    FUZZY = "fuzzy"


class RankingPolicy(Protocol):
    kind: ClassVar[MatchPolicy]

    def rank(self, query: str, candidates: Sequence[Candidate]) -> List[int]:
        """Return surviving candidate positions in output order."""
        ...


def _identity(text: str) -> str:
    return text


def _folder(case_sensitive: bool) -> Fold:
    return _identity if case_sensitive else str.lower


def tokenize(query: str, delimiters: str = " ") -> List[str]:
    """Split ``query`` on every delimiter character, dropping empty pieces."""

    pieces = [query]
    for delimiter in delimiters:
        pieces = [part for piece in pieces for part in piece.split(delimiter)]
    return [piece for piece in pieces if piece]


@dataclass(frozen=True, slots=True)
class SubstringPolicy:
    """Every token must be a substring; exact, then prefix, then the rest."""

    kind: ClassVar[MatchPolicy] = MatchPolicy.SUBSTRING

    case_sensitive: bool = True
    delimiters: str = " "

    def rank(self, query: str, candidates: Sequence[Candidate]) -> List[int]:
        fold = _folder(self.case_sensitive)
        tokens = [fold(token) for token in tokenize(query, self.delimiters)]
        folded_query = fold(query)
        first = tokens[0] if tokens else ""

        exact: List[int] = []
        prefix: List[int] = []
        substring: List[int] = []
        for index, candidate in enumerate(candidates):
            text = fold(candidate.text)
            if not all(token in text for token in tokens):
                continue
            if not tokens or text == folded_query:
                exact.append(index)
            elif text.startswith(first):
                prefix.append(index)
            else:
                substring.append(index)
        return exact + prefix + substring


def fuzzy_score(query: str, text: str, fold: Fold = _identity) -> Optional[float]:
    """Score ``text`` against ``query`` as a greedy ordered subsequence.

    Returns ``None`` when some query character cannot be matched. Otherwise
    ``ln(sidx + 2) + (eidx - sidx - qlen)`` where ``sidx``/``eidx`` are the
    positions of the first and last matched characters; lower is better.
    """

    needle = fold(query)
    haystack = fold(text)
    qlen = len(needle)
    if qlen == 0:
        return 0.0

    pointer = 0
    sidx = eidx = -1
    for position, char in enumerate(haystack):
        if char != needle[pointer]:
            continue
        if sidx == -1:
            sidx = position
        pointer += 1
        if pointer == qlen:
            eidx = position
            break

    if eidx == -1:
        return None
    return math.log(sidx + 2) + (eidx - sidx - qlen)


@dataclass(frozen=True, slots=True)
class FuzzyPolicy:
    """Ordered-subsequence matching ranked by ``fuzzy_score``."""

    kind: ClassVar[MatchPolicy] = MatchPolicy.FUZZY

    case_sensitive: bool = True

    def rank(self, query: str, candidates: Sequence[Candidate]) -> List[int]:
        fold = _folder(self.case_sensitive)
        survivors: List[int] = []
        for index, candidate in enumerate(candidates):
            score = fuzzy_score(query, candidate.text, fold)
            if score is None:
                continue
            candidate.score = score
            survivors.append(index)
        # sorted() is stable: equal scores keep store order.
        return sorted(survivors, key=lambda index: candidates[index].score)


__all__ = [
    "MatchPolicy",
    "RankingPolicy",
    "SubstringPolicy",
    "FuzzyPolicy",
    "fuzzy_score",
    "tokenize",
]
