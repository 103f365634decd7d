"""Candidate filtering and ranking."""

from .matcher import MatchList, Matcher, build_policy
from .policies import (
    FuzzyPolicy,
    MatchPolicy,
    RankingPolicy,
    SubstringPolicy,
    fuzzy_score,
    tokenize,
)

__all__ = [
    "MatchList",
    "Matcher",
    "build_policy",
    "FuzzyPolicy",
    "MatchPolicy",
    "RankingPolicy",
    "SubstringPolicy",
    "fuzzy_score",
    "tokenize",
]
