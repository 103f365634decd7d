"""Candidate records and the store that owns them."""

from .store import Candidate, CandidateStore

__all__ = ["Candidate", "CandidateStore"]
