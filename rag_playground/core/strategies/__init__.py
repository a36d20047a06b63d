"""Chunking and ranking strategies."""
from .chunking import WindowChunker
from .scoring import MatchFilterStrategy, MatchOrderStrategy, ScoringStrategy

__all__ = [
    "WindowChunker",
    "ScoringStrategy",
    "MatchFilterStrategy",
    "MatchOrderStrategy",
]
