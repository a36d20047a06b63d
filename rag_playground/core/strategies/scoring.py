
import logging
from abc import ABC, abstractmethod

from ..models.search import RankedEntry

logger = logging.getLogger(__name__)


class ScoringStrategy(ABC):
    """Base class for ranking strategies."""

    @abstractmethod
    def apply(self, tokens: list[str], entries: list[RankedEntry]) -> list[RankedEntry]:
        """Apply strategy to entries.

        Args:
            tokens: Lower-cased search tokens.
            entries: Scored entries.
        """
        ...


class MatchFilterStrategy(ScoringStrategy):
    """Drop chunks without any token match while a search is active."""

    def apply(self, tokens: list[str], entries: list[RankedEntry]) -> list[RankedEntry]:
        if not tokens:
            return entries

        filtered = [e for e in entries if e.match_count > 0]

        if len(filtered) < len(entries):
            logger.debug(f"Match filter: {len(entries)} → {len(filtered)}")

        return filtered


class MatchOrderStrategy(ScoringStrategy):
    """Most matches first, ties in upload order."""

    def apply(self, tokens: list[str], entries: list[RankedEntry]) -> list[RankedEntry]:
        if not tokens:
            return sorted(entries, key=lambda e: e.original_index)
        return sorted(entries, key=lambda e: (-e.match_count, e.original_index))
