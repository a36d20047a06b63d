"""Search service - keyword ranking and highlighting over uploaded chunks."""

import logging
import re

from ..models.document import EmbeddedChunk
from ..models.search import RankedEntry, SearchResponse, Segment
from ..strategies.scoring import (
    MatchFilterStrategy,
    MatchOrderStrategy,
    ScoringStrategy,
)

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")


def parse_tokens(value: str) -> list[str]:
    """Split search input into unique tokens.

    Tokens are separated by whitespace and/or commas. Duplicates are dropped
    case-insensitively; the first spelling and order are kept.
    """
    seen: set[str] = set()
    tokens = []
    for token in _TOKEN_SPLIT_RE.split(value):
        token = token.strip()
        if not token:
            continue
        lower = token.lower()
        if lower in seen:
            continue
        seen.add(lower)
        tokens.append(token)
    return tokens


def remove_token(value: str, target: str) -> str:
    """Search input without ``target`` (case-insensitive)."""
    target = target.lower()
    return " ".join(t for t in parse_tokens(value) if t.lower() != target)


def drop_last_token(value: str) -> str:
    """Search input without its last token."""
    return " ".join(parse_tokens(value)[:-1])


class SearchService:
    """Rank, filter and highlight chunks against free-text search input."""

    def __init__(self, strategies: list[ScoringStrategy] | None = None):
        """Initialize search service.

        Args:
            strategies: Custom ranking strategies, applied in order.
        """
        self._strategies = strategies or [
            MatchFilterStrategy(),
            MatchOrderStrategy(),
        ]

    def search(self, chunks: list[EmbeddedChunk], query: str) -> SearchResponse:
        """Score every chunk against the query tokens and rank them.

        Args:
            chunks: Embedded chunks in upload order.
            query: Raw search input.

        Returns:
            Ranked entries with the tokens used.
        """
        tokens = parse_tokens(query)
        normalized = [t.lower() for t in tokens]

        entries = [
            RankedEntry(
                chunk=chunk,
                original_index=index,
                match_count=self.count_matches(chunk.text, normalized),
            )
            for index, chunk in enumerate(chunks)
        ]

        for strategy in self._strategies:
            entries = strategy.apply(normalized, entries)

        if tokens:
            logger.debug(
                f"Search: {len(entries)}/{len(chunks)} chunks match {tokens}"
            )

        return SearchResponse(entries=entries, tokens=tokens)

    @staticmethod
    def count_matches(text: str, tokens: list[str]) -> int:
        """Sum of non-overlapping case-insensitive occurrences of each token."""
        if not tokens:
            return 0
        lower = text.lower()
        return sum(lower.count(token.lower()) for token in tokens)

    @staticmethod
    def highlight(text: str, tokens: list[str]) -> list[Segment]:
        """Partition text into plain and matched segments.

        Tokens are tried as one case-insensitive alternation in the given
        order, so at each position the leftmost match wins and, among matches
        starting there, the earlier token wins. Joining the segment texts
        gives back ``text`` unchanged.
        """
        unique: list[str] = []
        for token in tokens:
            lower = token.lower()
            if lower and lower not in unique:
                unique.append(lower)

        if not unique:
            return [Segment(text)] if text else []

        pattern = re.compile(
            "(" + "|".join(re.escape(t) for t in unique) + ")", re.IGNORECASE
        )

        # re.split keeps the captured matches at odd positions
        segments = []
        for i, part in enumerate(pattern.split(text)):
            if part:
                segments.append(Segment(part, matched=i % 2 == 1))
        return segments
