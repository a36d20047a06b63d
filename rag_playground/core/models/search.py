"""Search domain models."""
from dataclasses import dataclass, field

from .document import EmbeddedChunk


@dataclass(frozen=True)
class RankedEntry:
    """Chunk with its position in the upload and its match count."""
    chunk: EmbeddedChunk
    original_index: int
    match_count: int = 0


@dataclass(frozen=True)
class Segment:
    """Piece of chunk text, either plain or matching a search token."""
    text: str
    matched: bool = False


@dataclass
class SearchResponse:
    """Search response for presentation layer."""
    entries: list[RankedEntry]
    tokens: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def normalized_tokens(self) -> list[str]:
        return [t.lower() for t in self.tokens]
