"""Domain models."""
from .document import UploadedFile, Chunk, EmbeddedChunk
from .search import RankedEntry, Segment, SearchResponse
from .display import DisplayWindow, SHOW_ALL

__all__ = [
    "UploadedFile",
    "Chunk",
    "EmbeddedChunk",
    "RankedEntry",
    "Segment",
    "SearchResponse",
    "DisplayWindow",
    "SHOW_ALL",
]
