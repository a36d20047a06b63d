"""Core business services."""
from .search_service import SearchService
from .ingest_service import IngestService
from .session_service import DocumentSession, ChunkView

__all__ = [
    "SearchService",
    "IngestService",
    "DocumentSession",
    "ChunkView",
]
