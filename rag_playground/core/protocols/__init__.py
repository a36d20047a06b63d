"""Protocol interfaces for dependency injection."""
from .embedder import EmbedderProtocol
from .text_extractor import TextExtractorProtocol

__all__ = [
    "EmbedderProtocol",
    "TextExtractorProtocol",
]
