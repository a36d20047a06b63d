"""Embedder protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding service."""

    @property
    def dimension(self) -> int:
        """Length of every vector returned by ``encode``."""
        ...

    def encode(self, text: str) -> list[float]:
        """Encode a single text to a mean-pooled, normalized embedding.

        Args:
            text: Text to encode.

        Returns:
            Embedding as a list of floats.
        """
        ...

    def warmup(self) -> None:
        """Load the model if it is not loaded yet."""
        ...
