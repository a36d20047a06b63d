"""Sliding-window text chunking."""
import logging

from ..models.document import Chunk

logger = logging.getLogger(__name__)


class WindowChunker:
    """Split text into overlapping fixed-size windows on a fixed stride."""

    def __init__(self, step: int = 100, window_size: int = 500):
        """Initialize chunker.

        Args:
            step: Characters between consecutive window starts.
            window_size: Characters per window.

        Raises:
            ValueError: If step or window_size is not positive.
        """
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self._step = step
        self._window_size = window_size

    @property
    def step(self) -> int:
        return self._step

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def overlap(self) -> int:
        return max(0, self._window_size - self._step)

    def split(self, text: str) -> list[Chunk]:
        """Windows starting at 0, step, 2*step, ... while inside the text."""
        chunks = [
            Chunk(text=text[offset : offset + self._window_size], offset=offset)
            for offset in range(0, len(text), self._step)
        ]
        logger.debug(f"Split {len(text)} chars into {len(chunks)} windows")
        return chunks
