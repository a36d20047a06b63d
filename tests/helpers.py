"""Test doubles and builders."""
import threading

from rag_playground.core.models.document import EmbeddedChunk, UploadedFile


class FakeEmbedder:
    """Deterministic embedder that records how it was called."""

    dimension = 3

    def __init__(self, fail_on: str | None = None):
        self.calls: list[str] = []
        self.max_active = 0
        self._active = 0
        self._lock = threading.Lock()
        self._fail_on = fail_on
        self.warmed_up = False

    def warmup(self) -> None:
        self.warmed_up = True

    def encode(self, text: str) -> list[float]:
        with self._lock:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            if self._fail_on is not None and self._fail_on in text:
                raise RuntimeError("model crashed")
            self.calls.append(text)
            return [float(len(text)), 0.5, -0.25]
        finally:
            with self._lock:
                self._active -= 1


def make_chunks(*texts: str, vectors=(0.1, 0.2)) -> list[EmbeddedChunk]:
    return [EmbeddedChunk(text=t, vectors=tuple(vectors)) for t in texts]


def text_file(name: str, text: str, media_type: str = "text/plain") -> UploadedFile:
    return UploadedFile(name=name, content=text.encode("utf-8"), media_type=media_type)
