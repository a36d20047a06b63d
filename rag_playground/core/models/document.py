"""Document domain models."""
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadedFile:
    """Raw upload with its declared name and media type."""
    name: str
    content: bytes
    media_type: str = ""

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot, empty if there is none."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot else ""


@dataclass(frozen=True)
class Chunk:
    """Window of the extracted text."""
    text: str
    offset: int


@dataclass(frozen=True)
class EmbeddedChunk:
    """Chunk text paired with its embedding vector."""
    text: str
    vectors: tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.vectors)
