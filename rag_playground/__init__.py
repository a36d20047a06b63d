"""In-memory document chunking, embedding and keyword exploration."""

__version__ = "0.1.0"
