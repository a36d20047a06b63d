"""Domain errors raised by the upload flow."""


class PlaygroundError(Exception):
    """Base class for errors reported to the user."""


class UnsupportedFormatError(PlaygroundError, ValueError):
    """File extension or media type is not one we can extract."""

    def __init__(self, name: str, allowed: list[str] | None = None):
        self.name = name
        self.allowed = allowed or []
        if self.allowed:
            allowed_list = ", ".join(f".{ext}" for ext in self.allowed)
            message = (
                f"Unsupported file type: {name}. "
                f"Please upload one of: {allowed_list}"
            )
        else:
            message = f"Unsupported file type: {name}"
        super().__init__(message)


class ExtractionError(PlaygroundError):
    """Text extractor failed on a supported file."""


class EmbeddingError(PlaygroundError):
    """Embedding model failed to load or to encode a chunk."""


class UploadInProgressError(PlaygroundError):
    """Another upload is still being processed."""
