"""Text extractor protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import UploadedFile


@runtime_checkable
class TextExtractorProtocol(Protocol):
    """Protocol for file-to-text extraction."""

    def supports(self, file: UploadedFile) -> bool:
        """Check whether the file's extension or media type is handled."""
        ...

    def load(self, file: UploadedFile) -> str:
        """Extract plain text from the file.

        Args:
            file: Uploaded file.

        Returns:
            Extracted text.

        Raises:
            UnsupportedFormatError: No loader handles the file.
        """
        ...
