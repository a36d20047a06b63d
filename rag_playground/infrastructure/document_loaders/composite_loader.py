import logging

from ...core.exceptions import UnsupportedFormatError
from ...core.models.document import UploadedFile
from .docx_loader import DocxLoader
from .pdf_loader import PDFLoader
from .text_loader import TextLoader

logger = logging.getLogger(__name__)


class CompositeLoader:

    def __init__(self):
        # Text first: a text/* media type wins over a misleading extension
        self._loaders = [
            TextLoader(),
            PDFLoader(),
            DocxLoader(),
        ]

    def supports(self, file: UploadedFile) -> bool:
        return any(loader.supports(file) for loader in self._loaders)

    def load(self, file: UploadedFile) -> str:
        for loader in self._loaders:
            if loader.supports(file):
                logger.info(f"Extracting {file.name} with {type(loader).__name__}")
                return loader.load(file)

        logger.error(f"No loader for {file.name} ({file.media_type or 'unknown type'})")
        raise UnsupportedFormatError(file.extension or file.media_type or "unknown")
