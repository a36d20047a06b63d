"""Ingest service - file to embedded chunks."""

import asyncio
import logging

from ..exceptions import EmbeddingError, ExtractionError, UnsupportedFormatError
from ..models.document import Chunk, EmbeddedChunk, UploadedFile
from ..protocols.embedder import EmbedderProtocol
from ..protocols.text_extractor import TextExtractorProtocol
from ..strategies.chunking import WindowChunker

logger = logging.getLogger(__name__)

_DONE = None


class IngestService:
    """Extract, chunk and embed a single uploaded file."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        extractor: TextExtractorProtocol,
        chunker: WindowChunker,
    ):
        """Initialize ingest service.

        Args:
            embedder: Embedding service, shared across uploads.
            extractor: File-to-text extractor.
            chunker: Sliding-window chunker.
        """
        self._embedder = embedder
        self._extractor = extractor
        self._chunker = chunker

    async def extract(self, file: UploadedFile) -> str:
        """Extract text off the event loop thread.

        Raises:
            UnsupportedFormatError: File type is not handled.
            ExtractionError: Extractor failed on the file.
        """
        try:
            return await asyncio.to_thread(self._extractor.load, file)
        except UnsupportedFormatError:
            raise
        except Exception as e:
            logger.error(f"Failed to extract {file.name}: {e}")
            raise ExtractionError(f"Could not read {file.name}: {e}") from e

    async def embed(self, chunks: list[Chunk]) -> list[EmbeddedChunk]:
        """Embed chunks one at a time, in order.

        A single worker drains the queue, so the model never sees two
        chunks of the same upload concurrently.

        Raises:
            EmbeddingError: Model failed to load or encode.
        """
        queue: asyncio.Queue[Chunk | None] = asyncio.Queue()
        for chunk in chunks:
            queue.put_nowait(chunk)
        queue.put_nowait(_DONE)

        results: list[EmbeddedChunk] = []
        await asyncio.create_task(self._worker(queue, results, len(chunks)))
        return results

    async def _worker(
        self,
        queue: "asyncio.Queue[Chunk | None]",
        results: list[EmbeddedChunk],
        total: int,
    ) -> None:
        while True:
            chunk = await queue.get()
            if chunk is _DONE:
                return
            try:
                vector = await asyncio.to_thread(self._embedder.encode, chunk.text)
            except Exception as e:
                logger.error(f"Embedding failed at offset {chunk.offset}: {e}")
                raise EmbeddingError(f"Embedding failed: {e}") from e
            results.append(EmbeddedChunk(text=chunk.text, vectors=tuple(vector)))
            logger.debug(f"Embedded chunk {len(results)}/{total}")

    async def run(self, file: UploadedFile) -> list[EmbeddedChunk]:
        """Turn an uploaded file into embedded chunks.

        Args:
            file: Uploaded file.

        Returns:
            Embedded chunks in document order. Blank windows are skipped.
        """
        text = await self.extract(file)

        chunks = [c for c in self._chunker.split(text) if c.text.strip()]
        logger.info(f"Chunked {file.name}: {len(chunks)} windows from {len(text)} chars")

        embedded = await self.embed(chunks)

        logger.info(f"Embedding complete: {len(embedded)} chunks from {file.name}")
        return embedded
