"""Shared fixtures for the test suite."""
import pytest

from rag_playground.core.services.ingest_service import IngestService
from rag_playground.core.services.search_service import SearchService
from rag_playground.core.services.session_service import DocumentSession
from rag_playground.core.strategies.chunking import WindowChunker
from rag_playground.infrastructure.document_loaders import CompositeLoader

from .helpers import FakeEmbedder


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def ingest(embedder):
    return IngestService(
        embedder=embedder,
        extractor=CompositeLoader(),
        chunker=WindowChunker(step=100, window_size=500),
    )


@pytest.fixture
def session(ingest):
    return DocumentSession(ingest=ingest, search_service=SearchService())
