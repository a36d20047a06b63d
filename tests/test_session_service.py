"""Tests for DocumentSession."""
import asyncio
from unittest.mock import Mock

import pytest

from rag_playground.core.exceptions import (
    EmbeddingError,
    ExtractionError,
    UnsupportedFormatError,
    UploadInProgressError,
)
from rag_playground.core.services.ingest_service import IngestService
from rag_playground.core.services.search_service import SearchService
from rag_playground.core.services.session_service import (
    EMPTY_PREVIEW,
    NO_VECTOR_DATA,
    DocumentSession,
    format_vector,
)
from rag_playground.core.strategies.chunking import WindowChunker
from rag_playground.infrastructure.document_loaders import CompositeLoader

from .helpers import FakeEmbedder, make_chunks, text_file


class TestUpload:
    """Upload gating and rollback."""

    def test_upload_stores_chunks(self, session):
        chunks = asyncio.run(session.upload(text_file("notes.md", "hello world")))

        assert session.chunks == chunks
        assert len(chunks) == 1
        assert session.file_name == "notes.md"
        assert not session.is_processing
        assert session.window.display_count == 1

    def test_csv_rejected_and_session_left_empty(self, session, embedder):
        with pytest.raises(UnsupportedFormatError):
            asyncio.run(session.upload(text_file("table.csv", "a,b", media_type="text/csv")))

        assert session.chunks == []
        assert embedder.calls == []

    def test_unsupported_upload_keeps_previous_state(self, session):
        asyncio.run(session.upload(text_file("notes.txt", "keep me")))
        session.set_search("keep")
        before = list(session.chunks)

        with pytest.raises(UnsupportedFormatError):
            asyncio.run(session.upload(text_file("table.csv", "a,b")))

        assert session.chunks == before
        assert session.file_name == "notes.txt"
        assert session.search_input == "keep"

    def test_upload_while_processing_rejected(self, session):
        session.is_processing = True
        with pytest.raises(UploadInProgressError):
            asyncio.run(session.upload(text_file("notes.txt", "x")))

    def test_extraction_failure_rolls_back(self, embedder):
        extractor = Mock()
        extractor.load.side_effect = ValueError("not a zip file")
        session = DocumentSession(
            ingest=IngestService(embedder, extractor, WindowChunker()),
            search_service=SearchService(),
        )
        session.chunks = make_chunks("old")
        session.file_name = "old.txt"

        with pytest.raises(ExtractionError):
            asyncio.run(session.upload(text_file("broken.docx", "")))

        assert session.chunks == []
        assert session.file_name is None
        assert not session.is_processing

    def test_embedding_failure_leaves_no_partial_chunks(self):
        embedder = FakeEmbedder(fail_on="two")
        session = DocumentSession(
            ingest=IngestService(embedder, CompositeLoader(), WindowChunker(step=3, window_size=3)),
            search_service=SearchService(),
        )

        with pytest.raises(EmbeddingError):
            asyncio.run(session.upload(text_file("n.txt", "onetwo")))

        assert session.chunks == []
        assert session.file_name is None
        assert not session.is_processing

    def test_new_upload_replaces_previous(self, session):
        asyncio.run(session.upload(text_file("a.txt", "first document")))
        session.set_search("first")

        asyncio.run(session.upload(text_file("b.txt", "second document")))

        assert [c.text for c in session.chunks] == ["second document"]
        assert session.file_name == "b.txt"
        assert session.search_input == ""

    def test_reset(self, session):
        asyncio.run(session.upload(text_file("a.txt", "some text")))
        session.set_search("some")
        session.toggle_expanded(0)

        session.reset()

        assert session.chunks == []
        assert session.file_name is None
        assert session.search_input == ""
        assert session.expanded == {}
        assert session.window.selected == 10


class TestSearchAndView:
    """Search input, display window and chunk cards."""

    def setup_method(self):
        self.session = DocumentSession(ingest=Mock(), search_service=SearchService())

    def test_display_window_follows_filter(self):
        self.session.chunks = make_chunks(
            *[f"chunk {i}" + (" needle" if i < 5 else "") for i in range(45)]
        )

        assert len(self.session.view()) == 10
        assert self.session.window.options() == [10, 20, 30, 45]

        self.session.select_size(30)
        self.session.set_search("needle")

        assert len(self.session.view()) == 5
        assert self.session.window.display_count == 5

    def test_show_more(self):
        self.session.chunks = make_chunks(*["text"] * 25)
        self.session.view()

        self.session.show_more()

        assert len(self.session.view()) == 20

    def test_cards_highlight_and_format(self):
        self.session.chunks = make_chunks("Lorem ipsum", "dolor sit", "Lorem Lorem")
        self.session.set_search("lorem")

        cards = self.session.view()

        assert [c.number for c in cards] == [3, 1]
        assert cards[0].entry.match_count == 2
        assert "".join(s.text for s in cards[0].segments) == "Lorem Lorem"
        assert cards[0].preview == "0.1000, 0.2000"
        assert cards[0].full_vector == "0.100000, 0.200000"
        assert cards[0].dimension == 2

    def test_preview_limited_to_first_values(self):
        self.session.chunks = make_chunks("x", vectors=[i / 10 for i in range(12)])
        card = self.session.view()[0]
        assert card.preview.count(",") == 7
        assert card.full_vector.count(",") == 11

    def test_empty_vector_placeholders(self):
        self.session.chunks = make_chunks("x", vectors=())
        card = self.session.view()[0]
        assert card.preview == EMPTY_PREVIEW
        assert card.full_vector == NO_VECTOR_DATA

    def test_expanded_by_default_only_while_searching(self):
        self.session.chunks = make_chunks("alpha", "beta")
        assert not self.session.view()[0].expanded

        self.session.set_search("alpha")
        assert self.session.view()[0].expanded

    def test_toggle_reset_when_tokens_change(self):
        self.session.chunks = make_chunks("alpha beta")
        self.session.set_search("alpha")
        self.session.toggle_expanded(0)
        assert not self.session.is_expanded(0)

        self.session.set_search("alpha,  ")
        assert not self.session.is_expanded(0)

        self.session.set_search("alpha beta")
        assert self.session.is_expanded(0)

    def test_token_editing(self):
        self.session.set_search("alpha, Beta gamma")

        self.session.remove_token("beta")
        assert self.session.tokens == ["alpha", "gamma"]

        self.session.drop_last_token()
        assert self.session.tokens == ["alpha"]

        self.session.clear_search()
        assert self.session.tokens == []


def test_format_vector():
    assert format_vector((0.123456789, -1.0), 4) == "0.1235, -1.0000"
    assert format_vector([], 6) == ""
