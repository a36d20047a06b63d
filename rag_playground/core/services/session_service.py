"""Document session - per-user state of the chunk explorer."""

import logging
from dataclasses import dataclass, field

from ..exceptions import UnsupportedFormatError, UploadInProgressError
from ..models.display import DisplayWindow
from ..models.document import EmbeddedChunk, UploadedFile
from ..models.search import RankedEntry, SearchResponse, Segment
from .ingest_service import IngestService
from .search_service import SearchService, drop_last_token, parse_tokens, remove_token

logger = logging.getLogger(__name__)

NO_VECTOR_DATA = "No embedding data available."
EMPTY_PREVIEW = "—"


def format_vector(values: tuple[float, ...] | list[float], decimals: int) -> str:
    """Comma-separated values with a fixed number of decimals."""
    return ", ".join(f"{value:.{decimals}f}" for value in values)


@dataclass
class ChunkView:
    """Everything the presentation layer needs to draw one chunk card."""
    entry: RankedEntry
    segments: list[Segment]
    expanded: bool
    preview: str
    full_vector: str

    @property
    def number(self) -> int:
        return self.entry.original_index + 1

    @property
    def dimension(self) -> int:
        return self.entry.chunk.dimension


@dataclass
class DocumentSession:
    """State of one user's upload, search and display choices."""
    ingest: IngestService
    search_service: SearchService
    allowed_extensions: list[str] = field(
        default_factory=lambda: ["pdf", "docx", "txt", "md", "json"]
    )
    page_size: int = 10
    preview_size: int = 8

    chunks: list[EmbeddedChunk] = field(default_factory=list)
    file_name: str | None = None
    is_processing: bool = False
    search_input: str = ""
    expanded: dict[int, bool] = field(default_factory=dict)
    window: DisplayWindow = field(init=False)

    def __post_init__(self):
        self.window = DisplayWindow(selected=self.page_size, default_size=self.page_size)

    @property
    def tokens(self) -> list[str]:
        return parse_tokens(self.search_input)

    @property
    def upload_locked(self) -> bool:
        return self.is_processing

    def check_supported(self, file: UploadedFile) -> None:
        """Raise UnsupportedFormatError for extensions outside the allow-list."""
        if file.extension not in self.allowed_extensions:
            raise UnsupportedFormatError(file.name, self.allowed_extensions)

    async def upload(self, file: UploadedFile) -> list[EmbeddedChunk]:
        """Replace the session's chunks with the chunks of ``file``.

        Raises:
            UploadInProgressError: Another upload is running.
            UnsupportedFormatError: Extension not allowed; state untouched.
            ExtractionError, EmbeddingError: Upload failed; session is empty.
        """
        if self.is_processing:
            raise UploadInProgressError("An upload is already being processed")
        self.check_supported(file)

        self._clear()
        self.is_processing = True
        logger.info(f"Processing upload: {file.name} ({len(file.content)} bytes)")
        try:
            chunks = await self.ingest.run(file)
        except Exception:
            self._clear()
            raise
        finally:
            self.is_processing = False

        self.chunks = chunks
        self.file_name = file.name
        self.window.resize(len(chunks))
        return chunks

    def reset(self) -> None:
        """Discard the upload and every search or display choice."""
        self._clear()
        logger.info("Session reset")

    def _clear(self) -> None:
        self.chunks = []
        self.file_name = None
        self.search_input = ""
        self.expanded = {}
        self.window.reset()

    def set_search(self, value: str) -> None:
        before = [t.lower() for t in self.tokens]
        self.search_input = value
        if [t.lower() for t in self.tokens] != before:
            self.expanded = {}

    def clear_search(self) -> None:
        self.set_search("")

    def remove_token(self, token: str) -> None:
        self.set_search(remove_token(self.search_input, token))

    def drop_last_token(self) -> None:
        self.set_search(drop_last_token(self.search_input))

    def is_expanded(self, original_index: int) -> bool:
        """Manual choice if any, else expanded while a search is active."""
        return self.expanded.get(original_index, bool(self.tokens))

    def toggle_expanded(self, original_index: int) -> None:
        self.expanded[original_index] = not self.is_expanded(original_index)

    def search(self) -> SearchResponse:
        """Ranked entries for the current input; clamps the display window."""
        response = self.search_service.search(self.chunks, self.search_input)
        self.window.resize(response.total)
        return response

    def show_more(self) -> None:
        self.search()
        self.window.show_more()

    def select_size(self, size: int) -> None:
        self.window.select(size)

    def view(self) -> list[ChunkView]:
        """Cards for the visible slice of the ranked entries."""
        response = self.search()
        visible = response.entries[: self.window.display_count]
        return [self._card(entry, response.tokens) for entry in visible]

    def _card(self, entry: RankedEntry, tokens: list[str]) -> ChunkView:
        vectors = entry.chunk.vectors
        return ChunkView(
            entry=entry,
            segments=self.search_service.highlight(entry.chunk.text, tokens),
            expanded=self.is_expanded(entry.original_index),
            preview=format_vector(vectors[: self.preview_size], 4) or EMPTY_PREVIEW,
            full_vector=format_vector(vectors, 6) or NO_VECTOR_DATA,
        )
