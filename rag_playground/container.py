import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)
        else:
            self._singleton_flags.discard(interface)
        self._singletons.pop(interface, None)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def configure_container(settings: Settings, target: Container | None = None) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.
        target: Container to fill; the module-level one by default.

    Returns:
        Configured container.
    """
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.text_extractor import TextExtractorProtocol
    from .core.services.ingest_service import IngestService
    from .core.services.search_service import SearchService
    from .core.services.session_service import DocumentSession
    from .core.strategies.chunking import WindowChunker
    from .infrastructure.document_loaders import CompositeLoader
    from .infrastructure.embeddings.sentence_transformer import (
        SentenceTransformerEmbedder,
    )

    c = target if target is not None else container

    # One model per process, loaded lazily on first encode or warmup
    c.register(
        EmbedderProtocol,
        lambda: SentenceTransformerEmbedder(
            settings.embedding_model, device=settings.embedding_device
        ),
        singleton=True,
    )

    c.register(TextExtractorProtocol, CompositeLoader, singleton=True)

    c.register(
        WindowChunker,
        lambda: WindowChunker(
            step=settings.chunk_step, window_size=settings.chunk_window_size
        ),
        singleton=True,
    )

    c.register(SearchService, SearchService, singleton=True)

    c.register(
        IngestService,
        lambda: IngestService(
            embedder=c.resolve(EmbedderProtocol),
            extractor=c.resolve(TextExtractorProtocol),
            chunker=c.resolve(WindowChunker),
        ),
        singleton=True,
    )

    # Fresh state for every chat session
    c.register(
        DocumentSession,
        lambda: DocumentSession(
            ingest=c.resolve(IngestService),
            search_service=c.resolve(SearchService),
            allowed_extensions=list(settings.allowed_extensions),
            page_size=settings.display_page_size,
            preview_size=settings.vector_preview_size,
        ),
    )

    logger.info("Container configured")
    return c
