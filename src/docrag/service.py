"""RAG service — the calls the admin surface makes into the core.

A :class:`RagService` owns one document store and wires the extractor,
chunker, embedder and query engine around it.  Build one per process with
:meth:`RagService.from_settings` and hand it to every consumer; tests build
their own isolated instances.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docrag.config import Settings, settings
from docrag.errors import DocRagError, EmptyDocumentError
from docrag.ingestion.chunker import Chunker, get_chunker
from docrag.ingestion.embedder import Embedder, embed_chunks, get_embedder
from docrag.ingestion.loader import clean_text, extract_text, iter_supported_files
from docrag.retrieval.engine import QueryEngine
from docrag.retrieval.models import QueryResult
from docrag.retrieval.scoring import EmbeddingScorer, KeywordScorer, Scorer
from docrag.store.base import DocumentStoreBase
from docrag.store.memory import InMemoryDocumentStore
from docrag.store.models import Chunk, Document, DocumentSummary, StoreStats

logger = logging.getLogger(__name__)


class RagService:
    """Ingestion and query facade over a single document store.

    Parameters
    ----------
    store:
        Backend holding documents; a fresh :class:`InMemoryDocumentStore`
        when *None*.
    embedder:
        Optional embedding provider.  ``None`` stores chunks without vectors.
    chunker:
        One-argument chunking callable; the sentence chunker with the
        configured size when *None*.
    scorer:
        Relevance strategy for queries; keyword counting when *None*.
    default_max_results:
        Result cap used when a query does not pass its own.
    """

    def __init__(
        self,
        store: DocumentStoreBase | None = None,
        *,
        embedder: Embedder | None = None,
        chunker: Chunker | None = None,
        scorer: Scorer | None = None,
        default_max_results: int = settings.max_results,
    ) -> None:
        self.store = store if store is not None else InMemoryDocumentStore()
        self.embedder = embedder
        self.chunker = chunker or get_chunker("sentence", settings.chunk_size)
        self.engine = QueryEngine(
            self.store,
            scorer or KeywordScorer(),
            default_max_results=default_max_results,
        )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> RagService:
        """Build a service wired according to *config*."""
        embedder = get_embedder(config=config)
        scorer: Scorer = KeywordScorer()
        if config.scorer == "embedding":
            if embedder is None:
                logger.warning("Embedding scorer requested without an embedding provider; using keyword scorer")
            else:
                scorer = EmbeddingScorer(embedder)
        return cls(
            embedder=embedder,
            chunker=get_chunker(config.chunk_strategy, config.chunk_size, config.chunk_overlap),
            scorer=scorer,
            default_max_results=config.max_results,
        )

    # -- ingestion ------------------------------------------------------------

    def extract_text(self, path: str | Path) -> str:
        return extract_text(path)

    def process_document_for_rag(self, filename: str, text: str) -> str:
        """Chunk, embed and store *text*; return the new document id.

        Raises
        ------
        EmptyDocumentError
            *text* is empty or whitespace only.
        """
        if not text or not text.strip():
            raise EmptyDocumentError()

        pieces = self.chunker(clean_text(text))
        vectors = embed_chunks(pieces, self.embedder)
        chunks = [
            Chunk(text=piece, index=idx, embedding=vector)
            for idx, (piece, vector) in enumerate(zip(pieces, vectors))
        ]
        document_id = self.store.insert(filename, text, chunks)
        logger.info("Document %r processed with %d chunks", filename, len(chunks))
        return document_id

    def ingest_file(self, path: str | Path, filename: str | None = None) -> str:
        """Extract and process a file; *filename* defaults to the file's name."""
        path = Path(path)
        text = self.extract_text(path)
        return self.process_document_for_rag(filename or path.name, text)

    def ingest_directory(self, directory: str | Path) -> list[str]:
        """Ingest every supported file below *directory*.

        Files that fail extraction are logged and skipped so one bad file
        does not block the rest.
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning("Seed directory %s not found, skipping", directory)
            return []

        ids: list[str] = []
        for path in iter_supported_files(directory):
            try:
                ids.append(self.ingest_file(path))
            except DocRagError:
                logger.warning("Skipping %s", path, exc_info=True)
        logger.info("Ingested %d documents from %s", len(ids), directory)
        return ids

    # -- queries --------------------------------------------------------------

    def query_rag(self, query: str, max_results: int | None = None) -> QueryResult:
        return self.engine.query(query, max_results)

    # -- store passthroughs ---------------------------------------------------

    def get_all_documents(self) -> list[DocumentSummary]:
        return self.store.list()

    def get_document(self, document_id: str) -> Document | None:
        return self.store.get(document_id)

    def delete_document(self, document_id: str) -> bool:
        return self.store.delete(document_id)

    def get_stats(self) -> StoreStats:
        return self.store.stats()
