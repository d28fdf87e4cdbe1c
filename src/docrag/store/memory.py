"""In-process implementation of the document-store abstraction."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from uuid import uuid4

from docrag.store.base import DocumentStoreBase, build_chunks
from docrag.store.models import Chunk, Document, DocumentSummary

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStoreBase):
    """Insertion-ordered dict of documents guarded by a re-entrant lock.

    Nothing survives the process.  Documents are built completely before
    they are published under the lock, so readers never see a partially
    constructed document.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.RLock()

    # -- DocumentStoreBase overrides ------------------------------------------

    def insert(self, filename: str, raw_text: str, chunks: Sequence[Chunk | str]) -> str:
        document = Document(
            id=uuid4().hex,
            filename=filename,
            raw_text=raw_text,
            chunks=build_chunks(chunks),
        )
        with self._lock:
            self._documents[document.id] = document
        logger.debug("Document %r stored with %d chunks (id=%s)", filename, document.chunk_count, document.id)
        return document.id

    def list(self) -> list[DocumentSummary]:
        with self._lock:
            return [doc.summary() for doc in self._documents.values()]

    def get(self, document_id: str) -> Document | None:
        with self._lock:
            return self._documents.get(document_id)

    def delete(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is None:
            logger.info("Document with ID %s not found", document_id)
            return False
        logger.info("Document with ID %s deleted", document_id)
        return True

    def documents(self) -> list[Document]:
        with self._lock:
            return list(self._documents.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)

    # -- extras ---------------------------------------------------------------

    def clear(self) -> None:
        """Drop every stored document."""
        with self._lock:
            self._documents.clear()
