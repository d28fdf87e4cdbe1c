"""Abstract base class for document-store backends.

Adding a durable backend (SQL, key-value …) only requires subclassing
:class:`DocumentStoreBase` and implementing the abstract methods.  The
query engine and the service only talk to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from docrag.store.models import Chunk, Document, DocumentSummary, StoreStats


class DocumentStoreBase(ABC):
    """Backend-agnostic document/chunk repository."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def insert(self, filename: str, raw_text: str, chunks: Sequence[Chunk | str]) -> str:
        """Store a fully processed document and return its new id.

        Plain-string chunks are wrapped into :class:`Chunk` objects and
        indexed in the order given.  An empty *chunks* sequence raises
        ``ValueError``.
        """
        ...

    @abstractmethod
    def list(self) -> list[DocumentSummary]:
        """Summaries of every document, in insertion order."""
        ...

    @abstractmethod
    def get(self, document_id: str) -> Document | None:
        """Return the document, or ``None`` when the id is unknown."""
        ...

    @abstractmethod
    def delete(self, document_id: str) -> bool:
        """Remove a document and its chunks; ``False`` when nothing was removed."""
        ...

    @abstractmethod
    def documents(self) -> list[Document]:
        """Snapshot of all full documents, in insertion order."""
        ...

    # -- optional overrides ---------------------------------------------------

    def stats(self) -> StoreStats:
        """Aggregate counts; averages are rounded half-up and 0 on an empty store."""
        docs = self.documents()
        total_documents = len(docs)
        total_chunks = sum(doc.chunk_count for doc in docs)
        total_text_length = sum(doc.text_length for doc in docs)
        return StoreStats(
            total_documents=total_documents,
            total_chunks=total_chunks,
            total_text_length=total_text_length,
            average_chunks_per_doc=_round_average(total_chunks, total_documents),
            average_text_length_per_doc=_round_average(total_text_length, total_documents),
        )

    def __len__(self) -> int:
        return len(self.documents())


def _round_average(total: int, count: int) -> int:
    if count == 0:
        return 0
    # integer half-up rounding; round() would round half to even
    return (2 * total + count) // (2 * count)


def build_chunks(chunks: Sequence[Chunk | str]) -> list[Chunk]:
    """Normalise *chunks* into :class:`Chunk` objects indexed 0..n-1."""
    if not chunks:
        raise ValueError("a document needs at least one chunk")
    built: list[Chunk] = []
    for idx, chunk in enumerate(chunks):
        if isinstance(chunk, Chunk):
            built.append(chunk.model_copy(update={"index": idx}))
        else:
            built.append(Chunk(text=chunk, index=idx))
    return built
