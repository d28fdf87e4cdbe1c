"""Domain models for stored documents and their chunks."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


class Chunk(BaseModel):
    """One retrievable segment of a document.

    Attributes
    ----------
    text:
        Trimmed, non-empty chunk content.
    index:
        0-based position within the parent document.
    embedding:
        Vector for the chunk, or ``None`` when no provider is configured or
        the provider failed for this chunk.
    """

    text: str
    index: int = Field(ge=0)
    embedding: list[float] | None = None

    @field_validator("text")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("chunk text must not be empty")
        return value

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None


class DocumentSummary(BaseModel):
    """Listing view of a document; carries no text or chunk contents."""

    id: str
    filename: str
    processed_at: datetime
    status: DocumentStatus
    chunk_count: int
    text_length: int


class Document(BaseModel):
    """An ingested file together with the chunks it owns."""

    id: str
    filename: str
    raw_text: str
    chunks: list[Chunk]
    processed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: DocumentStatus = DocumentStatus.PROCESSED

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @property
    def text_length(self) -> int:
        return len(self.raw_text)

    def summary(self) -> DocumentSummary:
        return DocumentSummary(
            id=self.id,
            filename=self.filename,
            processed_at=self.processed_at,
            status=self.status,
            chunk_count=self.chunk_count,
            text_length=self.text_length,
        )


class StoreStats(BaseModel):
    """Aggregate counters over every stored document."""

    total_documents: int = 0
    total_chunks: int = 0
    total_text_length: int = 0
    average_chunks_per_doc: int = 0
    average_text_length_per_doc: int = 0
