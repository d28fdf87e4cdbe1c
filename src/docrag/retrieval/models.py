"""Domain models for query results and source tracking."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SourceReference(BaseModel):
    """Provenance record linking a ranked chunk back to its document.

    Attributes
    ----------
    document_id:
        Store id of the parent document.
    document_name:
        Original filename of the parent document.
    chunk_index:
        Ordinal position of the chunk within the document.
    content:
        The chunk text.
    relevance_score:
        Score assigned by the active scorer (strictly positive).
    """

    document_id: str
    document_name: str
    chunk_index: int
    content: str
    relevance_score: float

    def short_ref(self) -> str:
        """Return a compact ``[filename§chunk]`` reference string."""
        return f"[{self.document_name}§{self.chunk_index}]"


class QueryResult(BaseModel):
    """Ranked sources plus a synthesized answer for one query."""

    query: str
    response: str
    sources: list[SourceReference] = Field(default_factory=list)
    total_documents: int = 0
