"""
Store — documents and the chunks they own.

Public surface
--------------
- :class:`DocumentStoreBase` — abstract backend.
- :class:`InMemoryDocumentStore` — default process-local backend.
- :class:`Document`, :class:`Chunk`, :class:`DocumentSummary`,
  :class:`StoreStats`, :class:`DocumentStatus` — data models.
"""

from docrag.store.base import DocumentStoreBase
from docrag.store.memory import InMemoryDocumentStore
from docrag.store.models import Chunk, Document, DocumentStatus, DocumentSummary, StoreStats

__all__ = [
    "Chunk",
    "Document",
    "DocumentStatus",
    "DocumentStoreBase",
    "DocumentSummary",
    "InMemoryDocumentStore",
    "StoreStats",
]
