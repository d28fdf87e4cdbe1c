"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from langchain_core.embeddings import Embeddings

from docrag.ingestion.embedder import Embedder
from docrag.service import RagService
from docrag.store import InMemoryDocumentStore


# ── Fake embeddings for deterministic testing ───────────────────────────


class KeywordEmbeddings(Embeddings):
    """Maps text to a 3-d vector counting ``cat`` / ``dog`` / ``fish``.

    Any text containing ``boom`` raises, to exercise failure handling.
    """

    VOCAB = ("cat", "dog", "fish")

    def __init__(self) -> None:
        self.query_calls = 0

    def embed_query(self, text: str) -> list[float]:
        self.query_calls += 1
        if "boom" in text.lower():
            raise RuntimeError("provider exploded")
        lowered = text.lower()
        return [float(lowered.count(word)) for word in self.VOCAB]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]


class FakeEmbedder(Embedder):
    """Embedder backed by :class:`KeywordEmbeddings`."""

    def __init__(self) -> None:
        super().__init__("fake-keyword-model")

    def _build_client(self) -> Embeddings:
        return KeywordEmbeddings()


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def service(store: InMemoryDocumentStore) -> RagService:
    return RagService(store=store)
