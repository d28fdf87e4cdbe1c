"""Relevance scorers used by the query engine.

Every scorer satisfies the same ``score(query, chunk) -> float`` contract so
the ranking logic in :class:`~docrag.retrieval.engine.QueryEngine` never
changes when the strategy does.  A score of ``0`` means "not relevant".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from docrag.ingestion.embedder import Embedder
from docrag.store.models import Chunk

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3


def tokenize(query: str) -> list[str]:
    """Lower-case whitespace tokens of at least :data:`MIN_TOKEN_LENGTH` chars."""
    return [token for token in query.lower().split() if len(token) >= MIN_TOKEN_LENGTH]


class Scorer(ABC):
    """Strategy that rates how well a chunk answers a query."""

    @abstractmethod
    def score(self, query: str, chunk: Chunk) -> float:
        ...


class KeywordScorer(Scorer):
    """Sum of case-insensitive substring counts of each query token.

    Matching is not word-boundary aware: ``"cat"`` matches inside
    ``"cats"`` and ``"concatenate"``.  Repeated query tokens count once
    per repetition.
    """

    def score(self, query: str, chunk: Chunk) -> float:
        haystack = chunk.text.lower()
        return sum(haystack.count(token) for token in tokenize(query))


class EmbeddingScorer(Scorer):
    """Cosine similarity between query and chunk embeddings.

    Chunks stored without an embedding score ``0`` and therefore never
    rank.  The query embedding is cached for the most recent query string
    since the engine scores every chunk against the same query.
    """

    def __init__(self, embedder: Embedder) -> None:
        self._embedder = embedder
        self._cache: tuple[str, np.ndarray] | None = None

    def _query_vector(self, query: str) -> np.ndarray:
        # query and vector are swapped in as one tuple so threads never mix them
        cached = self._cache
        if cached is not None and cached[0] == query:
            return cached[1]
        vector = np.asarray(self._embedder.embed_query(query), dtype=float)
        self._cache = (query, vector)
        return vector

    def score(self, query: str, chunk: Chunk) -> float:
        if chunk.embedding is None:
            return 0.0
        return max(cosine_similarity(self._query_vector(query), chunk.embedding), 0.0)


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Compute cosine similarity between two vectors."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"Embedding dimensions differ: {a.shape[0]} != {b.shape[0]}")
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))
