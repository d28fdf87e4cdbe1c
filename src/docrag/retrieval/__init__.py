"""
Retrieval — relevance scoring, ranking, and answer assembly.

Public surface
--------------
- :class:`QueryEngine` — main entry point for ranked queries.
- :class:`Scorer` — abstract scoring strategy.
- :class:`KeywordScorer` — default substring-count scorer.
- :class:`EmbeddingScorer` — cosine-similarity scorer over chunk embeddings.
- :class:`QueryResult`, :class:`SourceReference` — data models.
"""

from docrag.retrieval.engine import NO_RESULTS_MESSAGE, QueryEngine
from docrag.retrieval.models import QueryResult, SourceReference
from docrag.retrieval.scoring import EmbeddingScorer, KeywordScorer, Scorer, tokenize

__all__ = [
    "EmbeddingScorer",
    "KeywordScorer",
    "NO_RESULTS_MESSAGE",
    "QueryEngine",
    "QueryResult",
    "Scorer",
    "SourceReference",
    "tokenize",
]
