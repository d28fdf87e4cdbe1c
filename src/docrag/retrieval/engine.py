"""Query engine — scan, score, rank, and answer.

Usage::

    from docrag.retrieval.engine import QueryEngine
    from docrag.store import InMemoryDocumentStore

    engine = QueryEngine(InMemoryDocumentStore())
    result = engine.query("How are documents chunked?", max_results=3)
    for source in result.sources:
        print(source.short_ref(), source.content[:80])
"""

from __future__ import annotations

import logging

from docrag.errors import EmptyQueryError
from docrag.retrieval.models import QueryResult, SourceReference
from docrag.retrieval.scoring import KeywordScorer, Scorer
from docrag.store.base import DocumentStoreBase

logger = logging.getLogger(__name__)

ANSWER_PREFIX = "Based on the documents, here's what I found:\n\n"
ADDITIONAL_PREFIX = "\n\nAdditional relevant information:\n"
NO_RESULTS_MESSAGE = "I could not find relevant information in the uploaded documents to answer your query."


class QueryEngine:
    """Rank every stored chunk against a free-text query.

    Parameters
    ----------
    store:
        Document store to scan.
    scorer:
        Relevance strategy; defaults to :class:`KeywordScorer`.
    default_max_results:
        Number of sources returned when :meth:`query` is called without
        *max_results*.
    """

    def __init__(
        self,
        store: DocumentStoreBase,
        scorer: Scorer | None = None,
        *,
        default_max_results: int = 5,
    ) -> None:
        self._store = store
        self.scorer = scorer or KeywordScorer()
        self.default_max_results = default_max_results

    # -- public API -----------------------------------------------------------

    def query(self, text: str, max_results: int | None = None) -> QueryResult:
        """Return the top-*max_results* chunks for *text* and a synthesized answer.

        Candidates need a strictly positive score.  Ties keep scan order
        (documents in insertion order, then chunks in index order).

        Raises
        ------
        EmptyQueryError
            *text* is empty or whitespace only.  The store is not touched.
        """
        if not text or not text.strip():
            raise EmptyQueryError()
        if max_results is None:
            max_results = self.default_max_results
        if max_results < 1:
            raise ValueError(f"max_results must be >= 1, got {max_results}")

        documents = self._store.documents()
        candidates: list[SourceReference] = []
        for doc in documents:
            for chunk in doc.chunks:
                score = self.scorer.score(text, chunk)
                if score <= 0:
                    continue
                candidates.append(
                    SourceReference(
                        document_id=doc.id,
                        document_name=doc.filename,
                        chunk_index=chunk.index,
                        content=chunk.text,
                        relevance_score=score,
                    )
                )

        # list.sort is stable, so equal scores stay in scan order
        candidates.sort(key=lambda c: c.relevance_score, reverse=True)
        top = candidates[:max_results]

        logger.info(
            "Query %r matched %d chunks across %d documents; returning %d",
            text, len(candidates), len(documents), len(top),
        )
        return QueryResult(
            query=text,
            response=build_response(top),
            sources=top,
            total_documents=len(documents),
        )


def build_response(sources: list[SourceReference]) -> str:
    """Compose the answer text from the two best sources."""
    if not sources:
        return NO_RESULTS_MESSAGE
    response = ANSWER_PREFIX + sources[0].content
    if len(sources) > 1:
        response += ADDITIONAL_PREFIX + sources[1].content
    return response
