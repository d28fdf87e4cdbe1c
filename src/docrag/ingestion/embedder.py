"""Optional embedding providers.

An :class:`Embedder` maps text to a fixed-length vector.  Embeddings are an
enrichment: ingestion works without a provider, and a provider failure for
one chunk only leaves that chunk without a vector.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from docrag.config import Settings, settings

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Provider-agnostic embedding interface."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        self._client: Embeddings | None = None

    @abstractmethod
    def _build_client(self) -> Embeddings:
        """Create the underlying LangChain embeddings client."""
        ...

    @property
    def client(self) -> Embeddings:
        """Lazily build the client so importing never loads a model."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def embed_query(self, text: str) -> list[float]:
        return self.client.embed_query(text)


class HuggingFaceEmbedder(Embedder):
    """Local sentence-transformer embeddings."""

    def __init__(self, model_name: str = settings.embedding_model) -> None:
        super().__init__(model_name)

    def _build_client(self) -> Embeddings:
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(
            model_name=self.model_name,
            encode_kwargs={"normalize_embeddings": True},
        )


class OpenAIEmbedder(Embedder):
    """OpenAI embeddings API."""

    def __init__(
        self,
        model_name: str = settings.openai_embedding_model,
        *,
        api_key: str = settings.openai_api_key,
    ) -> None:
        super().__init__(model_name)
        self._api_key = api_key

    def _build_client(self) -> Embeddings:
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(model=self.model_name, api_key=self._api_key)


def get_embedder(provider: str | None = None, config: Settings | None = None) -> Embedder | None:
    """Return the configured embedder, or ``None`` when embeddings are disabled."""
    config = config or settings
    provider = provider or config.embedding_provider
    if provider == "none":
        return None
    if provider == "huggingface":
        return HuggingFaceEmbedder(config.embedding_model)
    if provider == "openai":
        if not config.openai_api_key:
            logger.warning("OpenAI embedding provider selected but no API key set; embeddings disabled")
            return None
        return OpenAIEmbedder(config.openai_embedding_model, api_key=config.openai_api_key)
    raise ValueError(f"Unknown embedding provider: {provider!r}")


def embed_chunks(texts: Sequence[str], embedder: Embedder | None) -> list[list[float] | None]:
    """Embed each chunk independently; a failed chunk gets ``None``.

    Failures are logged and never propagated, so one bad chunk (or an
    unreachable provider) does not abort ingestion.
    """
    if embedder is None:
        return [None] * len(texts)

    vectors: list[list[float] | None] = []
    failed = 0
    for idx, text in enumerate(texts):
        try:
            vectors.append(list(embedder.embed_query(text)))
        except Exception as exc:
            logger.warning("Embedding failed for chunk %d, continuing without embedding: %s", idx, exc)
            vectors.append(None)
            failed += 1

    if failed:
        logger.info("Embedded %d / %d chunks with %s", len(texts) - failed, len(texts), embedder.model_name)
    return vectors
