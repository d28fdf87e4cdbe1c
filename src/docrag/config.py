"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from ``DOCRAG_*`` env vars or .env file."""

    # Chunking
    chunk_strategy: Literal["sentence", "window"] = "sentence"
    chunk_size: int = Field(default=500, gt=0, description="Soft upper bound on chunk length (chars)")
    chunk_overlap: int = Field(default=100, ge=0, description="Overlap between windows (window strategy only)")

    # Query
    max_results: int = Field(default=5, gt=0)
    scorer: Literal["keyword", "embedding"] = "keyword"

    # Embedding
    embedding_provider: Literal["none", "huggingface", "openai"] = "none"
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    openai_api_key: str = Field(default="", description="OpenAI API key for the openai embedding provider")
    openai_embedding_model: str = "text-embedding-3-small"

    # Serving
    seed_directory: str = Field(
        default="",
        description="Directory whose supported files are ingested at startup. Empty disables seeding.",
    )
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0, description="Largest accepted upload body")
    log_level: str = "INFO"

    model_config = {"env_prefix": "DOCRAG_", "env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
