"""Text chunking strategies."""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import partial

from langchain_text_splitters import RecursiveCharacterTextSplitter

_SENTENCE_END = re.compile(r"[.!?]+")

Chunker = Callable[[str], list[str]]


def chunk_text(text: str, max_chunk_size: int = 500) -> list[str]:
    """Group the sentences of *text* into chunks of roughly *max_chunk_size* chars.

    Sentences are accumulated into a buffer (joined with ``". "``).  The
    buffer is flushed as soon as the next sentence would push it past
    *max_chunk_size*, so the bound is soft: a single sentence longer than
    the limit becomes one oversized chunk instead of being cut.

    Parameters
    ----------
    text:
        Pre-cleaned document text (see :func:`~docrag.ingestion.loader.clean_text`).
    max_chunk_size:
        Target maximum number of characters per chunk.

    Returns
    -------
    list[str]
        Non-empty, trimmed chunks in document order.  When no sentence
        survives splitting, the unmodified *text* is the only chunk.
    """
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if not text.strip():
        raise ValueError("cannot chunk empty text")

    sentences = [s.strip() for s in _SENTENCE_END.split(text)]
    chunks: list[str] = []
    current = ""

    for sentence in sentences:
        if not sentence:
            continue
        if len(current + sentence) > max_chunk_size and current:
            chunks.append(current.strip())
            current = sentence
        else:
            current += (". " if current else "") + sentence

    if current.strip():
        chunks.append(current.strip())

    return chunks or [text]


def chunk_text_windowed(text: str, chunk_size: int = 800, overlap: int = 100) -> list[str]:
    """Split *text* into fixed-size windows that overlap by *overlap* chars.

    Windows prefer to break on newlines, then sentence ends, then words.
    """
    if overlap >= chunk_size:
        raise ValueError(f"chunk_overlap ({overlap}) must be < chunk_size ({chunk_size})")
    if not text.strip():
        raise ValueError("cannot chunk empty text")

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=overlap,
        length_function=len,
        separators=["\n", ". ", " ", ""],
        keep_separator="end",
    )
    chunks = [c.strip() for c in splitter.split_text(text)]
    return [c for c in chunks if c] or [text]


def get_chunker(strategy: str = "sentence", chunk_size: int = 500, chunk_overlap: int = 100) -> Chunker:
    """Return a one-argument chunking callable for *strategy*."""
    if strategy == "sentence":
        return partial(chunk_text, max_chunk_size=chunk_size)
    if strategy == "window":
        return partial(chunk_text_windowed, chunk_size=chunk_size, overlap=chunk_overlap)
    raise ValueError(f"Unknown chunk strategy: {strategy!r}")
