"""Unit tests for the document store."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest
from pydantic import ValidationError

from docrag.store import Chunk, DocumentStatus, InMemoryDocumentStore, StoreStats


def _insert(store: InMemoryDocumentStore, name: str, text: str, chunks: list[str] | None = None) -> str:
    return store.insert(name, text, chunks or [text])


class TestInsertAndRead:
    def test_insert_returns_unique_ids(self, store: InMemoryDocumentStore) -> None:
        ids = {_insert(store, f"doc{i}.txt", f"text {i}") for i in range(20)}
        assert len(ids) == 20

    def test_inserted_document_is_processed(self, store: InMemoryDocumentStore) -> None:
        doc_id = _insert(store, "a.txt", "Hello world.")
        doc = store.get(doc_id)
        assert doc is not None
        assert doc.filename == "a.txt"
        assert doc.raw_text == "Hello world."
        assert doc.status is DocumentStatus.PROCESSED
        assert isinstance(doc.processed_at, datetime)
        assert doc.processed_at.tzinfo is not None

    def test_string_chunks_are_indexed_in_order(self, store: InMemoryDocumentStore) -> None:
        doc_id = store.insert("a.txt", "one. two. three", ["one", " two ", "three"])
        doc = store.get(doc_id)
        assert [(c.index, c.text) for c in doc.chunks] == [(0, "one"), (1, "two"), (2, "three")]
        assert all(not c.has_embedding for c in doc.chunks)

    def test_chunk_objects_are_reindexed_and_keep_embeddings(self, store: InMemoryDocumentStore) -> None:
        chunks = [Chunk(text="first", index=7, embedding=[0.1, 0.2]), Chunk(text="second", index=3)]
        doc = store.get(store.insert("a.txt", "first second", chunks))
        assert [c.index for c in doc.chunks] == [0, 1]
        assert doc.chunks[0].embedding == [0.1, 0.2]
        assert doc.chunks[1].embedding is None

    def test_empty_chunk_list_is_rejected(self, store: InMemoryDocumentStore) -> None:
        with pytest.raises(ValueError, match="at least one chunk"):
            store.insert("a.txt", "text", [])
        assert len(store) == 0

    def test_blank_chunk_text_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Chunk(text="   ", index=0)

    def test_get_unknown_id(self, store: InMemoryDocumentStore) -> None:
        assert store.get("missing") is None

    def test_list_preserves_insertion_order(self, store: InMemoryDocumentStore) -> None:
        names = ["c.txt", "a.txt", "b.txt"]
        for name in names:
            _insert(store, name, f"body of {name}")
        assert [s.filename for s in store.list()] == names

    def test_summary_fields(self, store: InMemoryDocumentStore) -> None:
        doc_id = store.insert("a.txt", "0123456789", ["01234", "56789"])
        (summary,) = store.list()
        assert summary.id == doc_id
        assert summary.chunk_count == 2
        assert summary.text_length == 10
        assert summary.status is DocumentStatus.PROCESSED
        assert "raw_text" not in summary.model_dump()
        assert "chunks" not in summary.model_dump()


class TestDelete:
    def test_delete_present_document(self, store: InMemoryDocumentStore) -> None:
        keep = _insert(store, "keep.txt", "keep")
        drop = _insert(store, "drop.txt", "drop")
        assert store.delete(drop) is True
        assert store.get(drop) is None
        assert [s.id for s in store.list()] == [keep]

    def test_delete_is_idempotent(self, store: InMemoryDocumentStore) -> None:
        _insert(store, "a.txt", "a")
        assert store.delete("missing") is False
        assert store.delete("missing") is False
        assert len(store.list()) == 1

    def test_list_shrinks_by_one_per_successful_delete(self, store: InMemoryDocumentStore) -> None:
        ids = [_insert(store, f"{i}.txt", str(i)) for i in range(3)]
        assert store.delete(ids[1])
        assert len(store.list()) == 2
        assert not store.delete(ids[1])
        assert len(store.list()) == 2

    def test_clear(self, store: InMemoryDocumentStore) -> None:
        _insert(store, "a.txt", "a")
        store.clear()
        assert store.list() == []


class TestStats:
    def test_empty_store_is_all_zero(self, store: InMemoryDocumentStore) -> None:
        assert store.stats() == StoreStats()
        assert store.stats().model_dump() == {
            "total_documents": 0,
            "total_chunks": 0,
            "total_text_length": 0,
            "average_chunks_per_doc": 0,
            "average_text_length_per_doc": 0,
        }

    def test_totals_and_half_up_averages(self, store: InMemoryDocumentStore) -> None:
        store.insert("a.txt", "abc", ["abc"])
        store.insert("b.txt", "defg", ["de", "fg"])
        stats = store.stats()
        assert stats.total_documents == 2
        assert stats.total_chunks == 3
        assert stats.total_text_length == 7
        assert stats.average_chunks_per_doc == 2  # 1.5 rounds up
        assert stats.average_text_length_per_doc == 4  # 3.5 rounds up

    def test_averages_round_down_below_half(self, store: InMemoryDocumentStore) -> None:
        for _ in range(3):
            store.insert("a.txt", "a", ["a"])
        store.insert("b.txt", "b", ["b", "c"])
        assert store.stats().average_chunks_per_doc == 1  # 5 / 4 = 1.25


def test_concurrent_inserts_are_not_lost(store: InMemoryDocumentStore) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda i: _insert(store, f"{i}.txt", f"text {i}"), range(100)))
    assert len(set(ids)) == 100
    assert len(store) == 100
    assert store.stats().total_chunks == 100
