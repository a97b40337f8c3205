"""Behaviour shared by every vector store backend."""

from __future__ import annotations

import asyncio
import math
import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from conftest import make_chunk, make_document
from docvault.exceptions import DimensionMismatchError, StoreError
from docvault.models.domain import DocumentStatus
from docvault.vectorstore.memory_store import InMemoryVectorStore
from docvault.vectorstore.sqlite_store import SQLiteVectorStore

DIMS = 2
QUERY = [1.0, 0.0]


def unit_at(score: float) -> list[float]:
    """2-d vector whose cosine similarity with QUERY equals ``score``."""
    return [score, math.sqrt(1.0 - score * score)]


@pytest.fixture(params=["memory", "sqlite"])
async def store(request):
    if request.param == "memory":
        return InMemoryVectorStore(dimensions=DIMS)
    tmp = tempfile.mkdtemp()
    sqlite_store = SQLiteVectorStore(str(Path(tmp) / "vectors.db"), dimensions=DIMS)
    await sqlite_store.initialize()
    return sqlite_store


async def add_document(store, scores_by_ordinal: dict[int, float], **doc_kwargs):
    doc = make_document(**doc_kwargs)
    chunks = [make_chunk(doc.doc_id, i, unit_at(s)) for i, s in scores_by_ordinal.items()]
    await store.save_document(doc)
    await store.add(doc, chunks)
    return doc


async def test_ties_broken_by_ordinal(store):
    await add_document(store, {2: 0.9, 0: 0.9, 1: 0.4})
    results = await store.query(QUERY, k=2, threshold=0.5)
    assert [r.chunk.index for r in results] == [0, 2]
    assert [r.score for r in results] == pytest.approx([0.9, 0.9])


async def test_results_sorted_and_within_k(store):
    await add_document(store, {0: 0.1, 1: 0.7, 2: 0.95, 3: 0.3, 4: 0.5})
    results = await store.query(QUERY, k=3, threshold=0.0)
    scores = [r.score for r in results]
    assert len(results) == 3
    assert scores == sorted(scores, reverse=True)
    assert [r.chunk.index for r in results] == [2, 1, 4]


async def test_threshold_filters_results(store):
    await add_document(store, {0: 0.2, 1: 0.6, 2: 0.8})
    results = await store.query(QUERY, k=10, threshold=0.5)
    assert all(r.score >= 0.5 for r in results)
    assert {r.chunk.index for r in results} == {1, 2}


async def test_non_positive_k_and_empty_store(store):
    assert await store.query(QUERY, k=3) == []
    await add_document(store, {0: 0.9})
    assert await store.query(QUERY, k=0) == []
    assert await store.query(QUERY, k=-1) == []


async def test_results_reference_their_document(store):
    doc = await add_document(store, {0: 0.9}, name="passport.pdf")
    [result] = await store.query(QUERY, k=1)
    assert result.document.doc_id == doc.doc_id
    assert result.document.name == "passport.pdf"
    assert result.chunk.doc_id == doc.doc_id


async def test_add_commits_document_as_complete(store):
    doc = await add_document(store, {0: 0.9, 1: 0.8, 2: 0.7})
    assert doc.status == DocumentStatus.COMPLETE
    stored = await store.get_document(doc.doc_id)
    assert stored.status == DocumentStatus.COMPLETE
    assert stored.chunk_count == 3


async def test_get_chunks_in_ordinal_order(store):
    doc = make_document()
    chunks = [make_chunk(doc.doc_id, i, unit_at(0.5)) for i in (2, 0, 1)]
    await store.save_document(doc)
    await store.add(doc, chunks)
    assert [c.index for c in await store.get_chunks(doc.doc_id)] == [0, 1, 2]


async def test_remove_document_removes_all_chunks(store):
    keep = await add_document(store, {0: 0.9, 1: 0.8})
    gone = await add_document(store, {0: 0.95, 1: 0.85, 2: 0.75})

    assert await store.remove_document(gone.doc_id) is True

    results = await store.query(QUERY, k=10, threshold=-1.0)
    assert {r.document.doc_id for r in results} == {keep.doc_id}
    assert await store.get_chunks(gone.doc_id) == []
    assert await store.get_document(gone.doc_id) is None
    assert await store.count_chunks() == 2


async def test_remove_missing_document_is_noop(store):
    assert await store.remove_document("does-not-exist") is False


async def test_incomplete_documents_are_not_searchable(store):
    doc = await add_document(store, {0: 0.9})
    reingest = replace(doc, status=DocumentStatus.PROCESSING)
    await store.save_document(reingest)
    assert await store.query(QUERY, k=5, threshold=-1.0) == []


async def test_save_document_cannot_mark_complete(store):
    doc = make_document()
    doc.status = DocumentStatus.COMPLETE
    with pytest.raises(StoreError):
        await store.save_document(doc)


async def test_add_rejects_bad_vectors(store):
    doc = make_document()
    await store.save_document(doc)
    with pytest.raises(DimensionMismatchError):
        await store.add(doc, [make_chunk(doc.doc_id, 0, [1.0, 0.0, 0.0])])
    with pytest.raises(StoreError):
        await store.add(doc, [make_chunk(doc.doc_id, 0, [math.nan, 0.0])])
    with pytest.raises(StoreError):
        await store.add(doc, [make_chunk("someone-else", 0, [1.0, 0.0])])
    with pytest.raises(StoreError):
        await store.add(doc, [make_chunk(doc.doc_id, 0, None)])
    assert await store.count_chunks() == 0


async def test_query_dimension_mismatch(store):
    await add_document(store, {0: 0.9})
    with pytest.raises(DimensionMismatchError):
        await store.query([1.0, 0.0, 0.0], k=1)


async def test_listing_and_name_search(store):
    await add_document(store, {0: 0.9}, name="Passport Scan.pdf")
    await add_document(store, {0: 0.9}, name="electricity_bill.pdf")
    assert await store.count_documents() == 2
    assert len(await store.list_documents()) == 2
    matches = await store.search_by_name("passport")
    assert [d.name for d in matches] == ["Passport Scan.pdf"]
    assert await store.search_by_name("missing") == []


async def test_concurrent_adds_of_different_documents(store):
    docs = [make_document(name=f"doc{i}.txt") for i in range(5)]
    for doc in docs:
        await store.save_document(doc)
    await asyncio.gather(
        *(store.add(doc, [make_chunk(doc.doc_id, 0, unit_at(0.5))]) for doc in docs)
    )
    assert await store.count_chunks() == 5
    assert len(await store.query(QUERY, k=10, threshold=-1.0)) == 5
