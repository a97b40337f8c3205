"""Tests for in-memory store snapshot semantics."""

from conftest import make_chunk, make_document
from docvault.models.domain import DocumentStatus
from docvault.vectorstore.memory_store import InMemoryVectorStore


async def test_returned_documents_are_copies():
    store = InMemoryVectorStore(dimensions=2)
    doc = make_document(name="original.txt")
    await store.save_document(doc)

    fetched = await store.get_document(doc.doc_id)
    fetched.name = "mutated.txt"
    doc.status = DocumentStatus.FAILED

    again = await store.get_document(doc.doc_id)
    assert again.name == "original.txt"
    assert again.status == DocumentStatus.PENDING


async def test_query_reads_a_single_snapshot():
    store = InMemoryVectorStore(dimensions=2)
    doc = make_document()
    await store.save_document(doc)
    await store.add(doc, [make_chunk(doc.doc_id, i, [1.0, 0.0]) for i in range(3)])

    before = store._snapshot
    await store.remove_document(doc.doc_id)

    assert len(before.chunks) == 3
    assert before.matrix.shape == (3, 2)
    assert store._snapshot.chunks == ()
    assert store._snapshot.matrix is None
