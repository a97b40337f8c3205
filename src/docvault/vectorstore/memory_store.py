"""In-memory vector store with copy-on-write snapshots.

Writers build a complete new snapshot under a lock and swap it in with a
single assignment, so a query always sees either all or none of a
document's chunks.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace

import numpy as np

from docvault.exceptions import StoreError
from docvault.models.domain import Chunk, Document, DocumentStatus, SimilarityResult
from docvault.observability.logger import get_logger
from docvault.vectorstore.ranking import check_query_vector, rank, validate_chunks
from docvault.vectorstore.similarity import VECTOR_DTYPE, cosine_similarities

logger = get_logger("memory_store")


@dataclass(frozen=True)
class _Snapshot:
    documents: dict[str, Document] = field(default_factory=dict)
    chunks: tuple[Chunk, ...] = ()
    matrix: np.ndarray | None = None


class InMemoryVectorStore:
    def __init__(self, dimensions: int) -> None:
        self._dimensions = dimensions
        self._snapshot = _Snapshot()
        self._write_lock = asyncio.Lock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def save_document(self, doc: Document) -> None:
        if doc.status == DocumentStatus.COMPLETE:
            raise StoreError("Documents are marked COMPLETE only by add()")
        async with self._write_lock:
            snap = self._snapshot
            documents = dict(snap.documents)
            documents[doc.doc_id] = replace(doc)
            self._snapshot = replace(snap, documents=documents)

    async def add(self, doc: Document, chunks: list[Chunk]) -> None:
        validate_chunks(doc, chunks, self._dimensions)
        committed = replace(doc, status=DocumentStatus.COMPLETE, chunk_count=len(chunks))
        ordered = sorted(chunks, key=lambda c: c.index)
        async with self._write_lock:
            snap = self._snapshot
            documents = dict(snap.documents)
            documents[doc.doc_id] = committed
            kept = tuple(c for c in snap.chunks if c.doc_id != doc.doc_id)
            self._snapshot = self._build(documents, kept + tuple(ordered))
        doc.status = committed.status
        doc.chunk_count = committed.chunk_count
        logger.info("store_added", doc_id=doc.doc_id, chunks=len(chunks))

    async def query(
        self, vector: list[float], k: int, threshold: float = 0.0
    ) -> list[SimilarityResult]:
        snap = self._snapshot
        if k <= 0 or snap.matrix is None or not snap.chunks:
            return []
        check_query_vector(vector, self._dimensions)
        searchable = np.array(
            [snap.documents[c.doc_id].status == DocumentStatus.COMPLETE for c in snap.chunks]
        )
        if not searchable.any():
            return []
        chunks = [c for c, ok in zip(snap.chunks, searchable) if ok]
        scores = cosine_similarities(vector, snap.matrix[searchable])
        return rank(scores, chunks, snap.documents, k, threshold)

    async def remove_document(self, doc_id: str) -> bool:
        async with self._write_lock:
            snap = self._snapshot
            if doc_id not in snap.documents:
                return False
            documents = {k: v for k, v in snap.documents.items() if k != doc_id}
            kept = tuple(c for c in snap.chunks if c.doc_id != doc_id)
            self._snapshot = self._build(documents, kept)
        logger.info("store_removed", doc_id=doc_id)
        return True

    async def get_document(self, doc_id: str) -> Document | None:
        doc = self._snapshot.documents.get(doc_id)
        return replace(doc) if doc else None

    async def list_documents(self) -> list[Document]:
        docs = sorted(self._snapshot.documents.values(), key=lambda d: d.created_at)
        return [replace(d) for d in docs]

    async def search_by_name(self, name: str) -> list[Document]:
        needle = name.lower()
        return [d for d in await self.list_documents() if needle in d.name.lower()]

    async def get_chunks(self, doc_id: str) -> list[Chunk]:
        return [c for c in self._snapshot.chunks if c.doc_id == doc_id]

    async def count_documents(self) -> int:
        return len(self._snapshot.documents)

    async def count_chunks(self) -> int:
        return len(self._snapshot.chunks)

    def _build(self, documents: dict[str, Document], chunks: tuple[Chunk, ...]) -> _Snapshot:
        matrix = None
        if chunks:
            matrix = np.asarray([c.embedding for c in chunks], dtype=VECTOR_DTYPE)
        return _Snapshot(documents=documents, chunks=chunks, matrix=matrix)
