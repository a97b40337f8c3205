"""Retrieval orchestrator: chunk -> embed -> store on ingest, embed -> search -> arbitrate on query."""

from __future__ import annotations

import asyncio
import weakref
from uuid import uuid4

from docvault.arbitration.response_arbiter import ResponseArbiter
from docvault.embeddings.factory import ensure_compatible
from docvault.exceptions import ChunkingError, DocVaultError, PartialIngestFailure
from docvault.generation.prompt_templates import GENERATION_FAILED_ANSWER
from docvault.models.domain import (
    Document,
    DocumentStatus,
    IngestResult,
    QueryResult,
    SimilarityResult,
    SourceText,
)
from docvault.observability.logger import get_logger
from docvault.protocols.chunker import Chunker
from docvault.protocols.embedder import Embedder
from docvault.protocols.llm import AnswerGenerator
from docvault.protocols.vector_store import VectorStore

logger = get_logger("orchestrator")


class RetrievalOrchestrator:
    def __init__(
        self,
        chunker: Chunker,
        embedder: Embedder,
        store: VectorStore,
        arbiter: ResponseArbiter,
        top_k: int = 3,
        threshold: float = 0.0,
    ) -> None:
        ensure_compatible(embedder, store)
        self._chunker = chunker
        self._embedder = embedder
        self._store = store
        self._arbiter = arbiter
        self._top_k = top_k
        self._threshold = threshold
        self._doc_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    async def ingest(self, source: SourceText, doc_id: str | None = None) -> IngestResult:
        doc = Document(
            doc_id=doc_id or str(uuid4()),
            name=source.name,
            origin=source.origin,
            size_bytes=source.size_bytes,
            doc_type=source.doc_type.upper(),
            description=source.description,
        )
        async with self._lock_for(doc.doc_id):
            return await self._ingest_locked(doc, source.text)

    async def _ingest_locked(self, doc: Document, text: str) -> IngestResult:
        # A committed version stays searchable until add() swaps in the new chunk set.
        existing = await self._store.get_document(doc.doc_id)
        replacing = existing is not None and existing.status == DocumentStatus.COMPLETE
        if replacing:
            doc.created_at = existing.created_at

        try:
            if not replacing:
                await self._store.save_document(doc)
            doc.status = DocumentStatus.PROCESSING
            if not replacing:
                await self._store.save_document(doc)

            chunks = await asyncio.to_thread(self._chunker.chunk, text, doc.doc_id)
            if not chunks:
                raise ChunkingError(
                    "No chunks produced: text is blank or shorter than the minimum chunk size"
                )

            vectors = await self._embedder.embed_batch([c.text for c in chunks])
            if len(vectors) != len(chunks):
                raise PartialIngestFailure(
                    f"Embedded {len(vectors)} of {len(chunks)} chunks"
                )
            for chunk, vector in zip(chunks, vectors):
                if not self._embedder.is_valid(vector):
                    raise PartialIngestFailure(
                        f"Chunk {chunk.index} embedding has {len(vector)} dimensions, "
                        f"expected {self._embedder.dimensions}"
                    )
                chunk.embedding = vector

            await self._store.add(doc, chunks)
        except asyncio.CancelledError:
            await asyncio.shield(
                self._mark_failed(doc, "Ingestion cancelled", persist=not replacing)
            )
            raise
        except DocVaultError as e:
            await self._mark_failed(doc, str(e), persist=not replacing)
            return IngestResult(success=False, doc_id=doc.doc_id, reason=str(e))
        except Exception as e:
            await self._mark_failed(doc, f"Unexpected error: {e}", persist=not replacing)
            raise

        logger.info("ingested", doc_id=doc.doc_id, name=doc.name, chunks=len(chunks))
        return IngestResult(success=True, doc_id=doc.doc_id, chunk_count=len(chunks))

    async def _mark_failed(self, doc: Document, reason: str, persist: bool = True) -> None:
        doc.status = DocumentStatus.FAILED
        logger.error(
            "ingest_failed", doc_id=doc.doc_id, name=doc.name, reason=reason, kept_previous=not persist
        )
        if not persist:
            return
        try:
            await self._store.save_document(doc)
        except Exception as e:
            logger.error("mark_failed_error", doc_id=doc.doc_id, error=str(e))

    async def query(
        self,
        text: str,
        k: int | None = None,
        threshold: float | None = None,
    ) -> list[SimilarityResult]:
        if not text.strip():
            return []
        k = self._top_k if k is None else k
        threshold = self._threshold if threshold is None else threshold
        vector = await self._embedder.embed(text)
        results = await self._store.query(vector, k, threshold)
        logger.info(
            "queried",
            query_len=len(text),
            k=k,
            threshold=threshold,
            results=len(results),
            top_score=round(results[0].score, 4) if results else None,
        )
        return results

    async def ask(
        self,
        question: str,
        generator: AnswerGenerator,
        document_type_hint: str = "",
        k: int | None = None,
        threshold: float | None = None,
    ) -> QueryResult:
        results = await self.query(question, k=k, threshold=threshold)
        try:
            answer = await generator.generate(question, results)
        except Exception as e:
            logger.warning("generation_failed", error=str(e))
            answer = GENERATION_FAILED_ANSWER
        decision = self._arbiter.arbitrate(answer, results, document_type_hint)
        return QueryResult(query=question, results=results, decision=decision)

    async def remove_document(self, doc_id: str) -> bool:
        async with self._lock_for(doc_id):
            return await self._store.remove_document(doc_id)

    def _lock_for(self, doc_id: str) -> asyncio.Lock:
        # Single writer per document id; entries go away once no caller holds the lock.
        lock = self._doc_locks.get(doc_id)
        if lock is None:
            lock = asyncio.Lock()
            self._doc_locks[doc_id] = lock
        return lock
