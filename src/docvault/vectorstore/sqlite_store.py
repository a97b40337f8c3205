"""SQLite-backed document/chunk store with linear-scan similarity search."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timezone

import aiosqlite
import numpy as np

from docvault.exceptions import ConfigurationError, StoreError
from docvault.models.domain import Chunk, Document, DocumentStatus, SimilarityResult
from docvault.observability.logger import get_logger
from docvault.vectorstore.migrations import initialize_store_db
from docvault.vectorstore.ranking import check_query_vector, rank, validate_chunks
from docvault.vectorstore.similarity import (
    VECTOR_DTYPE,
    blob_to_vector,
    cosine_similarities,
    vector_to_blob,
)

logger = get_logger("sqlite_store")

UPSERT_DOCUMENT = (
    "INSERT INTO documents "
    "(doc_id, name, origin, size_bytes, doc_type, description, chunk_count, status, created_at) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?) "
    "ON CONFLICT(doc_id) DO UPDATE SET "
    "name = excluded.name, origin = excluded.origin, size_bytes = excluded.size_bytes, "
    "doc_type = excluded.doc_type, description = excluded.description, "
    "chunk_count = excluded.chunk_count, status = excluded.status"
)

INSERT_CHUNK = (
    "INSERT INTO chunks "
    "(chunk_id, doc_id, text, chunk_index, start_offset, end_offset, metadata, embedding, processed_at) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
)

SEARCHABLE_CHUNKS = (
    "SELECT c.*, d.name, d.origin, d.size_bytes, d.doc_type, d.description, "
    "d.chunk_count, d.status, d.created_at "
    "FROM chunks c JOIN documents d ON c.doc_id = d.doc_id "
    "WHERE d.status = ?"
)


class SQLiteVectorStore:
    def __init__(self, db_path: str, dimensions: int) -> None:
        self._db_path = db_path
        self._dimensions = dimensions
        self._write_lock = asyncio.Lock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def initialize(self) -> None:
        await initialize_store_db(self._db_path)
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "SELECT value FROM store_meta WHERE key = 'dimensions'"
            ) as cursor:
                row = await cursor.fetchone()
            if row is None:
                await db.execute(
                    "INSERT INTO store_meta (key, value) VALUES ('dimensions', ?)",
                    (str(self._dimensions),),
                )
                await db.commit()
            elif int(row[0]) != self._dimensions:
                raise ConfigurationError(
                    f"Store at {self._db_path} holds {row[0]}-dimensional vectors, "
                    f"configured embedder produces {self._dimensions}"
                )

    async def save_document(self, doc: Document) -> None:
        if doc.status == DocumentStatus.COMPLETE:
            raise StoreError("Documents are marked COMPLETE only by add()")
        async with self._write_lock:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute(UPSERT_DOCUMENT, self._document_params(doc))
                await db.commit()

    async def add(self, doc: Document, chunks: list[Chunk]) -> None:
        validate_chunks(doc, chunks, self._dimensions)
        committed = replace(doc, status=DocumentStatus.COMPLETE, chunk_count=len(chunks))
        async with self._write_lock:
            # One transaction: an interrupted add leaves nothing behind.
            try:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("DELETE FROM chunks WHERE doc_id = ?", (doc.doc_id,))
                    await db.executemany(
                        INSERT_CHUNK,
                        [
                            (
                                c.chunk_id,
                                c.doc_id,
                                c.text,
                                c.index,
                                c.start_offset,
                                c.end_offset,
                                c.metadata,
                                vector_to_blob(c.embedding),
                                c.processed_at.isoformat(),
                            )
                            for c in chunks
                        ],
                    )
                    await db.execute(UPSERT_DOCUMENT, self._document_params(committed))
                    await db.commit()
            except aiosqlite.Error as e:
                raise StoreError(f"Failed to commit document {doc.doc_id}: {e}") from e
        doc.status = committed.status
        doc.chunk_count = committed.chunk_count
        logger.info("store_added", doc_id=doc.doc_id, chunks=len(chunks))

    async def query(
        self, vector: list[float], k: int, threshold: float = 0.0
    ) -> list[SimilarityResult]:
        if k <= 0:
            return []
        check_query_vector(vector, self._dimensions)
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(SEARCHABLE_CHUNKS, (DocumentStatus.COMPLETE.value,)) as cursor:
                rows = await cursor.fetchall()
        if not rows:
            return []

        chunks = [self._row_to_chunk(row) for row in rows]
        documents: dict[str, Document] = {}
        for row in rows:
            if row["doc_id"] not in documents:
                documents[row["doc_id"]] = self._row_to_document(row)
        matrix = np.asarray([c.embedding for c in chunks], dtype=VECTOR_DTYPE)
        scores = cosine_similarities(vector, matrix)
        return rank(scores, chunks, documents, k, threshold)

    async def remove_document(self, doc_id: str) -> bool:
        async with self._write_lock:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute("DELETE FROM chunks WHERE doc_id = ?", (doc_id,))
                cursor = await db.execute("DELETE FROM documents WHERE doc_id = ?", (doc_id,))
                removed = cursor.rowcount > 0
                await db.commit()
        if removed:
            logger.info("store_removed", doc_id=doc_id)
        return removed

    async def get_document(self, doc_id: str) -> Document | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM documents WHERE doc_id = ?", (doc_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if row is None:
                    return None
                return self._row_to_document(row)

    async def list_documents(self) -> list[Document]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute("SELECT * FROM documents ORDER BY created_at") as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_document(row) for row in rows]

    async def search_by_name(self, name: str) -> list[Document]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM documents WHERE instr(lower(name), lower(?)) > 0 ORDER BY created_at",
                (name,),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_document(row) for row in rows]

    async def get_chunks(self, doc_id: str) -> list[Chunk]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                "SELECT * FROM chunks WHERE doc_id = ? ORDER BY chunk_index",
                (doc_id,),
            ) as cursor:
                rows = await cursor.fetchall()
                return [self._row_to_chunk(row) for row in rows]

    async def count_documents(self) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT COUNT(*) FROM documents") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def count_chunks(self) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT COUNT(*) FROM chunks") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    @staticmethod
    def _document_params(doc: Document) -> tuple:
        return (
            doc.doc_id,
            doc.name,
            doc.origin,
            doc.size_bytes,
            doc.doc_type,
            doc.description,
            doc.chunk_count,
            doc.status.value,
            doc.created_at.isoformat(),
        )

    @staticmethod
    def _parse_time(value: str) -> datetime:
        parsed = datetime.fromisoformat(value)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    @classmethod
    def _row_to_document(cls, row: aiosqlite.Row) -> Document:
        return Document(
            doc_id=row["doc_id"],
            name=row["name"],
            origin=row["origin"],
            size_bytes=row["size_bytes"],
            doc_type=row["doc_type"],
            description=row["description"],
            chunk_count=row["chunk_count"],
            status=DocumentStatus(row["status"]),
            created_at=cls._parse_time(row["created_at"]),
        )

    @classmethod
    def _row_to_chunk(cls, row: aiosqlite.Row) -> Chunk:
        return Chunk(
            chunk_id=row["chunk_id"],
            doc_id=row["doc_id"],
            text=row["text"],
            index=row["chunk_index"],
            start_offset=row["start_offset"],
            end_offset=row["end_offset"],
            metadata=row["metadata"],
            embedding=blob_to_vector(row["embedding"]),
            processed_at=cls._parse_time(row["processed_at"]),
        )
