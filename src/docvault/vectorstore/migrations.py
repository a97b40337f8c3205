"""Idempotent database schema creation."""

from __future__ import annotations

import aiosqlite

DOCUMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS documents (
    doc_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    origin TEXT NOT NULL DEFAULT '',
    size_bytes INTEGER NOT NULL DEFAULT 0,
    doc_type TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    chunk_count INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

CHUNKS_TABLE = """
CREATE TABLE IF NOT EXISTS chunks (
    chunk_id TEXT PRIMARY KEY,
    doc_id TEXT NOT NULL,
    text TEXT NOT NULL,
    chunk_index INTEGER NOT NULL,
    start_offset INTEGER NOT NULL,
    end_offset INTEGER NOT NULL,
    metadata TEXT NOT NULL DEFAULT '',
    embedding BLOB NOT NULL,
    processed_at TEXT NOT NULL,
    FOREIGN KEY (doc_id) REFERENCES documents(doc_id)
)
"""

CHUNKS_DOC_INDEX = """
CREATE INDEX IF NOT EXISTS idx_chunks_doc_id ON chunks(doc_id, chunk_index)
"""

META_TABLE = """
CREATE TABLE IF NOT EXISTS store_meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


async def initialize_store_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(DOCUMENTS_TABLE)
        await db.execute(CHUNKS_TABLE)
        await db.execute(CHUNKS_DOC_INDEX)
        await db.execute(META_TABLE)
        await db.commit()
