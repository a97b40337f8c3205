"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from uuid import uuid4

import pytest

from docvault.config.settings import Settings
from docvault.models.domain import Chunk, Document, SimilarityResult

TOPICS = [
    "passport renewal",
    "insurance policy",
    "electricity bill",
    "vehicle registration",
    "tax return",
]


def make_document(
    doc_id: str | None = None,
    name: str = "notes.txt",
    description: str = "",
    origin: str = "",
    doc_type: str = "TEXT",
) -> Document:
    return Document(
        doc_id=doc_id or str(uuid4()),
        name=name,
        origin=origin,
        size_bytes=1024,
        doc_type=doc_type,
        description=description,
    )


def make_chunk(doc_id: str, index: int, embedding: list[float] | None = None) -> Chunk:
    return Chunk(
        chunk_id=f"{doc_id}-{index}",
        doc_id=doc_id,
        text=f"Chunk {index} of {doc_id}",
        index=index,
        start_offset=index * 10,
        end_offset=index * 10 + 10,
        embedding=embedding,
    )


def make_result(doc: Document, score: float, index: int = 0) -> SimilarityResult:
    return SimilarityResult(chunk=make_chunk(doc.doc_id, index), document=doc, score=score)


@pytest.fixture
def settings():
    """Offline settings: deterministic embeddings and an in-memory store."""
    tmp = tempfile.mkdtemp()
    return Settings(
        google_api_key="test-key",
        openai_api_key="test-key",
        embedding_provider="deterministic",
        embedding_dimensions=32,
        store_backend="memory",
        sqlite_db_path=str(Path(tmp) / "test_docvault.db"),
        artifact_root=str(Path(tmp) / "uploads"),
    )


@pytest.fixture
def long_text():
    """Several paragraphs of sentence-terminated prose, a few thousand characters."""
    paragraphs = []
    for p, topic in enumerate(TOPICS):
        sentences = [
            f"Paragraph {p} sentence {s} explains the {topic} details for the household records."
            for s in range(8)
        ]
        paragraphs.append(" ".join(sentences))
    return "\n\n".join(paragraphs)
