"""Shared helpers for linear-scan stores: vector validation and top-k ranking."""

from __future__ import annotations

import numpy as np

from docvault.exceptions import DimensionMismatchError, StoreError
from docvault.models.domain import Chunk, Document, SimilarityResult
from docvault.vectorstore.similarity import has_invalid_values


def validate_chunks(doc: Document, chunks: list[Chunk], dimensions: int) -> None:
    for chunk in chunks:
        if chunk.doc_id != doc.doc_id:
            raise StoreError(
                f"Chunk {chunk.chunk_id} belongs to {chunk.doc_id!r}, not {doc.doc_id!r}"
            )
        if chunk.embedding is None:
            raise StoreError(f"Chunk {chunk.chunk_id} has no embedding")
        if len(chunk.embedding) != dimensions:
            raise DimensionMismatchError(
                f"Chunk {chunk.chunk_id} has {len(chunk.embedding)} dimensions, store expects {dimensions}"
            )
        if has_invalid_values(chunk.embedding):
            raise StoreError(f"Chunk {chunk.chunk_id} embedding contains NaN or infinite values")


def check_query_vector(vector: list[float], dimensions: int) -> None:
    if len(vector) != dimensions:
        raise DimensionMismatchError(
            f"Query vector has {len(vector)} dimensions, store expects {dimensions}"
        )


def rank(
    scores: np.ndarray,
    chunks: list[Chunk],
    documents: dict[str, Document],
    k: int,
    threshold: float,
) -> list[SimilarityResult]:
    """Keep scores >= threshold, order by score desc then chunk ordinal asc, cut to k."""
    if k <= 0 or len(chunks) == 0:
        return []
    hits = [
        (float(score), chunk)
        for score, chunk in zip(scores, chunks)
        if score >= threshold
    ]
    hits.sort(key=lambda hit: (-hit[0], hit[1].index))
    return [
        SimilarityResult(chunk=chunk, document=documents[chunk.doc_id], score=score)
        for score, chunk in hits[:k]
    ]
