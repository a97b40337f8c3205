"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from docvault.models.domain import Document, ResponseDecision, SimilarityResult


class IngestRequest(BaseModel):
    name: str = Field(min_length=1)
    doc_type: str = "TEXT"
    text: str
    size_bytes: int | None = Field(default=None, ge=0)
    origin: str = ""
    description: str = ""


class IngestResponse(BaseModel):
    doc_id: str
    success: bool
    chunks_created: int
    reason: str | None = None


class DocumentOut(BaseModel):
    doc_id: str
    name: str
    origin: str
    size_bytes: int
    doc_type: str
    description: str
    chunk_count: int
    status: Literal["PENDING", "PROCESSING", "COMPLETE", "FAILED"]
    created_at: datetime

    @classmethod
    def from_domain(cls, doc: Document) -> DocumentOut:
        return cls(
            doc_id=doc.doc_id,
            name=doc.name,
            origin=doc.origin,
            size_bytes=doc.size_bytes,
            doc_type=doc.doc_type,
            description=doc.description,
            chunk_count=doc.chunk_count,
            status=doc.status.value,
            created_at=doc.created_at,
        )


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    top_k: int | None = Field(default=None, ge=0)
    threshold: float | None = Field(default=None, ge=-1.0, le=1.0)


class SearchHit(BaseModel):
    doc_id: str
    document_name: str
    chunk_id: str
    chunk_index: int
    text: str
    score: float

    @classmethod
    def from_domain(cls, result: SimilarityResult) -> SearchHit:
        return cls(
            doc_id=result.document.doc_id,
            document_name=result.document.name,
            chunk_id=result.chunk.chunk_id,
            chunk_index=result.chunk.index,
            text=result.chunk.text,
            score=result.score,
        )


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]


class AskRequest(SearchRequest):
    document_type_hint: str = ""


class ArtifactOut(BaseModel):
    name: str
    path: str
    size_bytes: int


class DecisionOut(BaseModel):
    response_type: Literal["TEXT_ONLY", "FULL_ARTIFACT", "MIXED"]
    text: str
    confidence: float
    doc_id: str | None = None
    artifact: ArtifactOut | None = None

    @classmethod
    def from_domain(cls, decision: ResponseDecision) -> DecisionOut:
        artifact = None
        if decision.artifact is not None:
            artifact = ArtifactOut(
                name=decision.artifact.name,
                path=str(decision.artifact.path),
                size_bytes=decision.artifact.size_bytes,
            )
        return cls(
            response_type=decision.response_type.value,
            text=decision.text,
            confidence=decision.confidence,
            doc_id=decision.document.doc_id if decision.document else None,
            artifact=artifact,
        )


class AskResponse(BaseModel):
    query: str
    results: list[SearchHit]
    decision: DecisionOut


class HealthResponse(BaseModel):
    status: str
    doc_count: int
    chunk_count: int
    embedding_dimensions: int
