"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class ResponseType(str, Enum):
    TEXT_ONLY = "TEXT_ONLY"
    FULL_ARTIFACT = "FULL_ARTIFACT"
    MIXED = "MIXED"


@dataclass
class Document:
    doc_id: str
    name: str
    origin: str
    size_bytes: int
    doc_type: str  # "PDF", "IMAGE", "AUDIO", "TEXT", ...
    description: str = ""
    chunk_count: int = 0
    status: DocumentStatus = DocumentStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class Chunk:
    chunk_id: str
    doc_id: str
    text: str
    index: int
    start_offset: int
    end_offset: int
    metadata: str = ""  # "heading: ...; keywords: ..."
    embedding: list[float] | None = None
    processed_at: datetime = field(default_factory=_utcnow)

    @property
    def text_length(self) -> int:
        return len(self.text)


@dataclass
class SimilarityResult:
    chunk: Chunk
    document: Document
    score: float


@dataclass
class Artifact:
    """Handle to the original stored file behind a document."""

    path: Path
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class ResponseDecision:
    response_type: ResponseType
    text: str
    confidence: float
    document: Document | None = None
    artifact: Artifact | None = None


@dataclass
class SourceText:
    """Output of the text-extraction collaborator, input to ingestion."""

    name: str
    doc_type: str
    size_bytes: int
    text: str
    origin: str = ""
    description: str = ""


@dataclass
class IngestResult:
    success: bool
    doc_id: str
    chunk_count: int = 0
    reason: str | None = None


@dataclass
class QueryResult:
    query: str
    results: list[SimilarityResult]
    decision: ResponseDecision | None = None
