"""Tests for API request/response models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from conftest import make_document
from docvault.models.domain import Artifact, ResponseDecision, ResponseType
from docvault.models.schemas import (
    AskRequest,
    DecisionOut,
    DocumentOut,
    IngestRequest,
    SearchRequest,
)


def test_ingest_request_defaults():
    request = IngestRequest(name="notes.txt", text="hello")
    assert request.doc_type == "TEXT"
    assert request.size_bytes is None


def test_ingest_request_requires_name():
    with pytest.raises(ValidationError):
        IngestRequest(name="", text="hello")


def test_search_request_bounds():
    assert SearchRequest(query="passport").top_k is None
    with pytest.raises(ValidationError):
        SearchRequest(query="")
    with pytest.raises(ValidationError):
        SearchRequest(query="passport", top_k=-1)
    with pytest.raises(ValidationError):
        SearchRequest(query="passport", threshold=1.5)


def test_ask_request_hint_default():
    assert AskRequest(query="show my bill").document_type_hint == ""


def test_document_out_from_domain():
    doc = make_document(name="lease.pdf")
    out = DocumentOut.from_domain(doc)
    assert out.status == "PENDING"
    assert out.name == "lease.pdf"


def test_decision_out_with_artifact():
    doc = make_document(doc_id="d1")
    decision = ResponseDecision(
        response_type=ResponseType.FULL_ARTIFACT,
        text="Here it is.",
        confidence=0.9,
        document=doc,
        artifact=Artifact(path=Path("/uploads/lease.pdf"), size_bytes=10),
    )
    out = DecisionOut.from_domain(decision)
    assert out.response_type == "FULL_ARTIFACT"
    assert out.doc_id == "d1"
    assert out.artifact.name == "lease.pdf"
    assert out.artifact.path == str(Path("/uploads/lease.pdf"))


def test_decision_out_text_only():
    decision = ResponseDecision(response_type=ResponseType.TEXT_ONLY, text="hi", confidence=0.6)
    out = DecisionOut.from_domain(decision)
    assert out.doc_id is None
    assert out.artifact is None
