"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from docvault.artifacts.local_resolver import LocalArtifactResolver
from docvault.pipeline.orchestrator import RetrievalOrchestrator
from docvault.protocols.llm import AnswerGenerator
from docvault.protocols.vector_store import VectorStore


def get_orchestrator(request: Request) -> RetrievalOrchestrator:
    return request.app.state.components.orchestrator


def get_store(request: Request) -> VectorStore:
    return request.app.state.components.store


def get_artifacts(request: Request) -> LocalArtifactResolver:
    return request.app.state.components.artifacts


def get_generator(request: Request) -> AnswerGenerator:
    return request.app.state.components.generator
