"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from docvault.api.dependencies import get_store
from docvault.models.schemas import HealthResponse
from docvault.protocols.vector_store import VectorStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(store: VectorStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        doc_count=await store.count_documents(),
        chunk_count=await store.count_chunks(),
        embedding_dimensions=store.dimensions,
    )
