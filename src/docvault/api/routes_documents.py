"""Document ingestion, listing, and deletion endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from docvault.api.dependencies import get_artifacts, get_orchestrator, get_store
from docvault.artifacts.local_resolver import LocalArtifactResolver
from docvault.models.domain import SourceText
from docvault.models.schemas import DocumentOut, IngestRequest, IngestResponse
from docvault.pipeline.orchestrator import RetrievalOrchestrator
from docvault.protocols.vector_store import VectorStore

router = APIRouter(prefix="/documents")


@router.post("", response_model=IngestResponse, status_code=status.HTTP_201_CREATED)
async def ingest_document(
    request: IngestRequest,
    orchestrator: RetrievalOrchestrator = Depends(get_orchestrator),
) -> IngestResponse:
    source = SourceText(
        name=request.name,
        doc_type=request.doc_type,
        size_bytes=(
            request.size_bytes
            if request.size_bytes is not None
            else len(request.text.encode("utf-8"))
        ),
        text=request.text,
        origin=request.origin,
        description=request.description,
    )
    result = await orchestrator.ingest(source)
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"doc_id": result.doc_id, "reason": result.reason},
        )
    return IngestResponse(
        doc_id=result.doc_id,
        success=result.success,
        chunks_created=result.chunk_count,
        reason=result.reason,
    )


@router.get("", response_model=list[DocumentOut])
async def list_documents(
    name: str | None = Query(default=None, description="Case-insensitive name filter"),
    store: VectorStore = Depends(get_store),
) -> list[DocumentOut]:
    docs = await store.search_by_name(name) if name else await store.list_documents()
    return [DocumentOut.from_domain(d) for d in docs]


@router.get("/{doc_id}", response_model=DocumentOut)
async def get_document(doc_id: str, store: VectorStore = Depends(get_store)) -> DocumentOut:
    doc = await store.get_document(doc_id)
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return DocumentOut.from_domain(doc)


@router.delete("/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    doc_id: str,
    delete_artifact: bool = Query(default=False),
    orchestrator: RetrievalOrchestrator = Depends(get_orchestrator),
    store: VectorStore = Depends(get_store),
    artifacts: LocalArtifactResolver = Depends(get_artifacts),
) -> None:
    doc = await store.get_document(doc_id)
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    await orchestrator.remove_document(doc_id)
    if delete_artifact:
        artifacts.delete(doc)
