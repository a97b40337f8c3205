"""Similarity search and arbitrated answer endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from docvault.api.dependencies import get_generator, get_orchestrator
from docvault.exceptions import DocVaultError
from docvault.models.schemas import (
    AskRequest,
    AskResponse,
    DecisionOut,
    SearchHit,
    SearchRequest,
    SearchResponse,
)
from docvault.pipeline.orchestrator import RetrievalOrchestrator
from docvault.protocols.llm import AnswerGenerator

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    orchestrator: RetrievalOrchestrator = Depends(get_orchestrator),
) -> SearchResponse:
    try:
        results = await orchestrator.query(
            request.query, k=request.top_k, threshold=request.threshold
        )
    except DocVaultError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return SearchResponse(
        query=request.query,
        results=[SearchHit.from_domain(r) for r in results],
    )


@router.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    orchestrator: RetrievalOrchestrator = Depends(get_orchestrator),
    generator: AnswerGenerator = Depends(get_generator),
) -> AskResponse:
    try:
        result = await orchestrator.ask(
            request.query,
            generator,
            document_type_hint=request.document_type_hint,
            k=request.top_k,
            threshold=request.threshold,
        )
    except DocVaultError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return AskResponse(
        query=result.query,
        results=[SearchHit.from_domain(r) for r in result.results],
        decision=DecisionOut.from_domain(result.decision),
    )
