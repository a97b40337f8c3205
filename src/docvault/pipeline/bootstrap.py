"""Wire settings into a ready orchestrator. Used by the API lifespan and scripts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docvault.arbitration.response_arbiter import ResponseArbiter
from docvault.artifacts.local_resolver import LocalArtifactResolver
from docvault.chunking.boundary_chunker import BoundaryChunker
from docvault.chunking.config import ChunkConfig
from docvault.config.settings import Settings
from docvault.embeddings.factory import create_embedder
from docvault.generation.answer_generator import LLMAnswerGenerator
from docvault.pipeline.orchestrator import RetrievalOrchestrator
from docvault.protocols.embedder import Embedder
from docvault.protocols.llm import AnswerGenerator
from docvault.protocols.vector_store import VectorStore
from docvault.vectorstore.memory_store import InMemoryVectorStore
from docvault.vectorstore.sqlite_store import SQLiteVectorStore


@dataclass
class Components:
    settings: Settings
    embedder: Embedder
    store: VectorStore
    artifacts: LocalArtifactResolver
    arbiter: ResponseArbiter
    orchestrator: RetrievalOrchestrator
    generator: AnswerGenerator


def chunk_config_from(settings: Settings) -> ChunkConfig:
    return ChunkConfig(
        target_size=settings.chunk_target_size,
        overlap=settings.chunk_overlap,
        min_size=settings.chunk_min_size,
        max_size=settings.chunk_max_size,
        prefer_sentence_boundary=settings.chunk_prefer_sentence,
        prefer_paragraph_boundary=settings.chunk_prefer_paragraph,
    )


async def create_store(settings: Settings) -> VectorStore:
    if settings.store_backend == "memory":
        return InMemoryVectorStore(dimensions=settings.embedding_dimensions)
    Path(settings.sqlite_db_path).parent.mkdir(parents=True, exist_ok=True)
    store = SQLiteVectorStore(settings.sqlite_db_path, dimensions=settings.embedding_dimensions)
    await store.initialize()
    return store


def create_generator(settings: Settings) -> AnswerGenerator:
    from docvault.generation.gemini_provider import GeminiProvider

    llm = GeminiProvider(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        timeout_s=settings.gemini_timeout_s,
    )
    return LLMAnswerGenerator(
        llm=llm,
        temperature=settings.gemini_temperature,
        max_tokens=settings.gemini_max_tokens,
    )


async def build_components(
    settings: Settings, generator: AnswerGenerator | None = None
) -> Components:
    chunker = BoundaryChunker(chunk_config_from(settings))
    embedder = create_embedder(settings)
    store = await create_store(settings)
    artifacts = LocalArtifactResolver(settings.artifact_root)
    arbiter = ResponseArbiter(artifacts)
    orchestrator = RetrievalOrchestrator(
        chunker=chunker,
        embedder=embedder,
        store=store,
        arbiter=arbiter,
        top_k=settings.retrieval_top_k,
        threshold=settings.retrieval_threshold,
    )
    return Components(
        settings=settings,
        embedder=embedder,
        store=store,
        artifacts=artifacts,
        arbiter=arbiter,
        orchestrator=orchestrator,
        generator=generator or create_generator(settings),
    )
