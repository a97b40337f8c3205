"""Select the embedding variant once, at construction time."""

from __future__ import annotations

from docvault.config.settings import Settings
from docvault.embeddings.deterministic_embedder import DeterministicEmbedder
from docvault.embeddings.resilient_embedder import ResilientEmbedder
from docvault.exceptions import DimensionMismatchError
from docvault.protocols.embedder import Embedder
from docvault.protocols.vector_store import VectorStore


def create_embedder(settings: Settings) -> Embedder:
    fallback = DeterministicEmbedder(dimensions=settings.embedding_dimensions)

    if settings.embedding_provider == "deterministic":
        return fallback

    if settings.embedding_provider == "openai":
        from docvault.embeddings.openai_client import OpenAIEmbeddingClient

        client = OpenAIEmbeddingClient(
            api_key=settings.openai_api_key,
            model=settings.openai_embedding_model,
            dimensions=settings.embedding_dimensions,
            timeout_s=settings.embedding_timeout_s,
        )
    else:
        from docvault.embeddings.gemini_client import GeminiEmbeddingClient

        client = GeminiEmbeddingClient(
            api_key=settings.google_api_key,
            model=settings.embedding_model,
            dimensions=settings.embedding_dimensions,
            timeout_s=settings.embedding_timeout_s,
        )

    return ResilientEmbedder(
        client=client,
        fallback=fallback,
        batch_size=settings.embedding_batch_size,
        batch_pause_s=settings.embedding_batch_pause_s,
    )


def ensure_compatible(embedder: Embedder, store: VectorStore) -> None:
    """Reject a provider/store pairing whose vector dimensions differ."""
    if embedder.dimensions != store.dimensions:
        raise DimensionMismatchError(
            f"Embedder produces {embedder.dimensions}-dimensional vectors "
            f"but the store holds {store.dimensions}"
        )
