"""Network-backed embedder that never fails: per-text fallback to deterministic vectors."""

from __future__ import annotations

import asyncio
from typing import Protocol

from docvault.config.constants import EMBEDDING_BATCH_PAUSE_S, EMBEDDING_BATCH_SIZE
from docvault.embeddings.deterministic_embedder import DeterministicEmbedder
from docvault.observability.logger import get_logger

logger = get_logger("embeddings")


class EmbeddingClient(Protocol):
    @property
    def name(self) -> str: ...

    async def embed_one(self, text: str) -> list[float]: ...


class ResilientEmbedder:
    """Wraps an EmbeddingClient; any failure for a text yields the fallback vector.

    Batches are processed sequentially in groups of ``batch_size`` with a
    short pause between groups to stay under provider rate limits.
    """

    def __init__(
        self,
        client: EmbeddingClient,
        fallback: DeterministicEmbedder,
        batch_size: int = EMBEDDING_BATCH_SIZE,
        batch_pause_s: float = EMBEDDING_BATCH_PAUSE_S,
    ) -> None:
        self._client = client
        self._fallback = fallback
        self._batch_size = max(1, batch_size)
        self._batch_pause_s = batch_pause_s
        self.fallback_count = 0

    @property
    def dimensions(self) -> int:
        return self._fallback.dimensions

    def is_valid(self, vector: list[float]) -> bool:
        return len(vector) == self.dimensions

    async def embed(self, text: str) -> list[float]:
        try:
            vector = await self._client.embed_one(text)
        except Exception as e:
            return self._use_fallback(text, str(e))
        if not self.is_valid(vector):
            return self._use_fallback(
                text, f"expected {self.dimensions} dimensions, got {len(vector)}"
            )
        return vector

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        vectors: list[list[float]] = []
        for i in range(0, len(texts), self._batch_size):
            if i > 0 and self._batch_pause_s > 0:
                await asyncio.sleep(self._batch_pause_s)
            for text in texts[i : i + self._batch_size]:
                vectors.append(await self.embed(text))
        logger.info(
            "embedded_texts",
            count=len(texts),
            provider=self._client.name,
            fallbacks=self.fallback_count,
        )
        return vectors

    def _use_fallback(self, text: str, reason: str) -> list[float]:
        self.fallback_count += 1
        logger.warning(
            "embedding_fallback",
            provider=self._client.name,
            text_len=len(text),
            reason=reason,
        )
        return self._fallback.vector_for(text)
