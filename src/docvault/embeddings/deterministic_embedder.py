"""Offline, deterministic embedder used as the network fallback and in tests.

Vectors carry no semantic meaning. Coordinate ``i`` is
``sin(h + i) * 0.5`` where ``h`` is the 32-bit Java-style string hash of the
text, which is stable across processes (unlike Python's salted ``hash``).
"""

from __future__ import annotations

import math

from docvault.config.constants import DEFAULT_EMBEDDING_DIMENSIONS, FALLBACK_EMBEDDING_SCALE
from docvault.exceptions import ConfigurationError


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def stable_hash(text: str) -> int:
    """32-bit signed polynomial hash over UTF-16 code units."""
    encoded = text.encode("utf-16-be", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        h = (31 * h + ((encoded[i] << 8) | encoded[i + 1])) & 0xFFFFFFFF
    return _to_int32(h)


class DeterministicEmbedder:
    def __init__(self, dimensions: int = DEFAULT_EMBEDDING_DIMENSIONS) -> None:
        if dimensions <= 0:
            raise ConfigurationError(f"Embedding dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def vector_for(self, text: str) -> list[float]:
        seed = stable_hash(text)
        return [
            math.sin(_to_int32(seed + i)) * FALLBACK_EMBEDDING_SCALE
            for i in range(self._dimensions)
        ]

    async def embed(self, text: str) -> list[float]:
        return self.vector_for(text)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [self.vector_for(t) for t in texts]

    def is_valid(self, vector: list[float]) -> bool:
        return len(vector) == self._dimensions
