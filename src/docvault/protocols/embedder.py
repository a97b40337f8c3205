"""Protocol for embedding providers."""

from __future__ import annotations

from typing import Protocol


class Embedder(Protocol):
    async def embed(self, text: str) -> list[float]: ...

    async def embed_batch(self, texts: list[str]) -> list[list[float]]: ...

    @property
    def dimensions(self) -> int: ...

    def is_valid(self, vector: list[float]) -> bool: ...
