"""Protocol for document/chunk/vector record stores."""

from __future__ import annotations

from typing import Protocol

from docvault.models.domain import Chunk, Document, SimilarityResult


class VectorStore(Protocol):
    @property
    def dimensions(self) -> int: ...

    async def save_document(self, doc: Document) -> None: ...

    async def add(self, doc: Document, chunks: list[Chunk]) -> None:
        """Commit a document together with all of its embedded chunks."""
        ...

    async def query(
        self, vector: list[float], k: int, threshold: float = 0.0
    ) -> list[SimilarityResult]: ...

    async def remove_document(self, doc_id: str) -> bool: ...

    async def get_document(self, doc_id: str) -> Document | None: ...

    async def list_documents(self) -> list[Document]: ...

    async def search_by_name(self, name: str) -> list[Document]: ...

    async def get_chunks(self, doc_id: str) -> list[Chunk]: ...

    async def count_documents(self) -> int: ...

    async def count_chunks(self) -> int: ...
