"""Protocol for text chunking."""

from __future__ import annotations

from typing import Protocol

from docvault.models.domain import Chunk


class Chunker(Protocol):
    def chunk(self, text: str, doc_id: str = "") -> list[Chunk]: ...
