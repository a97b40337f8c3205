"""Protocol for resolving a document to its original stored file."""

from __future__ import annotations

from typing import Protocol

from docvault.models.domain import Artifact, Document


class ArtifactResolver(Protocol):
    def resolve(self, doc: Document) -> Artifact | None: ...
