"""Resolve documents to their original files kept under a local upload directory."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from docvault.models.domain import Artifact, Document
from docvault.observability.logger import get_logger

logger = get_logger("artifacts")


class LocalArtifactResolver:
    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def save(self, file_name: str, data: bytes) -> Path:
        """Store an original file under a collision-free name and return its path."""
        self._root.mkdir(parents=True, exist_ok=True)
        original = Path(file_name)
        target = self._root / f"{original.stem}_{uuid4().hex[:8]}{original.suffix}"
        target.write_bytes(data)
        logger.info("artifact_saved", path=str(target), size=len(data))
        return target

    def resolve(self, doc: Document) -> Artifact | None:
        path = self._path_for(doc)
        if path is None or not path.is_file():
            logger.debug("artifact_missing", doc_id=doc.doc_id, origin=doc.origin)
            return None
        return Artifact(path=path, size_bytes=path.stat().st_size)

    def has_artifact(self, doc: Document) -> bool:
        return self.resolve(doc) is not None

    def delete(self, doc: Document) -> bool:
        artifact = self.resolve(doc)
        if artifact is None:
            return False
        artifact.path.unlink(missing_ok=True)
        logger.info("artifact_deleted", doc_id=doc.doc_id, path=str(artifact.path))
        return True

    def origin_for(self, path: Path) -> str:
        """Root-relative origin to record on a document for a file saved here."""
        return path.resolve().relative_to(self._root.resolve()).as_posix()

    def _path_for(self, doc: Document) -> Path | None:
        if not doc.origin:
            return None
        # Origins come from clients; only files under the root are ever served or deleted.
        root = self._root.resolve()
        path = (root / doc.origin).resolve()
        if not path.is_relative_to(root):
            logger.warning("artifact_outside_root", doc_id=doc.doc_id, origin=doc.origin)
            return None
        return path
