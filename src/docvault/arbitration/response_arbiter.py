"""Decide the final response shape from a generated answer and its evidence.

The generator is asked to end its answer with ``[RESPONSE_TYPE: <TAG>]``
where TAG is TEXT_ONLY, FULL_FILE or MIXED. The tag is a soft signal: when
it is missing, unknown, or names an artifact that cannot be found, the
arbiter degrades to a text-only decision with lower confidence instead of
raising.
"""

from __future__ import annotations

import re

from docvault.config.constants import (
    ARTIFACT_UNAVAILABLE_NOTE,
    CONFIDENCE_ARTIFACT_MISSING,
    CONFIDENCE_FULL_ARTIFACT,
    CONFIDENCE_MIXED,
    CONFIDENCE_NO_TAG,
    CONFIDENCE_TEXT_ONLY,
    RESPONSE_TYPE_PATTERN,
)
from docvault.models.domain import (
    Artifact,
    Document,
    ResponseDecision,
    ResponseType,
    SimilarityResult,
)
from docvault.observability.logger import get_logger
from docvault.protocols.artifacts import ArtifactResolver

logger = get_logger("arbiter")

_TAG_RE = re.compile(RESPONSE_TYPE_PATTERN, re.IGNORECASE)

TAG_TEXT_ONLY = "TEXT_ONLY"
TAG_FULL_FILE = "FULL_FILE"
TAG_MIXED = "MIXED"


def parse_response_tag(answer: str) -> str | None:
    match = _TAG_RE.search(answer)
    return match.group(1).upper() if match else None


def strip_response_tag(answer: str) -> str:
    return _TAG_RE.sub("", answer).strip()


class ResponseArbiter:
    def __init__(self, artifact_resolver: ArtifactResolver) -> None:
        self._resolver = artifact_resolver

    def arbitrate(
        self,
        answer: str,
        evidence: list[SimilarityResult],
        document_type_hint: str = "",
    ) -> ResponseDecision:
        if not isinstance(answer, str):
            answer = "" if answer is None else str(answer)
        tag = parse_response_tag(answer)
        text = strip_response_tag(answer)

        if tag == TAG_TEXT_ONLY:
            decision = ResponseDecision(
                response_type=ResponseType.TEXT_ONLY, text=text, confidence=CONFIDENCE_TEXT_ONLY
            )
        elif tag == TAG_FULL_FILE:
            decision = self._full_artifact(text, evidence, document_type_hint)
        elif tag == TAG_MIXED:
            decision = self._mixed(text, evidence)
        else:
            decision = ResponseDecision(
                response_type=ResponseType.TEXT_ONLY, text=text, confidence=CONFIDENCE_NO_TAG
            )

        logger.info(
            "arbitrated",
            tag=tag,
            response_type=decision.response_type.value,
            confidence=decision.confidence,
            evidence=len(evidence),
            has_artifact=decision.artifact is not None,
        )
        return decision

    def _full_artifact(
        self, text: str, evidence: list[SimilarityResult], hint: str
    ) -> ResponseDecision:
        doc = self.best_matching_document(evidence, hint)
        artifact = self._resolve(doc) if doc else None
        if doc is not None and artifact is not None:
            return ResponseDecision(
                response_type=ResponseType.FULL_ARTIFACT,
                text=text,
                confidence=CONFIDENCE_FULL_ARTIFACT,
                document=doc,
                artifact=artifact,
            )

        logger.warning(
            "artifact_unavailable",
            doc_id=doc.doc_id if doc else None,
            evidence=len(evidence),
        )
        note = ARTIFACT_UNAVAILABLE_NOTE
        return ResponseDecision(
            response_type=ResponseType.TEXT_ONLY,
            text=f"{text}\n\n{note}" if text else note,
            confidence=CONFIDENCE_ARTIFACT_MISSING,
        )

    def _mixed(self, text: str, evidence: list[SimilarityResult]) -> ResponseDecision:
        top = self._highest(evidence)
        doc = top.document if top else None
        return ResponseDecision(
            response_type=ResponseType.MIXED,
            text=text,
            confidence=CONFIDENCE_MIXED,
            document=doc,
            artifact=self._resolve(doc) if doc else None,
        )

    @classmethod
    def best_matching_document(
        cls, evidence: list[SimilarityResult], hint: str = ""
    ) -> Document | None:
        """Substring match on name/description first, then the top-scoring item.

        This is a heuristic; ambiguous names can pick the wrong document.
        """
        if not evidence:
            return None
        needle = hint.strip().lower()
        if needle:
            for result in evidence:
                doc = result.document
                if needle in doc.name.lower() or needle in doc.description.lower():
                    return doc
        top = cls._highest(evidence)
        return top.document if top else None

    @staticmethod
    def _highest(evidence: list[SimilarityResult]) -> SimilarityResult | None:
        if not evidence:
            return None
        return max(evidence, key=lambda r: r.score)

    def _resolve(self, doc: Document) -> Artifact | None:
        try:
            return self._resolver.resolve(doc)
        except Exception as e:
            logger.warning("artifact_resolution_failed", doc_id=doc.doc_id, error=str(e))
            return None
