"""Protocols for LLM providers and answer generators."""

from __future__ import annotations

from typing import Protocol

from docvault.models.domain import SimilarityResult


class LLMProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> str: ...


class AnswerGenerator(Protocol):
    async def generate(self, query: str, evidence: list[SimilarityResult]) -> str: ...
