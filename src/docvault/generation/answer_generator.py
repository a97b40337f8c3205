"""Answer generation from retrieved evidence using an LLM provider."""

from __future__ import annotations

from docvault.generation.prompt_templates import (
    ANSWER_GENERATION_PROMPT,
    ANSWER_GENERATION_SYSTEM,
    format_evidence_block,
)
from docvault.models.domain import SimilarityResult
from docvault.observability.logger import get_logger
from docvault.protocols.llm import LLMProvider

logger = get_logger("generation")


class LLMAnswerGenerator:
    def __init__(
        self,
        llm: LLMProvider,
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate(self, query: str, evidence: list[SimilarityResult]) -> str:
        prompt = ANSWER_GENERATION_PROMPT.format(
            query=query,
            evidence_block=format_evidence_block(evidence),
        )
        answer = await self._llm.generate(
            prompt,
            system=ANSWER_GENERATION_SYSTEM,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        logger.info(
            "generated_answer",
            query_len=len(query),
            answer_len=len(answer),
            evidence=len(evidence),
        )
        return answer
