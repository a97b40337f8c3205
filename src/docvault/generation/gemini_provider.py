"""Gemini text generation for evidence-grounded answers."""

from __future__ import annotations

import asyncio
import time

from google import genai
from google.genai import types

from docvault.exceptions import GenerationError
from docvault.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    """The SDK client is created on first use so a keyless offline setup still starts."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        timeout_s: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise GenerationError("No Google API key configured for answer generation")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.1,
        max_tokens: int = 4096,
    ) -> str:
        client = self._get_client()
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            system_instruction=system,
        )
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self._model, contents=prompt, config=config
                ),
                timeout=self._timeout_s,
            )
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e

        text = response.text
        if not text:
            raise GenerationError("Gemini returned an empty answer")
        logger.debug(
            "gemini_generated",
            model=self._model,
            chars=len(text),
            latency_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return text
