"""Gemini embedding calls via the google-genai SDK, one request per text."""

from __future__ import annotations

import asyncio

from google import genai
from google.genai import types

from docvault.exceptions import TransientProviderError


class GeminiEmbeddingClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-embedding-001",
        dimensions: int = 768,
        timeout_s: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._client: genai.Client | None = None
        self._model = model
        self._dimensions = dimensions
        self._timeout_s = timeout_s

    @property
    def name(self) -> str:
        return f"gemini:{self._model}"

    async def embed_one(self, text: str) -> list[float]:
        try:
            if self._client is None:
                self._client = genai.Client(api_key=self._api_key)
            response = await asyncio.wait_for(
                self._client.aio.models.embed_content(
                    model=self._model,
                    contents=text,
                    config=types.EmbedContentConfig(output_dimensionality=self._dimensions),
                ),
                timeout=self._timeout_s,
            )
        except Exception as e:
            raise TransientProviderError(f"Gemini embedding request failed: {e}") from e

        if not response.embeddings or not response.embeddings[0].values:
            raise TransientProviderError("Received empty embedding from Gemini")
        return list(response.embeddings[0].values)
