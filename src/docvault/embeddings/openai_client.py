"""OpenAI embedding calls, one request per text."""

from __future__ import annotations

from openai import AsyncOpenAI

from docvault.exceptions import TransientProviderError


class OpenAIEmbeddingClient:
    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int = 768,
        timeout_s: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._client: AsyncOpenAI | None = None
        self._model = model
        self._dimensions = dimensions

    @property
    def name(self) -> str:
        return f"openai:{self._model}"

    async def embed_one(self, text: str) -> list[float]:
        try:
            if self._client is None:
                self._client = AsyncOpenAI(
                    api_key=self._api_key, timeout=self._timeout_s, max_retries=0
                )
            response = await self._client.embeddings.create(
                input=[text], model=self._model, dimensions=self._dimensions
            )
        except Exception as e:
            raise TransientProviderError(f"OpenAI embedding request failed: {e}") from e

        if not response.data or not response.data[0].embedding:
            raise TransientProviderError("Received empty embedding from OpenAI")
        return list(response.data[0].embedding)
