from __future__ import annotations

from typing import Sequence

from openai import APIError, AsyncOpenAI

from resume_analyzer.ai.config import AIConfig
from resume_analyzer.ai.types import ChatMessage
from resume_analyzer.core.errors import RemoteServiceError


class OpenAIProvider:
    """Chat-completions client for any OpenAI-compatible endpoint (Groq by default)."""

    def __init__(self, config: AIConfig):
        self._config = config
        self._client: AsyncOpenAI | None = None

    @property
    def model(self) -> str:
        return self._config.model

    def _get_client(self) -> AsyncOpenAI:
        if not self._config.api_key:
            raise RemoteServiceError("GROQ_API_KEY is missing")
        if self._client is None:
            # Single attempt per request, the SDK retries by default.
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                timeout=self._config.timeout_s,
                max_retries=0,
            )
        return self._client

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self._config.model,
                messages=payload,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except APIError as exc:
            raise RemoteServiceError(f"chat completion failed: {exc}") from exc

        if not response.choices:
            raise RemoteServiceError("chat completion returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise RemoteServiceError("chat completion returned empty content")
        return content
