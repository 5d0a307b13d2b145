"""OpenAI provider implementation (the default drafting backend)."""

import os
from typing import Optional

from .base import LLMProvider, LLMResponse
from config import settings


class OpenAIProvider(LLMProvider):
    """Provider for OpenAI chat models, asked for a JSON object response."""

    MODELS = {
        "gpt-4-turbo-preview": "gpt-4-turbo-preview",
        "gpt-4-turbo": "gpt-4-turbo",
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
    }

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. Falls back to settings, then OPENAI_API_KEY.
            timeout: Request timeout in seconds (defaults to settings)
        """
        self.api_key = api_key or settings.openai_api_key or os.environ.get("OPENAI_API_KEY")
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._client = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return settings.llm_model

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI
            # One request, no SDK-level retries: failures fall back to the template generator
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def _resolve_model(self, model: Optional[str]) -> str:
        if model is None:
            return self.default_model
        return self.MODELS.get(model, model)

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        client = self._get_client()
        resolved_model = self._resolve_model(model)

        response = client.chat.completions.create(
            model=resolved_model,
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        )

        return LLMResponse(
            content=response.choices[0].message.content or "",
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
            model=resolved_model,
            provider=self.name,
        )

    def is_available(self) -> bool:
        return bool(self.api_key)
