"""Base LLM provider interface for the drafting backend."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""
    content: str
    input_tokens: int
    output_tokens: int
    model: str
    provider: str


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations make exactly one request per ``complete`` call; callers
    decide what to do on failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (openai, anthropic)."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default model for this provider."""
        pass

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        user_message: str,
        model: Optional[str] = None,
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Generate a completion.

        Args:
            system_prompt: System/instruction prompt
            user_message: User message/query
            model: Model to use (defaults to provider's default)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            LLMResponse with content and token counts
        """
        pass

    def is_available(self) -> bool:
        """Check if this provider is available (API key set, etc.)."""
        return True
