"""LLM provider abstraction for the drafting backend."""

from .base import LLMProvider, LLMResponse
from .factory import get_provider, list_providers

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "get_provider",
    "list_providers",
]
