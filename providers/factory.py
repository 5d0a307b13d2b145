"""Factory for creating LLM providers."""

from typing import Optional, Dict, Type

from .base import LLMProvider
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider
from config import settings


# Registry of available providers
PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "gpt": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "claude": AnthropicProvider,
}

# Aliases skipped when listing
_ALIASES = {"gpt", "claude"}

# Model prefix to provider mapping for auto-detection
MODEL_PROVIDERS: Dict[str, str] = {
    "gpt-": "openai",
    "o1": "openai",
    "claude": "anthropic",
    "sonnet": "anthropic",
    "haiku": "anthropic",
}


def get_provider(
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> LLMProvider:
    """Get an LLM provider instance.

    Args:
        provider_name: Explicit provider name (openai, anthropic)
        model: Model name - if provided without provider, will auto-detect provider

    Returns:
        LLMProvider instance; the configured ``llm_provider`` when nothing
        else decides it

    Examples:
        get_provider("anthropic")
        get_provider(model="gpt-4o")  # OpenAI
        get_provider()  # settings.llm_provider
    """
    if provider_name:
        provider_key = provider_name.lower()
        if provider_key not in PROVIDERS:
            raise ValueError(
                f"Unknown provider: {provider_name}. "
                f"Available: {list(PROVIDERS.keys())}"
            )
        return PROVIDERS[provider_key]()

    if model:
        model_lower = model.lower()
        for prefix, provider in MODEL_PROVIDERS.items():
            if model_lower.startswith(prefix):
                return PROVIDERS[provider]()

    return PROVIDERS.get(settings.llm_provider.lower(), OpenAIProvider)()


def list_providers() -> Dict[str, bool]:
    """List all providers and their availability.

    Returns:
        Dict mapping provider name to availability status
    """
    result = {}
    for name, provider_class in PROVIDERS.items():
        if name in _ALIASES:
            continue
        result[name] = provider_class().is_available()
    return result
