"""
LLM Module - Unified interface for LLM providers.

Usage:
    from llm import get_client

    client = get_client()  # Uses config settings
    response = await client.generate("Your prompt here")
    print(response.content)

Supported providers:
- openai: OpenAI chat completions (gpt-4.1-mini by default)
"""
from typing import Optional

from config import settings
from .base import (
    LLMClient,
    LLMError,
    LLMResponse,
    Message,
    set_llm_context,
    get_llm_context,
)
from .openai_client import OpenAIClient


# Provider mapping
_PROVIDERS = {
    "openai": OpenAIClient,
}

# Default models per provider
_DEFAULT_MODELS = {
    "openai": "gpt-4.1-mini",
}


def get_client(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    verify_ssl: Optional[bool] = None,
) -> LLMClient:
    """
    Get an LLM client instance.

    Args:
        provider: Provider name ("openai"). Defaults to settings.LLM_PROVIDER
        api_key: API key. Defaults to settings based on provider
        model: Model name. Defaults to settings.LLM_MODEL or provider default
        verify_ssl: Verify TLS certificates. Defaults to settings.LLM_VERIFY_SSL

    Returns:
        Configured LLMClient instance
    """
    provider = (provider or settings.LLM_PROVIDER).lower()

    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {provider}. Available: {list(_PROVIDERS.keys())}")

    if api_key is None:
        if provider == "openai":
            api_key = settings.OPENAI_API_KEY
        else:
            raise ValueError(f"No API key configured for provider: {provider}")

    if not api_key:
        raise ValueError(f"API key required for provider: {provider}")

    model = model or settings.LLM_MODEL or _DEFAULT_MODELS.get(provider)

    if verify_ssl is None:
        verify_ssl = settings.LLM_VERIFY_SSL

    client_class = _PROVIDERS[provider]
    return client_class(api_key=api_key, model=model, verify_ssl=verify_ssl)


__all__ = [
    "get_client",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "Message",
    "OpenAIClient",
    "set_llm_context",
    "get_llm_context",
]
