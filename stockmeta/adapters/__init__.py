"""Adapter factory and exports."""
from stockmeta.adapters.base import ModelAdapter, ModelResponse
from stockmeta.config import EXTRACTOR_PROVIDER


def get_adapter(provider: str | None = None) -> ModelAdapter:
    """Get the configured vision model adapter.
    
    Args:
        provider: Provider name; defaults to the EXTRACTOR_PROVIDER config

    Returns:
        ModelAdapter instance for the provider
    """
    provider = provider or EXTRACTOR_PROVIDER
    if provider == "openai":
        from stockmeta.adapters.openai import OpenAIAdapter
        return OpenAIAdapter()
    elif provider == "anthropic":
        from stockmeta.adapters.anthropic import AnthropicAdapter
        return AnthropicAdapter()
    elif provider == "ollama":
        from stockmeta.adapters.ollama import OllamaAdapter
        return OllamaAdapter()
    else:
        # Default to Gemini
        from stockmeta.adapters.gemini import GeminiAdapter
        return GeminiAdapter()


__all__ = ["ModelAdapter", "ModelResponse", "get_adapter"]
