"""Factory functions for creating LLM providers."""

from .base import LLMProvider
from .openai_compatible import OpenAICompatibleProvider, PROVIDER_CONFIGS


def get_providers() -> dict[str, LLMProvider]:
    """Get an instance of each provider type.

    Returns:
        Dictionary mapping provider type names to provider instances.
        Keys are: "openai", "groq"
    """
    return {name: OpenAICompatibleProvider(name) for name in PROVIDER_CONFIGS}
