"""Unified provider for OpenAI-compatible chat APIs.

Both supported providers speak the OpenAI chat completions protocol, so
they share LangChain's ChatOpenAI client and differ only in endpoint and
key:
- OpenAI: default endpoint
- Groq: https://api.groq.com/openai/v1
"""

from dataclasses import dataclass

from langchain_openai import ChatOpenAI

from .base import LLMProvider, ModelConfig
from .exceptions import ProviderNotConfiguredError


@dataclass
class ProviderConfig:
    """Configuration for an OpenAI-compatible provider.

    Attributes:
        display_name: Name used in logs and error messages
        default_base_url: API endpoint URL (None uses OpenAI's default)
        api_key_env_var: Environment variable name for the API key (for error messages)
        signup_hint: Extra guidance appended to missing-key errors
    """

    display_name: str
    default_base_url: str | None = None
    api_key_env_var: str = ""
    signup_hint: str = ""


# Provider configurations registry
PROVIDER_CONFIGS: dict[str, ProviderConfig] = {
    "openai": ProviderConfig(
        display_name="OpenAI",
        api_key_env_var="OPENAI_API_KEY",
    ),
    "groq": ProviderConfig(
        display_name="Groq",
        default_base_url="https://api.groq.com/openai/v1",
        api_key_env_var="GROQ_API_KEY",
        signup_hint="Get a free API key at https://console.groq.com",
    ),
}


class OpenAICompatibleProvider(LLMProvider):
    """Provider for any registered OpenAI-compatible API."""

    def __init__(self, provider_type: str):
        """Initialize the provider.

        Args:
            provider_type: One of the PROVIDER_CONFIGS keys

        Raises:
            KeyError: If provider_type is not recognized
        """
        if provider_type not in PROVIDER_CONFIGS:
            raise KeyError(
                f"Unknown provider type: {provider_type}. "
                f"Valid types: {list(PROVIDER_CONFIGS.keys())}"
            )
        self.provider_type = provider_type
        self.provider_config = PROVIDER_CONFIGS[provider_type]

    def get_llm(self, model: ModelConfig, api_key: str, temperature: float = 0.7) -> ChatOpenAI:
        """Return a streaming ChatOpenAI client for this provider.

        Raises:
            ProviderNotConfiguredError: If no API key is configured
        """
        if not api_key:
            raise ProviderNotConfiguredError(
                self.provider_config.display_name,
                self.provider_config.api_key_env_var,
                self.provider_config.signup_hint,
            )

        kwargs: dict = {
            "model": model.id,
            "api_key": api_key,
            "temperature": temperature,
            "streaming": True,
        }
        if self.provider_config.default_base_url:
            kwargs["base_url"] = self.provider_config.default_base_url

        return ChatOpenAI(**kwargs)
