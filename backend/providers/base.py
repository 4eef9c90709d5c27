"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod

from langchain_openai import ChatOpenAI
from pydantic import BaseModel


class ModelConfig(BaseModel):
    """A chat model offered to users.

    Attributes:
        id: Provider model identifier (e.g., "llama-3.1-8b-instant")
        name: Display name
        provider: Provider type (e.g., "groq", "openai")
        is_free: Whether the model runs on a free provider tier
        description: Short description for the model picker
    """

    model_config = {"frozen": True}

    id: str
    name: str
    provider: str
    is_free: bool
    description: str = ""


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    The chat pipeline treats a provider as an opaque streaming text
    generator: it asks for a LangChain chat model and streams from it.
    """

    @abstractmethod
    def get_llm(self, model: ModelConfig, api_key: str, temperature: float = 0.7) -> ChatOpenAI:
        """Return a streaming chat client for the given model.

        Args:
            model: Catalog entry of the model to use
            api_key: Provider API key
            temperature: Sampling temperature

        Returns:
            A configured ChatOpenAI client
        """
        pass
