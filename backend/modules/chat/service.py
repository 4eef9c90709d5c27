"""
Chat completion service.

Resolves the requested model and streams the assistant's reply. Access
gating happens before this service is reached; see modules.gatekeeper.
"""

import logging
from typing import AsyncIterator, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from shared.config import Settings, get_settings
from providers.base import LLMProvider, ModelConfig
from providers.catalog import resolve_model
from providers.factory import get_providers

from .models import ChatMessage

logger = logging.getLogger(__name__)

_MESSAGE_TYPES: dict[str, type[BaseMessage]] = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_langchain_messages(messages: list[ChatMessage]) -> list[BaseMessage]:
    """Convert client messages to LangChain messages."""
    return [_MESSAGE_TYPES[m.role](content=m.content) for m in messages]


class ChatService:
    """Streams chat replies from the configured LLM providers."""

    def __init__(
        self,
        providers: Optional[dict[str, LLMProvider]] = None,
        settings: Optional[Settings] = None,
    ):
        self._providers = providers or get_providers()
        self._settings = settings or get_settings()

    def resolve_model(self, model_id: Optional[str]) -> ModelConfig:
        """Pick the requested model, or the default for unknown IDs."""
        return resolve_model(model_id, self._settings.default_model_id)

    def get_llm(self, model: ModelConfig) -> ChatOpenAI:
        """
        Build a streaming client for ``model``.

        Raises:
            ProviderNotConfiguredError: If the provider's API key is missing
        """
        provider = self._providers[model.provider]
        api_key = getattr(self._settings, f"{model.provider}_api_key", "")
        return provider.get_llm(model, api_key)

    async def stream_reply(
        self,
        llm: ChatOpenAI,
        messages: list[ChatMessage],
    ) -> AsyncIterator[str]:
        """
        Stream the assistant reply as text chunks.

        Args:
            llm: Client from get_llm()
            messages: Conversation so far

        Yields:
            Non-empty text chunks
        """
        async for chunk in llm.astream(to_langchain_messages(messages)):
            if chunk.content:
                yield chunk.content
