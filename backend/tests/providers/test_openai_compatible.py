"""Tests for the OpenAI-compatible provider and model catalog."""

import os

import pytest
from unittest.mock import patch

from langchain_core.messages import HumanMessage

from providers.base import ModelConfig
from providers.catalog import DEFAULT_MODEL, MODELS, get_model_config, resolve_model
from providers.exceptions import ProviderNotConfiguredError
from providers.factory import get_providers
from providers.openai_compatible import OpenAICompatibleProvider, PROVIDER_CONFIGS


GROQ_API_KEY = os.environ.get("GROQ_API_KEY", "")


def model_for(provider_type: str) -> ModelConfig:
    return next(m for m in MODELS if m.provider == provider_type)


class TestInstantiation:

    @pytest.mark.parametrize("provider_type", list(PROVIDER_CONFIGS.keys()))
    def test_provider_instantiation(self, provider_type):
        provider = OpenAICompatibleProvider(provider_type)
        assert provider.provider_type == provider_type
        assert provider.provider_config == PROVIDER_CONFIGS[provider_type]

    def test_unknown_provider_raises_error(self):
        with pytest.raises(KeyError, match="Unknown provider type"):
            OpenAICompatibleProvider("anthropic")

    def test_factory_covers_catalog(self):
        """Every catalog model has a provider."""
        providers = get_providers()
        assert {m.provider for m in MODELS} <= set(providers)


class TestGetLLM:

    @pytest.mark.parametrize("provider_type,env_var", [
        ("openai", "OPENAI_API_KEY"),
        ("groq", "GROQ_API_KEY"),
    ])
    def test_api_key_required(self, provider_type, env_var):
        provider = OpenAICompatibleProvider(provider_type)

        with pytest.raises(ProviderNotConfiguredError) as exc_info:
            provider.get_llm(model_for(provider_type), "")

        assert exc_info.value.details["env_var"] == env_var
        assert exc_info.value.status_code == 500

    def test_groq_error_has_signup_hint(self):
        with pytest.raises(ProviderNotConfiguredError, match="console.groq.com"):
            OpenAICompatibleProvider("groq").get_llm(model_for("groq"), "")

    @patch("providers.openai_compatible.ChatOpenAI")
    def test_groq_uses_groq_endpoint(self, mock_chat):
        OpenAICompatibleProvider("groq").get_llm(model_for("groq"), "gsk_test", temperature=0.2)

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["base_url"] == "https://api.groq.com/openai/v1"
        assert kwargs["api_key"] == "gsk_test"
        assert kwargs["model"] == "llama-3.1-8b-instant"
        assert kwargs["temperature"] == 0.2
        assert kwargs["streaming"] is True

    @patch("providers.openai_compatible.ChatOpenAI")
    def test_openai_uses_default_endpoint(self, mock_chat):
        OpenAICompatibleProvider("openai").get_llm(model_for("openai"), "sk-test")
        assert "base_url" not in mock_chat.call_args.kwargs


class TestCatalog:

    def test_default_is_first_free_model(self):
        assert DEFAULT_MODEL.is_free is True
        assert DEFAULT_MODEL.id == "llama-3.1-8b-instant"

    def test_ids_are_unique(self):
        ids = [m.id for m in MODELS]
        assert len(ids) == len(set(ids))

    def test_lookup(self):
        assert get_model_config("gpt-4o").provider == "openai"
        assert get_model_config("nope") is None
        assert get_model_config(None) is None

    def test_free_groq_models(self):
        free = [m.id for m in MODELS if m.is_free]
        assert free == [
            "llama-3.1-8b-instant",
            "llama-3.3-70b-versatile",
            "llama-3.2-90b-versatile",
            "mixtral-8x7b-32768",
        ]
        assert {get_model_config(model_id).provider for model_id in free} == {"groq"}

    def test_resolve_known_model(self):
        assert resolve_model("mixtral-8x7b-32768").id == "mixtral-8x7b-32768"

    def test_resolve_unknown_uses_configured_default(self):
        assert resolve_model("nope", "gpt-4o-mini").id == "gpt-4o-mini"

    def test_resolve_falls_back_to_catalog_default(self):
        assert resolve_model(None, "also-unknown") == DEFAULT_MODEL


@pytest.mark.skipif(not GROQ_API_KEY, reason="GROQ_API_KEY not set")
class TestGroqIntegration:

    @pytest.mark.asyncio
    async def test_streams_text(self):
        llm = OpenAICompatibleProvider("groq").get_llm(DEFAULT_MODEL, GROQ_API_KEY, temperature=0)
        chunks = [c.content async for c in llm.astream([HumanMessage(content="Say OK")])]
        assert "".join(chunks).strip()
