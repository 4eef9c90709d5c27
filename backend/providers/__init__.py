"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig
from .catalog import MODELS, DEFAULT_MODEL, get_model_config, resolve_model
from .exceptions import ProviderNotConfiguredError
from .factory import get_providers

__all__ = [
    "LLMProvider",
    "ModelConfig",
    "MODELS",
    "DEFAULT_MODEL",
    "get_model_config",
    "resolve_model",
    "ProviderNotConfiguredError",
    "get_providers",
]
