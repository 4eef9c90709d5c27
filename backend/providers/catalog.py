"""Chat models offered to users.

Free Groq-hosted models come first; the first free model is the default.
"""

from typing import Optional

from .base import ModelConfig


MODELS: list[ModelConfig] = [
    ModelConfig(
        id="llama-3.1-8b-instant",
        name="Llama 3.1 8B (Groq)",
        provider="groq",
        is_free=True,
        description="Free - Fast and lightweight (Recommended)",
    ),
    ModelConfig(
        id="llama-3.3-70b-versatile",
        name="Llama 3.3 70B (Groq)",
        provider="groq",
        is_free=True,
        description="Free - Fast inference via Groq",
    ),
    ModelConfig(
        id="llama-3.2-90b-versatile",
        name="Llama 3.2 90B (Groq)",
        provider="groq",
        is_free=True,
        description="Free - High capacity model",
    ),
    ModelConfig(
        id="mixtral-8x7b-32768",
        name="Mixtral 8x7B (Groq)",
        provider="groq",
        is_free=True,
        description="Free - High performance",
    ),
    ModelConfig(
        id="gpt-4o-mini",
        name="GPT-4o Mini (OpenAI)",
        provider="openai",
        is_free=False,
        description="Paid - Cost-effective OpenAI model",
    ),
    ModelConfig(
        id="gpt-4o",
        name="GPT-4o (OpenAI)",
        provider="openai",
        is_free=False,
        description="Paid - Latest OpenAI model",
    ),
]

DEFAULT_MODEL: ModelConfig = next((m for m in MODELS if m.is_free), MODELS[0])


def get_model_config(model_id: Optional[str]) -> Optional[ModelConfig]:
    """Look up a catalog entry by model ID."""
    if not model_id:
        return None
    return next((m for m in MODELS if m.id == model_id), None)


def resolve_model(model_id: Optional[str], default_id: Optional[str] = None) -> ModelConfig:
    """Resolve a requested model, falling back to the configured default.

    Args:
        model_id: Requested model ID (may be None or unknown)
        default_id: Preferred default from settings

    Returns:
        The requested model if known, else the default
    """
    return get_model_config(model_id) or get_model_config(default_id) or DEFAULT_MODEL
