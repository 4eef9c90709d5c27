"""LLM provider exceptions."""

from shared.exceptions import MentorError


class ProviderNotConfiguredError(MentorError):
    """Raised when a provider's API key is missing on the server."""

    status_code = 500

    def __init__(self, provider: str, env_var: str, hint: str = ""):
        message = f"{provider} API key is not configured"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(
            message,
            code="PROVIDER_NOT_CONFIGURED",
            details={"provider": provider, "env_var": env_var},
        )
