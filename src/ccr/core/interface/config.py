"""Provider configuration — one named OpenAI-compatible backend."""

from pydantic import BaseModel, ConfigDict


class ProviderConfig(BaseModel):
    """An upstream provider loaded from configuration.

    Immutable once loaded; the registry owns it for the life of the process.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    api_base_url: str
    api_key: str
    models: frozenset[str] = frozenset()

    @property
    def chat_completions_url(self) -> str:
        """Absolute URL of the provider's chat completions endpoint."""
        return f"{self.api_base_url.rstrip('/')}/v1/chat/completions"
