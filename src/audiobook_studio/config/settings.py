"""Application settings using Pydantic Settings."""

import os

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from audiobook_studio.constants import DEFAULT_MODEL, DEFAULT_OPENAI_BASE_URL


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables.

    The API key fields hold raw key blobs: one key per line, tried in order.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    gemini_api_key: SecretStr | None = Field(None, alias="GEMINI_API_KEY")
    openai_api_key: SecretStr | None = Field(None, alias="OPENAI_API_KEY")

    openai_base_url: str = Field(DEFAULT_OPENAI_BASE_URL, alias="OPENAI_BASE_URL")
    # None disables the client-side timeout
    openai_request_timeout: float | None = Field(None, alias="OPENAI_REQUEST_TIMEOUT")
    openai_model_fallback: bool = Field(True, alias="OPENAI_MODEL_FALLBACK")

    default_model: str = Field(DEFAULT_MODEL, alias="DEFAULT_MODEL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    def get_api_key_blob(self, provider: str) -> str | None:
        """Get the configured key blob for a provider name.

        Args:
            provider: Provider name (gemini, google or openai)

        Returns:
            Key blob string if found, None otherwise
        """
        provider_key = provider.lower()
        key_map = {
            "gemini": ("GEMINI_API_KEY", self.gemini_api_key),
            "google": ("GEMINI_API_KEY", self.gemini_api_key),
            "openai": ("OPENAI_API_KEY", self.openai_api_key),
        }
        env_name, secret_value = key_map.get(provider_key, (None, None))
        if secret_value:
            return secret_value.get_secret_value()
        if env_name:
            return os.getenv(env_name)
        return None


settings: Settings = Settings()  # type: ignore[call-arg]
