"""Audiobook Studio - AI content packages for YouTube audiobook videos."""

__version__ = "0.1.0"

from audiobook_studio.config import BaseConfig, Settings, settings
from audiobook_studio.exceptions import (
    APIError,
    AuthenticationError,
    LlmModelError,
    MissingApiKeyError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
)
from audiobook_studio.facade import ProviderRouter, generate_text
from audiobook_studio.providers import (
    ApiKeyConfig,
    GeminiClient,
    GenerationRequest,
    OpenAICompatibleClient,
    Provider,
    is_retryable,
    parse_key_pool,
    resolve_provider,
)

__all__ = [
    # Version
    "__version__",
    # Entry point
    "generate_text",
    "ProviderRouter",
    # Config
    "settings",
    "Settings",
    "BaseConfig",
    # Providers
    "ApiKeyConfig",
    "GenerationRequest",
    "Provider",
    "GeminiClient",
    "OpenAICompatibleClient",
    "resolve_provider",
    "parse_key_pool",
    "is_retryable",
    # Exceptions
    "LlmModelError",
    "MissingApiKeyError",
    "ProviderError",
    "RateLimitError",
    "ModelNotFoundError",
    "AuthenticationError",
    "APIError",
]
