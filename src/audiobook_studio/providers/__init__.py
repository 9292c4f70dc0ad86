"""Text generation provider clients with key rotation."""

from audiobook_studio.providers.base import AsyncProviderClient
from audiobook_studio.providers.errors import is_retryable, is_retryable_http_failure, normalize_error
from audiobook_studio.providers.gemini import GeminiClient
from audiobook_studio.providers.keys import parse_key_pool
from audiobook_studio.providers.openai_compat import OpenAICompatibleClient, resolve_backend_model
from audiobook_studio.providers.types import (
    ApiKeyConfig,
    BackendModel,
    GenerationRequest,
    Provider,
    ProviderFailure,
    coerce_key_config,
    resolve_provider,
)

__all__ = [
    # Base class
    "AsyncProviderClient",
    # Provider clients
    "GeminiClient",
    "OpenAICompatibleClient",
    # Types
    "ApiKeyConfig",
    "BackendModel",
    "GenerationRequest",
    "Provider",
    "ProviderFailure",
    # Routing and classification
    "coerce_key_config",
    "resolve_provider",
    "resolve_backend_model",
    "parse_key_pool",
    "normalize_error",
    "is_retryable",
    "is_retryable_http_failure",
]
