"""Custom exceptions for Audiobook Studio."""

from typing import Optional


class LlmModelError(Exception):
    """Base exception for text generation errors."""

    pass


class MissingApiKeyError(LlmModelError):
    """Exception raised when no API key is configured for the selected provider.

    This is a configuration error: it is raised before any network call and is
    never retried.

    Attributes:
        message: Description of the failure
        provider: Name of the provider without keys
    """

    def __init__(self, provider: str, message: Optional[str] = None):
        self.provider = provider
        self.message = message or f"Missing API Key: please configure your {provider} API key in Settings."
        super().__init__(self.message)


class ProviderError(LlmModelError):
    """Exception raised when a provider reports a failed generation.

    Attributes:
        message: Description of the failure
        http_status: HTTP status of the failed response, if any
        provider: Name of the provider that failed
    """

    def __init__(self, message: str, http_status: Optional[int] = None, provider: Optional[str] = None):
        self.message = message
        self.http_status = http_status
        self.provider = provider
        super().__init__(self.message)


class RateLimitError(ProviderError):
    """Rate limit or quota exceeded - retryable with another key."""

    pass


class ModelNotFoundError(ProviderError):
    """The requested backend model does not exist for this key."""

    pass


class AuthenticationError(ProviderError):
    """Authentication failed - not retryable."""

    pass


class APIError(ProviderError):
    """General API error - may or may not be retryable."""

    pass
