"""Single entry point for text generation across providers."""

from typing import Optional

from loguru import logger

from audiobook_studio.config import Settings
from audiobook_studio.config import settings as default_settings
from audiobook_studio.providers.base import AsyncProviderClient
from audiobook_studio.providers.gemini import GeminiClient
from audiobook_studio.providers.openai_compat import OpenAICompatibleClient
from audiobook_studio.providers.types import (
    GenerationRequest,
    KeysInput,
    Provider,
    coerce_key_config,
    resolve_provider,
)

module_logger = logger


class ProviderRouter:
    """Routes generation requests to the provider client that serves the model.

    The router performs no retries; key rotation belongs to the clients.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gemini: Optional[AsyncProviderClient] = None,
        openai: Optional[AsyncProviderClient] = None,
    ):
        self.settings = settings or default_settings
        self._clients: dict[Provider, AsyncProviderClient] = {
            Provider.GEMINI: gemini or GeminiClient(),
            Provider.OPENAI: openai
            or OpenAICompatibleClient(
                base_url=self.settings.openai_base_url,
                timeout=self.settings.openai_request_timeout,
                enable_fallback=self.settings.openai_model_fallback,
            ),
        }

    def client_for(self, provider: Provider) -> AsyncProviderClient:
        return self._clients[provider]

    def key_blob(self, provider: Provider, keys: KeysInput) -> Optional[str]:
        """Pick the caller's key blob for a provider, falling back to settings."""
        blob = coerce_key_config(keys, provider).blob_for(provider)
        if blob and blob.strip():
            return blob
        return self.settings.get_api_key_blob(provider.value)

    async def generate_text(self, request: GenerationRequest, keys: KeysInput = None) -> str:
        """Generate text with the provider implied by ``request.model``."""
        provider = resolve_provider(request.model)
        module_logger.debug(f"Routing model {request.model} to {provider.value}")
        return await self.client_for(provider).generate(request, self.key_blob(provider, keys))


_default_router: Optional[ProviderRouter] = None


def get_router() -> ProviderRouter:
    """Return the shared router, creating it on first use."""
    global _default_router
    if _default_router is None:
        _default_router = ProviderRouter()
    return _default_router


async def generate_text(request: GenerationRequest, keys: KeysInput = None) -> str:
    """
    Generate text for a request.

    This is the only function content generators call.

    Args:
        request: Generation request; the model id selects the provider
        keys: ``ApiKeyConfig``, a mapping with ``google``/``openai`` blobs, or a
            bare blob for the provider the model routes to

    Returns:
        str: Raw generated text; structured callers parse it themselves
    """
    return await get_router().generate_text(request, keys)
