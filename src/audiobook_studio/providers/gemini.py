"""Gemini provider client."""

from typing import Any, Callable, Optional

from loguru import logger

from audiobook_studio.constants import GEMINI_KEY_PATTERN
from audiobook_studio.exceptions import LlmModelError
from audiobook_studio.providers.base import AsyncProviderClient
from audiobook_studio.providers.errors import is_retryable
from audiobook_studio.providers.types import GenerationRequest, Provider

module_logger = logger


def _default_client_factory(api_key: str) -> Any:
    try:
        from google import genai
    except ImportError as e:
        raise LlmModelError(f"Google GenAI SDK not available: {e}") from e
    return genai.Client(api_key=api_key)


def build_generation_config(request: GenerationRequest) -> dict[str, Any]:
    """Build the ``GenerateContentConfig`` arguments for a request."""
    config_kwargs: dict[str, Any] = {}
    if request.temperature is not None:
        config_kwargs["temperature"] = request.temperature
    if request.wants_json:
        config_kwargs["response_mime_type"] = "application/json"
    if request.response_schema is not None:
        config_kwargs["response_schema"] = request.response_schema
    if request.system_instruction:
        config_kwargs["system_instruction"] = request.system_instruction
    return config_kwargs


class GeminiClient(AsyncProviderClient):
    """Client for Google Gemini SDK calls with key rotation."""

    provider = Provider.GEMINI
    key_pattern = GEMINI_KEY_PATTERN

    def __init__(self, client_factory: Optional[Callable[[str], Any]] = None):
        # A new SDK client is built for every attempt, scoped to one key
        self._client_factory = client_factory or _default_client_factory

    def _should_rotate(self, error: BaseException) -> bool:
        return is_retryable(error)

    async def _attempt(self, request: GenerationRequest, api_key: str) -> str:
        """Make a single generate_content call using the Gemini SDK."""
        client = self._client_factory(api_key)

        config_kwargs = build_generation_config(request)
        config: Any = None
        if config_kwargs:
            from google.genai import types

            config = types.GenerateContentConfig(**config_kwargs)

        module_logger.debug(f"Calling Gemini model {request.model} (json={request.wants_json})")
        try:
            response = await client.aio.models.generate_content(
                model=request.model,
                contents=request.prompt,
                config=config,
            )
        finally:
            # The SDK opens an async HTTP client per key on first use
            await client.aio.aclose()
        return response.text or ""
