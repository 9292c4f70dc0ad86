"""OpenAI-compatible chat completions client with model routing and key rotation."""

from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from audiobook_studio.constants import (
    DEFAULT_OPENAI_BASE_URL,
    JSON_OUTPUT_INSTRUCTION,
    OPENAI_CHAT_COMPLETIONS_PATH,
    SYSTEM_INSTRUCTIONS_LABEL,
)
from audiobook_studio.exceptions import (
    APIError,
    AuthenticationError,
    ModelNotFoundError,
    ProviderError,
    RateLimitError,
)
from audiobook_studio.providers.api_models import ChatCompletionResponse, ErrorDetail, ErrorResponse
from audiobook_studio.providers.base import AsyncProviderClient
from audiobook_studio.providers.errors import is_retryable_http_failure, normalize_error
from audiobook_studio.providers.types import BackendModel, GenerationRequest, Provider

module_logger = logger

GPT_4O = BackendModel(name="gpt-4o")
GPT_4O_MINI = BackendModel(name="gpt-4o-mini")
GPT_4_TURBO = BackendModel(name="gpt-4-turbo")
# Reasoning model: no system role, no JSON mode and a fixed temperature
O1_MINI = BackendModel(
    name="o1-mini",
    supports_system_role=False,
    supports_json_mode=False,
    supports_temperature=False,
    fallback=GPT_4O.name,
)

# Evaluated top to bottom; the first token found in the logical model id wins
MODEL_ROUTES: tuple[tuple[str, BackendModel], ...] = (
    ("instant", GPT_4O_MINI),
    ("thinking", O1_MINI),
    ("pro", GPT_4_TURBO),
)
DEFAULT_BACKEND = GPT_4O

BACKEND_MODELS: dict[str, BackendModel] = {
    model.name: model for model in (GPT_4O, GPT_4O_MINI, GPT_4_TURBO, O1_MINI)
}

_STATUS_ERRORS: dict[int, type[ProviderError]] = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: ModelNotFoundError,
    429: RateLimitError,
}


def resolve_backend_model(model: str) -> BackendModel:
    """Map a logical model identifier to a concrete backend model.

    Identifiers that match no route, including ones outside this provider's
    naming convention, get the default flagship model.
    """
    lowered = (model or "").lower()
    for token, backend in MODEL_ROUTES:
        if token in lowered:
            return backend
    return DEFAULT_BACKEND


def build_messages(request: GenerationRequest, backend: BackendModel) -> list[dict[str, str]]:
    """Build the chat messages for a request on a given backend model."""
    prompt = request.prompt
    if request.wants_json and "json" not in prompt.lower():
        prompt = f"{prompt}\n\n{JSON_OUTPUT_INSTRUCTION}"

    if not request.system_instruction:
        return [{"role": "user", "content": prompt}]

    if backend.supports_system_role:
        return [
            {"role": "system", "content": request.system_instruction},
            {"role": "user", "content": prompt},
        ]

    folded = f"{SYSTEM_INSTRUCTIONS_LABEL}\n{request.system_instruction}\n\n{prompt}"
    return [{"role": "user", "content": folded}]


def build_payload(request: GenerationRequest, backend: BackendModel) -> dict[str, Any]:
    """Build the JSON body of a chat completion call."""
    payload: dict[str, Any] = {
        "model": backend.name,
        "messages": build_messages(request, backend),
    }
    if request.wants_json and backend.supports_json_mode:
        payload["response_format"] = {"type": "json_object"}
    if request.temperature is not None and backend.supports_temperature:
        payload["temperature"] = request.temperature
    return payload


def _error_message(response: httpx.Response) -> str:
    try:
        body = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.text or response.reason_phrase
    if isinstance(body.error, ErrorDetail) and body.error.message:
        return body.error.message
    if isinstance(body.error, str) and body.error:
        return body.error
    return response.text or response.reason_phrase


def raise_for_response(response: httpx.Response, model_name: str) -> None:
    """Raise a status-specific ``ProviderError`` for a non-2xx response."""
    if response.is_success:
        return
    status = response.status_code
    error_cls = _STATUS_ERRORS.get(status, APIError)
    raise error_cls(
        f"API error ({status}) for model {model_name}: {_error_message(response)}",
        http_status=status,
        provider=Provider.OPENAI.value,
    )


class OpenAICompatibleClient(AsyncProviderClient):
    """Async client for OpenAI-compatible chat completion endpoints.

    Uses httpx for the HTTP calls. Each attempt builds its own HTTP client
    scoped to one key.
    """

    provider = Provider.OPENAI
    # Keys are only trimmed, never matched against a shape
    key_pattern = None

    def __init__(
        self,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        timeout: Optional[float] = None,
        enable_fallback: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root, the chat completions path is appended
            timeout: Request timeout in seconds, None for no timeout
            enable_fallback: Retry once on the fallback model when a model is not found
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.enable_fallback = enable_fallback
        self._transport = transport

    def _should_rotate(self, error: BaseException) -> bool:
        return is_retryable_http_failure(normalize_error(error))

    async def _attempt(self, request: GenerationRequest, api_key: str) -> str:
        backend = resolve_backend_model(request.model)
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as http:
            try:
                return await self._complete(http, request, backend)
            except ModelNotFoundError:
                if not (self.enable_fallback and backend.fallback):
                    raise
                fallback = BACKEND_MODELS[backend.fallback]
                module_logger.warning(f"Model {backend.name} not found, falling back to {fallback.name}")
                return await self._complete(http, request, fallback)

    async def _complete(self, http: httpx.AsyncClient, request: GenerationRequest, backend: BackendModel) -> str:
        """Make a single chat completion call and return the message content."""
        module_logger.debug(f"Calling chat completions with model {backend.name} for {request.model}")
        response = await http.post(OPENAI_CHAT_COMPLETIONS_PATH, json=build_payload(request, backend))
        raise_for_response(response, backend.name)

        try:
            data = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise APIError(
                f"Unexpected response format: {e}",
                http_status=response.status_code,
                provider=self.provider.value,
            ) from e

        if not data.choices:
            raise APIError("No choices in response", http_status=response.status_code, provider=self.provider.value)
        return data.choices[0].message.content or ""
