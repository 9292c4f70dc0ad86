"""Provider types and request models for text generation."""

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import Field

from audiobook_studio.config.pydantic_config import BaseConfig
from audiobook_studio.constants import OPENAI_MODEL_TOKENS


class Provider(Enum):
    """Enumeration of supported text generation providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


class ApiKeyConfig(BaseConfig):
    """Raw key blobs per provider, one key per line."""

    google: Optional[str] = None
    openai: Optional[str] = None

    def blob_for(self, provider: Provider) -> Optional[str]:
        """Return the key blob for a provider."""
        if provider == Provider.OPENAI:
            return self.openai
        return self.google


KeysInput = Union[ApiKeyConfig, Mapping[str, Optional[str]], str, None]


class GenerationRequest(BaseConfig):
    """A single text generation request.

    When ``schema`` is set the caller expects JSON text conforming to it. The
    schema is not enforced here; the caller parses and validates the text.
    """

    model: str
    prompt: str
    system_instruction: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    expect_json: bool = False
    temperature: Optional[float] = None

    @property
    def response_schema(self) -> Optional[dict[str, Any]]:
        return self.schema_

    @property
    def wants_json(self) -> bool:
        """True when structured JSON output was requested."""
        return self.schema_ is not None or self.expect_json


class ProviderFailure(BaseConfig):
    """Canonical shape of a caught provider error."""

    http_status: Optional[int] = None
    message: str = ""
    network: bool = False


class BackendModel(BaseConfig):
    """A concrete OpenAI-compatible backend model and its request capabilities."""

    name: str
    supports_system_role: bool = True
    supports_json_mode: bool = True
    supports_temperature: bool = True
    # Backend model tried once when this one is not found
    fallback: Optional[str] = None


def resolve_provider(model: str) -> Provider:
    """Pick the provider that serves a logical model identifier.

    Gemini is the default; identifiers containing an OpenAI naming token
    (case-insensitive) go to the OpenAI-compatible backend.
    """
    lowered = (model or "").lower()
    if any(token in lowered for token in OPENAI_MODEL_TOKENS):
        return Provider.OPENAI
    return Provider.GEMINI


def coerce_key_config(keys: KeysInput, provider: Provider) -> ApiKeyConfig:
    """Normalize the accepted key inputs into an ``ApiKeyConfig``.

    A bare string is treated as the key blob of the provider the request is
    routed to.
    """
    if keys is None:
        return ApiKeyConfig()
    if isinstance(keys, ApiKeyConfig):
        return keys
    if isinstance(keys, str):
        if provider == Provider.OPENAI:
            return ApiKeyConfig(openai=keys)
        return ApiKeyConfig(google=keys)
    return ApiKeyConfig(
        google=keys.get("google") or keys.get("gemini"),
        openai=keys.get("openai"),
    )
