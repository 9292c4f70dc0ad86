"""Pydantic models for OpenAI-compatible chat completion responses."""

from pydantic import ConfigDict

from audiobook_studio.config.pydantic_config import BaseConfig


class ApiBaseModel(BaseConfig):
    """Base model for API responses that may include extra fields."""

    model_config = BaseConfig.model_config | ConfigDict(extra="ignore")


class ChatUsage(ApiBaseModel):
    """Token usage from a chat completion."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatMessage(ApiBaseModel):
    """Message from a chat completion choice."""

    role: str | None = None
    content: str | None = None
    refusal: str | None = None


class ChatChoice(ApiBaseModel):
    """Response choice from a chat completion."""

    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletionResponse(ApiBaseModel):
    """Complete chat completion response."""

    id: str | None = None
    model: str | None = None
    choices: list[ChatChoice]
    usage: ChatUsage | None = None


class ErrorDetail(ApiBaseModel):
    """Error object of a failed OpenAI-compatible response."""

    message: str | None = None
    type: str | None = None
    code: str | int | None = None


class ErrorResponse(ApiBaseModel):
    """Body of a failed OpenAI-compatible response."""

    error: ErrorDetail | str | None = None
