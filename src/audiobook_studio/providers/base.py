"""Abstract base class for provider clients with key rotation."""

from abc import ABC, abstractmethod
from typing import Optional, Pattern

from loguru import logger
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

from audiobook_studio.providers.keys import key_fingerprint, require_key_pool
from audiobook_studio.providers.types import GenerationRequest, Provider

module_logger = logger


class AsyncProviderClient(ABC):
    """Base class for asynchronous provider clients.

    ``generate`` parses the key pool and tries each key in order. A key is
    abandoned only when its failure is retryable; any other failure, or a
    failure on the last key, propagates unchanged.
    """

    provider: Provider
    key_pattern: Optional[Pattern[str]] = None

    @abstractmethod
    async def _attempt(self, request: GenerationRequest, api_key: str) -> str:
        """Run one generation call with a single key."""
        pass

    @abstractmethod
    def _should_rotate(self, error: BaseException) -> bool:
        """Return True when the next key should be tried after this error."""
        pass

    async def generate(self, request: GenerationRequest, key_blob: Optional[str]) -> str:
        """
        Generate text, rotating through the key pool on transient failures.

        Args:
            request: Generation request
            key_blob: Raw key blob, one key per line

        Returns:
            str: Generated text

        Raises:
            MissingApiKeyError: If the blob holds no keys
            Exception: The last provider error once rotation stops
        """
        pool = require_key_pool(key_blob, self.provider.value, self.key_pattern)

        def log_rotation(retry_state: RetryCallState) -> None:
            index = retry_state.attempt_number
            error = retry_state.outcome.exception() if retry_state.outcome else None
            module_logger.warning(
                f"{self.provider.value} key {index}/{len(pool)} ({key_fingerprint(pool[index - 1])}) "
                f"failed with a retryable error, trying key {index + 1}/{len(pool)}: {error}"
            )

        retrying = AsyncRetrying(
            stop=stop_after_attempt(len(pool)),
            retry=retry_if_exception(self._should_rotate),
            before_sleep=log_rotation,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    api_key = pool[attempt.retry_state.attempt_number - 1]
                    return await self._attempt(request, api_key)
        except Exception as e:
            module_logger.error(f"{self.provider.value} generation with model {request.model} failed: {e}")
            raise
