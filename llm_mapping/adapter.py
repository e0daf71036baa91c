"""LLM adapters for the column-mapping oracle.

Provides a base interface and concrete adapters for OpenAI-compatible
APIs and a deterministic mock for testing.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from openai import OpenAI

from app.config import LLMSettings


class BaseLLMAdapter(ABC):
    """Abstract base for all LLM adapters."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw string response from the model (expected to be a JSON array).
        """


class OpenAILLMAdapter(BaseLLMAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Configured for deterministic, non-streaming output with
    zero temperature suitable for structured JSON generation.
    Retries are disabled: a failed call routes the rows to the
    fallback mapper instead.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        max_tokens: int = 4096,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            model: Model identifier.
            max_tokens: Maximum tokens in the completion.
            api_key: API key for the endpoint.
            base_url: Optional base URL for OpenAI-compatible endpoints.
            timeout_seconds: Per-request transport timeout.
        """
        client_kwargs: dict = {
            "api_key": api_key or "",
            "timeout": timeout_seconds,
            "max_retries": 0,
        }
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        """Call the OpenAI chat completion API.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Raw string content from the model response.
        """
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            top_p=1,
            max_tokens=self._max_tokens,
            stream=False,
        )
        return response.choices[0].message.content or ""


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter that returns a fixed response.

    Used for local runs and CI pipelines where no LLM API is
    available. The default empty array never matches a non-empty
    chunk, so every row is routed to the fallback mapper.
    """

    def __init__(self, response_text: str = "[]") -> None:
        self._response_text = response_text
        self.prompts: List[str] = []

    @classmethod
    def returning(cls, records: List[Any]) -> "MockLLMAdapter":
        """Build a mock that answers every prompt with ``records`` as JSON."""
        return cls(json.dumps(records))

    def generate(self, prompt: str) -> str:
        """Record the prompt and return the fixed response.

        Args:
            prompt: Kept in ``prompts`` for assertions in tests.

        Returns:
            The configured response text.
        """
        self.prompts.append(prompt)
        return self._response_text


def build_adapter(settings: LLMSettings) -> BaseLLMAdapter:
    """Build the adapter selected by ``LLM_ADAPTER``."""
    if settings.adapter == "mock":
        return MockLLMAdapter()
    return OpenAILLMAdapter(
        model=settings.model,
        max_tokens=settings.max_tokens,
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout_seconds=settings.timeout_seconds,
    )
