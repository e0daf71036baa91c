"""Bounded-time client for the column-mapping oracle."""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Mapping, Optional, Sequence

from app.domain.schema_registry import SchemaDefinition
from llm_mapping.adapter import BaseLLMAdapter
from llm_mapping.prompt_builder import MappingPromptBuilder

logger = logging.getLogger(__name__)


class OracleTimeoutError(RuntimeError):
    """Raised when the oracle does not answer within the timeout."""


class OracleTransportError(RuntimeError):
    """Raised when the oracle call itself fails."""


class MappingOracleClient:
    """Sends mapping prompts to an LLM adapter with a hard time limit.

    The adapter call runs on a dedicated worker so a hung request cannot
    block the file's pipeline past ``timeout_seconds``.
    """

    def __init__(
        self,
        adapter: BaseLLMAdapter,
        *,
        prompt_builder: Optional[MappingPromptBuilder] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._adapter = adapter
        self._prompt_builder = prompt_builder or MappingPromptBuilder()
        self._timeout_seconds = timeout_seconds

    def request_mapping(
        self,
        rows: Sequence[Mapping[str, Any]],
        definition: SchemaDefinition,
    ) -> str:
        """Ask the oracle to map ``rows`` and return its raw text.

        Raises:
            OracleTimeoutError: No answer within the timeout.
            OracleTransportError: The adapter raised.
        """
        prompt = self._prompt_builder.build_prompt(rows, definition)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mapping-oracle")
        try:
            future = executor.submit(self._adapter.generate, prompt)
            try:
                raw_response = future.result(timeout=self._timeout_seconds)
            except FutureTimeoutError as exc:
                raise OracleTimeoutError(
                    f"Mapping oracle did not respond within {self._timeout_seconds:g}s"
                ) from exc
            except Exception as exc:
                raise OracleTransportError(f"Mapping oracle call failed: {exc}") from exc
            logger.debug(
                "Mapping oracle responded schema=%s rows=%d chars=%d",
                definition.schema_type.value,
                len(rows),
                len(raw_response),
            )
            return raw_response
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
