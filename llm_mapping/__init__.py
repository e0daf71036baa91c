"""
llm_mapping package marker.
"""

from llm_mapping.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter, build_adapter
from llm_mapping.client import MappingOracleClient, OracleTimeoutError, OracleTransportError
from llm_mapping.parser import MappingParseResult, MappingResponseError, parse_mapping_response
from llm_mapping.prompt_builder import MappingPromptBuilder

__all__ = [
    "BaseLLMAdapter",
    "MappingOracleClient",
    "MappingParseResult",
    "MappingPromptBuilder",
    "MappingResponseError",
    "MockLLMAdapter",
    "OpenAILLMAdapter",
    "OracleTimeoutError",
    "OracleTransportError",
    "build_adapter",
    "parse_mapping_response",
]
