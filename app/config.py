"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from db.config import load_env_files

logger = logging.getLogger(__name__)

_ALLOWED_LLM_ADAPTERS = {"openai", "mock"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_json_object_env(name: str) -> dict[str, Any]:
    """
    Read a JSON object from an environment variable; invalid JSON is ignored.
    """

    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return {}
    try:
        parsed = json.loads(raw_value)
    except json.JSONDecodeError:
        logger.warning("Ignoring %s: value is not valid JSON", name)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Ignoring %s: value must be a JSON object", name)
        return {}
    return parsed


@dataclass(frozen=True)
class DataIngestionSettings:
    """
    Runtime settings for spreadsheet ingestion.
    """

    max_workers: int = 4
    oracle_chunk_size: int = 20
    max_rejections: int = 500
    log_rejections: bool = True
    replace_existing: bool = True
    field_default_overrides: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LLMSettings:
    """
    Mapping oracle adapter settings.
    """

    adapter: str = "openai"
    model: str = "gpt-4o-mini"
    max_tokens: int = 4096
    api_key: str | None = None
    base_url: str | None = None
    timeout_seconds: float = 30.0


@lru_cache(maxsize=1)
def get_data_ingestion_settings() -> DataIngestionSettings:
    """
    Return cached ingestion settings from environment variables.
    """

    return DataIngestionSettings(
        max_workers=max(1, _get_int_env("INGEST_MAX_WORKERS", 4)),
        oracle_chunk_size=max(1, _get_int_env("INGEST_ORACLE_CHUNK_SIZE", 20)),
        max_rejections=max(1, _get_int_env("INGEST_MAX_REJECTIONS", 500)),
        log_rejections=_get_bool_env("INGEST_LOG_REJECTIONS", True),
        replace_existing=_get_bool_env("INGEST_REPLACE_EXISTING", True),
        field_default_overrides=_get_json_object_env("INGEST_FIELD_DEFAULT_OVERRIDES"),
    )


@lru_cache(maxsize=1)
def get_llm_settings() -> LLMSettings:
    """
    Return cached mapping oracle settings.

    Raises RuntimeError when LLM_ADAPTER names an unknown adapter.
    """

    adapter = _get_str_env("LLM_ADAPTER", "openai").lower()
    if adapter not in _ALLOWED_LLM_ADAPTERS:
        raise RuntimeError(
            f"LLM_ADAPTER '{adapter}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_LLM_ADAPTERS)}."
        )
    return LLMSettings(
        adapter=adapter,
        model=_get_str_env("LLM_MODEL", "gpt-4o-mini"),
        max_tokens=max(256, _get_int_env("LLM_MAX_TOKENS", 4096)),
        api_key=_get_optional_str_env("LLM_API_KEY") or _get_optional_str_env("OPENAI_API_KEY"),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
        timeout_seconds=max(1.0, _get_float_env("LLM_TIMEOUT_SECONDS", 30.0)),
    )
