"""
tests/test_config.py

Pytest unit tests for environment-driven settings.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.config import get_data_ingestion_settings, get_llm_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_data_ingestion_settings.cache_clear()
    get_llm_settings.cache_clear()
    yield
    get_data_ingestion_settings.cache_clear()
    get_llm_settings.cache_clear()


def test_ingestion_settings_read_and_clamp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INGEST_MAX_WORKERS", "0")
    monkeypatch.setenv("INGEST_ORACLE_CHUNK_SIZE", "50")
    monkeypatch.setenv("INGEST_REPLACE_EXISTING", "false")
    monkeypatch.setenv("INGEST_MAX_REJECTIONS", "not-a-number")
    monkeypatch.setenv("INGEST_FIELD_DEFAULT_OVERRIDES", '{"products": {"leadTime": 45}}')

    settings = get_data_ingestion_settings()

    assert settings.max_workers == 1
    assert settings.oracle_chunk_size == 50
    assert settings.replace_existing is False
    assert settings.max_rejections == 500
    assert settings.field_default_overrides == {"products": {"leadTime": 45}}


def test_invalid_override_json_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INGEST_FIELD_DEFAULT_OVERRIDES", "{not json")

    assert get_data_ingestion_settings().field_default_overrides == {}


def test_llm_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_ADAPTER", "Mock")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "12.5")
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    settings = get_llm_settings()

    assert settings.adapter == "mock"
    assert settings.timeout_seconds == 12.5
    assert settings.api_key == "sk-test"


def test_unknown_llm_adapter_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_ADAPTER", "carrier-pigeon")

    with pytest.raises(RuntimeError, match="LLM_ADAPTER 'carrier-pigeon' is not valid"):
        get_llm_settings()
