"""
tests/test_db_config.py

Pytest unit tests for record store settings and `.env` loading.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from db.config import (
    RecordStoreConfigError,
    load_env_files,
    read_env_file,
    read_record_store_settings,
    to_psycopg_url,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db/supply", "postgresql+psycopg://u:p@db/supply"),
        ("postgresql://u:p@db/supply", "postgresql+psycopg://u:p@db/supply"),
        ("postgresql+psycopg://u:p@db/supply", "postgresql+psycopg://u:p@db/supply"),
        ("sqlite:///local.db", "sqlite:///local.db"),
    ],
)
def test_to_psycopg_url(url: str, expected: str) -> None:
    assert to_psycopg_url(url) == expected


def test_settings_defaults() -> None:
    settings = read_record_store_settings({"DATABASE_URL": "postgres://u:p@db/supply"})

    assert settings.database_url == "postgresql+psycopg://u:p@db/supply"
    assert settings.echo is False
    assert settings.pool_size == 5
    assert settings.max_overflow == 10
    assert settings.pool_recycle_seconds == 1800


def test_pool_settings_are_read_and_clamped() -> None:
    settings = read_record_store_settings(
        {
            "DATABASE_URL": "postgresql://db/supply",
            "SQL_ECHO": "yes",
            "DB_POOL_SIZE": "0",
            "DB_MAX_OVERFLOW": "not-a-number",
            "DB_POOL_RECYCLE": "600",
        }
    )

    assert settings.echo is True
    assert settings.pool_size == 1
    assert settings.max_overflow == 10
    assert settings.pool_recycle_seconds == 600


@pytest.mark.parametrize("environ", [{}, {"DATABASE_URL": "   "}, {"DATABASE_URL": "mysql://db/supply"}])
def test_missing_or_foreign_url_is_rejected(environ: dict[str, str]) -> None:
    with pytest.raises(RecordStoreConfigError, match="DATABASE_URL"):
        read_record_store_settings(environ)


def test_env_file_parsing(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n\nDATABASE_URL='postgres://db/supply'\nLLM_ADAPTER = mock\nBROKEN LINE\n",
        encoding="utf-8",
    )

    assert read_env_file(env_file) == {
        "DATABASE_URL": "postgres://db/supply",
        "LLM_ADAPTER": "mock",
    }
    assert read_env_file(tmp_path / "absent.env") == {}


def test_process_environment_wins_over_env_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("INGEST_TEST_KEPT=file\nINGEST_TEST_ADDED=env\n", encoding="utf-8")
    (tmp_path / ".env.local").write_text("INGEST_TEST_ADDED=local\n", encoding="utf-8")
    monkeypatch.setenv("INGEST_TEST_KEPT", "process")
    monkeypatch.delenv("INGEST_TEST_ADDED", raising=False)

    load_env_files(tmp_path)
    try:
        assert os.environ["INGEST_TEST_KEPT"] == "process"
        assert os.environ["INGEST_TEST_ADDED"] == "env"
    finally:
        os.environ.pop("INGEST_TEST_ADDED", None)
