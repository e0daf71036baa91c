"""
db/config.py

Record store connection settings.

Values come from the process environment, topped up from the project's
`.env` and `.env.local` files. Variables already set in the process win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILE_NAMES = (".env", ".env.local")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_POSTGRES_SCHEMES = {"postgres", "postgresql"}


class RecordStoreConfigError(RuntimeError):
    """Raised when the record store cannot be configured from the environment."""


@dataclass(frozen=True)
class RecordStoreSettings:
    database_url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle_seconds: int = 1800


def read_env_file(path: Path) -> dict[str, str]:
    """Parse KEY=VALUE lines, skipping blanks and comments and unquoting values."""
    pairs: dict[str, str] = {}
    if not path.is_file():
        return pairs
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        pairs[key] = value.strip().strip('"').strip("'")
    return pairs


def load_env_files(root: Path | None = None) -> None:
    for name in ENV_FILE_NAMES:
        for key, value in read_env_file((root or PROJECT_ROOT) / name).items():
            os.environ.setdefault(key, value)


def to_psycopg_url(url: str) -> str:
    """Point a bare postgres URL at the psycopg 3 driver."""
    scheme, sep, rest = url.partition("://")
    if sep and scheme in _POSTGRES_SCHEMES:
        return f"postgresql+psycopg://{rest}"
    return url


def _int_setting(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    try:
        value = int(env.get(name, default))
    except ValueError:
        return default
    return max(minimum, value)


def read_record_store_settings(environ: Mapping[str, str] | None = None) -> RecordStoreSettings:
    """
    Build record store settings from ``environ`` (the process environment
    plus `.env` files when omitted).

    Raises:
        RecordStoreConfigError: DATABASE_URL is unset or not a PostgreSQL URL.
    """

    if environ is None:
        load_env_files()
        environ = os.environ

    raw_url = environ.get("DATABASE_URL", "").strip()
    if not raw_url:
        raise RecordStoreConfigError("DATABASE_URL is not set. The record store needs a PostgreSQL URL.")
    database_url = to_psycopg_url(raw_url)
    if not database_url.startswith("postgresql"):
        raise RecordStoreConfigError("DATABASE_URL must be a PostgreSQL URL.")

    return RecordStoreSettings(
        database_url=database_url,
        echo=environ.get("SQL_ECHO", "").strip().lower() in _TRUE_VALUES,
        pool_size=_int_setting(environ, "DB_POOL_SIZE", 5, minimum=1),
        max_overflow=_int_setting(environ, "DB_MAX_OVERFLOW", 10, minimum=0),
        pool_recycle_seconds=_int_setting(environ, "DB_POOL_RECYCLE", 1800, minimum=-1),
    )
