from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _default_env_file() -> str:
    # Un .env junto al repo permite arrancar el dashboard sin exportar variables.
    repo_root = Path(__file__).resolve().parents[1]
    return str(repo_root / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    endpoint: str
    fetch_interval_seconds: float
    fetch_timeout_seconds: float
    fetch_enabled: bool

    default_topic: str
    default_limit: int

    fetch_backoff_seconds: float = 5.0


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("DASHBOARD_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    # El endpoint apunta al prefijo de la API, sin /messages/sensor.
    endpoint = os.getenv("DASHBOARD_ENDPOINT", "http://localhost:9869/cdp_api")
    fetch_interval_seconds = float(os.getenv("DASHBOARD_FETCH_INTERVAL_SEC", "5"))
    fetch_timeout_seconds = float(os.getenv("DASHBOARD_FETCH_TIMEOUT_SEC", "3"))
    fetch_backoff_seconds = float(os.getenv("DASHBOARD_FETCH_BACKOFF_SEC", "5"))
    fetch_enabled = _env_flag("DASHBOARD_FETCH_ENABLED", "1")

    default_topic = os.getenv("DASHBOARD_DEFAULT_TOPIC", "temperature").strip().lower()
    default_limit = int(os.getenv("DASHBOARD_DEFAULT_LIMIT", "10"))

    return Settings(
        endpoint=endpoint.rstrip("/"),
        fetch_interval_seconds=fetch_interval_seconds,
        fetch_timeout_seconds=fetch_timeout_seconds,
        fetch_enabled=fetch_enabled,
        default_topic=default_topic,
        default_limit=default_limit,
        fetch_backoff_seconds=fetch_backoff_seconds,
    )
